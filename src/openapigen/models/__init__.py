"""openapigen data models.

- canonical: the OpenAPI 3 model every template receives
- legacy: the Swagger 2.0 input model, used only until conversion
"""

from openapigen.models.canonical import Operation, PathItem, Specification
from openapigen.models.legacy import Swagger

__all__ = [
    "Specification",
    "PathItem",
    "Operation",
    "Swagger",
]

"""API description parsers.

- OpenAPI3Parser: OpenAPI 3.x -> canonical Specification
- Swagger2Parser: Swagger 2.0 -> legacy Swagger (converted separately)
"""

from openapigen.parsers.base import DocumentParser, decode_document
from openapigen.parsers.common import DocumentStructureError
from openapigen.parsers.openapi3 import OpenAPI3Parser
from openapigen.parsers.swagger2 import Swagger2Parser

__all__ = [
    "DocumentParser",
    "DocumentStructureError",
    "OpenAPI3Parser",
    "Swagger2Parser",
    "decode_document",
]

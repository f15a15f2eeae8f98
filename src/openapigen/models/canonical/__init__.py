"""Canonical specification model.

The rest of openapigen only works with these types, never with the
version-specific input structures. Swagger 2.0 documents are converted into
them before any template is rendered.
"""

from openapigen.models.canonical.spec import (
    DEFAULT_OPENAPI_VERSION,
    HTTP_METHODS,
    Components,
    Contact,
    ExternalDocs,
    Header,
    Info,
    License,
    MediaType,
    OAuthFlow,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Response,
    Schema,
    SecurityScheme,
    Server,
    Specification,
    Tag,
)

__all__ = [
    "DEFAULT_OPENAPI_VERSION",
    "HTTP_METHODS",
    "Components",
    "Contact",
    "ExternalDocs",
    "Header",
    "Info",
    "License",
    "MediaType",
    "OAuthFlow",
    "Operation",
    "Parameter",
    "PathItem",
    "RequestBody",
    "Response",
    "Schema",
    "SecurityScheme",
    "Server",
    "Specification",
    "Tag",
]

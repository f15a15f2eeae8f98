"""Swagger 2.0 (legacy) input model.

Only the Swagger 2.0 parser and the legacy converter use these types. They
exist so the normalizer can parse a legacy document into a typed shape first
and convert it in a separate step, giving each step its own error.

Schema bodies are kept as raw mappings here; they are only materialized into
canonical ``Schema`` objects after their references have been rewritten.
"""

from dataclasses import dataclass, field
from typing import Any

from openapigen.models.canonical import ExternalDocs, Info, Tag

LEGACY_HTTP_METHODS: tuple[str, ...] = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
)


@dataclass
class LegacyParameter:
    """Swagger 2.0 parameter.

    Attributes:
        name: Parameter name
        location: "query", "header", "path", "formData" or "body"
        schema: Raw schema (body parameters only)
        type: Primitive type (non-body parameters)
        items: Raw items definition for array parameters
        collection_format: csv, ssv, tsv, pipes or multi
        constraints: Validation keywords (maximum, pattern, ...)
        ref: Reference to a top-level parameter
    """

    name: str = ""
    location: str = ""
    description: str | None = None
    required: bool = False
    schema: dict[str, Any] | None = None
    type: str | None = None
    format: str | None = None
    items: dict[str, Any] | None = None
    collection_format: str | None = None
    default: Any = None
    enum: list[Any] = field(default_factory=list)
    allow_empty_value: bool = False
    constraints: dict[str, Any] = field(default_factory=dict)
    ref: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def is_payload(self) -> bool:
        """Return True for parameters that become a request body."""
        return self.location in ("body", "formData")


@dataclass
class LegacyResponse:
    """Swagger 2.0 response."""

    description: str = ""
    schema: dict[str, Any] | None = None
    headers: dict[str, dict[str, Any]] = field(default_factory=dict)
    examples: dict[str, Any] = field(default_factory=dict)
    ref: str | None = None


@dataclass
class LegacyOperation:
    """Swagger 2.0 operation.

    ``consumes``/``produces`` are None when the operation inherits the
    document-level value, and a (possibly empty) list when overridden.
    """

    operation_id: str | None = None
    summary: str | None = None
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    consumes: list[str] | None = None
    produces: list[str] | None = None
    parameters: list[LegacyParameter] = field(default_factory=list)
    responses: dict[str, LegacyResponse] = field(default_factory=dict)
    schemes: list[str] = field(default_factory=list)
    deprecated: bool = False
    security: list[dict[str, list[str]]] | None = None
    external_docs: ExternalDocs | None = None
    extensions: dict[str, Any] = field(default_factory=dict)


@dataclass
class LegacyPathItem:
    """Swagger 2.0 path item."""

    ref: str | None = None
    parameters: list[LegacyParameter] = field(default_factory=list)
    operations: dict[str, LegacyOperation] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)


@dataclass
class LegacySecurityScheme:
    """Swagger 2.0 security definition (basic, apiKey or oauth2)."""

    type: str = ""
    description: str | None = None
    name: str | None = None
    location: str | None = None
    flow: str | None = None
    authorization_url: str | None = None
    token_url: str | None = None
    scopes: dict[str, str] = field(default_factory=dict)


@dataclass
class Swagger:
    """Swagger 2.0 document as parsed, before conversion."""

    swagger: str = "2.0"
    info: Info = field(default_factory=Info)
    host: str | None = None
    base_path: str | None = None
    schemes: list[str] = field(default_factory=list)
    consumes: list[str] = field(default_factory=list)
    produces: list[str] = field(default_factory=list)
    paths: dict[str, LegacyPathItem] = field(default_factory=dict)
    definitions: dict[str, dict[str, Any]] = field(default_factory=dict)
    parameters: dict[str, LegacyParameter] = field(default_factory=dict)
    responses: dict[str, LegacyResponse] = field(default_factory=dict)
    security_definitions: dict[str, LegacySecurityScheme] = field(default_factory=dict)
    security: list[dict[str, list[str]]] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    external_docs: ExternalDocs | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def path_count(self) -> int:
        """Return the number of documented paths."""
        return len(self.paths)

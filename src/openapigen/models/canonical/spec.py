"""Canonical OpenAPI 3 specification model.

This is the one shape every template receives, whatever version the input
document was written in. Parsers and converters MUST produce it; nothing past
the normalizer ever sees version-specific structures.

All entities are plain dataclasses. ``to_dict()`` emits OpenAPI 3 key names
and leaves out empty optional fields, so the output doubles as the ``--view``
dump and the ``debugDump`` helper serialization.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

# Fixed HTTP method order used for iteration and serialization
HTTP_METHODS: tuple[str, ...] = (
    "connect",
    "delete",
    "get",
    "head",
    "options",
    "patch",
    "post",
    "put",
    "trace",
)

DEFAULT_OPENAPI_VERSION = "3.0.3"


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None or an empty container."""
    return {
        key: value
        for key, value in data.items()
        if value is not None and value != {} and value != []
    }


def _flag(value: bool) -> bool | None:
    """Emit a boolean only when it is set."""
    return True if value else None


def _dump_map(items: dict[str, Any]) -> dict[str, Any]:
    return {key: value.to_dict() for key, value in items.items()}


@dataclass
class ExternalDocs:
    """Link to external documentation."""

    url: str = ""
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"description": self.description, "url": self.url})


@dataclass
class Contact:
    """API owner contact information."""

    name: str | None = None
    url: str | None = None
    email: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"name": self.name, "url": self.url, "email": self.email})


@dataclass
class License:
    """API license information."""

    name: str = ""
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"name": self.name, "url": self.url})


@dataclass
class Info:
    """Global API metadata.

    Attributes:
        title: API title
        version: API (document) version, not the OpenAPI version
        description: Long description, may contain markdown
        terms_of_service: URL of the terms of service
        contact: Owner contact
        license: License information
        extensions: Vendor extensions (x-*)
    """

    title: str = ""
    version: str = ""
    description: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None
    license: License | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = _compact({
            "title": self.title,
            "description": self.description,
            "termsOfService": self.terms_of_service,
            "contact": self.contact.to_dict() if self.contact else None,
            "license": self.license.to_dict() if self.license else None,
            "version": self.version,
        })
        result.update(self.extensions)
        return result


@dataclass
class Server:
    """A server the API is reachable on."""

    url: str = ""
    description: str | None = None
    variables: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "url": self.url,
            "description": self.description,
            "variables": self.variables,
        })


@dataclass
class Tag:
    """Tag metadata declared at document level."""

    name: str = ""
    description: str | None = None
    external_docs: ExternalDocs | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "name": self.name,
            "description": self.description,
            "externalDocs": self.external_docs.to_dict() if self.external_docs else None,
        })


@dataclass
class Schema:
    """JSON schema object, or a reference to one when ``ref`` is set.

    Only the keywords templates commonly need are modelled explicitly;
    anything else lands in ``extensions`` untouched.
    """

    ref: str | None = None
    type: str | None = None
    format: str | None = None
    title: str | None = None
    description: str | None = None
    properties: dict[str, "Schema"] = field(default_factory=dict)
    items: "Schema | None" = None
    required: list[str] = field(default_factory=list)
    enum: list[Any] = field(default_factory=list)
    default: Any = None
    example: Any = None
    nullable: bool = False
    read_only: bool = False
    write_only: bool = False
    deprecated: bool = False
    all_of: list["Schema"] = field(default_factory=list)
    one_of: list["Schema"] = field(default_factory=list)
    any_of: list["Schema"] = field(default_factory=list)
    additional_properties: "Schema | bool | None" = None
    minimum: float | None = None
    maximum: float | None = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    multiple_of: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    min_items: int | None = None
    max_items: int | None = None
    unique_items: bool = False
    discriminator: dict[str, Any] | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    @property
    def is_ref(self) -> bool:
        """Return True if this schema is only a reference."""
        return self.ref is not None

    def to_dict(self) -> dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}

        additional: Any = self.additional_properties
        if isinstance(additional, Schema):
            additional = additional.to_dict()

        result = _compact({
            "type": self.type,
            "format": self.format,
            "title": self.title,
            "description": self.description,
            "properties": _dump_map(self.properties),
            "items": self.items.to_dict() if self.items else None,
            "required": self.required,
            "enum": self.enum,
            "default": self.default,
            "example": self.example,
            "nullable": _flag(self.nullable),
            "readOnly": _flag(self.read_only),
            "writeOnly": _flag(self.write_only),
            "deprecated": _flag(self.deprecated),
            "allOf": [s.to_dict() for s in self.all_of],
            "oneOf": [s.to_dict() for s in self.one_of],
            "anyOf": [s.to_dict() for s in self.any_of],
            "additionalProperties": additional,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "exclusiveMinimum": _flag(self.exclusive_minimum),
            "exclusiveMaximum": _flag(self.exclusive_maximum),
            "multipleOf": self.multiple_of,
            "minLength": self.min_length,
            "maxLength": self.max_length,
            "pattern": self.pattern,
            "minItems": self.min_items,
            "maxItems": self.max_items,
            "uniqueItems": _flag(self.unique_items),
            "discriminator": self.discriminator,
        })
        result.update(self.extensions)
        return result


@dataclass
class MediaType:
    """Schema and examples for one content type."""

    schema: Schema | None = None
    example: Any = None
    examples: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "schema": self.schema.to_dict() if self.schema else None,
            "example": self.example,
            "examples": self.examples,
        })


@dataclass
class Parameter:
    """Operation parameter (path, query, header or cookie).

    Attributes:
        name: Parameter name
        location: Where the parameter lives ("in" in the document)
        ref: Reference to a components parameter, if this is one
    """

    name: str = ""
    location: str = ""
    description: str | None = None
    required: bool = False
    deprecated: bool = False
    allow_empty_value: bool = False
    style: str | None = None
    explode: bool | None = None
    schema: Schema | None = None
    example: Any = None
    ref: str | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        result = _compact({
            "name": self.name,
            "in": self.location,
            "description": self.description,
            "required": _flag(self.required),
            "deprecated": _flag(self.deprecated),
            "allowEmptyValue": _flag(self.allow_empty_value),
            "style": self.style,
            "explode": self.explode,
            "schema": self.schema.to_dict() if self.schema else None,
            "example": self.example,
        })
        result.update(self.extensions)
        return result


@dataclass
class RequestBody:
    """Request payload description."""

    description: str | None = None
    required: bool = False
    content: dict[str, MediaType] = field(default_factory=dict)
    ref: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        return _compact({
            "description": self.description,
            "required": _flag(self.required),
            "content": _dump_map(self.content),
        })


@dataclass
class Header:
    """Response header."""

    description: str | None = None
    required: bool = False
    schema: Schema | None = None
    ref: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        return _compact({
            "description": self.description,
            "required": _flag(self.required),
            "schema": self.schema.to_dict() if self.schema else None,
        })


@dataclass
class Response:
    """A single response of an operation."""

    description: str = ""
    headers: dict[str, Header] = field(default_factory=dict)
    content: dict[str, MediaType] = field(default_factory=dict)
    ref: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        result = _compact({
            "headers": _dump_map(self.headers),
            "content": _dump_map(self.content),
        })
        # description is required by OpenAPI 3, keep it even when empty
        return {"description": self.description, **result}


@dataclass
class Operation:
    """A single API operation (one HTTP method on one path).

    Attributes:
        operation_id: Unique operation identifier
        tags: Tags for grouping
        parameters: Operation-level parameters
        request_body: Request payload, if any
        responses: Responses by status code ("200", "default", ...)
    """

    operation_id: str | None = None
    summary: str | None = None
    description: str | None = None
    tags: list[str] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)
    request_body: RequestBody | None = None
    responses: dict[str, Response] = field(default_factory=dict)
    deprecated: bool = False
    security: list[dict[str, list[str]]] | None = None
    servers: list[Server] = field(default_factory=list)
    external_docs: ExternalDocs | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = _compact({
            "tags": self.tags,
            "summary": self.summary,
            "description": self.description,
            "externalDocs": self.external_docs.to_dict() if self.external_docs else None,
            "operationId": self.operation_id,
            "parameters": [p.to_dict() for p in self.parameters],
            "requestBody": self.request_body.to_dict() if self.request_body else None,
            "responses": _dump_map(self.responses),
            "deprecated": _flag(self.deprecated),
            "servers": [s.to_dict() for s in self.servers],
        })
        # An explicit empty security list disables global security
        if self.security is not None:
            result["security"] = self.security
        result.update(self.extensions)
        return result


@dataclass
class PathItem:
    """All operations available on one URL template."""

    summary: str | None = None
    description: str | None = None
    parameters: list[Parameter] = field(default_factory=list)
    ref: str | None = None
    connect: Operation | None = None
    delete: Operation | None = None
    get: Operation | None = None
    head: Operation | None = None
    options: Operation | None = None
    patch: Operation | None = None
    post: Operation | None = None
    put: Operation | None = None
    trace: Operation | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def operations(self) -> dict[str, Operation]:
        """Return present operations keyed by lowercase method, in fixed order."""
        result: dict[str, Operation] = {}
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                result[method] = operation
        return result

    def set_operation(self, method: str, operation: Operation) -> None:
        """Attach an operation for the given HTTP method."""
        method = method.lower()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        setattr(self, method, operation)

    def to_dict(self) -> dict[str, Any]:
        result = _compact({
            "$ref": self.ref,
            "summary": self.summary,
            "description": self.description,
            "parameters": [p.to_dict() for p in self.parameters],
        })
        for method, operation in self.operations().items():
            result[method] = operation.to_dict()
        result.update(self.extensions)
        return result


@dataclass
class OAuthFlow:
    """One OAuth2 flow configuration."""

    authorization_url: str | None = None
    token_url: str | None = None
    refresh_url: str | None = None
    scopes: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = _compact({
            "authorizationUrl": self.authorization_url,
            "tokenUrl": self.token_url,
            "refreshUrl": self.refresh_url,
        })
        # scopes is required even when empty
        result["scopes"] = dict(self.scopes)
        return result


@dataclass
class SecurityScheme:
    """Security scheme (apiKey, http, oauth2, openIdConnect)."""

    type: str = ""
    description: str | None = None
    name: str | None = None
    location: str | None = None
    scheme: str | None = None
    bearer_format: str | None = None
    flows: dict[str, OAuthFlow] = field(default_factory=dict)
    open_id_connect_url: str | None = None
    ref: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        return _compact({
            "type": self.type,
            "description": self.description,
            "name": self.name,
            "in": self.location,
            "scheme": self.scheme,
            "bearerFormat": self.bearer_format,
            "flows": _dump_map(self.flows),
            "openIdConnectUrl": self.open_id_connect_url,
        })


@dataclass
class Components:
    """Reusable objects referenced from elsewhere in the document."""

    schemas: dict[str, Schema] = field(default_factory=dict)
    parameters: dict[str, Parameter] = field(default_factory=dict)
    request_bodies: dict[str, RequestBody] = field(default_factory=dict)
    responses: dict[str, Response] = field(default_factory=dict)
    headers: dict[str, Header] = field(default_factory=dict)
    security_schemes: dict[str, SecurityScheme] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "schemas": _dump_map(self.schemas),
            "parameters": _dump_map(self.parameters),
            "requestBodies": _dump_map(self.request_bodies),
            "responses": _dump_map(self.responses),
            "headers": _dump_map(self.headers),
            "securitySchemes": _dump_map(self.security_schemes),
        })


@dataclass
class Specification:
    """Canonical in-memory API description handed to every template.

    Built once per run by the normalizer and treated as read-only afterwards.
    """

    openapi: str = DEFAULT_OPENAPI_VERSION
    info: Info = field(default_factory=Info)
    servers: list[Server] = field(default_factory=list)
    paths: dict[str, PathItem] = field(default_factory=dict)
    components: Components = field(default_factory=Components)
    security: list[dict[str, list[str]]] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    external_docs: ExternalDocs | None = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def operations(self) -> Iterator[tuple[str, str, Operation]]:
        """Yield (path, method, operation) for every operation in the document."""
        for path, item in self.paths.items():
            for method, operation in item.operations().items():
                yield path, method, operation

    @property
    def path_count(self) -> int:
        """Return the number of documented paths."""
        return len(self.paths)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "openapi": self.openapi,
            "info": self.info.to_dict(),
        }
        result.update(_compact({
            "servers": [s.to_dict() for s in self.servers],
        }))
        # paths is required in OpenAPI 3.0, keep it even when empty
        result["paths"] = _dump_map(self.paths)
        result.update(_compact({
            "components": self.components.to_dict(),
            "security": self.security,
            "tags": [t.to_dict() for t in self.tags],
            "externalDocs": self.external_docs.to_dict() if self.external_docs else None,
        }))
        result.update(self.extensions)
        return result

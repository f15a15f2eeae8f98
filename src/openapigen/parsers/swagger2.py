"""Swagger 2.0 document parser.

Parses a decoded Swagger 2.0 document into the legacy model. Schema bodies
stay raw; the converter rewrites their references before materializing them.
"""

from typing import Any

from openapigen.models.legacy import (
    LEGACY_HTTP_METHODS,
    LegacyOperation,
    LegacyParameter,
    LegacyPathItem,
    LegacyResponse,
    LegacySecurityScheme,
    Swagger,
)
from openapigen.parsers.base import DocumentParser
from openapigen.parsers.common import (
    DocumentStructureError,
    as_list,
    as_mapping,
    as_strings,
    as_text,
    extensions_of,
    parse_external_docs,
    parse_info,
    parse_security_requirements,
    parse_tags,
)

# Validation keywords carried by non-body parameters
PARAMETER_CONSTRAINTS = (
    "maximum",
    "exclusiveMaximum",
    "minimum",
    "exclusiveMinimum",
    "maxLength",
    "minLength",
    "pattern",
    "maxItems",
    "minItems",
    "uniqueItems",
    "multipleOf",
)


class Swagger2Parser(DocumentParser[Swagger]):
    """Parser for Swagger 2.0 documents (the legacy schema)."""

    def __init__(self) -> None:
        super().__init__(name="swagger2", stage="legacy parse")

    def parse(self, document: dict[str, Any]) -> Swagger:
        if "openapi" in document:
            raise DocumentStructureError(
                f"document declares openapi {document['openapi']}; drop --v2 to parse it"
            )
        version = as_text(document.get("swagger")) or "2.0"
        if not version.startswith("2"):
            raise DocumentStructureError(f"unsupported swagger version: {version}")

        def optional_list(key: str) -> list[str]:
            return as_strings(document.get(key), key)

        return Swagger(
            swagger=version,
            info=parse_info(document.get("info")),
            host=as_text(document.get("host")),
            base_path=as_text(document.get("basePath")),
            schemes=optional_list("schemes"),
            consumes=optional_list("consumes"),
            produces=optional_list("produces"),
            paths={
                str(path): parse_path_item(item, f"paths.{path}")
                for path, item in as_mapping(document.get("paths"), "paths").items()
                if not str(path).startswith("x-")
            },
            definitions={
                str(name): as_mapping(schema, f"definitions.{name}")
                for name, schema in as_mapping(document.get("definitions"), "definitions").items()
            },
            parameters={
                str(name): parse_parameter(item, f"parameters.{name}")
                for name, item in as_mapping(document.get("parameters"), "parameters").items()
            },
            responses={
                str(name): parse_response(item, f"responses.{name}")
                for name, item in as_mapping(document.get("responses"), "responses").items()
            },
            security_definitions={
                str(name): parse_security_scheme(item, f"securityDefinitions.{name}")
                for name, item in as_mapping(
                    document.get("securityDefinitions"), "securityDefinitions"
                ).items()
            },
            security=parse_security_requirements(document.get("security"), "security"),
            tags=parse_tags(document.get("tags")),
            external_docs=parse_external_docs(document.get("externalDocs"), "externalDocs"),
            extensions=extensions_of(document),
        )


def parse_path_item(value: Any, where: str) -> LegacyPathItem:
    data = as_mapping(value, where)
    return LegacyPathItem(
        ref=as_text(data.get("$ref")),
        parameters=parse_parameters(data.get("parameters"), f"{where}.parameters"),
        operations={
            method: parse_operation(data[method], f"{where}.{method}")
            for method in LEGACY_HTTP_METHODS
            if data.get(method) is not None
        },
        extensions=extensions_of(data),
    )


def parse_operation(value: Any, where: str) -> LegacyOperation:
    data = as_mapping(value, where)

    consumes = None
    if "consumes" in data:
        consumes = as_strings(data["consumes"], f"{where}.consumes")
    produces = None
    if "produces" in data:
        produces = as_strings(data["produces"], f"{where}.produces")
    security = None
    if "security" in data:
        security = parse_security_requirements(data["security"], f"{where}.security")

    return LegacyOperation(
        operation_id=as_text(data.get("operationId")),
        summary=as_text(data.get("summary")),
        description=as_text(data.get("description")),
        tags=as_strings(data.get("tags"), f"{where}.tags"),
        consumes=consumes,
        produces=produces,
        parameters=parse_parameters(data.get("parameters"), f"{where}.parameters"),
        responses={
            str(code): parse_response(resp, f"{where}.responses.{code}")
            for code, resp in as_mapping(data.get("responses"), f"{where}.responses").items()
        },
        schemes=as_strings(data.get("schemes"), f"{where}.schemes"),
        deprecated=bool(data.get("deprecated", False)),
        security=security,
        external_docs=parse_external_docs(data.get("externalDocs"), f"{where}.externalDocs"),
        extensions=extensions_of(data),
    )


def parse_parameters(value: Any, where: str) -> list[LegacyParameter]:
    return [
        parse_parameter(item, f"{where}[{index}]")
        for index, item in enumerate(as_list(value, where))
    ]


def parse_parameter(value: Any, where: str) -> LegacyParameter:
    data = as_mapping(value, where)
    if "$ref" in data:
        return LegacyParameter(ref=as_text(data["$ref"]))

    schema = None
    if data.get("schema") is not None:
        schema = as_mapping(data["schema"], f"{where}.schema")
    items = None
    if data.get("items") is not None:
        items = as_mapping(data["items"], f"{where}.items")

    return LegacyParameter(
        name=as_text(data.get("name")) or "",
        location=as_text(data.get("in")) or "",
        description=as_text(data.get("description")),
        required=bool(data.get("required", False)),
        schema=schema,
        type=as_text(data.get("type")),
        format=as_text(data.get("format")),
        items=items,
        collection_format=as_text(data.get("collectionFormat")),
        default=data.get("default"),
        enum=list(as_list(data.get("enum"), f"{where}.enum")),
        allow_empty_value=bool(data.get("allowEmptyValue", False)),
        constraints={key: data[key] for key in PARAMETER_CONSTRAINTS if key in data},
        extensions=extensions_of(data),
    )


def parse_response(value: Any, where: str) -> LegacyResponse:
    data = as_mapping(value, where)
    if "$ref" in data:
        return LegacyResponse(ref=as_text(data["$ref"]))

    schema = None
    if data.get("schema") is not None:
        schema = as_mapping(data["schema"], f"{where}.schema")

    return LegacyResponse(
        description=as_text(data.get("description")) or "",
        schema=schema,
        headers={
            str(name): as_mapping(header, f"{where}.headers.{name}")
            for name, header in as_mapping(data.get("headers"), f"{where}.headers").items()
        },
        examples=as_mapping(data.get("examples"), f"{where}.examples"),
    )


def parse_security_scheme(value: Any, where: str) -> LegacySecurityScheme:
    data = as_mapping(value, where)
    return LegacySecurityScheme(
        type=as_text(data.get("type")) or "",
        description=as_text(data.get("description")),
        name=as_text(data.get("name")),
        location=as_text(data.get("in")),
        flow=as_text(data.get("flow")),
        authorization_url=as_text(data.get("authorizationUrl")),
        token_url=as_text(data.get("tokenUrl")),
        scopes={
            str(k): str(v)
            for k, v in as_mapping(data.get("scopes"), f"{where}.scopes").items()
        },
    )

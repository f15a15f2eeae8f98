"""OpenAPI 3.x document parser.

Parses a decoded OpenAPI 3 document directly into the canonical
Specification model.
"""

from typing import Any

from openapigen.models.canonical import (
    DEFAULT_OPENAPI_VERSION,
    HTTP_METHODS,
    Components,
    Header,
    MediaType,
    OAuthFlow,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Response,
    SecurityScheme,
    Server,
    Specification,
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
    parse_schema,
    parse_security_requirements,
    parse_tags,
)


class OpenAPI3Parser(DocumentParser[Specification]):
    """Parser for OpenAPI 3.x documents (the canonical schema)."""

    def __init__(self) -> None:
        super().__init__(name="openapi3", stage="parse")

    def parse(self, document: dict[str, Any]) -> Specification:
        if "swagger" in document:
            raise DocumentStructureError(
                f"document declares swagger {document['swagger']}; "
                "rerun with --v2 to convert it"
            )
        version = as_text(document.get("openapi")) or DEFAULT_OPENAPI_VERSION
        if not version.startswith("3"):
            raise DocumentStructureError(f"unsupported openapi version: {version}")

        return Specification(
            openapi=version,
            info=parse_info(document.get("info")),
            servers=parse_servers(document.get("servers"), "servers"),
            paths={
                str(path): parse_path_item(item, f"paths.{path}")
                for path, item in as_mapping(document.get("paths"), "paths").items()
                if not str(path).startswith("x-")
            },
            components=parse_components(document.get("components")),
            security=parse_security_requirements(document.get("security"), "security"),
            tags=parse_tags(document.get("tags")),
            external_docs=parse_external_docs(document.get("externalDocs"), "externalDocs"),
            extensions=extensions_of(document),
        )


def parse_servers(value: Any, where: str) -> list[Server]:
    servers: list[Server] = []
    for index, item in enumerate(as_list(value, where)):
        data = as_mapping(item, f"{where}[{index}]")
        servers.append(Server(
            url=as_text(data.get("url")) or "",
            description=as_text(data.get("description")),
            variables=as_mapping(data.get("variables"), f"{where}[{index}].variables"),
        ))
    return servers


def parse_path_item(value: Any, where: str) -> PathItem:
    data = as_mapping(value, where)
    item = PathItem(
        summary=as_text(data.get("summary")),
        description=as_text(data.get("description")),
        parameters=parse_parameters(data.get("parameters"), f"{where}.parameters"),
        ref=as_text(data.get("$ref")),
        extensions=extensions_of(data),
    )
    for method in HTTP_METHODS:
        if data.get(method) is not None:
            item.set_operation(method, parse_operation(data[method], f"{where}.{method}"))
    return item


def parse_operation(value: Any, where: str) -> Operation:
    data = as_mapping(value, where)

    request_body = None
    if data.get("requestBody") is not None:
        request_body = parse_request_body(data["requestBody"], f"{where}.requestBody")

    security = None
    if "security" in data:
        security = parse_security_requirements(data["security"], f"{where}.security")

    return Operation(
        operation_id=as_text(data.get("operationId")),
        summary=as_text(data.get("summary")),
        description=as_text(data.get("description")),
        tags=as_strings(data.get("tags"), f"{where}.tags"),
        parameters=parse_parameters(data.get("parameters"), f"{where}.parameters"),
        request_body=request_body,
        responses={
            str(code): parse_response(resp, f"{where}.responses.{code}")
            for code, resp in as_mapping(data.get("responses"), f"{where}.responses").items()
        },
        deprecated=bool(data.get("deprecated", False)),
        security=security,
        servers=parse_servers(data.get("servers"), f"{where}.servers"),
        external_docs=parse_external_docs(data.get("externalDocs"), f"{where}.externalDocs"),
        extensions=extensions_of(data),
    )


def parse_parameters(value: Any, where: str) -> list[Parameter]:
    return [
        parse_parameter(item, f"{where}[{index}]")
        for index, item in enumerate(as_list(value, where))
    ]


def parse_parameter(value: Any, where: str) -> Parameter:
    data = as_mapping(value, where)
    if "$ref" in data:
        return Parameter(ref=as_text(data["$ref"]))

    schema = None
    if data.get("schema") is not None:
        schema = parse_schema(data["schema"], f"{where}.schema")

    explode = data.get("explode")
    return Parameter(
        name=as_text(data.get("name")) or "",
        location=as_text(data.get("in")) or "",
        description=as_text(data.get("description")),
        required=bool(data.get("required", False)),
        deprecated=bool(data.get("deprecated", False)),
        allow_empty_value=bool(data.get("allowEmptyValue", False)),
        style=as_text(data.get("style")),
        explode=None if explode is None else bool(explode),
        schema=schema,
        example=data.get("example"),
        extensions=extensions_of(data),
    )


def parse_content(value: Any, where: str) -> dict[str, MediaType]:
    content: dict[str, MediaType] = {}
    for media_type, item in as_mapping(value, where).items():
        data = as_mapping(item, f"{where}.{media_type}")
        schema = None
        if data.get("schema") is not None:
            schema = parse_schema(data["schema"], f"{where}.{media_type}.schema")
        content[str(media_type)] = MediaType(
            schema=schema,
            example=data.get("example"),
            examples=as_mapping(data.get("examples"), f"{where}.{media_type}.examples"),
        )
    return content


def parse_request_body(value: Any, where: str) -> RequestBody:
    data = as_mapping(value, where)
    if "$ref" in data:
        return RequestBody(ref=as_text(data["$ref"]))
    return RequestBody(
        description=as_text(data.get("description")),
        required=bool(data.get("required", False)),
        content=parse_content(data.get("content"), f"{where}.content"),
    )


def parse_header(value: Any, where: str) -> Header:
    data = as_mapping(value, where)
    if "$ref" in data:
        return Header(ref=as_text(data["$ref"]))
    schema = None
    if data.get("schema") is not None:
        schema = parse_schema(data["schema"], f"{where}.schema")
    return Header(
        description=as_text(data.get("description")),
        required=bool(data.get("required", False)),
        schema=schema,
    )


def parse_response(value: Any, where: str) -> Response:
    data = as_mapping(value, where)
    if "$ref" in data:
        return Response(ref=as_text(data["$ref"]))
    return Response(
        description=as_text(data.get("description")) or "",
        headers={
            str(name): parse_header(header, f"{where}.headers.{name}")
            for name, header in as_mapping(data.get("headers"), f"{where}.headers").items()
        },
        content=parse_content(data.get("content"), f"{where}.content"),
    )


def parse_security_scheme(value: Any, where: str) -> SecurityScheme:
    data = as_mapping(value, where)
    if "$ref" in data:
        return SecurityScheme(ref=as_text(data["$ref"]))

    flows: dict[str, OAuthFlow] = {}
    for flow_name, flow in as_mapping(data.get("flows"), f"{where}.flows").items():
        flow_data = as_mapping(flow, f"{where}.flows.{flow_name}")
        flows[str(flow_name)] = OAuthFlow(
            authorization_url=as_text(flow_data.get("authorizationUrl")),
            token_url=as_text(flow_data.get("tokenUrl")),
            refresh_url=as_text(flow_data.get("refreshUrl")),
            scopes={
                str(k): str(v)
                for k, v in as_mapping(flow_data.get("scopes"), f"{where}.scopes").items()
            },
        )

    return SecurityScheme(
        type=as_text(data.get("type")) or "",
        description=as_text(data.get("description")),
        name=as_text(data.get("name")),
        location=as_text(data.get("in")),
        scheme=as_text(data.get("scheme")),
        bearer_format=as_text(data.get("bearerFormat")),
        flows=flows,
        open_id_connect_url=as_text(data.get("openIdConnectUrl")),
    )


def parse_components(value: Any) -> Components:
    data = as_mapping(value, "components")

    def section(key: str) -> dict[str, Any]:
        return as_mapping(data.get(key), f"components.{key}")

    return Components(
        schemas={
            str(name): parse_schema(item, f"components.schemas.{name}")
            for name, item in section("schemas").items()
        },
        parameters={
            str(name): parse_parameter(item, f"components.parameters.{name}")
            for name, item in section("parameters").items()
        },
        request_bodies={
            str(name): parse_request_body(item, f"components.requestBodies.{name}")
            for name, item in section("requestBodies").items()
        },
        responses={
            str(name): parse_response(item, f"components.responses.{name}")
            for name, item in section("responses").items()
        },
        headers={
            str(name): parse_header(item, f"components.headers.{name}")
            for name, item in section("headers").items()
        },
        security_schemes={
            str(name): parse_security_scheme(item, f"components.securitySchemes.{name}")
            for name, item in section("securitySchemes").items()
        },
    )

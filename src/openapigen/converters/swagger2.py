"""Swagger 2.0 -> OpenAPI 3 conversion.

Transforms the legacy model into the canonical Specification:
1. host/basePath/schemes become servers
2. body and formData parameters become request bodies
3. response schemas become content entries per media type
4. definitions, parameters, responses and securityDefinitions move under components
5. $ref targets are rewritten to their components location

Anything without an OpenAPI 3 equivalent raises ConversionError.
"""

import logging
from typing import Any

from openapigen.errors import ConversionError
from openapigen.models.canonical import (
    Components,
    Header,
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
)
from openapigen.models.legacy import (
    LegacyOperation,
    LegacyParameter,
    LegacyPathItem,
    LegacyResponse,
    LegacySecurityScheme,
    Swagger,
)
from openapigen.parsers.common import DocumentStructureError, parse_schema

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.3"
DEFAULT_MEDIA_TYPE = "application/json"
DEFAULT_SCHEME = "https"

LEGACY_DEFINITIONS_PREFIX = "#/definitions/"
LEGACY_PARAMETERS_PREFIX = "#/parameters/"
LEGACY_RESPONSES_PREFIX = "#/responses/"
SCHEMAS_PREFIX = "#/components/schemas/"
PARAMETERS_PREFIX = "#/components/parameters/"
REQUEST_BODIES_PREFIX = "#/components/requestBodies/"
RESPONSES_PREFIX = "#/components/responses/"

# Swagger 2.0 oauth2 flow name -> OpenAPI 3 flow name
OAUTH_FLOWS = {
    "implicit": "implicit",
    "password": "password",
    "application": "clientCredentials",
    "accessCode": "authorizationCode",
}

SIMPLE_LOCATIONS = ("query", "header", "path")


def convert_schema_dict(raw: Any) -> Any:
    """Rewrite a raw Swagger 2.0 schema node into its OpenAPI 3 form.

    Rewrites definition references, maps ``x-nullable`` to ``nullable`` and
    the ``file`` type to a binary string.
    """
    if isinstance(raw, list):
        return [convert_schema_dict(item) for item in raw]
    if not isinstance(raw, dict):
        return raw

    result: dict[str, Any] = {}
    for key, value in raw.items():
        if key == "$ref" and isinstance(value, str):
            result[key] = value.replace(LEGACY_DEFINITIONS_PREFIX, SCHEMAS_PREFIX, 1)
        elif key == "x-nullable":
            result["nullable"] = bool(value)
        elif key == "type" and value == "file":
            result["type"] = "string"
            result["format"] = "binary"
        else:
            result[key] = convert_schema_dict(value)
    return result


class Swagger2Converter:
    """Converts a parsed Swagger 2.0 document into the canonical model.

    Usage:
        spec = Swagger2Converter(swagger).convert()
    """

    def __init__(self, swagger: Swagger) -> None:
        self.swagger = swagger

    def convert(self) -> Specification:
        """Run the conversion.

        Returns:
            Canonical Specification

        Raises:
            ConversionError: If the document uses an unsupported construct
        """
        swagger = self.swagger
        paths: dict[str, PathItem] = {}
        for path, legacy_item in swagger.paths.items():
            paths[path] = self._convert_path_item(path, legacy_item)

        spec = Specification(
            openapi=OPENAPI_VERSION,
            info=swagger.info,
            servers=self._servers(swagger.schemes),
            paths=paths,
            components=self._components(),
            security=[dict(req) for req in swagger.security],
            tags=list(swagger.tags),
            external_docs=swagger.external_docs,
            extensions=dict(swagger.extensions),
        )
        logger.debug(
            "Converted swagger %s document with %d paths", swagger.swagger, len(paths)
        )
        return spec

    # =========================================================================
    # Servers and references
    # =========================================================================

    def _servers(self, schemes: list[str]) -> list[Server]:
        host = self.swagger.host
        base_path = self.swagger.base_path or ""
        if host:
            return [
                Server(url=f"{scheme}://{host}{base_path}")
                for scheme in (schemes or [DEFAULT_SCHEME])
            ]
        if base_path:
            return [Server(url=base_path)]
        return []

    def _parameter_ref(self, ref: str) -> tuple[str, LegacyParameter]:
        """Resolve a parameter $ref into its name and top-level definition."""
        if not ref.startswith(LEGACY_PARAMETERS_PREFIX):
            raise ConversionError(f"unsupported parameter reference: {ref}")
        name = ref[len(LEGACY_PARAMETERS_PREFIX):]
        if name not in self.swagger.parameters:
            raise ConversionError(f"reference to undefined parameter: {ref}")
        return name, self.swagger.parameters[name]

    def _response_ref(self, ref: str) -> str:
        if not ref.startswith(LEGACY_RESPONSES_PREFIX):
            raise ConversionError(f"unsupported response reference: {ref}")
        name = ref[len(LEGACY_RESPONSES_PREFIX):]
        if name not in self.swagger.responses:
            raise ConversionError(f"reference to undefined response: {ref}")
        return RESPONSES_PREFIX + name

    def _schema(self, raw: dict[str, Any] | None, where: str) -> Schema | None:
        if raw is None:
            return None
        try:
            return parse_schema(convert_schema_dict(raw), where)
        except DocumentStructureError as e:
            raise ConversionError(f"cannot convert schema at {where}: {e}") from e

    # =========================================================================
    # Paths and operations
    # =========================================================================

    def _convert_path_item(self, path: str, legacy_item: LegacyPathItem) -> PathItem:
        where = f"paths.{path}"
        shared, shared_payload = self._split_parameters(legacy_item.parameters, where)

        item = PathItem(
            parameters=shared,
            ref=legacy_item.ref,
            extensions=dict(legacy_item.extensions),
        )
        for method, legacy_op in legacy_item.operations.items():
            item.set_operation(
                method,
                self._convert_operation(legacy_op, shared_payload, f"{where}.{method}"),
            )
        return item

    def _split_parameters(
        self,
        legacy_params: list[LegacyParameter],
        where: str,
    ) -> tuple[list[Parameter], list[tuple[LegacyParameter, LegacyParameter]]]:
        """Split parameters into simple ones and payload ones.

        Returns:
            (converted simple parameters, [(as written, resolved)] payload parameters)
        """
        simple: list[Parameter] = []
        payload: list[tuple[LegacyParameter, LegacyParameter]] = []

        for legacy in legacy_params:
            resolved = legacy
            if legacy.ref is not None:
                _, resolved = self._parameter_ref(legacy.ref)

            if resolved.is_payload:
                payload.append((legacy, resolved))
            elif resolved.location in SIMPLE_LOCATIONS:
                if legacy.ref is not None:
                    name, _ = self._parameter_ref(legacy.ref)
                    simple.append(Parameter(ref=PARAMETERS_PREFIX + name))
                else:
                    simple.append(self._convert_parameter(resolved, where))
            else:
                raise ConversionError(
                    f"unsupported parameter location '{resolved.location}' "
                    f"for '{resolved.name}' at {where}"
                )
        return simple, payload

    def _convert_operation(
        self,
        legacy_op: LegacyOperation,
        shared_payload: list[tuple[LegacyParameter, LegacyParameter]],
        where: str,
    ) -> Operation:
        swagger = self.swagger
        consumes = legacy_op.consumes if legacy_op.consumes is not None else swagger.consumes
        produces = legacy_op.produces if legacy_op.produces is not None else swagger.produces

        parameters, payload = self._split_parameters(legacy_op.parameters, where)
        if not payload:
            payload = shared_payload

        servers: list[Server] = []
        if legacy_op.schemes and swagger.host:
            servers = self._servers(legacy_op.schemes)

        return Operation(
            operation_id=legacy_op.operation_id,
            summary=legacy_op.summary,
            description=legacy_op.description,
            tags=list(legacy_op.tags),
            parameters=parameters,
            request_body=self._request_body(payload, consumes, where),
            responses={
                code: self._convert_response(response, produces, f"{where}.responses.{code}")
                for code, response in legacy_op.responses.items()
            },
            deprecated=legacy_op.deprecated,
            security=legacy_op.security,
            servers=servers,
            external_docs=legacy_op.external_docs,
            extensions=dict(legacy_op.extensions),
        )

    # =========================================================================
    # Parameters and request bodies
    # =========================================================================

    def _parameter_schema(self, param: LegacyParameter, where: str) -> Schema | None:
        raw: dict[str, Any] = {}
        if param.type is not None:
            raw["type"] = param.type
        if param.format is not None:
            raw["format"] = param.format
        if param.items is not None:
            raw["items"] = param.items
        if param.enum:
            raw["enum"] = param.enum
        if param.default is not None:
            raw["default"] = param.default
        raw.update(param.constraints)
        if not raw:
            return None
        return self._schema(raw, where)

    def _style(self, param: LegacyParameter, where: str) -> tuple[str | None, bool | None]:
        """Map collectionFormat onto OpenAPI 3 style/explode."""
        if param.type != "array":
            return None, None

        fmt = param.collection_format or "csv"
        location = param.location
        if fmt == "csv":
            if location == "query":
                return "form", False
            return "simple", None
        if fmt == "multi" and location == "query":
            return "form", True
        if fmt == "ssv" and location == "query":
            return "spaceDelimited", None
        if fmt == "pipes" and location == "query":
            return "pipeDelimited", None
        raise ConversionError(
            f"unsupported collectionFormat '{fmt}' for {location} parameter "
            f"'{param.name}' at {where}"
        )

    def _convert_parameter(self, param: LegacyParameter, where: str) -> Parameter:
        style, explode = self._style(param, where)
        return Parameter(
            name=param.name,
            location=param.location,
            description=param.description,
            required=param.required or param.location == "path",
            allow_empty_value=param.allow_empty_value,
            style=style,
            explode=explode,
            schema=self._parameter_schema(param, f"{where}.{param.name}"),
            extensions=dict(param.extensions),
        )

    def _request_body(
        self,
        payload: list[tuple[LegacyParameter, LegacyParameter]],
        consumes: list[str],
        where: str,
    ) -> RequestBody | None:
        if not payload:
            return None

        body = [(written, resolved) for written, resolved in payload if resolved.location == "body"]
        form = [resolved for _, resolved in payload if resolved.location == "formData"]

        if len(body) > 1:
            raise ConversionError(f"more than one body parameter at {where}")
        if body and form:
            raise ConversionError(f"body and formData parameters mixed at {where}")

        if body:
            written, resolved = body[0]
            if written.ref is not None:
                name, _ = self._parameter_ref(written.ref)
                return RequestBody(ref=REQUEST_BODIES_PREFIX + name)
            return self._body_request(resolved, consumes, where)

        return self._form_request(form, consumes, where)

    def _body_request(
        self,
        param: LegacyParameter,
        consumes: list[str],
        where: str,
    ) -> RequestBody:
        schema = self._schema(param.schema, f"{where}.{param.name}.schema")
        return RequestBody(
            description=param.description,
            required=param.required,
            content={
                media_type: MediaType(schema=schema)
                for media_type in (consumes or [DEFAULT_MEDIA_TYPE])
            },
        )

    def _form_request(
        self,
        fields: list[LegacyParameter],
        consumes: list[str],
        where: str,
    ) -> RequestBody:
        properties: dict[str, Schema] = {}
        required: list[str] = []
        for param in fields:
            schema = self._parameter_schema(param, f"{where}.{param.name}") or Schema()
            if param.description and not schema.description:
                schema.description = param.description
            properties[param.name] = schema
            if param.required:
                required.append(param.name)

        has_file = any(param.type == "file" for param in fields)
        if has_file or "multipart/form-data" in consumes:
            media_type = "multipart/form-data"
        else:
            media_type = "application/x-www-form-urlencoded"

        return RequestBody(
            required=bool(required),
            content={
                media_type: MediaType(
                    schema=Schema(type="object", properties=properties, required=required)
                )
            },
        )

    # =========================================================================
    # Responses
    # =========================================================================

    def _convert_response(
        self,
        response: LegacyResponse,
        produces: list[str],
        where: str,
    ) -> Response:
        if response.ref is not None:
            return Response(ref=self._response_ref(response.ref))

        headers: dict[str, Header] = {}
        for name, raw_header in response.headers.items():
            header_schema = {k: v for k, v in raw_header.items() if k != "description"}
            headers[name] = Header(
                description=raw_header.get("description"),
                schema=self._schema(header_schema, f"{where}.headers.{name}") if header_schema else None,
            )

        content: dict[str, MediaType] = {}
        media_types = produces or [DEFAULT_MEDIA_TYPE]
        if response.schema is not None:
            schema = self._schema(response.schema, f"{where}.schema")
            for media_type in media_types:
                content[media_type] = MediaType(
                    schema=schema,
                    example=response.examples.get(media_type),
                )
        else:
            for media_type, example in response.examples.items():
                content[media_type] = MediaType(example=example)

        return Response(description=response.description, headers=headers, content=content)

    # =========================================================================
    # Components
    # =========================================================================

    def _convert_security_scheme(
        self,
        name: str,
        scheme: LegacySecurityScheme,
    ) -> SecurityScheme:
        if scheme.type == "basic":
            return SecurityScheme(type="http", scheme="basic", description=scheme.description)
        if scheme.type == "apiKey":
            return SecurityScheme(
                type="apiKey",
                description=scheme.description,
                name=scheme.name,
                location=scheme.location,
            )
        if scheme.type == "oauth2":
            flow = scheme.flow or ""
            if flow not in OAUTH_FLOWS:
                raise ConversionError(f"unsupported oauth2 flow '{flow}' in security scheme {name}")
            return SecurityScheme(
                type="oauth2",
                description=scheme.description,
                flows={
                    OAUTH_FLOWS[flow]: OAuthFlow(
                        authorization_url=scheme.authorization_url,
                        token_url=scheme.token_url,
                        scopes=dict(scheme.scopes),
                    )
                },
            )
        raise ConversionError(f"unsupported security scheme type '{scheme.type}' for {name}")

    def _components(self) -> Components:
        swagger = self.swagger
        components = Components()

        for name, raw in swagger.definitions.items():
            schema = self._schema(raw, f"definitions.{name}")
            if schema is not None:
                components.schemas[name] = schema

        for name, param in swagger.parameters.items():
            where = f"parameters.{name}"
            if param.ref is not None:
                raise ConversionError(f"top-level parameter {name} cannot be a reference")
            if param.location == "body":
                components.request_bodies[name] = self._body_request(
                    param, swagger.consumes, where
                )
            elif param.location in SIMPLE_LOCATIONS:
                components.parameters[name] = self._convert_parameter(param, where)
            elif param.location != "formData":
                raise ConversionError(
                    f"unsupported parameter location '{param.location}' at {where}"
                )

        for name, response in swagger.responses.items():
            components.responses[name] = self._convert_response(
                response, swagger.produces, f"responses.{name}"
            )

        for name, scheme in swagger.security_definitions.items():
            components.security_schemes[name] = self._convert_security_scheme(name, scheme)

        return components


def convert_swagger(swagger: Swagger) -> Specification:
    """Convert a Swagger 2.0 document into the canonical model."""
    return Swagger2Converter(swagger).convert()

"""Unit tests for the OpenAPI 3 and Swagger 2.0 parsers."""

from pathlib import Path

import pytest

from openapigen.errors import MalformedInput
from openapigen.parsers import (
    DocumentStructureError,
    OpenAPI3Parser,
    Swagger2Parser,
    decode_document,
)
from openapigen.parsers.common import parse_schema


class TestDecodeDocument:
    """Tests for JSON/YAML decoding."""

    def test_json(self) -> None:
        assert decode_document('{"a": 1}') == {"a": 1}

    def test_yaml_by_suffix(self) -> None:
        assert decode_document("a: 1\n", "api.yaml") == {"a": 1}

    def test_yaml_fallback(self) -> None:
        assert decode_document("openapi: 3.0.0\n", "api.json") == {"openapi": "3.0.0"}

    def test_yaml_dates_stay_strings(self) -> None:
        text = "released: 2020-01-01\nstamp: 2020-01-01T10:00:00Z\n"
        assert decode_document(text, "api.yaml") == {
            "released": "2020-01-01",
            "stamp": "2020-01-01T10:00:00Z",
        }
        assert decode_document("released: 2020-01-01\n", "api.json") == {"released": "2020-01-01"}

    def test_blank(self) -> None:
        with pytest.raises(DocumentStructureError, match="empty"):
            decode_document("   \n")

    def test_scalar_root(self) -> None:
        with pytest.raises(DocumentStructureError):
            decode_document('"just a string"')


class TestOpenAPI3Parser:
    """Tests for OpenAPI 3 parsing."""

    def test_petstore(self, petstore_v3_path: Path) -> None:
        spec = OpenAPI3Parser().load(petstore_v3_path.read_text())

        assert spec.openapi == "3.0.3"
        assert spec.servers[0].url == "https://petstore.example.com/v1"
        operation = spec.paths["/pets/{petId}"].get
        assert operation.tags == ["pets"]
        assert operation.parameters[0].location == "path"
        assert operation.parameters[0].required is True
        assert operation.responses["200"].content["application/json"].schema.ref == (
            "#/components/schemas/Pet"
        )
        assert spec.components.schemas["Pet"].required == ["id", "name"]

    def test_operations_in_method_order(self, petstore_v3_path: Path) -> None:
        spec = OpenAPI3Parser().load(petstore_v3_path.read_text())
        assert list(spec.paths["/pets"].operations()) == ["get", "post"]

    def test_path_extensions_are_not_paths(self) -> None:
        spec = OpenAPI3Parser().parse({"openapi": "3.0.0", "paths": {"x-internal": {}, "/a": {}}})
        assert list(spec.paths) == ["/a"]

    def test_operation_security_override(self) -> None:
        document = {"openapi": "3.0.0", "paths": {"/a": {"get": {"security": []}}}}
        assert OpenAPI3Parser().parse(document).paths["/a"].get.security == []

    def test_rejects_swagger(self) -> None:
        with pytest.raises(MalformedInput) as exc_info:
            OpenAPI3Parser().load('{"swagger": "2.0"}')
        assert exc_info.value.stage == "parse"
        assert "--v2" in exc_info.value.message

    def test_rejects_other_versions(self) -> None:
        with pytest.raises(MalformedInput, match="unsupported openapi version"):
            OpenAPI3Parser().load('{"openapi": "4.0.0"}')

    def test_security_schemes(self) -> None:
        document = {
            "openapi": "3.0.0",
            "components": {"securitySchemes": {
                "bearer": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
                "oauth": {"type": "oauth2", "flows": {"clientCredentials": {
                    "tokenUrl": "https://t", "scopes": {"read": "Read"},
                }}},
            }},
        }
        schemes = OpenAPI3Parser().parse(document).components.security_schemes
        assert schemes["bearer"].bearer_format == "JWT"
        assert schemes["oauth"].flows["clientCredentials"].scopes == {"read": "Read"}


class TestParseSchema:
    """Tests for schema parsing."""

    def test_reference(self) -> None:
        schema = parse_schema({"$ref": "#/components/schemas/Pet"}, "s")
        assert schema.is_ref
        assert schema.ref == "#/components/schemas/Pet"

    def test_type_array_with_null(self) -> None:
        schema = parse_schema({"type": ["string", "null"]}, "s")
        assert schema.type == "string"
        assert schema.nullable is True

    def test_numeric_exclusive_bound(self) -> None:
        schema = parse_schema({"type": "integer", "exclusiveMinimum": 0}, "s")
        assert schema.minimum == 0
        assert schema.exclusive_minimum is True

    def test_unknown_keywords_are_kept(self) -> None:
        schema = parse_schema({"type": "string", "x-go-type": "uuid.UUID", "const": "a"}, "s")
        assert schema.extensions == {"x-go-type": "uuid.UUID", "const": "a"}

    def test_additional_properties(self) -> None:
        schema = parse_schema({"type": "object", "additionalProperties": {"type": "string"}}, "s")
        assert schema.additional_properties.type == "string"
        assert parse_schema({"additionalProperties": False}, "s").additional_properties is False

    def test_bad_integer_keyword(self) -> None:
        with pytest.raises(DocumentStructureError, match="minLength"):
            parse_schema({"type": "string", "minLength": "3"}, "s")


class TestSwagger2Parser:
    """Tests for Swagger 2.0 parsing into the legacy model."""

    def test_petstore(self, petstore_v2_path: Path) -> None:
        swagger = Swagger2Parser().load(petstore_v2_path.read_text())

        assert swagger.host == "petstore.example.com"
        assert swagger.base_path == "/v1"
        assert swagger.schemes == ["https", "http"]
        assert swagger.path_count == 3
        assert swagger.paths["/pets"].operations["post"].parameters[0].is_payload
        assert swagger.parameters["PetId"].location == "path"
        assert swagger.security_definitions["petstore_auth"].flow == "implicit"

    def test_inherited_consumes_is_none(self, petstore_v2_path: Path) -> None:
        swagger = Swagger2Parser().load(petstore_v2_path.read_text())
        assert swagger.paths["/pets"].operations["get"].consumes is None
        upload = swagger.paths["/pets/{petId}/photo"].operations["post"]
        assert upload.consumes == ["multipart/form-data"]

    def test_parameter_constraints(self, petstore_v2_path: Path) -> None:
        swagger = Swagger2Parser().load(petstore_v2_path.read_text())
        limit = swagger.paths["/pets"].operations["get"].parameters[0]
        assert limit.constraints == {"maximum": 100}

    def test_rejects_openapi3(self) -> None:
        with pytest.raises(MalformedInput) as exc_info:
            Swagger2Parser().load('{"openapi": "3.0.0"}')
        assert exc_info.value.stage == "legacy parse"

    def test_rejects_other_swagger_versions(self) -> None:
        with pytest.raises(MalformedInput, match="unsupported swagger version"):
            Swagger2Parser().load('{"swagger": "1.2"}')

    def test_tags_must_be_a_list(self) -> None:
        with pytest.raises(MalformedInput, match="tags must be an array"):
            Swagger2Parser().load('{"swagger": "2.0", "tags": "pets"}')

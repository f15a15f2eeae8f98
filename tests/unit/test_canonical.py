"""Unit tests for the canonical specification model."""

import pytest

from openapigen.models.canonical import (
    HTTP_METHODS,
    Info,
    OAuthFlow,
    Operation,
    Parameter,
    PathItem,
    Response,
    Schema,
    Specification,
)


class TestPathItem:
    """Tests for PathItem operation access."""

    def test_operations_follow_method_order(self) -> None:
        item = PathItem(post=Operation(operation_id="b"), get=Operation(operation_id="a"))
        assert list(item.operations()) == ["get", "post"]

    def test_set_operation_is_case_insensitive(self) -> None:
        item = PathItem()
        item.set_operation("PUT", Operation(operation_id="replace"))
        assert item.put.operation_id == "replace"

    def test_set_operation_rejects_unknown_method(self) -> None:
        with pytest.raises(ValueError, match="Unsupported HTTP method"):
            PathItem().set_operation("fetch", Operation())

    def test_every_method_is_a_field(self) -> None:
        item = PathItem()
        for method in HTTP_METHODS:
            assert getattr(item, method) is None


class TestSpecification:
    """Tests for Specification helpers and serialization."""

    def test_operations_walks_all_paths(self, tagged_spec: Specification) -> None:
        found = [(path, method) for path, method, _ in tagged_spec.operations()]
        assert found == [("/zeta", "get"), ("/alpha", "delete"), ("/alpha", "post")]

    def test_path_count(self, tagged_spec: Specification) -> None:
        assert tagged_spec.path_count == 2

    def test_empty_document_keeps_required_keys(self) -> None:
        assert Specification().to_dict() == {
            "openapi": "3.0.3",
            "info": {"title": "", "version": ""},
            "paths": {},
        }

    def test_to_dict_uses_openapi_key_names(self) -> None:
        spec = Specification(
            info=Info(title="T", version="1", terms_of_service="https://tos"),
            paths={"/a": PathItem(get=Operation(
                operation_id="getA",
                parameters=[Parameter(name="q", location="query", required=True)],
                responses={"200": Response(description="OK")},
            ))},
        )
        data = spec.to_dict()
        assert data["info"]["termsOfService"] == "https://tos"
        operation = data["paths"]["/a"]["get"]
        assert operation["operationId"] == "getA"
        assert operation["parameters"] == [{"name": "q", "in": "query", "required": True}]
        assert operation["responses"] == {"200": {"description": "OK"}}

    def test_explicit_empty_security_is_kept(self) -> None:
        assert Operation(security=[]).to_dict() == {"security": []}
        assert "security" not in Operation().to_dict()


class TestSchema:
    """Tests for Schema serialization."""

    def test_reference_serializes_alone(self) -> None:
        schema = Schema(ref="#/components/schemas/Pet", description="ignored")
        assert schema.to_dict() == {"$ref": "#/components/schemas/Pet"}

    def test_flags_only_when_set(self) -> None:
        assert Schema(type="string", nullable=True).to_dict() == {"type": "string", "nullable": True}
        assert Schema(type="string").to_dict() == {"type": "string"}

    def test_nested_properties(self) -> None:
        schema = Schema(type="object", properties={"id": Schema(type="integer")}, required=["id"])
        assert schema.to_dict() == {
            "type": "object",
            "properties": {"id": {"type": "integer"}},
            "required": ["id"],
        }

    def test_extensions_are_merged(self) -> None:
        assert Schema(type="string", extensions={"x-order": 1}).to_dict() == {
            "type": "string",
            "x-order": 1,
        }


class TestOAuthFlow:
    def test_scopes_always_present(self) -> None:
        assert OAuthFlow(token_url="https://t").to_dict() == {"tokenUrl": "https://t", "scopes": {}}

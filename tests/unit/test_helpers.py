"""Unit tests for template helper functions."""

import json

import pytest
from jinja2 import ChainableUndefined

from openapigen.models.canonical import Info, Operation, PathItem, Specification
from openapigen.renderers.helpers import (
    HELPER_ALIASES,
    STRING_HELPERS,
    build_helpers,
    camel_case,
    debug_dump,
    filter_helpers,
    first_letter,
    lower_camel_case,
    snake_case,
    split_words,
    strip_definition_prefix,
    to_lower,
    unique_path_tags,
)


class TestSplitWords:
    """Tests for identifier word splitting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("user_id", ["user", "id"]),
            ("user-id", ["user", "id"]),
            ("list pets", ["list", "pets"]),
            ("pet.store", ["pet", "store"]),
            ("getPetById", ["get", "Pet", "By", "Id"]),
            ("UserID", ["User", "ID"]),
            ("HTTPServer", ["HTTP", "Server"]),
            ("v2Api", ["v", "2", "Api"]),
        ],
    )
    def test_boundaries(self, value: str, expected: list[str]) -> None:
        """Test separators, case changes, acronyms and digit runs."""
        assert split_words(value) == expected

    def test_none_is_empty(self) -> None:
        """Test that None has no words."""
        assert split_words(None) == []


class TestCaseConversion:
    """Tests for camelCase, lowerCamelCase and snakeCase."""

    def test_camel_case(self) -> None:
        assert camel_case("user_id") == "UserId"

    def test_lower_camel_case(self) -> None:
        assert lower_camel_case("user_id") == "userId"

    def test_snake_case(self) -> None:
        assert snake_case("UserID") == "user_id"

    def test_camel_case_of_operation_id(self) -> None:
        assert camel_case("listPets") == "ListPets"

    def test_lower_camel_case_of_acronym(self) -> None:
        assert lower_camel_case("ID") == "id"

    def test_snake_case_of_mixed_identifier(self) -> None:
        assert snake_case("getPetById") == "get_pet_by_id"

    @pytest.mark.parametrize(
        "value",
        ["user_id", "UserID", "getPetById", "HTTPServer2", "list_all_pets", "x"],
    )
    def test_snake_camel_snake_is_stable(self, value: str) -> None:
        """Test snakeCase(camelCase(snakeCase(x))) == snakeCase(x)."""
        once = snake_case(value)
        assert snake_case(camel_case(once)) == once

    def test_empty_input(self) -> None:
        assert camel_case("") == ""
        assert lower_camel_case("") == ""
        assert snake_case("") == ""

    def test_undefined_is_empty(self) -> None:
        """Test that undefined template values convert to ''."""
        assert camel_case(ChainableUndefined()) == ""


class TestStripDefinitionPrefix:
    """Tests for stripDefinitionPrefix."""

    def test_strips_legacy_prefix(self) -> None:
        assert strip_definition_prefix("#/definitions/Widget") == "Widget"

    def test_no_prefix_is_noop(self) -> None:
        assert strip_definition_prefix("Widget") == "Widget"

    def test_strips_components_prefix(self) -> None:
        """Converted documents carry the OpenAPI 3 prefix."""
        assert strip_definition_prefix("#/components/schemas/Widget") == "Widget"

    def test_prefix_only_in_middle_is_kept(self) -> None:
        assert strip_definition_prefix("x#/definitions/Widget") == "x#/definitions/Widget"


class TestSmallHelpers:
    """Tests for firstLetter and toLower."""

    def test_first_letter(self) -> None:
        assert first_letter("pets") == "p"

    def test_first_letter_of_empty(self) -> None:
        assert first_letter("") == ""
        assert first_letter(None) == ""

    def test_to_lower(self) -> None:
        assert to_lower("GET") == "get"


class TestDebugDump:
    """Tests for debugDump."""

    def test_tab_indented_with_trailing_newline(self) -> None:
        result = debug_dump({"a": [1]})
        assert result == '{\n\t"a": [\n\t\t1\n\t]\n}\n'

    def test_model_objects_use_to_dict(self) -> None:
        result = debug_dump(Operation(operation_id="listPets", tags=["pets"]))
        assert json.loads(result) == {"tags": ["pets"], "operationId": "listPets"}

    def test_unserializable_value_raises(self) -> None:
        with pytest.raises(ValueError, match="cannot marshal"):
            debug_dump(object())

    def test_undefined_dumps_null(self) -> None:
        assert debug_dump(ChainableUndefined()) == "null\n"


class TestUniquePathTags:
    """Tests for uniquePathTags."""

    def test_dedup_and_sort(self, tagged_spec: Specification) -> None:
        assert unique_path_tags(tagged_spec) == ["a", "b"]

    def test_independent_of_path_order(self) -> None:
        """Test the same tags come back whatever order paths were added in."""
        items = [
            ("/one", PathItem(get=Operation(tags=["b", "a"]))),
            ("/two", PathItem(get=Operation(tags=["a"]))),
            ("/three", PathItem(get=Operation(tags=[]))),
        ]
        forward = Specification(paths=dict(items))
        backward = Specification(paths=dict(reversed(items)))
        assert unique_path_tags(forward) == unique_path_tags(backward) == ["a", "b"]

    def test_no_operations(self) -> None:
        assert unique_path_tags(Specification()) == []


class TestHelperTable:
    """Tests for the assembled helper table."""

    def test_contains_every_helper(self, tagged_spec: Specification) -> None:
        helpers = build_helpers(tagged_spec)
        for name in [*STRING_HELPERS, *HELPER_ALIASES, "uniquePathTags"]:
            assert name in helpers

    def test_aliases_point_at_helpers(self) -> None:
        helpers = build_helpers(Specification())
        assert helpers["camel"] is helpers["camelCase"]
        assert helpers["snake"] is helpers["snakeCase"]
        assert helpers["debug"] is helpers["debugDump"]

    def test_unique_path_tags_is_bound_to_spec(self, tagged_spec: Specification) -> None:
        helpers = build_helpers(tagged_spec)
        assert helpers["uniquePathTags"]() == ["a", "b"]

    def test_tables_are_independent(self, tagged_spec: Specification) -> None:
        """Test each table sees only the spec it was built for."""
        other = Specification(
            info=Info(title="Other"),
            paths={"/x": PathItem(get=Operation(tags=["z"]))},
        )
        assert build_helpers(tagged_spec)["uniquePathTags"]() == ["a", "b"]
        assert build_helpers(other)["uniquePathTags"]() == ["z"]

    def test_filters_exclude_unique_path_tags(self) -> None:
        filters = filter_helpers(build_helpers(Specification()))
        assert "uniquePathTags" not in filters
        assert "camelCase" in filters

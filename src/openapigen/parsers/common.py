"""Parsing helpers shared by the OpenAPI 3 and Swagger 2.0 parsers.

Helpers raise DocumentStructureError on shape problems; the parser that called
them turns that into a MalformedInput tagged with its own stage.
"""

from typing import Any

from openapigen.models.canonical import (
    Contact,
    ExternalDocs,
    Info,
    License,
    Schema,
    Tag,
)


class DocumentStructureError(ValueError):
    """Raised when a document node does not have the expected shape."""


# Keys parse_schema maps onto Schema fields; everything else is kept verbatim
_SCHEMA_KEYS = {
    "$ref",
    "type",
    "format",
    "title",
    "description",
    "properties",
    "items",
    "required",
    "enum",
    "default",
    "example",
    "nullable",
    "readOnly",
    "writeOnly",
    "deprecated",
    "allOf",
    "oneOf",
    "anyOf",
    "additionalProperties",
    "minimum",
    "maximum",
    "exclusiveMinimum",
    "exclusiveMaximum",
    "multipleOf",
    "minLength",
    "maxLength",
    "pattern",
    "minItems",
    "maxItems",
    "uniqueItems",
    "discriminator",
}


def as_mapping(value: Any, where: str) -> dict[str, Any]:
    """Return value as a mapping, treating a missing node as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentStructureError(f"{where} must be an object")
    return value


def as_list(value: Any, where: str) -> list[Any]:
    """Return value as a list, treating a missing node as empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise DocumentStructureError(f"{where} must be an array")
    return value


def as_text(value: Any) -> str | None:
    """Return value as text; YAML may hand back numbers for versions."""
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise DocumentStructureError(f"expected a string, got {type(value).__name__}")
    return str(value)


def as_strings(value: Any, where: str) -> list[str]:
    """Return a list of strings (tags, media types, schemes)."""
    return [str(item) for item in as_list(value, where)]


def extensions_of(data: dict[str, Any]) -> dict[str, Any]:
    """Collect vendor extensions (x-*) of a node."""
    return {key: value for key, value in data.items() if str(key).startswith("x-")}


def parse_external_docs(value: Any, where: str) -> ExternalDocs | None:
    if value is None:
        return None
    data = as_mapping(value, where)
    return ExternalDocs(
        url=as_text(data.get("url")) or "",
        description=as_text(data.get("description")),
    )


def parse_info(value: Any) -> Info:
    """Parse the info object, which has the same shape in both versions."""
    data = as_mapping(value, "info")

    contact = None
    if data.get("contact") is not None:
        contact_data = as_mapping(data["contact"], "info.contact")
        contact = Contact(
            name=as_text(contact_data.get("name")),
            url=as_text(contact_data.get("url")),
            email=as_text(contact_data.get("email")),
        )

    license_ = None
    if data.get("license") is not None:
        license_data = as_mapping(data["license"], "info.license")
        license_ = License(
            name=as_text(license_data.get("name")) or "",
            url=as_text(license_data.get("url")),
        )

    return Info(
        title=as_text(data.get("title")) or "",
        version=as_text(data.get("version")) or "",
        description=as_text(data.get("description")),
        terms_of_service=as_text(data.get("termsOfService")),
        contact=contact,
        license=license_,
        extensions=extensions_of(data),
    )


def parse_tags(value: Any) -> list[Tag]:
    tags: list[Tag] = []
    for index, item in enumerate(as_list(value, "tags")):
        data = as_mapping(item, f"tags[{index}]")
        tags.append(Tag(
            name=as_text(data.get("name")) or "",
            description=as_text(data.get("description")),
            external_docs=parse_external_docs(
                data.get("externalDocs"), f"tags[{index}].externalDocs"
            ),
        ))
    return tags


def parse_security_requirements(value: Any, where: str) -> list[dict[str, list[str]]]:
    """Parse a list of security requirement objects."""
    requirements: list[dict[str, list[str]]] = []
    for index, item in enumerate(as_list(value, where)):
        data = as_mapping(item, f"{where}[{index}]")
        requirements.append({
            str(name): as_strings(scopes, f"{where}[{index}].{name}")
            for name, scopes in data.items()
        })
    return requirements


def _number(value: Any, where: str) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        raise DocumentStructureError(f"{where} must be a number")
    return value


def _integer(value: Any, where: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise DocumentStructureError(f"{where} must be an integer")
    return value


def parse_schema(value: Any, where: str) -> Schema:
    """Parse a JSON schema node (or a $ref to one) into a Schema."""
    data = as_mapping(value, where)

    if "$ref" in data:
        return Schema(ref=as_text(data["$ref"]))

    schema_type = data.get("type")
    nullable = bool(data.get("nullable", False))
    if isinstance(schema_type, list):
        # OpenAPI 3.1 style type arrays: ["string", "null"]
        types = [str(t) for t in schema_type]
        nullable = nullable or "null" in types
        non_null = [t for t in types if t != "null"]
        schema_type = non_null[0] if non_null else None

    additional: Schema | bool | None = None
    if isinstance(data.get("additionalProperties"), bool):
        additional = data["additionalProperties"]
    elif data.get("additionalProperties") is not None:
        additional = parse_schema(
            data["additionalProperties"], f"{where}.additionalProperties"
        )

    minimum = _number(data.get("minimum"), f"{where}.minimum")
    maximum = _number(data.get("maximum"), f"{where}.maximum")
    exclusive_minimum = data.get("exclusiveMinimum", False)
    exclusive_maximum = data.get("exclusiveMaximum", False)
    # OpenAPI 3.1 carries the bound itself in exclusiveMinimum/Maximum
    if not isinstance(exclusive_minimum, bool):
        minimum = _number(exclusive_minimum, f"{where}.exclusiveMinimum")
        exclusive_minimum = True
    if not isinstance(exclusive_maximum, bool):
        maximum = _number(exclusive_maximum, f"{where}.exclusiveMaximum")
        exclusive_maximum = True

    items = None
    if data.get("items") is not None:
        items = parse_schema(data["items"], f"{where}.items")

    discriminator = None
    if data.get("discriminator") is not None:
        discriminator = as_mapping(data["discriminator"], f"{where}.discriminator")

    return Schema(
        type=as_text(schema_type),
        format=as_text(data.get("format")),
        title=as_text(data.get("title")),
        description=as_text(data.get("description")),
        properties={
            str(name): parse_schema(prop, f"{where}.properties.{name}")
            for name, prop in as_mapping(data.get("properties"), f"{where}.properties").items()
        },
        items=items,
        required=as_strings(data.get("required"), f"{where}.required"),
        enum=list(as_list(data.get("enum"), f"{where}.enum")),
        default=data.get("default"),
        example=data.get("example"),
        nullable=nullable,
        read_only=bool(data.get("readOnly", False)),
        write_only=bool(data.get("writeOnly", False)),
        deprecated=bool(data.get("deprecated", False)),
        all_of=_schema_list(data.get("allOf"), f"{where}.allOf"),
        one_of=_schema_list(data.get("oneOf"), f"{where}.oneOf"),
        any_of=_schema_list(data.get("anyOf"), f"{where}.anyOf"),
        additional_properties=additional,
        minimum=minimum,
        maximum=maximum,
        exclusive_minimum=bool(exclusive_minimum),
        exclusive_maximum=bool(exclusive_maximum),
        multiple_of=_number(data.get("multipleOf"), f"{where}.multipleOf"),
        min_length=_integer(data.get("minLength"), f"{where}.minLength"),
        max_length=_integer(data.get("maxLength"), f"{where}.maxLength"),
        pattern=as_text(data.get("pattern")),
        min_items=_integer(data.get("minItems"), f"{where}.minItems"),
        max_items=_integer(data.get("maxItems"), f"{where}.maxItems"),
        unique_items=bool(data.get("uniqueItems", False)),
        discriminator=discriminator,
        extensions={k: v for k, v in data.items() if k not in _SCHEMA_KEYS},
    )


def _schema_list(value: Any, where: str) -> list[Schema]:
    return [
        parse_schema(item, f"{where}[{index}]")
        for index, item in enumerate(as_list(value, where))
    ]

"""Helper functions available to every template.

The table is identical for text and HTML rendering, so the two modes only
ever differ in escaping. Every helper is a pure function of its arguments
except ``uniquePathTags``, which is bound to the loaded specification when
the table is built.
"""

import json
import re
from collections.abc import Callable
from functools import partial
from typing import Any

from jinja2 import Undefined

from openapigen.models.canonical import Specification

# Schema reference prefixes removed by stripDefinitionPrefix
DEFINITION_PREFIXES: tuple[str, ...] = (
    "#/definitions/",
    "#/components/schemas/",
)

# Words are: an acronym not followed by a lowercase letter ("ID" in "UserID",
# "HTTP" in "HTTPServer"), a capitalized or lowercase word, or a digit run.
# Anything else (_, -, spaces, dots) is a separator.
_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+|[^\W_]+")


def _as_text(value: Any) -> str:
    """Coerce a template value to text; absent values become ''."""
    if value is None or isinstance(value, Undefined):
        return ""
    return str(value)


def split_words(value: Any) -> list[str]:
    """Split an identifier or phrase into words.

    Examples:
        >>> split_words("user_id")
        ['user', 'id']
        >>> split_words("HTTPServer2Go")
        ['HTTP', 'Server', '2', 'Go']
    """
    return _WORD_RE.findall(_as_text(value))


def camel_case(value: Any) -> str:
    """Convert to UpperCamelCase.

    Examples:
        >>> camel_case("user_id")
        'UserId'
        >>> camel_case("list pets")
        'ListPets'
    """
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(value))


def lower_camel_case(value: Any) -> str:
    """Convert to lowerCamelCase.

    Examples:
        >>> lower_camel_case("user_id")
        'userId'
        >>> lower_camel_case("ID")
        'id'
    """
    words = split_words(value)
    if not words:
        return ""
    return words[0].lower() + camel_case("_".join(words[1:]))


def snake_case(value: Any) -> str:
    """Convert to lower_snake_case.

    Examples:
        >>> snake_case("UserID")
        'user_id'
        >>> snake_case("getPetById")
        'get_pet_by_id'
    """
    return "_".join(word.lower() for word in split_words(value))


def strip_definition_prefix(value: Any) -> str:
    """Remove a schema reference prefix, leaving just the schema name.

    Examples:
        >>> strip_definition_prefix("#/definitions/Widget")
        'Widget'
        >>> strip_definition_prefix("Widget")
        'Widget'
    """
    text = _as_text(value)
    for prefix in DEFINITION_PREFIXES:
        if text.startswith(prefix):
            return text[len(prefix):]
    return text


def first_letter(value: Any) -> str:
    """Return the first character, or '' for empty input."""
    return _as_text(value)[:1]


def to_lower(value: Any) -> str:
    return _as_text(value).lower()


def _serializable(value: Any) -> Any:
    """json.dumps hook: model objects serialize through to_dict()."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not serializable")


def debug_dump(value: Any) -> str:
    """Serialize a value as tab-indented JSON with a trailing newline.

    Raises:
        ValueError: If the value cannot be serialized
    """
    if isinstance(value, Undefined):
        value = None
    try:
        return json.dumps(value, indent="\t", default=_serializable) + "\n"
    except (TypeError, ValueError) as e:
        raise ValueError(f"cannot marshal: {e}") from e


def unique_path_tags(spec: Specification) -> list[str]:
    """Collect the tags of every operation, deduplicated and sorted.

    Args:
        spec: Specification whose operations are scanned

    Returns:
        Sorted list of unique tag names
    """
    tags: set[str] = set()
    for _, _, operation in spec.operations():
        tags.update(operation.tags)
    return sorted(tags)


# Helpers that take a single value and are also exposed as filters
STRING_HELPERS: dict[str, Callable[[Any], str]] = {
    "camelCase": camel_case,
    "lowerCamelCase": lower_camel_case,
    "snakeCase": snake_case,
    "stripDefinitionPrefix": strip_definition_prefix,
    "firstLetter": first_letter,
    "toLower": to_lower,
    "debugDump": debug_dump,
}

# Short names accepted alongside the full helper names
HELPER_ALIASES: dict[str, str] = {
    "camel": "camelCase",
    "lowerCamel": "lowerCamelCase",
    "snake": "snakeCase",
    "debug": "debugDump",
}


def build_helpers(spec: Specification) -> dict[str, Callable[..., Any]]:
    """Build the helper table for one specification.

    Args:
        spec: The loaded specification ``uniquePathTags`` reads from

    Returns:
        Mapping of helper name to function
    """
    helpers: dict[str, Callable[..., Any]] = dict(STRING_HELPERS)
    for alias, target in HELPER_ALIASES.items():
        helpers[alias] = STRING_HELPERS[target]
    helpers["uniquePathTags"] = partial(unique_path_tags, spec)
    return helpers


def filter_helpers(helpers: dict[str, Callable[..., Any]]) -> dict[str, Callable[..., Any]]:
    """Return the subset of helpers usable as ``{{ value | helper }}`` filters."""
    return {name: func for name, func in helpers.items() if name != "uniquePathTags"}

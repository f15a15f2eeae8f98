"""Abstract base class for API description parsers.

Each parser turns a decoded document (a mapping) into one typed model:
- OpenAPI3Parser -> Specification (canonical)
- Swagger2Parser -> Swagger (legacy, converted afterwards)

Decoding and shape errors are reported as MalformedInput tagged with the
parser's stage, so the caller can tell which step failed.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Any, Generic, TypeVar

import yaml

from openapigen.errors import MalformedInput
from openapigen.parsers.common import DocumentStructureError

logger = logging.getLogger(__name__)

# Generic type for the parsed model
T = TypeVar("T")

YAML_SUFFIXES = (".yaml", ".yml")

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted dates and timestamps as strings.

    JSON has no date type, so `example: 2020-01-01` must stay the text it
    would be in a JSON document.
    """


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def decode_document(text: str, source: str = "<input>") -> dict[str, Any]:
    """Decode document text into a mapping.

    JSON is the primary format. YAML is used when the source name says so,
    or as a fallback when the text is not valid JSON.

    Args:
        text: Raw document text
        source: Name of the document (used for format detection only)

    Returns:
        Top-level document mapping

    Raises:
        DocumentStructureError: If the text is empty or not a mapping
    """
    if not text.strip():
        raise DocumentStructureError("document is empty")

    if PurePath(source).suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.load(text, Loader=DocumentLoader)
        except yaml.YAMLError as e:
            raise DocumentStructureError(f"invalid YAML: {e}") from e
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            data = _try_yaml(text)
            if data is None:
                raise DocumentStructureError(f"invalid JSON: {e}") from e
            logger.debug("Decoded %s as YAML", source)

    if not isinstance(data, dict):
        raise DocumentStructureError("document root must be an object")
    return data


def _try_yaml(text: str) -> dict[str, Any] | None:
    """Return the YAML mapping in text, or None if it is not one."""
    try:
        data = yaml.load(text, Loader=DocumentLoader)
    except yaml.YAMLError:
        return None
    return data if isinstance(data, dict) else None


class DocumentParser(ABC, Generic[T]):
    """Abstract interface for version-specific document parsers.

    Attributes:
        name: Parser identifier (e.g. "openapi3", "swagger2")
        stage: Stage name reported in MalformedInput errors
    """

    def __init__(self, name: str, stage: str) -> None:
        self.name = name
        self.stage = stage

    @abstractmethod
    def parse(self, document: dict[str, Any]) -> T:
        """Build the typed model from a decoded document.

        Raises:
            DocumentStructureError: If a node has the wrong shape
        """

    def load(self, text: str, source: str = "<input>") -> T:
        """Decode and parse document text.

        Args:
            text: Raw document text
            source: Document name for diagnostics

        Returns:
            Parsed model

        Raises:
            MalformedInput: If the text cannot be decoded or parsed
        """
        try:
            document = decode_document(text, source)
            return self.parse(document)
        except (DocumentStructureError, TypeError, AttributeError) as e:
            raise MalformedInput(
                f"cannot parse {self.name} document: {e}",
                stage=self.stage,
                path=None if source == "<input>" else source,
            ) from e

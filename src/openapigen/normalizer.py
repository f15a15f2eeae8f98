"""Spec normalizer.

Turns an input document of either schema version into the one canonical
Specification. Legacy (Swagger 2.0) input is parsed into the legacy model and
then converted; canonical (OpenAPI 3) input is parsed directly. Nothing past
this module branches on the input version.
"""

import logging
from pathlib import Path
from typing import BinaryIO, TextIO

from openapigen.converters import convert_swagger
from openapigen.errors import FileIOError, MalformedInput
from openapigen.models.canonical import Specification
from openapigen.parsers import OpenAPI3Parser, Swagger2Parser

logger = logging.getLogger(__name__)


def _read_text(data: bytes | str | BinaryIO | TextIO, source: str, stage: str) -> str:
    if hasattr(data, "read"):
        data = data.read()
    if isinstance(data, bytes):
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedInput(
                f"document is not valid UTF-8: {e}",
                stage=stage,
                path=None if source == "<input>" else source,
            ) from e
    return data


def normalize(
    data: bytes | str | BinaryIO | TextIO,
    legacy: bool = False,
    source: str = "<input>",
) -> Specification:
    """Produce the canonical model from raw document content.

    Args:
        data: Raw document bytes, text or an open stream
        legacy: Whether the document is Swagger 2.0
        source: Document name, used in diagnostics and format detection

    Returns:
        Canonical Specification

    Raises:
        MalformedInput: If the document cannot be decoded or parsed
        ConversionError: If a legacy document cannot be converted
    """
    if legacy:
        parser = Swagger2Parser()
        text = _read_text(data, source, parser.stage)
        logger.debug("Decoding %s as Swagger 2.0", source)
        swagger = parser.load(text, source)
        spec = convert_swagger(swagger)
    else:
        parser = OpenAPI3Parser()
        text = _read_text(data, source, parser.stage)
        logger.debug("Decoding %s as OpenAPI 3", source)
        spec = parser.load(text, source)

    logger.debug(
        "Normalized %s: %s %s, %d paths",
        source,
        spec.info.title or "<untitled>",
        spec.info.version,
        spec.path_count,
    )
    return spec


def load_specification(path: Path, legacy: bool = False) -> Specification:
    """Open an API description file and normalize it.

    Args:
        path: Path to the JSON (or YAML) document
        legacy: Whether the document is Swagger 2.0

    Returns:
        Canonical Specification

    Raises:
        FileIOError: If the file cannot be read
        MalformedInput: If the file is empty or cannot be parsed
        ConversionError: If a legacy document cannot be converted
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise FileIOError(f"cannot open spec file: {e.strerror or e}", path, stage="input") from e

    logger.info("Decoding spec file %s", path)
    return normalize(raw, legacy=legacy, source=str(path))

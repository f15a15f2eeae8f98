"""Render engines (text and HTML).

Both engines wrap a Jinja2 environment configured the same way:
- the same helper table, as globals and as filters
- ChainableUndefined, so absent fields (and chains through them) render empty
- a finalize hook that renders None as ''

The only difference is autoescaping: HTMLEngine escapes every inserted value,
TextEngine inserts values verbatim.
"""

import logging
from abc import ABC
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

import jinja2
from jinja2 import ChainableUndefined, Environment

from openapigen.errors import TemplateError
from openapigen.models.canonical import Specification
from openapigen.renderers.helpers import filter_helpers

logger = logging.getLogger(__name__)


@dataclass
class RenderOptions:
    """Jinja2 whitespace options shared by both engines.

    Attributes:
        trim_blocks: Remove the first newline after a block tag
        lstrip_blocks: Strip whitespace before a block tag
        keep_trailing_newline: Keep the template's final newline
    """

    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True


def _zero_value(value: Any) -> Any:
    """Render None the way an absent field renders: as nothing."""
    return "" if value is None else value


def build_context(spec: Specification) -> dict[str, Any]:
    """Build the template context for a specification.

    The model itself is available as ``spec``; its top-level attributes are
    also exposed directly, so ``{{ info.title }}`` and
    ``{{ spec.info.title }}`` are equivalent.
    """
    return {
        "spec": spec,
        "openapi": spec.openapi,
        "info": spec.info,
        "servers": spec.servers,
        "paths": spec.paths,
        "components": spec.components,
        "security": spec.security,
        "tags": spec.tags,
        "external_docs": spec.external_docs,
        "extensions": spec.extensions,
    }


class RenderEngine(ABC):
    """Common interface of the text and HTML engines.

    Subclasses only choose the mode name and whether to autoescape.

    Usage:
        engine = select_engine(html=False, helpers=build_helpers(spec))
        template = engine.compile(source, name="api.md.tpl")
        engine.render(template, build_context(spec), stream)
    """

    mode: str = ""
    autoescape: bool = False

    def __init__(
        self,
        helpers: dict[str, Callable[..., Any]],
        options: RenderOptions | None = None,
    ) -> None:
        self.options = options or RenderOptions()
        self._env = Environment(
            autoescape=self.autoescape,
            undefined=ChainableUndefined,
            finalize=_zero_value,
            trim_blocks=self.options.trim_blocks,
            lstrip_blocks=self.options.lstrip_blocks,
            keep_trailing_newline=self.options.keep_trailing_newline,
        )
        self._env.globals.update(helpers)
        self._env.filters.update(filter_helpers(helpers))

    @property
    def environment(self) -> Environment:
        """The underlying Jinja2 environment."""
        return self._env

    def compile(self, source: str, name: Path | str) -> jinja2.Template:
        """Compile template text.

        Args:
            source: Raw template text
            name: Template path, used in diagnostics

        Returns:
            Compiled template

        Raises:
            TemplateError: If the template has a syntax error
        """
        try:
            return self._env.from_string(source)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(
                f"cannot parse template ({self.mode} mode): line {e.lineno}: {e.message}",
                name,
                stage="template parse",
            ) from e

    def render(
        self,
        template: jinja2.Template,
        context: dict[str, Any],
        stream: TextIO,
        name: Path | str = "<template>",
    ) -> None:
        """Render a compiled template into an open stream.

        Raises:
            TemplateError: If rendering fails (including helper failures)
        """
        try:
            template.stream(context).dump(stream)
        except Exception as e:
            raise TemplateError(
                f"cannot render output: {e}",
                name,
                stage="template render",
            ) from e


class TextEngine(RenderEngine):
    """Plain-text rendering; inserted values are written verbatim."""

    mode = "text"
    autoescape = False


class HTMLEngine(RenderEngine):
    """Markup-safe rendering; inserted values are HTML-escaped."""

    mode = "html"
    autoescape = True


def select_engine(
    html: bool,
    helpers: dict[str, Callable[..., Any]],
    options: RenderOptions | None = None,
) -> RenderEngine:
    """Pick the render engine for the requested mode.

    Args:
        html: Use the escaping (HTML) engine instead of plain text
        helpers: Helper function table
        options: Whitespace options

    Returns:
        Configured engine
    """
    engine_class: type[RenderEngine] = HTMLEngine if html else TextEngine
    logger.debug("Using %s render engine", engine_class.mode)
    return engine_class(helpers, options)

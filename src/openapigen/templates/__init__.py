"""Template rendering.

- engine: text and HTML Jinja2 engines sharing one helper table
- walker: template tree discovery, output path mapping and rendering
"""

from openapigen.templates.engine import (
    HTMLEngine,
    RenderEngine,
    RenderOptions,
    TextEngine,
    build_context,
    select_engine,
)
from openapigen.templates.walker import (
    DEFAULT_SUFFIX,
    RenderedFile,
    TemplateDescriptor,
    TemplateTreeWalker,
    discover_templates,
    output_path_for,
)

__all__ = [
    "DEFAULT_SUFFIX",
    "HTMLEngine",
    "RenderEngine",
    "RenderOptions",
    "RenderedFile",
    "TemplateDescriptor",
    "TemplateTreeWalker",
    "TextEngine",
    "build_context",
    "discover_templates",
    "output_path_for",
    "select_engine",
]

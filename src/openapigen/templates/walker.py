"""Template tree walker.

Discovers template files under a root directory and renders each one into a
mirrored path under the output root:

    templates/api.md.tpl        -> out/api.md
    templates/sub/client.py.tpl -> out/sub/client.py

The walk is fail-fast: the first read, parse, mkdir, create or render error
stops the run. Files already written stay in place (no rollback), and a file
whose render failed midway is left as written. Destinations are truncated
without checking whether an earlier template (or a file ``a`` sitting next to
``a.tpl`` when both roots are the same directory) already produced them:
collisions are last-write-wins in traversal order.
"""

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from openapigen.errors import FileIOError, PathError
from openapigen.models.canonical import Specification
from openapigen.templates.engine import RenderEngine, build_context
from openapigen.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SUFFIX = ".tpl"


@dataclass
class TemplateDescriptor:
    """A discovered template, read and ready to compile.

    Attributes:
        path: Absolute path of the template file
        source: Raw template text
        mode: Render mode that will compile it ("text" or "html")
    """

    path: Path
    source: str
    mode: str


@dataclass
class RenderedFile:
    """Record of one rendered template."""

    template: Path
    destination: Path


def discover_templates(root: Path, suffix: str = DEFAULT_SUFFIX) -> Iterator[Path]:
    """Yield template files under root in depth-first lexical order.

    Entries of each directory are visited sorted by name, with files and
    subdirectories interleaved. Directories whose names end in the suffix are
    not templates but are still descended into. Symlinked directories are not
    followed.
    """
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if entry.is_dir() and not entry.is_symlink():
            yield from discover_templates(entry, suffix)
        elif entry.name.endswith(suffix) and not entry.is_dir():
            yield entry


def output_path_for(
    template_root: Path,
    output_root: Path,
    template_path: Path,
    suffix: str = DEFAULT_SUFFIX,
) -> Path:
    """Map a template file onto its destination under the output root.

    Args:
        template_root: Root of the template tree
        output_root: Root of the output tree
        template_path: Template file inside template_root
        suffix: Template suffix stripped from the file name

    Returns:
        Destination file path

    Raises:
        PathError: If the template is outside the root or its stripped name is empty
    """
    try:
        relative = template_path.relative_to(template_root)
    except ValueError as e:
        raise PathError(
            f"template is not under template root {template_root}", template_path
        ) from e

    name = relative.name
    if name.endswith(suffix):
        name = name[: -len(suffix)]
    if not name:
        raise PathError("template file name is empty once the suffix is stripped", template_path)

    return output_root / relative.parent / name


def display_path(path: Path, cwd: Path | None = None) -> str:
    """Return path relative to the working directory for progress output."""
    try:
        return os.path.relpath(path, cwd or Path.cwd())
    except ValueError as e:
        # Windows: path and cwd on different drives
        raise PathError(f"cannot calculate relative directory: {e}", path) from e


class TemplateTreeWalker:
    """Renders every template of a tree against one specification.

    Usage:
        walker = TemplateTreeWalker(Path("templates"), Path("out"), engine)
        rendered = walker.walk(spec)
    """

    def __init__(
        self,
        template_root: Path,
        output_root: Path,
        engine: RenderEngine,
        suffix: str = DEFAULT_SUFFIX,
    ) -> None:
        try:
            self.template_root = template_root.resolve()
            self.output_root = output_root.resolve()
        except (OSError, RuntimeError) as e:
            raise PathError(f"cannot calculate absolute directory: {e}", template_root) from e
        self.engine = engine
        self.suffix = suffix

    def templates(self) -> Iterator[Path]:
        """Yield the template files that will be rendered, in order.

        Raises:
            PathError: If the template root is not a directory
        """
        if not self.template_root.is_dir():
            raise PathError("template root is not a directory", self.template_root)
        try:
            yield from discover_templates(self.template_root, self.suffix)
        except OSError as e:
            raise FileIOError(
                f"cannot iterate through template files: {e.strerror or e}",
                e.filename or self.template_root,
                stage="walk",
            ) from e

    def read(self, path: Path) -> TemplateDescriptor:
        """Read a template file.

        Raises:
            FileIOError: If the file cannot be read or decoded
        """
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileIOError(f"cannot load template: {e}", path, stage="template read") from e
        return TemplateDescriptor(path=path, source=source, mode=self.engine.mode)

    def render_one(self, path: Path, context: dict) -> RenderedFile:
        """Read, compile and render one template into its destination."""
        descriptor = self.read(path)
        template = self.engine.compile(descriptor.source, descriptor.path)

        destination = output_path_for(self.template_root, self.output_root, path, self.suffix)
        directory = destination.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileIOError(
                f"cannot create directory: {e.strerror or e}", directory, stage="output"
            ) from e

        try:
            stream = destination.open("w", encoding="utf-8")
        except OSError as e:
            raise FileIOError(
                f"cannot create output file: {e.strerror or e}", destination, stage="output"
            ) from e

        with stream:
            self.engine.render(template, context, stream, name=descriptor.path)

        return RenderedFile(template=path, destination=destination)

    def walk(self, spec: Specification) -> list[RenderedFile]:
        """Render every template in the tree, stopping at the first error.

        Args:
            spec: Canonical specification to render

        Returns:
            Rendered files in traversal order

        Raises:
            OpenapigenError: The first error encountered (no rollback)
        """
        context = build_context(spec)
        rendered: list[RenderedFile] = []

        for path in self.templates():
            logger.structured(
                logging.INFO,
                f"rendering {display_path(path)}",
                template=str(path),
                mode=self.engine.mode,
            )
            rendered.append(self.render_one(path, context))

        logger.debug("Rendered %d template(s) into %s", len(rendered), self.output_root)
        return rendered

"""Generation pipeline orchestrator.

Runs the stages in a fixed order:
1. Normalize the input document into the canonical model
2. Build the helper table bound to that model
3. Select the render engine
4. Walk the template tree, rendering each template

Normalization always completes before the first template is touched. Any
error is fatal and propagates unchanged to the caller.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from openapigen.config import OpenapigenConfig
from openapigen.errors import OpenapigenError
from openapigen.models.canonical import Specification
from openapigen.normalizer import load_specification
from openapigen.renderers.helpers import build_helpers
from openapigen.templates.engine import RenderEngine, RenderOptions, select_engine
from openapigen.templates.walker import DEFAULT_SUFFIX, RenderedFile, TemplateTreeWalker

logger = logging.getLogger(__name__)


@dataclass
class PipelineOptions:
    """Options for one generation run.

    Attributes:
        spec_path: API description document
        template_dir: Template tree root (not needed for view)
        output_dir: Output tree root (not needed for view)
        legacy: Input is Swagger 2.0
        html: Use the escaping engine
        suffix: Template file suffix
        trim_blocks: Jinja2 trim_blocks
        lstrip_blocks: Jinja2 lstrip_blocks
    """

    spec_path: Path
    template_dir: Path | None = None
    output_dir: Path | None = None
    legacy: bool = False
    html: bool = False
    suffix: str = DEFAULT_SUFFIX
    trim_blocks: bool = False
    lstrip_blocks: bool = False

    @classmethod
    def from_config(cls, config: OpenapigenConfig) -> "PipelineOptions":
        """Build options from a loaded configuration.

        Raises:
            ValueError: If the configuration names no spec file
        """
        if not config.input.spec:
            raise ValueError("no spec file given (use --spec or input.spec in config)")
        render = config.render
        return cls(
            spec_path=Path(config.input.spec),
            template_dir=Path(render.templates) if render.templates else None,
            output_dir=Path(render.output) if render.output else None,
            legacy=config.input.legacy,
            html=render.html,
            suffix=render.suffix,
            trim_blocks=render.trim_blocks,
            lstrip_blocks=render.lstrip_blocks,
        )


def dump_specification(spec: Specification) -> str:
    """Serialize the canonical model as tab-indented JSON.

    Raises:
        OpenapigenError: If a value in the model has no JSON form
    """
    try:
        return json.dumps(spec.to_dict(), indent="\t") + "\n"
    except (TypeError, ValueError) as e:
        raise OpenapigenError(f"cannot marshal: {e}", stage="view") from e


class GenerationPipeline:
    """Loads one specification and renders one template tree against it.

    Usage:
        pipeline = GenerationPipeline(options)
        rendered = pipeline.run()
    """

    def __init__(self, options: PipelineOptions) -> None:
        self.options = options
        self._spec: Specification | None = None

    @property
    def spec(self) -> Specification:
        """The normalized specification, loaded on first access."""
        if self._spec is None:
            self._spec = load_specification(self.options.spec_path, legacy=self.options.legacy)
        return self._spec

    def engine(self) -> RenderEngine:
        """Build the render engine for the loaded specification."""
        options = RenderOptions(
            trim_blocks=self.options.trim_blocks,
            lstrip_blocks=self.options.lstrip_blocks,
        )
        return select_engine(self.options.html, build_helpers(self.spec), options)

    def walker(self) -> TemplateTreeWalker:
        """Build the tree walker.

        Raises:
            ValueError: If template or output directory is missing
        """
        if self.options.template_dir is None:
            raise ValueError("no template directory given (use --template)")
        if self.options.output_dir is None:
            raise ValueError("no output directory given (use --output)")
        return TemplateTreeWalker(
            self.options.template_dir,
            self.options.output_dir,
            self.engine(),
            suffix=self.options.suffix,
        )

    def view(self) -> str:
        """Return the normalized model as indented JSON, without rendering."""
        return dump_specification(self.spec)

    def run(self) -> list[RenderedFile]:
        """Normalize the input, then render every template.

        Returns:
            Rendered files in traversal order

        Raises:
            ValueError: If required options are missing
            OpenapigenError: The first error of any stage
        """
        spec = self.spec
        walker = self.walker()
        logger.info(
            "Rendering %s into %s (%s mode)",
            walker.template_root,
            walker.output_root,
            walker.engine.mode,
        )
        return walker.walk(spec)

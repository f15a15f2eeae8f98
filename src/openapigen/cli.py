"""openapigen CLI interface.

Commands:
- render: Render a template tree against an OpenAPI document (or --view it)
- validate: Compile every template of a tree without rendering
- init: Write a default configuration file

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines
- --version: Show version and exit
"""

from pathlib import Path
from typing import Annotated

import typer

from openapigen import __version__
from openapigen.config import OpenapigenConfig, load_config
from openapigen.errors import OpenapigenError
from openapigen.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="openapigen",
    help="Render a template tree against an OpenAPI v2 or v3 document",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: OpenapigenConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"openapigen {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """openapigen - OpenAPI template tree renderer.

    Normalizes an OpenAPI v2 or v3 document and renders every template of a
    directory tree against it into a mirrored output tree.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except (ValueError, OSError) as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


def _current_config() -> OpenapigenConfig:
    return _config if _config is not None else OpenapigenConfig()


# =============================================================================
# render command
# =============================================================================


@app.command()
def render(
    spec: Annotated[
        Path | None,
        typer.Option(
            "--spec",
            "-s",
            help="OpenAPI JSON (or YAML) document",
            dir_okay=False,
        ),
    ] = None,
    template: Annotated[
        Path | None,
        typer.Option(
            "--template",
            "-t",
            help="Template tree root directory",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output tree root directory",
        ),
    ] = None,
    html: Annotated[
        bool,
        typer.Option(
            "--html",
            help="HTML-escape inserted values",
        ),
    ] = False,
    text: Annotated[
        bool,
        typer.Option(
            "--text",
            help="Insert values verbatim (default; overrides render.html in config)",
        ),
    ] = False,
    v2: Annotated[
        bool,
        typer.Option(
            "--v2",
            help="The document is Swagger 2.0 and must be converted",
        ),
    ] = False,
    view: Annotated[
        bool,
        typer.Option(
            "--view",
            help="Print the normalized document as JSON and exit",
        ),
    ] = False,
    suffix: Annotated[
        str | None,
        typer.Option(
            "--suffix",
            help="Template file suffix (default: .tpl)",
        ),
    ] = None,
) -> None:
    """Render a template tree against an OpenAPI document.

    Exit codes:
        0: All templates rendered (or --view printed)
        1: A fatal error stopped the run
    """
    from openapigen.pipeline import GenerationPipeline, PipelineOptions

    if html and text:
        _logger.error("--html and --text are mutually exclusive")
        raise typer.Exit(1)

    config = _current_config()
    if spec is not None:
        config.input.spec = str(spec)
    if v2:
        config.input.legacy = True
    if template is not None:
        config.render.templates = str(template)
    if output is not None:
        config.render.output = str(output)
    if html or text:
        config.render.html = html
    if suffix is not None:
        config.render.suffix = suffix

    try:
        options = PipelineOptions.from_config(config)
        if not options.suffix.startswith(".") or len(options.suffix) < 2:
            raise ValueError(f"invalid template suffix: {options.suffix!r}")
        if not view and (options.template_dir is None or options.output_dir is None):
            raise ValueError("both --template and --output are required to render")
    except ValueError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    pipeline = GenerationPipeline(options)

    try:
        if view:
            typer.echo(pipeline.view(), nl=False)
            raise typer.Exit(0)

        rendered = pipeline.run()
    except OpenapigenError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    _logger.debug(f"Rendered {len(rendered)} file(s)")
    raise typer.Exit(0)


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    template: Annotated[
        Path,
        typer.Argument(
            help="Template tree root directory",
            exists=True,
            file_okay=False,
        ),
    ],
    html: Annotated[
        bool,
        typer.Option(
            "--html",
            help="Compile with the HTML engine",
        ),
    ] = False,
    suffix: Annotated[
        str | None,
        typer.Option(
            "--suffix",
            help="Template file suffix (default: .tpl)",
        ),
    ] = None,
) -> None:
    """Check that every template in a tree compiles.

    Templates are compiled with the full helper table but not rendered, so no
    document is needed.
    """
    from openapigen.models.canonical import Specification
    from openapigen.renderers.helpers import build_helpers
    from openapigen.templates import TemplateTreeWalker, select_engine

    config = _current_config()
    suffix = suffix or config.render.suffix

    engine = select_engine(html, build_helpers(Specification()))
    walker = TemplateTreeWalker(template, template, engine, suffix=suffix)

    count = 0
    try:
        for path in walker.templates():
            descriptor = walker.read(path)
            engine.compile(descriptor.source, descriptor.path)
            count += 1
    except OpenapigenError as e:
        _logger.error(str(e))
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    typer.echo(f"✅ {count} template(s) valid in {template}")
    raise typer.Exit(0)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Initialize openapigen configuration.

    Creates .openapigen/config.yaml with default settings.
    """
    from openapigen.config import create_default_config

    config_dir = Path(".openapigen")
    config_dir.mkdir(exist_ok=True)
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config(), encoding="utf-8")
    _logger.info(f"Created config: {config_file}")

    typer.echo("\n✅ openapigen configuration initialized")
    typer.echo(f"   Config: {config_file}")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()

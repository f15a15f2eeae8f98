"""openapigen configuration system.

Configuration is YAML-based; every value can be overridden from the CLI.
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.openapigen/config.yaml
3. ./openapigen.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from openapigen.templates.walker import DEFAULT_SUFFIX

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class InputConfig:
    """Input document configuration.

    Attributes:
        spec: Path to the API description document
        legacy: Whether the document is Swagger 2.0 (converted to OpenAPI 3)
    """

    spec: str | None = None
    legacy: bool = False


@dataclass
class RenderConfig:
    """Template rendering configuration.

    Attributes:
        templates: Template tree root
        output: Output tree root
        html: Use the escaping (HTML) engine
        suffix: File suffix marking templates, stripped from output names
        trim_blocks: Jinja2 trim_blocks
        lstrip_blocks: Jinja2 lstrip_blocks
    """

    templates: str | None = None
    output: str | None = None
    html: bool = False
    suffix: str = DEFAULT_SUFFIX
    trim_blocks: bool = False
    lstrip_blocks: bool = False

    def __post_init__(self) -> None:
        """Validate render configuration."""
        if not self.suffix.startswith(".") or len(self.suffix) < 2:
            raise ValueError(
                f"Template suffix must start with '.' and name an extension (got {self.suffix!r})"
            )


@dataclass
class OpenapigenConfig:
    """Top-level openapigen configuration.

    Attributes:
        input: Input document settings
        render: Template rendering settings
    """

    input: InputConfig = field(default_factory=InputConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${SPEC_DIR}/petstore.json -> /srv/specs/petstore.json

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.openapigen/config.yaml
    2. ./openapigen.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".openapigen" / "config.yaml",
        start_path / "openapigen.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return section


def load_config_from_dict(data: dict[str, Any]) -> OpenapigenConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        OpenapigenConfig instance
    """
    data = substitute_env_vars(data)

    config = OpenapigenConfig()

    if "input" in data:
        input_data = _section(data, "input")
        config.input = InputConfig(
            spec=input_data.get("spec", config.input.spec),
            legacy=bool(input_data.get("legacy", config.input.legacy)),
        )

    if "render" in data:
        render_data = _section(data, "render")
        config.render = RenderConfig(
            templates=render_data.get("templates", config.render.templates),
            output=render_data.get("output", config.render.output),
            html=bool(render_data.get("html", config.render.html)),
            suffix=render_data.get("suffix", config.render.suffix),
            trim_blocks=bool(render_data.get("trim_blocks", config.render.trim_blocks)),
            lstrip_blocks=bool(render_data.get("lstrip_blocks", config.render.lstrip_blocks)),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> OpenapigenConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        OpenapigenConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
        ValueError: If the file is not valid YAML or not a mapping
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in config file {found_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {found_path}")
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = OpenapigenConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return f'''# openapigen configuration
# Every value can be overridden on the command line.

# API description document
input:
  spec: "openapi.json"
  legacy: false          # true for Swagger 2.0 documents (--v2)

# Template tree rendering
render:
  templates: "templates"
  output: "generated"
  html: false            # true to HTML-escape inserted values (--html)
  suffix: "{DEFAULT_SUFFIX}"
  trim_blocks: false
  lstrip_blocks: false
'''

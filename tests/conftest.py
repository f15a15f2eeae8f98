"""Shared pytest fixtures for openapigen tests.

Fixtures are organized by category:
- Path fixtures: sample documents and template trees on disk
- Model fixtures: small canonical specifications built in code
- Template tree fixtures: throwaway template/output roots under tmp_path
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from openapigen.models.canonical import Info, Operation, PathItem, Specification
from tests.fixtures import (
    FIXTURES_DIR,
    MINIMAL_V3_YAML_PATH,
    PETSTORE_V2_PATH,
    PETSTORE_V3_PATH,
    TEMPLATES_DIR,
)

# =============================================================================
# Logging isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_openapigen_logging() -> Iterator[None]:
    """Drop handlers installed by CLI runs so they don't outlive the test."""
    yield
    logger = logging.getLogger("openapigen")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def petstore_v2_path() -> Path:
    """Return the path to the Swagger 2.0 petstore document."""
    return PETSTORE_V2_PATH


@pytest.fixture
def petstore_v3_path() -> Path:
    """Return the path to the OpenAPI 3 petstore document."""
    return PETSTORE_V3_PATH


@pytest.fixture
def minimal_yaml_path() -> Path:
    """Return the path to the minimal YAML document."""
    return MINIMAL_V3_YAML_PATH


@pytest.fixture
def sample_templates_dir() -> Path:
    """Return the path to the sample template tree."""
    return TEMPLATES_DIR


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def tagged_spec() -> Specification:
    """Return a specification whose operations are tagged {b,a}, {a} and {}."""
    return Specification(
        info=Info(title="Tagged", version="2.1.0"),
        paths={
            "/zeta": PathItem(get=Operation(operation_id="getZeta", tags=["b", "a"])),
            "/alpha": PathItem(
                post=Operation(operation_id="createAlpha", tags=["a"]),
                delete=Operation(operation_id="deleteAlpha"),
            ),
        },
    )


# =============================================================================
# Template Tree Fixtures
# =============================================================================


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """Create an empty template root directory."""
    root = tmp_path / "templates"
    root.mkdir()
    return root


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    """Return an output root path that does not exist yet."""
    return tmp_path / "out"


@pytest.fixture
def simple_tree(template_root: Path) -> Path:
    """Create root/a.tpl and root/sub/b.tpl."""
    (template_root / "a.tpl").write_text("A: {{ info.title }}\n")
    sub = template_root / "sub"
    sub.mkdir()
    (sub / "b.tpl").write_text("B: {{ info.version }}\n")
    return template_root

"""Test fixtures for openapigen.

Sample documents and a sample template tree for integration tests.

Documents (specs/):
- petstore_v2.json: Swagger 2.0 petstore with refs, body, formData and security
- petstore_v3.json: OpenAPI 3.0 petstore
- minimal_v3.yaml: OpenAPI 3.0 document in YAML

Template tree (templates/):
- README.md.tpl, models/schemas.txt.tpl and one non-template file
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

SPECS_DIR = FIXTURES_DIR / "specs"
TEMPLATES_DIR = FIXTURES_DIR / "templates"

PETSTORE_V2_PATH = SPECS_DIR / "petstore_v2.json"
PETSTORE_V3_PATH = SPECS_DIR / "petstore_v3.json"
MINIMAL_V3_YAML_PATH = SPECS_DIR / "minimal_v3.yaml"


def get_spec(name: str) -> Path:
    """Get path to a sample document.

    Args:
        name: File name of the document under specs/

    Returns:
        Path to the document

    Raises:
        ValueError: If the document doesn't exist
    """
    spec_path = SPECS_DIR / name
    if not spec_path.exists():
        raise ValueError(f"Sample spec not found: {name}")
    return spec_path

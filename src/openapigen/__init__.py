"""openapigen - OpenAPI template tree renderer.

openapigen reads an OpenAPI 3 (or Swagger 2.0) document, normalizes it into a
single canonical model, and renders every template of a directory tree
against that model into a mirrored output tree.

Core principles:
- One model: Swagger 2.0 input is converted before any template sees it
- Fail-fast: the first error stops the run with a non-zero exit code
- Deterministic: templates are visited in lexical order
"""

__version__ = "0.1.0"
__author__ = "openapigen Contributors"

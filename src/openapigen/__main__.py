"""Entry point for running openapigen as a module.

Usage:
    python -m openapigen [command] [options]

Example:
    python -m openapigen render --spec petstore.json --template tpl --output out
    python -m openapigen render --v2 --spec swagger.json --view
"""

from openapigen.cli import app

if __name__ == "__main__":
    app()

"""openapigen utility modules.

- logging: Standardized logging with human/verbose/JSON modes
"""

from openapigen.utils.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]

"""Template helper functions."""

from openapigen.renderers.helpers import build_helpers, filter_helpers, unique_path_tags

__all__ = ["build_helpers", "filter_helpers", "unique_path_tags"]

"""File discovery for nested-mdlint.

This module provides pathspec-based gitignore filtering using
the mature pathspec library.
"""

from nested_mdlint.filters.pathspec_filter import (
    PathspecFilter,
    discover_markdown_files,
    DEFAULT_INCLUDE_PATTERNS,
)

__all__ = [
    "PathspecFilter",
    "discover_markdown_files",
    "DEFAULT_INCLUDE_PATTERNS",
]

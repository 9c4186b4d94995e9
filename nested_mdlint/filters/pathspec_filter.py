"""Pathspec-based Markdown file discovery.

This module uses the pathspec library for gitignore handling, supporting
negation patterns, double-star globs, and nested gitignore files.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

import pathspec

logger = logging.getLogger(__name__)


# Files to lint when no pattern is given
DEFAULT_INCLUDE_PATTERNS: list[str] = ["**/*.md"]

# Always excluded, even when a .gitignore exists
ALWAYS_IGNORE_PATTERNS: list[str] = [
    "node_modules/",
    ".git/",
]


class PathspecFilter:
    """File filter based on pathspec library with nested gitignore support."""

    def __init__(self, root: Path, include_nested: bool = True):
        """
        Initialize the filter.

        Args:
            root: Directory that discovery starts from
            include_nested: Whether to include nested .gitignore files
        """
        self.root = root
        self._nested_specs: dict[Path, pathspec.PathSpec] = {}
        self._root_spec = self._load_gitignore()
        if include_nested:
            self._load_nested_gitignores()

    def _load_gitignore(self) -> pathspec.PathSpec:
        """Load root .gitignore file."""
        lines = list(ALWAYS_IGNORE_PATTERNS)
        gitignore_path = self.root / ".gitignore"

        if gitignore_path.is_file():
            lines.extend(gitignore_path.read_text(encoding="utf-8").splitlines())

        return pathspec.PathSpec.from_lines("gitwildmatch", lines)

    def _load_nested_gitignores(self) -> None:
        """Load nested .gitignore files from subdirectories."""
        for gitignore_path in self.root.rglob(".gitignore"):
            if gitignore_path.parent == self.root:
                continue  # root, already loaded
            if self._root_spec.match_file(_posix(gitignore_path.relative_to(self.root))):
                continue

            lines = gitignore_path.read_text(encoding="utf-8").splitlines()
            self._nested_specs[gitignore_path.parent] = pathspec.PathSpec.from_lines(
                "gitwildmatch", lines
            )

    def should_ignore(self, path: Path) -> bool:
        """
        Check if a file should be ignored.

        The root spec applies to every file; a nested .gitignore applies to
        files in its directory and below.
        """
        relative = path.relative_to(self.root) if path.is_absolute() else path

        if self._root_spec.match_file(_posix(relative)):
            return True

        for gitignore_dir, spec in self._nested_specs.items():
            try:
                below = (self.root / relative).relative_to(gitignore_dir)
            except ValueError:
                continue
            if spec.match_file(_posix(below)):
                return True

        return False

    def filter_paths(self, paths: list[Path]) -> list[Path]:
        """Filter paths, returning those that should NOT be ignored."""
        return [p for p in paths if not self.should_ignore(p)]


def discover_markdown_files(
    root: Path,
    patterns: Optional[Iterable[str]] = None,
    pathspec_filter: Optional[PathspecFilter] = None,
) -> list[Path]:
    """
    Find files under root matching the include patterns.

    Hidden files and directories (a path part starting with ".") are never
    matched. Results are absolute paths sorted by their path relative to root, so
    reports are reproducible across runs.
    """
    root = root.resolve()
    include = pathspec.PathSpec.from_lines(
        "gitwildmatch", list(patterns) if patterns else DEFAULT_INCLUDE_PATTERNS
    )
    if pathspec_filter is None:
        pathspec_filter = PathspecFilter(root)

    files: list[Path] = []
    for file_path in root.rglob("*"):
        if not file_path.is_file():
            continue
        relative = file_path.relative_to(root)
        # like glob without dot:true, skip hidden files and directories
        if any(part.startswith(".") for part in relative.parts):
            continue
        if not include.match_file(_posix(relative)):
            continue
        if pathspec_filter.should_ignore(file_path):
            continue
        files.append(file_path)

    files.sort(key=lambda p: _posix(p.relative_to(root)))
    logger.debug(f"Discovered {len(files)} markdown file(s) under {root}")
    return files


def _posix(path: Path) -> str:
    return str(path).replace("\\", "/")

"""
Core Layer - 核心层

包含代码块提取器、嵌套 lint 适配器和坐标映射器。
"""

from nested_mdlint.core.extractor import (
    extract_markdown_fences,
    extract_file_fences,
    is_markdown_fence,
    ExtractedBlock,
    MARKDOWN_LANGUAGES,
)
from nested_mdlint.core.linter import (
    lint_block,
    build_nested_config,
    Finding,
    RuleEngine,
    RuleEngineError,
    PyMarkdownEngine,
    SUPPRESSED_RULES,
)
from nested_mdlint.core.mapper import (
    map_findings,
    original_line,
    BlockResult,
    FileResult,
    LintReport,
)

__all__ = [
    # extractor
    "extract_markdown_fences",
    "extract_file_fences",
    "is_markdown_fence",
    "ExtractedBlock",
    "MARKDOWN_LANGUAGES",
    # linter
    "lint_block",
    "build_nested_config",
    "Finding",
    "RuleEngine",
    "RuleEngineError",
    "PyMarkdownEngine",
    "SUPPRESSED_RULES",
    # mapper
    "map_findings",
    "original_line",
    "BlockResult",
    "FileResult",
    "LintReport",
]

"""
执行器模块 - 串联文件发现、代码块提取、lint 与坐标映射

完整流程：
1. 加载配置
2. 发现 Markdown 文件
3. 逐文件递归提取代码块
4. 逐代码块 lint
5. 映射行号并汇总为 LintReport

所有处理按顺序执行，任何文件读取失败都会中止整个运行。
"""

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from nested_mdlint.config import load_rule_config
from nested_mdlint.core import (
    extract_file_fences,
    lint_block,
    map_findings,
    LintReport,
    PyMarkdownEngine,
    RuleEngine,
)
from nested_mdlint.filters import discover_markdown_files

logger = logging.getLogger(__name__)


def _display_path(file_path: Path, root: Path) -> str:
    try:
        return str(file_path.relative_to(root))
    except ValueError:
        return str(file_path)


def lint_files(
    files: Iterable[Path],
    config: dict[str, Any],
    root: Path,
    engine: Optional[RuleEngine] = None,
    max_depth: Optional[int] = None,
    on_file: Optional[Callable[[str, int], None]] = None,
) -> LintReport:
    """
    对文件列表中的嵌套 Markdown 代码块运行 lint

    Args:
        files: 文件路径，按此顺序处理
        config: 基础规则配置
        root: 用于生成相对显示路径的根目录
        engine: 规则引擎，默认为 PyMarkdownEngine
        max_depth: 可选的最大嵌套深度
        on_file: 每个文件提取完成后的回调 (显示路径, 代码块数量)

    Returns:
        LintReport
    """
    if engine is None:
        engine = PyMarkdownEngine()

    report = LintReport()

    for file_path in files:
        display_path = _display_path(file_path, root)
        blocks = extract_file_fences(file_path, display_path=display_path, max_depth=max_depth)

        if on_file is not None:
            on_file(display_path, len(blocks))

        findings_per_block = [lint_block(block.content, config, engine) for block in blocks]
        file_result = map_findings(blocks, findings_per_block, display_path)

        logger.debug(
            f"{display_path}: {len(blocks)} block(s), "
            f"{len(file_result.results)} with findings"
        )
        report.files.append(file_result)

    return report


def run(
    root: Path,
    config_path: Optional[Path] = None,
    patterns: Optional[list[str]] = None,
    engine: Optional[RuleEngine] = None,
    max_depth: Optional[int] = None,
    on_discovered: Optional[Callable[[int], None]] = None,
    on_file: Optional[Callable[[str, int], None]] = None,
) -> LintReport:
    """
    完整运行：加载配置、发现文件、lint

    Args:
        root: 扫描根目录，同时也是默认配置文件所在目录
        config_path: 显式指定的配置文件
        patterns: 文件匹配模式，默认 **/*.md
        engine: 规则引擎
        max_depth: 可选的最大嵌套深度
        on_discovered: 文件发现完成后的回调 (文件数量)
        on_file: 见 lint_files

    Returns:
        LintReport
    """
    root = root.resolve()
    config = load_rule_config(root, config_path)
    files = discover_markdown_files(root, patterns)

    if on_discovered is not None:
        on_discovered(len(files))

    return lint_files(
        files,
        config,
        root,
        engine=engine,
        max_depth=max_depth,
        on_file=on_file,
    )

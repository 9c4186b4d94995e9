"""
CLI 入口模块 - 使用 Typer 构建命令行界面

检查流程：
1. 加载 markdownlint 配置
2. 发现 Markdown 文件
3. 递归提取并 lint 嵌套代码块
4. 生成报告
5. 设置退出码（有问题或运行出错为 1）
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from nested_mdlint.reporters import (
    JsonReporter,
    Reporter,
    ReportStyle,
    RichReporter,
    make_console,
)
from nested_mdlint.runner import run

logger = logging.getLogger("nested_mdlint")

# 创建 Typer 应用实例
app = typer.Typer(
    name="nested-mdlint",
    help="nested-mdlint: Lint Markdown nested inside markdown code fences.",
    add_completion=False,
)


def setup_logging(verbose: bool) -> None:
    """日志输出到 stderr，避免干扰 JSON 报告"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def check(
    root: str = typer.Argument(
        ".",
        help="Directory to scan for Markdown files",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="markdownlint config file (default: .markdownlint.jsonc or .markdownlint.json in ROOT)",
    ),
    pattern: Optional[list[str]] = typer.Option(
        None,
        "--pattern",
        "-p",
        help="Gitignore-style pattern of files to lint, repeatable (default: **/*.md)",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        min=0,
        help="Do not descend into fences nested deeper than this",
    ),
    format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default) or json",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """
    Lint markdown/md code fences in Markdown files, recursively.

    Examples:
        nested-mdlint check
        nested-mdlint check ./docs --config .markdownlint.jsonc
        nested-mdlint check -p "docs/**/*.md" --format json
    """
    setup_logging(verbose)

    if format not in ("rich", "json"):
        raise typer.BadParameter(f"Unknown format: {format}", param_hint="--format")

    root_path = Path(root)
    if not root_path.is_dir():
        Console(stderr=True).print(f"[red]Error:[/red] Path is not a directory: {root}")
        raise typer.Exit(1)

    reporter: Reporter
    if format == "json":
        reporter = JsonReporter()
        on_discovered = None
        on_file = None
    else:
        rich_reporter = RichReporter(make_console(ReportStyle(color=not no_color)))
        rich_reporter.start()
        on_discovered = rich_reporter.discovered
        on_file = rich_reporter.file_scanned
        reporter = rich_reporter

    try:
        report = run(
            root_path,
            config_path=config,
            patterns=pattern or None,
            max_depth=max_depth,
            on_discovered=on_discovered,
            on_file=on_file,
        )
        reporter.report(report)
    except Exception as e:
        logger.exception(f"Nested Markdown linting aborted: {e}")
        raise typer.Exit(1)

    raise typer.Exit(0 if report.passed else 1)


@app.command()
def version() -> None:
    """Show the version of nested-mdlint."""
    from nested_mdlint import __version__
    Console().print(f"[bold]nested-mdlint[/bold] v{__version__}")


if __name__ == "__main__":
    app()

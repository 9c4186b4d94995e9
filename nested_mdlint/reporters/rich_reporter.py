"""
Rich 终端报告器 - 使用 Rich 库输出彩色终端格式

输出格式：
    File: docs/guide.md
      Code fence at line 5 [depth 1] (markdown block #2) (line 3 > block at line 5):
        6:1 (nested line 1) MD022/blanks-around-headings Headings should be surrounded by blank lines
          Expected: 1; Actual: 0; Below
"""

from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

from nested_mdlint.core.mapper import BlockResult, LintReport


@dataclass(frozen=True)
class ReportStyle:
    """
    报告格式选项

    Attributes:
        color: 是否输出颜色
        show_paths: 是否输出代码块的祖先链描述
    """
    color: bool = True
    show_paths: bool = True


def make_console(style: ReportStyle) -> Console:
    """根据格式选项创建 Console"""
    return Console(no_color=not style.color, highlight=False)


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None, style: ReportStyle | None = None):
        self.style = style or ReportStyle()
        self.console = console or make_console(self.style)

    def start(self) -> None:
        self.console.print("[bold]Linting nested Markdown in code fences...[/bold]")
        self.console.print()

    def discovered(self, file_count: int) -> None:
        self.console.print(f"Found {file_count} Markdown file(s) to scan")
        self.console.print()

    def file_scanned(self, file_path: str, block_count: int) -> None:
        if block_count > 0:
            self.console.print(
                f"[cyan]{escape(file_path)}[/cyan]: Found {block_count} nested Markdown block(s)"
            )

    def report(self, report: LintReport) -> None:
        """输出问题详情和总结"""
        self.console.print()
        self.console.print(f"Total nested Markdown blocks found: {report.total_blocks}")
        self.console.print()

        if report.passed:
            self.console.print("[green]✓[/green] No issues found in nested Markdown code fences")
            self.console.print()
            self.console.print("[bold green]✓[/bold green] [green]Nested Markdown linting passed[/green]")
            return

        self.console.print("[bold red]Nested Markdown Linting Issues:[/bold red]")
        self.console.print()

        for entry in report.entries:
            self._print_entry(entry)

        self.console.print(
            f"[bold red]✗[/bold red] [red]Nested Markdown linting failed[/red] "
            f"[dim]({report.total_findings} issue(s) in {len(report.entries)} block(s))[/dim]"
        )

    def _print_entry(self, entry: BlockResult) -> None:
        block = entry.block

        self.console.print(f"[cyan]File:[/cyan] {escape(entry.file_path)}")

        depth = f" [yellow]\\[depth {block.depth}][/yellow]" if block.depth > 0 else ""
        path = f" ({escape(block.path)})" if self.style.show_paths and block.path else ""
        self.console.print(
            f"  [yellow]Code fence at line {block.line}[/yellow]{depth}"
            f"[yellow] ({escape(block.info)} block #{entry.block_index}){path}:[/yellow]"
        )

        for finding, line in entry.mapped_findings():
            column = finding.column if finding.column is not None else 1
            nested = f" (nested line {finding.line_number})" if block.depth > 0 else ""
            rules = escape("/".join(finding.rule_names))
            self.console.print(
                f"    {line}:{column}{nested} [red]{rules}[/red] {escape(finding.description)}"
            )
            if finding.detail:
                self.console.print(f"      [yellow]{escape(finding.detail)}[/yellow]")

        self.console.print()

import io
import json

from rich.console import Console

from nested_mdlint.core.extractor import ExtractedBlock
from nested_mdlint.core.linter import Finding
from nested_mdlint.core.mapper import map_findings, LintReport
from nested_mdlint.reporters import JsonReporter, ReportStyle, RichReporter


def make_report():
    top = ExtractedBlock(content="a\n", line=5, depth=0, path="line 5", info="markdown", file_path="D.md")
    nested = ExtractedBlock(
        content="b\n", line=9, depth=1, path="line 5 > block at line 9", info="md", file_path="D.md"
    )
    findings = [
        [Finding(("MD022", "blanks-around-headings"), "Headings should be surrounded by blank lines", 1)],
        [Finding(("MD009", "no-trailing-spaces"), "Trailing spaces", 2, column=7, detail="Expected: 0; Actual: 1")],
    ]
    return LintReport(files=[map_findings([top, nested], findings, "D.md")])


def render(report, style=None):
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, no_color=True, highlight=False)
    RichReporter(console, style).report(report)
    return buffer.getvalue()


def test_rich_reporter_lists_mapped_lines():
    output = render(make_report())

    assert "Nested Markdown Linting Issues:" in output
    assert "File: D.md" in output
    assert "Code fence at line 5 (markdown block #1) (line 5):" in output
    assert "6:1 MD022/blanks-around-headings Headings should be surrounded by blank lines" in output
    assert "Code fence at line 9 [depth 1] (md block #2) (line 5 > block at line 9):" in output
    assert "11:7 (nested line 2) MD009/no-trailing-spaces Trailing spaces" in output
    assert "Expected: 0; Actual: 1" in output
    assert "Nested Markdown linting failed" in output


def test_rich_reporter_can_hide_paths():
    output = render(make_report(), ReportStyle(show_paths=False))
    assert "Code fence at line 9 [depth 1] (md block #2):" in output


def test_rich_reporter_success():
    output = render(LintReport())
    assert "Total nested Markdown blocks found: 0" in output
    assert "No issues found in nested Markdown code fences" in output
    assert "Nested Markdown linting passed" in output


def test_json_reporter():
    buffer = io.StringIO()
    JsonReporter(buffer).report(make_report())
    data = json.loads(buffer.getvalue())

    assert data["summary"] == {
        "total_files": 1,
        "total_blocks": 2,
        "total_findings": 2,
        "passed": False,
    }
    nested = data["issues"][1]
    assert nested["block_index"] == 2
    assert nested["depth"] == 1
    assert nested["findings"][0]["line_number"] == 11
    assert nested["findings"][0]["nested_line_number"] == 2
    assert nested["findings"][0]["rule_names"] == ["MD009", "no-trailing-spaces"]

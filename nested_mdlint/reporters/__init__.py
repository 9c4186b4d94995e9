"""
Reporters Layer - 报告层

包含 Rich 终端报告器和 JSON 报告器。
"""

from nested_mdlint.reporters.base import Reporter
from nested_mdlint.reporters.rich_reporter import RichReporter, ReportStyle, make_console
from nested_mdlint.reporters.json_reporter import JsonReporter

__all__ = [
    "Reporter",
    "RichReporter",
    "ReportStyle",
    "make_console",
    "JsonReporter",
]

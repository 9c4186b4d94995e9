"""
报告器基类 - 定义报告器接口
"""

from typing import Protocol

from nested_mdlint.core.mapper import LintReport


class Reporter(Protocol):
    """报告器协议"""

    def report(self, report: LintReport) -> None:
        """生成报告"""
        ...

"""
JSON 报告器 - 输出 JSON 格式报告
"""

import json
import sys
from typing import TextIO

from nested_mdlint.core.mapper import LintReport


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def report(self, report: LintReport) -> None:
        """生成 JSON 格式报告"""
        report_data = {
            "files": [
                {"file_path": file_result.file_path, "blocks": file_result.blocks}
                for file_result in report.files
            ],
            "issues": [
                {
                    "file_path": entry.file_path,
                    "block_index": entry.block_index,
                    "block_line": entry.block.line,
                    "depth": entry.block.depth,
                    "path": entry.block.path,
                    "info": entry.block.info,
                    "findings": [
                        {
                            "line_number": line,
                            "nested_line_number": finding.line_number,
                            "column": finding.column,
                            "rule_names": list(finding.rule_names),
                            "description": finding.description,
                            "detail": finding.detail,
                        }
                        for finding, line in entry.mapped_findings()
                    ],
                }
                for entry in report.entries
            ],
            "summary": {
                "total_files": report.total_files,
                "total_blocks": report.total_blocks,
                "total_findings": report.total_findings,
                "passed": report.passed,
            },
        }

        json_str = json.dumps(report_data, indent=2, ensure_ascii=False)
        print(json_str, file=self.output)

"""
坐标映射与汇总模块 - 将代码块内的行号映射回原始文件

映射规则：原始行号 = 代码块 fence 起始行号 + 问题在代码块内容中的行号。
代码块内容第 1 行紧跟在 fence 起始行之后，因此无需额外偏移。
"""

from dataclasses import dataclass, field
from typing import Sequence

from nested_mdlint.core.extractor import ExtractedBlock
from nested_mdlint.core.linter import Finding


def original_line(block: ExtractedBlock, finding: Finding) -> int:
    """计算 finding 在顶层文件中的行号"""
    return block.line + finding.line_number


@dataclass
class BlockResult:
    """
    单个代码块的 lint 结果

    Attributes:
        file_path: 来源文件路径
        block: 代码块
        block_index: 代码块在所属文件提取序列中的 1-based 序号
        findings: 该代码块的问题列表
    """
    file_path: str
    block: ExtractedBlock
    block_index: int
    findings: list[Finding] = field(default_factory=list)

    def mapped_findings(self) -> list[tuple[Finding, int]]:
        """返回 (finding, 原始行号) 列表"""
        return [(finding, original_line(self.block, finding)) for finding in self.findings]


@dataclass
class FileResult:
    """
    单个文件的结果

    Attributes:
        file_path: 文件路径
        blocks: 提取出的代码块数量
        results: 有问题的代码块结果，按先序排列
    """
    file_path: str
    blocks: int = 0
    results: list[BlockResult] = field(default_factory=list)


@dataclass
class LintReport:
    """整体报告，files 按文件发现顺序排列"""
    files: list[FileResult] = field(default_factory=list)

    @property
    def entries(self) -> list[BlockResult]:
        return [entry for file_result in self.files for entry in file_result.results]

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_blocks(self) -> int:
        return sum(file_result.blocks for file_result in self.files)

    @property
    def total_findings(self) -> int:
        return sum(len(entry.findings) for entry in self.entries)

    @property
    def passed(self) -> bool:
        return self.total_findings == 0


def map_findings(
    blocks: Sequence[ExtractedBlock],
    findings_per_block: Sequence[list[Finding]],
    file_path: str,
) -> FileResult:
    """
    汇总一个文件的 lint 结果

    跳过没有问题的代码块；block_index 按文件内的提取顺序从 1 开始编号。

    Args:
        blocks: 先序排列的代码块
        findings_per_block: 与 blocks 一一对应的问题列表
        file_path: 文件路径

    Returns:
        FileResult
    """
    if len(blocks) != len(findings_per_block):
        raise ValueError(
            f"Got {len(findings_per_block)} finding lists for {len(blocks)} blocks"
        )

    results = [
        BlockResult(
            file_path=file_path,
            block=block,
            block_index=index,
            findings=list(findings),
        )
        for index, (block, findings) in enumerate(zip(blocks, findings_per_block), start=1)
        if findings
    ]

    return FileResult(file_path=file_path, blocks=len(blocks), results=results)

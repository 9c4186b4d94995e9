"""
代码块提取器模块 - 递归提取 Markdown 中的 markdown/md 代码块

使用 markdown-it-py 解析 token 流，找到语言标识为 markdown 或 md 的
fence，并对其内容递归解析，提取更深层的嵌套代码块。

行号约定：
- ExtractedBlock.line 是 fence 起始行（``` 所在行）在顶层文件中的 1-based 行号
- 嵌套代码块的行号 = 父代码块行号 + 子 fence 在父内容中的 1-based 行号
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from markdown_it import MarkdownIt


# 需要递归 lint 的代码块语言标识
MARKDOWN_LANGUAGES = frozenset({"markdown", "md"})


@dataclass(frozen=True)
class ExtractedBlock:
    """
    提取出的 Markdown 代码块

    Attributes:
        content: 代码块内容（不含 fence 行）
        line: fence 起始行在顶层文件中的行号
        depth: 嵌套深度，0 表示直接位于顶层文档中
        path: 祖先链描述，如 "line 5 > block at line 8"，仅用于诊断输出
        info: 去除首尾空白后的语言标识（保留原大小写）
        file_path: 来源文件路径
    """
    content: str
    line: int
    depth: int
    path: str
    info: str
    file_path: str = ""


def is_markdown_fence(info: str) -> bool:
    """判断 fence 的语言标识是否为 markdown/md"""
    return info.strip().lower() in MARKDOWN_LANGUAGES


def extract_markdown_fences(
    content: str,
    file_path: str = "",
    base_line: int = 0,
    depth: int = 0,
    parent_path: str = "",
    max_depth: Optional[int] = None,
) -> list[ExtractedBlock]:
    """
    递归提取 markdown/md 代码块

    按先序遍历输出：每个代码块之后紧跟它的全部子代码块，然后才是下一个
    兄弟代码块。只有 markdown/md 代码块会被递归解析，其他语言的 fence
    内容即使看起来像 Markdown 也不会被扫描。

    Args:
        content: 待解析的 Markdown 文本
        file_path: 来源文件路径
        base_line: content 第一行之前那一行在顶层文件中的行号
        depth: 当前嵌套深度
        parent_path: 父代码块的祖先链描述，顶层为空字符串
        max_depth: 可选的最大深度，超过该深度的代码块不再输出和递归

    Returns:
        ExtractedBlock 列表
    """
    if max_depth is not None and depth > max_depth:
        return []

    # html=False：紧跟在 <details> 等 HTML 行后的 fence 不会被并入 html_block
    md = MarkdownIt("js-default")
    tokens = md.parse(content)

    blocks: list[ExtractedBlock] = []

    for token in tokens:
        if token.type != "fence" or not is_markdown_fence(token.info):
            continue

        # 没有 map 信息时退回 base_line，行号可能偏小
        if token.map:
            block_line = base_line + token.map[0] + 1
        else:
            block_line = base_line

        if parent_path:
            block_path = f"{parent_path} > block at line {block_line}"
        else:
            block_path = f"line {block_line}"

        blocks.append(ExtractedBlock(
            content=token.content,
            line=block_line,
            depth=depth,
            path=block_path,
            info=token.info.strip(),
            file_path=file_path,
        ))

        if token.content.strip():
            blocks.extend(extract_markdown_fences(
                token.content,
                file_path=file_path,
                base_line=block_line,
                depth=depth + 1,
                parent_path=block_path,
                max_depth=max_depth,
            ))

    return blocks


def extract_file_fences(
    file_path: Path,
    display_path: Optional[str] = None,
    max_depth: Optional[int] = None,
) -> list[ExtractedBlock]:
    """
    从文件中提取 markdown/md 代码块

    读取失败（OSError、UnicodeDecodeError）直接向上抛出。

    Args:
        file_path: Markdown 文件路径
        display_path: 写入 ExtractedBlock.file_path 的路径，默认为 file_path
        max_depth: 可选的最大嵌套深度

    Returns:
        ExtractedBlock 列表
    """
    content = file_path.read_text(encoding="utf-8")
    return extract_markdown_fences(
        content,
        file_path=display_path if display_path is not None else str(file_path),
        max_depth=max_depth,
    )

"""
nested-mdlint - 对 Markdown 代码块中嵌套的 Markdown 运行 lint

递归提取 markdown/md 代码块，使用与顶层文档相同的规则检查，
并将问题行号映射回原始文件。
"""

__version__ = "0.1.0"

"""
配置加载模块 - 读取 markdownlint 配置文件

按优先级查找：
1. .markdownlint.jsonc
2. .markdownlint.json

支持 // 与 /* */ 注释以及尾随逗号。文件不存在时返回空配置，
即使用规则引擎自身的默认规则。
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


# 配置文件候选（按优先级）
CONFIG_FILENAMES = (".markdownlint.jsonc", ".markdownlint.json")

# 字符串字面量优先匹配，避免误删字符串中的 // 或 /*
_COMMENT_PATTERN = re.compile(
    r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/',
    re.DOTALL,
)
_TRAILING_COMMA_PATTERN = re.compile(r'("(?:\\.|[^"\\])*")|,(\s*[}\]])')


class ConfigError(ValueError):
    """配置文件无效"""
    pass


def strip_json_comments(text: str) -> str:
    """
    移除 JSONC 中的注释和尾随逗号

    Args:
        text: JSONC 文本

    Returns:
        标准 JSON 文本
    """
    text = _COMMENT_PATTERN.sub(lambda m: m.group(1) or "", text)
    return _TRAILING_COMMA_PATTERN.sub(
        lambda m: m.group(1) if m.group(1) else m.group(2),
        text,
    )


def find_config(root: Path) -> Optional[Path]:
    """在 root 目录下查找配置文件"""
    for name in CONFIG_FILENAMES:
        config_path = root / name
        if config_path.is_file():
            return config_path
    return None


def parse_rule_config(text: str, source: str = "<string>") -> dict[str, Any]:
    """
    解析配置文本

    Raises:
        ConfigError: JSON 无效或顶层不是对象
    """
    try:
        data = json.loads(strip_json_comments(text))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid markdownlint config {source}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid markdownlint config {source}: expected an object, got {type(data).__name__}"
        )
    return data


def load_rule_config(root: Path, config_path: Optional[Path] = None) -> dict[str, Any]:
    """
    加载规则配置

    Args:
        root: 查找默认配置文件的目录
        config_path: 显式指定的配置文件，必须存在

    Returns:
        规则名 -> bool 或选项字典；没有配置文件时返回空字典

    Raises:
        ConfigError: 显式指定的文件不存在，或配置内容无效
    """
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        path = config_path
    else:
        path = find_config(root)
        if path is None:
            logger.debug(f"No markdownlint config found in {root}, using rule defaults")
            return {}

    logger.debug(f"Loading markdownlint config from {path}")
    return parse_rule_config(path.read_text(encoding="utf-8"), source=str(path))

"""
嵌套 Lint 适配器模块 - 对提取出的代码块运行 Markdown 规则检查

提取出的片段不是完整文档，因此始终禁用两条规则：
- MD041 (first-line-heading)：片段不一定以一级标题开头
- MD051 (link-fragments)：示例中的锚点通常指向其他文档，无法解析

规则引擎通过 RuleEngine 协议接入，默认使用 pymarkdownlnt。
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from pymarkdown.api import PyMarkdownApi, PyMarkdownApiException

logger = logging.getLogger(__name__)


# 嵌套代码块中强制禁用的规则，调用方配置中的同名值会被直接覆盖
SUPPRESSED_RULES: dict[str, bool] = {
    "MD041": False,
    "MD051": False,
}

# 与被禁用规则等价的配置键（小写），从基础配置中移除以免重新启用
SUPPRESSED_ALIASES = frozenset({
    "md041",
    "first-line-heading",
    "first-line-h1",
    "md051",
    "link-fragments",
})

# markdownlint 配置中不对应具体规则的键
_META_KEYS = frozenset({"extends"})

# 规则 ID -> 别名，用于处理 "default": false（先全部禁用，再按配置启用）
KNOWN_RULES: dict[str, tuple[str, ...]] = {
    "md001": ("heading-increment", "header-increment"),
    "md002": ("first-heading-h1", "first-header-h1"),
    "md003": ("heading-style", "header-style"),
    "md004": ("ul-style",),
    "md005": ("list-indent",),
    "md006": ("ul-start-left",),
    "md007": ("ul-indent",),
    "md009": ("no-trailing-spaces",),
    "md010": ("no-hard-tabs",),
    "md011": ("no-reversed-links",),
    "md012": ("no-multiple-blanks",),
    "md013": ("line-length",),
    "md014": ("commands-show-output",),
    "md018": ("no-missing-space-atx",),
    "md019": ("no-multiple-space-atx",),
    "md020": ("no-missing-space-closed-atx",),
    "md021": ("no-multiple-space-closed-atx",),
    "md022": ("blanks-around-headings", "blanks-around-headers"),
    "md023": ("heading-start-left", "header-start-left"),
    "md024": ("no-duplicate-heading", "no-duplicate-header"),
    "md025": ("single-title", "single-h1"),
    "md026": ("no-trailing-punctuation",),
    "md027": ("no-multiple-space-blockquote",),
    "md028": ("no-blanks-blockquote",),
    "md029": ("ol-prefix",),
    "md030": ("list-marker-space",),
    "md031": ("blanks-around-fences",),
    "md032": ("blanks-around-lists",),
    "md033": ("no-inline-html",),
    "md034": ("no-bare-urls",),
    "md035": ("hr-style",),
    "md036": ("no-emphasis-as-heading", "no-emphasis-as-header"),
    "md037": ("no-space-in-emphasis",),
    "md038": ("no-space-in-code",),
    "md039": ("no-space-in-links",),
    "md040": ("fenced-code-language",),
    "md041": ("first-line-heading", "first-line-h1"),
    "md042": ("no-empty-links",),
    "md043": ("required-headings", "required-headers"),
    "md044": ("proper-names",),
    "md045": ("no-alt-text",),
    "md046": ("code-block-style",),
    "md047": ("single-trailing-newline",),
    "md048": ("code-fence-style",),
    "md049": ("emphasis-style",),
    "md050": ("strong-style",),
    "md051": ("link-fragments",),
    "md052": ("reference-links-images",),
    "md053": ("link-image-reference-definitions",),
    "md054": ("link-image-style",),
    "md055": ("table-pipe-style",),
    "md056": ("table-column-count",),
    "md058": ("blanks-around-tables",),
    "md059": ("descriptive-link-text",),
}


class RuleEngineError(Exception):
    """规则引擎执行失败"""
    pass


@dataclass(frozen=True)
class Finding:
    """
    单条 lint 问题

    Attributes:
        rule_names: 规则标识及别名，如 ("MD022", "blanks-around-headings")
        description: 规则描述
        line_number: 在代码块内容中的 1-based 行号
        column: 1-based 列号，未知时为 None
        detail: 附加诊断信息
    """
    rule_names: tuple[str, ...]
    description: str
    line_number: int
    column: Optional[int] = None
    detail: Optional[str] = None


class RuleEngine(Protocol):
    """规则引擎协议"""

    def lint(self, content: str, config: dict[str, Any]) -> list[Finding]:
        """对字符串运行规则检查"""
        ...


def build_nested_config(base_config: dict[str, Any]) -> dict[str, Any]:
    """
    构建嵌套代码块使用的有效配置

    复制 base_config，移除所有指向 MD041/MD051 的键（包括别名和小写形式），
    再强制写入 SUPPRESSED_RULES。base_config 本身不会被修改。

    Args:
        base_config: 顶层文档使用的规则配置

    Returns:
        有效配置
    """
    config = {
        key: value
        for key, value in base_config.items()
        if key.lower() not in SUPPRESSED_ALIASES
    }
    config.update(SUPPRESSED_RULES)
    return config


def lint_block(
    content: str,
    base_config: dict[str, Any],
    engine: Optional[RuleEngine] = None,
) -> list[Finding]:
    """
    对单个代码块运行 lint

    Args:
        content: 代码块内容
        base_config: 基础规则配置
        engine: 规则引擎，默认为 PyMarkdownEngine

    Returns:
        规则引擎返回的 Finding 列表（不做修改）
    """
    if engine is None:
        engine = PyMarkdownEngine()
    return engine.lint(content, build_nested_config(base_config))


class PyMarkdownEngine:
    """
    基于 pymarkdownlnt 的规则引擎

    将 markdownlint 风格的配置（规则名 -> bool 或选项字典）映射到
    PyMarkdownApi 的规则开关和 plugins.<rule>.<option> 属性。
    """

    def lint(self, content: str, config: dict[str, Any]) -> list[Finding]:
        api = PyMarkdownApi()
        self._apply_config(api, config)

        try:
            result = api.scan_string(content)
        except PyMarkdownApiException as e:
            raise RuleEngineError(f"pymarkdown scan failed: {e}") from e

        return [
            Finding(
                rule_names=_rule_names(failure.rule_id, failure.rule_name),
                description=failure.rule_description,
                line_number=failure.line_number,
                column=failure.column_number or None,
                detail=_format_detail(failure.extra_error_information),
            )
            for failure in result.scan_failures
        ]

    def _apply_config(self, api: PyMarkdownApi, config: dict[str, Any]) -> None:
        if config.get("default") is False:
            self._disable_unlisted_rules(api, config)

        for key, value in config.items():
            if key.startswith("$") or key in _META_KEYS or key == "default":
                logger.debug(f"Ignoring config key {key!r}")
                continue

            rule_id = key.lower()

            if isinstance(value, bool):
                if value:
                    api.enable_rule_by_identifier(rule_id)
                else:
                    api.disable_rule_by_identifier(rule_id)
            elif isinstance(value, dict):
                api.enable_rule_by_identifier(rule_id)
                for option, option_value in value.items():
                    self._set_option(api, rule_id, option, option_value)
            else:
                logger.warning(f"Unsupported value for rule {key!r}: {value!r}")

    def _disable_unlisted_rules(self, api: PyMarkdownApi, config: dict[str, Any]) -> None:
        """处理 "default": false：禁用所有未在配置中显式启用的规则"""
        enabled = {
            key.lower()
            for key, value in config.items()
            if value is True or isinstance(value, dict)
        }
        for rule_id, aliases in KNOWN_RULES.items():
            if rule_id in enabled or enabled.intersection(aliases):
                continue
            api.disable_rule_by_identifier(rule_id)

    def _set_option(self, api: PyMarkdownApi, rule_id: str, option: str, value: Any) -> None:
        property_name = f"plugins.{rule_id}.{option}"
        # bool 是 int 的子类，需先判断
        if isinstance(value, bool):
            api.set_boolean_property(property_name, value)
        elif isinstance(value, int):
            api.set_integer_property(property_name, value)
        elif isinstance(value, str):
            api.set_string_property(property_name, value)
        else:
            logger.warning(f"Skipping option {property_name}: unsupported value {value!r}")


def _format_detail(extra: Optional[str]) -> Optional[str]:
    """去掉 pymarkdown 附加信息外层的空格和方括号，如 " [Expected: 1]" -> "Expected: 1" """
    detail = (extra or "").strip()
    if detail.startswith("[") and detail.endswith("]"):
        detail = detail[1:-1].strip()
    return detail or None


def _rule_names(rule_id: str, rule_name: str) -> tuple[str, ...]:
    """合并规则 ID 和逗号分隔的别名"""
    aliases = [name.strip() for name in (rule_name or "").split(",") if name.strip()]
    return (rule_id.upper(), *aliases)

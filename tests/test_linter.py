import pytest

from nested_mdlint.core.linter import (
    build_nested_config,
    _format_detail,
    lint_block,
    Finding,
    PyMarkdownEngine,
    SUPPRESSED_RULES,
)


class RecordingEngine:
    def __init__(self, findings=None):
        self.calls = []
        self.findings = findings or []

    def lint(self, content, config):
        self.calls.append((content, config))
        return list(self.findings)


class RecordingApi:
    def __init__(self):
        self.calls = []

    def enable_rule_by_identifier(self, rule_id):
        self.calls.append(("enable", rule_id))

    def disable_rule_by_identifier(self, rule_id):
        self.calls.append(("disable", rule_id))

    def set_boolean_property(self, name, value):
        self.calls.append(("bool", name, value))

    def set_integer_property(self, name, value):
        self.calls.append(("int", name, value))

    def set_string_property(self, name, value):
        self.calls.append(("str", name, value))


def test_empty_config_yields_only_suppressed_rules():
    assert build_nested_config({}) == {"MD041": False, "MD051": False}


@pytest.mark.parametrize("value", [True, False, {"level": 2}])
def test_suppressed_rules_override_base_values(value):
    config = build_nested_config({"MD041": value, "MD051": value, "MD013": False})
    assert config["MD041"] is False
    assert config["MD051"] is False
    assert config["MD013"] is False


def test_aliases_of_suppressed_rules_are_dropped():
    config = build_nested_config({
        "first-line-heading": True,
        "first-line-h1": {"level": 1},
        "link-fragments": True,
        "md041": True,
        "line-length": {"line_length": 120},
    })
    assert config == {
        "line-length": {"line_length": 120},
        "MD041": False,
        "MD051": False,
    }


def test_base_config_is_not_mutated():
    base = {"MD041": True, "MD022": True}
    build_nested_config(base)
    assert base == {"MD041": True, "MD022": True}


def test_lint_block_passes_effective_config_and_returns_findings_verbatim():
    finding = Finding(
        rule_names=("MD022", "blanks-around-headings"),
        description="Headings should be surrounded by blank lines",
        line_number=1,
        column=None,
        detail="Expected: 1; Actual: 0; Below",
    )
    engine = RecordingEngine([finding])
    findings = lint_block("## Sub\ntext\n", {"MD013": False}, engine)

    assert findings == [finding]
    content, config = engine.calls[0]
    assert content == "## Sub\ntext\n"
    assert config == {"MD013": False, **SUPPRESSED_RULES}


def test_pymarkdown_config_translation():
    api = RecordingApi()
    PyMarkdownEngine()._apply_config(api, {
        "$schema": "https://example.com/schema.json",
        "default": True,
        "extends": "base.json",
        "MD041": False,
        "MD022": True,
        "MD013": {"line_length": 120, "code_blocks": False, "style": "x"},
        "MD007": [1, 2],
    })
    assert api.calls == [
        ("disable", "md041"),
        ("enable", "md022"),
        ("enable", "md013"),
        ("int", "plugins.md013.line_length", 120),
        ("bool", "plugins.md013.code_blocks", False),
        ("str", "plugins.md013.style", "x"),
    ]


def test_pymarkdown_engine_reports_heading_spacing():
    findings = PyMarkdownEngine().lint("# Title\nSome text\n", build_nested_config({}))
    md022 = [f for f in findings if "MD022" in f.rule_names]
    assert md022
    assert md022[0].line_number == 1


def test_pymarkdown_engine_suppresses_first_line_heading():
    findings = PyMarkdownEngine().lint("Some text\n", build_nested_config({}))
    assert not any("MD041" in f.rule_names for f in findings)


def test_default_false_disables_rules_not_enabled():
    api = RecordingApi()
    PyMarkdownEngine()._apply_config(api, {
        "default": False,
        "MD013": {"line_length": 100},
        "no-trailing-spaces": True,
        "MD022": False,
    })
    disabled = {call[1] for call in api.calls if call[0] == "disable"}

    assert {"md001", "md022", "md041", "md047"} <= disabled
    assert "md013" not in disabled
    assert "md009" not in disabled
    assert ("enable", "md013") in api.calls
    assert ("enable", "no-trailing-spaces") in api.calls


def test_default_true_keeps_rule_defaults():
    api = RecordingApi()
    PyMarkdownEngine()._apply_config(api, {"default": True, "MD013": False})
    assert api.calls == [("disable", "md013")]


def test_pymarkdown_engine_honours_default_false():
    findings = PyMarkdownEngine().lint("# T\nline   \n", build_nested_config({"default": False}))
    assert findings == []


def test_pymarkdown_engine_detail_has_no_brackets():
    findings = PyMarkdownEngine().lint("# Title\nSome text\n", build_nested_config({}))
    details = [f.detail for f in findings if f.detail]
    assert details
    assert all(not d.startswith((" ", "[")) and not d.endswith("]") for d in details)


@pytest.mark.parametrize("extra, expected", [
    (" [Expected: 1; Actual: 0; Below]", "Expected: 1; Actual: 0; Below"),
    ("Expected: 0; Actual: 3", "Expected: 0; Actual: 3"),
    ("", None),
    (None, None),
])
def test_format_detail(extra, expected):
    assert _format_detail(extra) == expected

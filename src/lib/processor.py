"""
Public entry points for the CSS and diff pipelines

Each entry point runs its whole pipeline and returns a result object. Input
problems (empty input, invalid JSON) and unexpected internal exceptions are
converted to success=False results; nothing is raised past these functions.

    css_process(text, CssConfig(...))      -> CssResult
    diff_compute(old, new, DiffConfig(...)) -> DiffResult
"""

import json
from typing import List, Optional

from ..config import appsettings
from ..models.css import AtRule, CssConfig, Rule, StyleRule
from ..models.diff import DiffConfig
from ..models.results import CssResult, CssStats, DiffResult
from .differ import changes_build, lines_split
from .diffrender import report_build, stats_compute
from .jsondiff import json_compare
from .log import LOG
from .parser import Parser
from .renderer import render
from .tokenizer import tokenize
from .validator import validate


def rules_count(rules: List[Rule]) -> tuple:
    """
    Count style rules and their declarations at every depth

    Returns:
        (rule count, declaration count)
    """
    rule_total = 0
    declaration_total = 0
    for rule in rules:
        if isinstance(rule, StyleRule):
            rule_total += 1
            declaration_total += len(rule.declarations)
            nested_rules, nested_declarations = rules_count(rule.nested_rules)
        elif isinstance(rule, AtRule) and rule.body is not None:
            nested_rules, nested_declarations = rules_count(rule.body)
        else:
            continue
        rule_total += nested_rules
        declaration_total += nested_declarations
    return rule_total, declaration_total


def css_process(text: str, config: Optional[CssConfig] = None) -> CssResult:
    """
    Beautify or minify a stylesheet

    Args:
        text: Stylesheet source
        config: Formatting options (defaults to CssConfig())

    Returns:
        CssResult with output, statistics, validation issues and the parsed
        rule tree, or a failure result for empty input
    """
    config = config or CssConfig()

    try:
        if not text.strip():
            return CssResult.failure("Please provide CSS content to process")

        tokens = tokenize(text)
        LOG(f"Tokenized {len(text)} characters into {len(tokens)} tokens", level=2)

        rules = Parser(tokens, debug=appsettings.debug_mode).parse()
        issues = validate(rules)
        LOG(f"Validation found {len(issues)} issues", level=2)

        output = render(rules, config)
        LOG(f"Rendered {len(output)} characters ({config.mode})", level=2)

        original_size = len(text.encode("utf-8"))
        processed_size = len(output.encode("utf-8"))
        rule_total, declaration_total = rules_count(rules)

        stats = CssStats(
            original_size=original_size,
            processed_size=processed_size,
            compression_ratio=processed_size / original_size if original_size else 1.0,
            line_count=len(output.split("\n")),
            rule_count=rule_total,
            declaration_count=declaration_total,
            errors=[issue for issue in issues if issue.is_error],
            warnings=[issue for issue in issues if not issue.is_error],
        )
        return CssResult(success=True, output=output, stats=stats, rules=rules)

    except Exception as e:
        LOG(f"CSS processing failed: {e}", level=1)
        return CssResult.failure(str(e) or "Failed to process CSS")


def diff_compute(old_text: str, new_text: str, config: Optional[DiffConfig] = None) -> DiffResult:
    """
    Compare two texts line by line, or two JSON documents structurally

    Args:
        old_text: Left-hand text
        new_text: Right-hand text
        config: Diff options (defaults to DiffConfig())

    Returns:
        DiffResult. Fails when both inputs are empty, or in JSON mode when
        either input is not valid JSON.
    """
    config = config or DiffConfig()

    try:
        if not old_text and not new_text:
            return DiffResult.failure("Please provide both old and new text to compare")

        if config.compare_mode == "json":
            try:
                output, json_changes = json_compare(old_text, new_text)
            except json.JSONDecodeError as e:
                return DiffResult.failure(f"Invalid JSON format in one or both inputs: {e}")
            LOG(f"JSON comparison found {len(json_changes)} differences", level=2)
            return DiffResult(success=True, output=output, json_changes=json_changes)

        old_lines = lines_split(old_text)
        new_lines = lines_split(new_text)
        LOG(f"Comparing {len(old_lines)} old lines with {len(new_lines)} new lines", level=2)

        records = changes_build(old_lines, new_lines, config)
        stats = stats_compute(records)
        output = report_build(records, stats, config)

        return DiffResult(success=True, output=output, stats=stats, records=records)

    except Exception as e:
        LOG(f"Diff failed: {e}", level=1)
        return DiffResult.failure(str(e) or "Failed to compute diff")

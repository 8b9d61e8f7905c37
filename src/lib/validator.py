"""
Structural lint for parsed stylesheets

Checks only top-level style rules; at-rule bodies and nested rules are not
visited. Issues are data, not failures: malformed CSS still beautifies and
minifies on a best-effort basis.

Checks:
    empty-selector    WARNING  style rule without a selector
    empty-property    ERROR    declaration without a property name
    empty-value       WARNING  declaration without a value
    invalid-property  ERROR    property name containing a space
"""

from typing import List

from ..models.css import Rule, Severity, StyleRule, ValidationIssue


def issue_make(rule: StyleRule, message: str, severity: Severity, code: str) -> ValidationIssue:
    """Build an issue located at the rule's first token"""
    return ValidationIssue(
        line=rule.line,
        column=rule.column,
        message=message,
        severity=severity,
        code=code,
    )


def validate(rules: List[Rule]) -> List[ValidationIssue]:
    """
    Validate top-level style rules

    Args:
        rules: Output of Parser.parse()

    Returns:
        Issues in rule/declaration order
    """
    issues: List[ValidationIssue] = []

    for rule in rules:
        if not isinstance(rule, StyleRule):
            continue

        if not rule.selector.strip():
            issues.append(issue_make(rule, "Empty selector", Severity.WARNING, "empty-selector"))

        for declaration in rule.declarations:
            if not declaration.property.strip():
                issues.append(issue_make(rule, "Empty property name", Severity.ERROR, "empty-property"))

            if not declaration.value.strip():
                issues.append(issue_make(
                    rule,
                    f"Empty value for property '{declaration.property}'",
                    Severity.WARNING,
                    "empty-value",
                ))

            if " " in declaration.property:
                issues.append(issue_make(
                    rule,
                    f"Invalid property name '{declaration.property}' (contains spaces)",
                    Severity.ERROR,
                    "invalid-property",
                ))

    return issues

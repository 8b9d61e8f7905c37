"""
Renderers for CSS rule trees

Two independent tree walks over the output of Parser.parse():

- Beautifier: one construct per line, indented by depth, with brace placement
  and blank-line separation driven by CssConfig.
- Minifier: no separators at all (`sel{prop:value;}`).

Both honour preserve_comments, drop_empty_rules and sort_declarations, and
both always render braces for an at-rule with a body, even an empty one.
"""

from typing import List

from ..config import appsettings
from ..models.css import AtRule, CommentRule, CssConfig, Declaration, Rule, StyleRule


def declarations_order(declarations: List[Declaration], config: CssConfig) -> List[Declaration]:
    """Declarations in render order (stable sort by property when enabled)"""
    if config.sort_declarations:
        return sorted(declarations, key=lambda declaration: declaration.property)
    return list(declarations)


def rule_isEmpty(rule: Rule) -> bool:
    """
    True when a rule renders no declarations at any depth

    Comments are empty; a style rule or block at-rule is empty when it has
    no declarations and all of its children are empty. Statement at-rules
    (@import ...;) are never empty.
    """
    if isinstance(rule, CommentRule):
        return True
    if isinstance(rule, AtRule):
        if rule.body is None or rule.declarations:
            return False
        return all(rule_isEmpty(child) for child in rule.body)
    if rule.declarations:
        return False
    return all(rule_isEmpty(child) for child in rule.nested_rules)


def atRule_head(rule: AtRule) -> str:
    if rule.prelude:
        return f"{rule.keyword} {rule.prelude}"
    return rule.keyword


class Beautifier:
    """
    Pretty-printer for rule trees

    Example:
        >>> Beautifier(CssConfig()).render(Parser(tokenize(".a{color:red}")).parse())
        '.a {\\n  color: red;\\n}'
    """

    def __init__(self, config: CssConfig) -> None:
        self.config = config
        self.indent = appsettings.indentUnit_make(config.indent_type, config.indent_size)
        self.lines: List[str] = []

    def render(self, rules: List[Rule]) -> str:
        """
        Render a rule tree

        Returns:
            Lines joined with newlines, runs of blank lines collapsed to
            one, leading/trailing whitespace stripped
        """
        self.lines = []
        self.rules_render(rules, 0)
        return self.lines_finalize()

    def rules_render(self, rules: List[Rule], level: int) -> None:
        for rule in rules:
            self.rule_render(rule, level)

    def rule_render(self, rule: Rule, level: int) -> None:
        current_indent = self.indent * level

        if isinstance(rule, CommentRule):
            if self.config.preserve_comments:
                self.lines.append(current_indent + rule.text)
            return

        if isinstance(rule, AtRule):
            head = atRule_head(rule)
            if rule.body is None:
                self.lines.append(current_indent + head + ";")
            else:
                self.brace_open(head, current_indent)
                self.block_render(rule.declarations, rule.body, level)
                self.lines.append(current_indent + "}")
            self.ruleGap_emit()
            return

        if self.config.drop_empty_rules and rule_isEmpty(rule):
            return

        self.brace_open(rule.selector, current_indent)
        self.block_render(rule.declarations, rule.nested_rules, level)
        self.lines.append(current_indent + "}")
        self.ruleGap_emit()

    def brace_open(self, head: str, current_indent: str) -> None:
        if self.config.newline_before_brace:
            if head:
                self.lines.append(current_indent + head)
            self.lines.append(current_indent + "{")
        elif head and self.config.space_before_brace:
            self.lines.append(current_indent + head + " {")
        else:
            self.lines.append(current_indent + head + "{")

    def block_render(self, declarations: List[Declaration], rules: List[Rule], level: int) -> None:
        """Render the inside of a block, between its braces"""
        has_content = bool(declarations) or any(self.rule_renders(rule) for rule in rules)
        inner_indent = self.indent * (level + 1)
        colon = ": " if self.config.space_after_colon else ":"

        if self.config.blank_line_after_brace and has_content:
            self.lines.append("")

        for declaration in declarations_order(declarations, self.config):
            value = " ".join(
                part for part in (declaration.value, "!important" if declaration.important else "") if part
            )
            self.lines.append(f"{inner_indent}{declaration.property}{colon}{value};")

        self.rules_render(rules, level + 1)

        # Separation after the last child belongs to the closing brace
        while self.lines and self.lines[-1] == "":
            self.lines.pop()

        if self.config.blank_line_before_close_brace and has_content:
            self.lines.append("")

    def rule_renders(self, rule: Rule) -> bool:
        """False for a child that rule_render() would skip"""
        if isinstance(rule, CommentRule):
            return self.config.preserve_comments
        if isinstance(rule, StyleRule) and self.config.drop_empty_rules:
            return not rule_isEmpty(rule)
        return True

    def ruleGap_emit(self) -> None:
        if self.config.blank_line_after_rule:
            self.lines.append("")

    def lines_finalize(self) -> str:
        collapsed: List[str] = []
        for line in self.lines:
            if not line.strip() and collapsed and not collapsed[-1].strip():
                continue
            collapsed.append(line)
        return "\n".join(collapsed).strip()


class Minifier:
    """
    Compact renderer for rule trees

    Comments are emitted verbatim only when preserve_comments is set;
    otherwise they vanish without a replacement character.

    Example:
        >>> Minifier(CssConfig(mode="minify")).render(Parser(tokenize(".a { color: red; }")).parse())
        '.a{color:red;}'
    """

    def __init__(self, config: CssConfig) -> None:
        self.config = config

    def render(self, rules: List[Rule]) -> str:
        return "".join(self.rule_render(rule) for rule in rules)

    def rule_render(self, rule: Rule) -> str:
        if isinstance(rule, CommentRule):
            return rule.text if self.config.preserve_comments else ""

        if isinstance(rule, AtRule):
            head = atRule_head(rule)
            if rule.body is None:
                return head + ";"
            return head + "{" + self.block_render(rule.declarations, rule.body) + "}"

        if self.config.drop_empty_rules and rule_isEmpty(rule):
            return ""
        return rule.selector + "{" + self.block_render(rule.declarations, rule.nested_rules) + "}"

    def block_render(self, declarations: List[Declaration], rules: List[Rule]) -> str:
        parts = []
        for declaration in declarations_order(declarations, self.config):
            important = "!important" if declaration.important else ""
            parts.append(f"{declaration.property}:{declaration.value}{important};")
        parts.extend(self.rule_render(rule) for rule in rules)
        return "".join(parts)


def beautify(rules: List[Rule], config: CssConfig) -> str:
    return Beautifier(config).render(rules)


def minify(rules: List[Rule], config: CssConfig) -> str:
    return Minifier(config).render(rules)


def render(rules: List[Rule], config: CssConfig) -> str:
    """Render a rule tree in the mode selected by config.mode"""
    if config.mode == "minify":
        return minify(rules, config)
    return beautify(rules, config)

"""
Recursive descent parser for CSS token streams

Transforms the tokenizer's lexemes into a rule tree (StyleRule, AtRule,
CommentRule).

The parser operates on an explicit cursor: every parse routine takes a token
index and returns what it built together with the index of the next unread
token. A single routine, block_parse(), handles the inside of every
brace-delimited block, whether it belongs to a top-level style rule, an
at-rule body or a nested rule.

Key features:
- Semantic roles (selector, property, value, prelude) assigned by context
- SCSS-style nesting and nested at-rules (@media inside @supports, etc.)
- !important detection
- Comments kept as CommentRule siblings
- Never raises: unterminated blocks are truncated at end of stream

Example:
    >>> rules = Parser(tokenize(".a{color:red}")).parse()
    >>> rules[0].selector
    '.a'
    >>> rules[0].declarations[0].value
    'red'
"""

from typing import FrozenSet, List, Optional, Tuple

from ..models.css import (
    AtRule,
    Block,
    CommentRule,
    Declaration,
    Rule,
    StyleRule,
    Token,
    TokenKind,
)
from .log import LOG

IMPORTANT = "!important"


class Parser:
    """
    Parser for tokenized CSS

    Handles:
    - Style rules with declarations
    - At-rules in statement form (@import ...;) and block form (@media ... {})
    - Nested rules inside style rules and at-rule bodies
    - Comments at any depth
    - Malformed input, by graceful truncation
    """

    def __init__(self, tokens: List[Token], debug: bool = False):
        """
        Initialize parser with a token stream

        Args:
            tokens: Output of tokenize()
            debug: Enable trace logging of parser decisions
        """
        self.tokens = tokens
        self.debug = debug

    def parse(self) -> List[Rule]:
        """
        Parse the whole token stream into a rule tree

        Returns:
            Top-level rules in source order. Returns an empty list for
            empty or whitespace-only input.
        """
        rules: List[Rule] = []
        pos = 0

        while pos < len(self.tokens):
            token = self.tokens[pos]

            if token.kind is TokenKind.WHITESPACE:
                pos += 1
                continue

            if token.kind is TokenKind.COMMENT:
                rules.append(self.comment_make(token))
                pos += 1
                continue

            if self.punctuation_is(pos, "};"):
                self.trace(f"Skipping stray '{token.text}' at {token.line}:{token.column}")
                pos += 1
                continue

            if token.kind is TokenKind.AT_KEYWORD:
                at_rule, pos = self.atRule_parse(pos, rules)
                rules.append(at_rule)
                continue

            style_rule, pos = self.styleRule_parse(pos, rules)
            if style_rule is not None:
                rules.append(style_rule)

        LOG(f"Parsed {len(rules)} top-level rules", level=3)
        return rules

    def block_parse(self, pos: int) -> Tuple[Block, int]:
        """
        Parse the contents of a block, starting just after its '{'

        Repeatedly skips whitespace, collects comments, and parses nested
        at-rules, nested style rules and declarations until the matching '}'.

        Args:
            pos: Index of the first token inside the block

        Returns:
            (Block, index of the token after the closing '}'). If the stream
            ends before the block is closed, the index is len(tokens).
        """
        block = Block()

        while pos < len(self.tokens):
            token = self.tokens[pos]

            if token.kind is TokenKind.WHITESPACE:
                pos += 1
            elif token.kind is TokenKind.COMMENT:
                block.rules.append(self.comment_make(token))
                pos += 1
            elif self.punctuation_is(pos, "}"):
                return block, pos + 1
            elif self.punctuation_is(pos, ";"):
                pos += 1
            elif token.kind is TokenKind.AT_KEYWORD:
                at_rule, pos = self.atRule_parse(pos, block.rules)
                block.rules.append(at_rule)
            elif self.nestedRule_ahead(pos):
                style_rule, pos = self.styleRule_parse(pos, block.rules)
                if style_rule is not None:
                    block.rules.append(style_rule)
            else:
                declaration, pos = self.declaration_parse(pos, block.rules)
                if declaration is not None:
                    block.declarations.append(declaration)

        self.trace("Block not closed before end of input")
        return block, pos

    def atRule_parse(self, pos: int, siblings: List[Rule]) -> Tuple[AtRule, int]:
        """
        Parse an at-rule starting at its @keyword token

        The prelude runs up to ';' (statement form), '{' (block form) or an
        enclosing block's '}' (statement form, '}' left for the caller).
        Comments found in the prelude open the body of a block at-rule; for
        the statement form they are appended to siblings.

        Example:
            "@import url(a.css);" -> AtRule("@import", "url(a.css)", body=None)
            "@media print { .a { color: red } }"
                -> AtRule("@media", "print", body=[StyleRule(".a", ...)])
        """
        keyword_token = self.tokens[pos]
        at_rule = AtRule(
            keyword=keyword_token.text,
            line=keyword_token.line,
            column=keyword_token.column,
        )

        prelude, pos, comments = self.text_collect(pos + 1, frozenset(";{}"))
        at_rule.prelude = prelude

        if self.punctuation_is(pos, "{"):
            block, pos = self.block_parse(pos + 1)
            at_rule.body = comments + block.rules
            at_rule.declarations = block.declarations
            return at_rule, pos

        siblings.extend(comments)
        if self.punctuation_is(pos, ";"):
            pos += 1

        return at_rule, pos

    def styleRule_parse(self, pos: int, siblings: List[Rule]) -> Tuple[Optional[StyleRule], int]:
        """
        Parse `selector { block }` starting at the selector's first token

        Comments found inside the selector are appended to siblings.

        Returns:
            (StyleRule or None, next index). None is returned when the
            selector never reaches a '{' (partial content is dropped) or when
            the rule has neither a selector nor declarations.
        """
        first = self.tokens[pos]
        selector, pos, comments = self.text_collect(pos, frozenset("{"))
        siblings.extend(comments)

        if pos >= len(self.tokens):
            self.trace(f"Selector '{selector}' has no block, dropped")
            return None, pos

        block, pos = self.block_parse(pos + 1)
        rule = StyleRule(
            selector=selector,
            declarations=block.declarations,
            nested_rules=block.rules,
            line=first.line,
            column=first.column,
        )

        if not rule.selector and not rule.declarations:
            self.trace(f"Empty rule at {first.line}:{first.column} discarded")
            return None, pos

        return rule, pos

    def declaration_parse(self, pos: int, siblings: List[Rule]) -> Tuple[Optional[Declaration], int]:
        """
        Parse `property : value [!important] ;`

        The property runs up to ':' (or ';'/'}' when the colon is missing),
        the value up to ';' or '}'. A trailing ';' is consumed, a '}' is left
        for block_parse(). Comments found inside are appended to siblings.

        Returns:
            (Declaration or None, next index)
        """
        prop, pos, comments = self.text_collect(pos, frozenset(":;}"))
        siblings.extend(comments)

        if not self.punctuation_is(pos, ":"):
            if self.punctuation_is(pos, ";"):
                pos += 1
            if not prop:
                return None, pos
            return Declaration(property=prop, value=""), pos

        value, pos, comments = self.text_collect(pos + 1, frozenset(";}"))
        siblings.extend(comments)

        important = False
        if value.endswith(IMPORTANT):
            important = True
            value = value[: -len(IMPORTANT)].strip()

        if self.punctuation_is(pos, ";"):
            pos += 1

        return Declaration(property=prop, value=value, important=important), pos

    def nestedRule_ahead(self, pos: int) -> bool:
        """
        Decide whether the construct at pos is a nested rule

        It is when a '{' is reached before any ';' or '}', which tells
        `a:hover { ... }` apart from `color: red;`.
        """
        for index in range(pos, len(self.tokens)):
            token = self.tokens[index]
            if token.kind is TokenKind.PUNCTUATION:
                if token.text == "{":
                    return True
                if token.text in ";}":
                    return False
        return False

    def text_collect(self, pos: int, stops: FrozenSet[str]) -> Tuple[str, int, List[Rule]]:
        """
        Join token text up to (not including) a stop punctuation

        Non-whitespace token text is concatenated; each whitespace boundary
        between two pieces becomes a single space, and leading/trailing
        whitespace is dropped. Comments act as whitespace boundaries and are
        returned separately.

        Returns:
            (joined text, index of the stop token or len(tokens), comments)
        """
        parts: List[str] = []
        comments: List[Rule] = []
        pending_space = False

        while pos < len(self.tokens):
            token = self.tokens[pos]
            if token.kind is TokenKind.PUNCTUATION and token.text in stops:
                break
            if token.kind is TokenKind.COMMENT:
                comments.append(self.comment_make(token))
                pending_space = bool(parts)
            elif token.kind is TokenKind.WHITESPACE:
                pending_space = bool(parts)
            else:
                if pending_space:
                    parts.append(" ")
                    pending_space = False
                parts.append(token.text)
            pos += 1

        return "".join(parts), pos, comments

    def comment_make(self, token: Token) -> CommentRule:
        """
        CommentRule for a comment token, closing an unterminated comment

        The tokenizer lets an unterminated comment run to end of input; its
        text gets a closing */ so rendered output re-parses to the same tree.
        """
        text = token.text
        if len(text) < 4 or not text.endswith("*/"):
            self.trace(f"Unterminated comment at {token.line}:{token.column} closed")
            text += "*/"
        return CommentRule(text=text, line=token.line, column=token.column)

    def punctuation_is(self, pos: int, chars: str) -> bool:
        """True if the token at pos is a punctuation token among chars"""
        if pos >= len(self.tokens):
            return False
        token = self.tokens[pos]
        return token.kind is TokenKind.PUNCTUATION and token.text in chars

    def trace(self, message: str) -> None:
        if self.debug:
            LOG(message, level=3)

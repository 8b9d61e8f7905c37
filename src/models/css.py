"""
CSS pipeline data models

Type-safe structures shared by the tokenizer, parser, validator and renderers.

The tokenizer is context-free: it only knows lexeme classes (TokenKind).
Semantic roles (selector, property, value, at-rule keyword) are assigned by
the parser and live in the rule tree (StyleRule, AtRule, CommentRule).
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TokenKind(Enum):
    """
    Lexeme classes produced by the tokenizer
    """
    COMMENT = "comment"          # /* ... */ including delimiters
    WHITESPACE = "whitespace"    # maximal \s+ run
    PUNCTUATION = "punctuation"  # one of { } : ; , ( ) [ ]
    AT_KEYWORD = "at-keyword"    # text run starting with @
    TEXT = "text"                # any other maximal run


@dataclass(frozen=True)
class Token:
    """
    A single lexeme with its source position

    Attributes:
        kind: Lexeme class
        text: Exact source text of the lexeme
        line: 1-based line of the first character
        column: 1-based column of the first character
    """
    kind: TokenKind
    text: str
    line: int
    column: int


@dataclass
class Declaration:
    """
    A `property: value` pair, optionally flagged !important
    """
    property: str
    value: str
    important: bool = False


@dataclass
class StyleRule:
    """
    `selector { declarations; nested rules }`

    nested_rules holds SCSS-style nested rules, nested at-rules and comments
    written inside the block, in source order.
    """
    selector: str
    declarations: List[Declaration] = field(default_factory=list)
    nested_rules: List['Rule'] = field(default_factory=list)
    line: int = 1
    column: int = 1


@dataclass
class AtRule:
    """
    `@keyword prelude;` (statement form, body is None) or
    `@keyword prelude { ... }` (block form, body is a list, possibly empty)

    Attributes:
        keyword: Keyword including the leading @ (e.g., "@media")
        prelude: Text between the keyword and ; or {, whitespace-normalized
        body: Child rules, or None for the statement form
        declarations: Declarations written directly inside the block
                      (e.g., @font-face, @page)
    """
    keyword: str
    prelude: str = ""
    body: Optional[List['Rule']] = None
    declarations: List[Declaration] = field(default_factory=list)
    line: int = 1
    column: int = 1


@dataclass
class CommentRule:
    """
    A block comment, delimiters included (an unterminated comment gets its closing */)
    """
    text: str
    line: int = 1
    column: int = 1


Rule = Union[StyleRule, AtRule, CommentRule]


@dataclass
class Block:
    """
    Contents of one brace-delimited block as returned by Parser.block_parse()
    """
    declarations: List[Declaration] = field(default_factory=list)
    rules: List[Rule] = field(default_factory=list)


class Severity(Enum):
    """Severity level for a validation issue."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """
    A structural lint finding about a parsed stylesheet

    Attributes:
        line: Line of the offending rule
        column: Column of the offending rule
        message: Human-readable description
        severity: ERROR or WARNING
        code: Stable identifier (empty-selector, empty-property,
              empty-value, invalid-property)
    """
    line: int
    column: int
    message: str
    severity: Severity
    code: str

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        return f"{self.severity.value} [{self.code}] line {self.line}, column {self.column}: {self.message}"


class CssConfig(BaseModel):
    """
    Formatting options for the CSS beautifier/minifier

    All options are independent. space_after_comma, newline_after_comma and
    autoprefixer are accepted for compatibility with saved option sets but
    have no effect on the output.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: Literal["beautify", "minify"] = "beautify"
    indent_size: int = Field(default=2, ge=0)
    indent_type: Literal["spaces", "tabs"] = "spaces"
    space_before_brace: bool = True
    newline_before_brace: bool = False
    blank_line_after_brace: bool = False
    blank_line_before_close_brace: bool = False
    blank_line_after_rule: bool = True
    newline_after_comma: bool = False
    preserve_comments: bool = True
    drop_empty_rules: bool = False
    sort_declarations: bool = False
    space_after_colon: bool = True
    space_after_comma: bool = False
    autoprefixer: bool = False

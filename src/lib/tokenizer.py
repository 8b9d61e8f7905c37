"""
Context-free CSS tokenizer

Splits a stylesheet into lexemes in a single left-to-right scan, tracking
line and column of every lexeme for diagnostics.

Lexeme classes, in priority order at each scan position:
1. Block comment /* ... */ (unterminated comments run to end of input)
2. Whitespace run
3. Single-character punctuation: { } : ; , ( ) [ ]
4. Maximal run of anything else, stopping before punctuation, whitespace
   or the start of a comment. Runs beginning with @ are at-keywords.

Tokenization is lossless: ''.join(t.text for t in tokenize(s)) == s.

String literals are not special-cased: `content: "a:b"` splits at the colon
like any other text.

Example:
    >>> [t.text for t in tokenize(".a{color:red}")]
    ['.a', '{', 'color', ':', 'red', '}']
"""

from typing import List

from ..models.css import Token, TokenKind

PUNCTUATION = frozenset("{}:;,()[]")


def position_advance(text: str, line: int, column: int) -> tuple:
    """
    Compute the (line, column) reached after consuming text.

    A newline increments the line and resets the column to 1; every other
    character advances the column by 1.
    """
    newlines = text.count("\n")
    if not newlines:
        return line, column + len(text)
    return line + newlines, len(text) - text.rfind("\n")


def tokenize(source: str) -> List[Token]:
    """
    Tokenize CSS source text

    Never fails: every character of the input ends up in exactly one token.

    Args:
        source: Raw stylesheet text

    Returns:
        Tokens in source order
    """
    tokens: List[Token] = []
    length = len(source)
    pos = 0
    line = 1
    column = 1

    while pos < length:
        char = source[pos]

        if source.startswith("/*", pos):
            close = source.find("*/", pos + 2)
            end = length if close == -1 else close + 2
            kind = TokenKind.COMMENT
        elif char.isspace():
            end = pos + 1
            while end < length and source[end].isspace():
                end += 1
            kind = TokenKind.WHITESPACE
        elif char in PUNCTUATION:
            end = pos + 1
            kind = TokenKind.PUNCTUATION
        else:
            end = pos + 1
            while end < length:
                nxt = source[end]
                if nxt in PUNCTUATION or nxt.isspace() or source.startswith("/*", end):
                    break
                end += 1
            kind = TokenKind.AT_KEYWORD if char == "@" else TokenKind.TEXT

        text = source[pos:end]
        tokens.append(Token(kind=kind, text=text, line=line, column=column))
        line, column = position_advance(text, line, column)
        pos = end

    return tokens

"""
Custom Pygments lexer for formathub diff reports, and HTML highlighting

Provides syntax highlighting for the text produced by diff_compute() when
the CLI writes an HTML rendering. Stylesheets and JSON reports use the stock
Pygments CSS and JSON lexers.

Token types:
- Generic.Heading: Report header ("Diff Comparison (...)", "Statistics:")
- Generic.Inserted: Added lines ("+ ...")
- Generic.Deleted: Removed lines ("- ...")
- Generic.Subheading: Omitted-context marker ("...") and split header
- Comment: Rules (=====, -----) and code fences
- Number: Line-number columns and statistics values
- Text: Unchanged lines
"""

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer, RegexLexer, bygroups
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.token import Comment, Generic, Name, Number, Punctuation, Text, Whitespace
from pygments.util import ClassNotFound

from ..config import appsettings


class DiffReportLexer(RegexLexer):
    """
    Lexer for formathub diff reports

    Example:
        Diff Comparison (unified)
        ==================================================
        - Hello World        → Generic.Deleted
        + Hello Universe     → Generic.Inserted
          This is line 2     → Text
    """

    name = 'FormathubDiff'
    aliases = ['formathub-diff', 'fhdiff']
    filenames = ['*.fhdiff']

    tokens = {
        'root': [
            # Report headers
            (r'^(Diff Comparison|JSON Comparison:|Statistics:)(.*\n)', bygroups(Generic.Heading, Generic.Heading)),
            (r'^(OLD \(Left\) \| NEW \(Right\))(\n)', bygroups(Generic.Subheading, Whitespace)),

            # Rules and fences
            (r'^[=\-]{10,}\n', Comment),
            (r'^```(diff)?\n?', Comment),

            # Statistics lines
            (r'^(Lines \w+|Similarity)(:)( *)(\d+%?)(\n)',
             bygroups(Name.Attribute, Punctuation, Whitespace, Number, Whitespace)),

            # Omitted context
            (r'^\.\.\.\n', Generic.Subheading),

            # Line-number columns (split: "   1 |    2 | ", inline: "   1: ")
            (r'^( *\d* \| *\d* \| )', Number),
            (r'^( *\d*: )', Number),

            # Records
            (r'\+ .*\n', Generic.Inserted),
            (r'- .*\n', Generic.Deleted),
            (r'.*\n', Text),
            (r'.+', Text),
        ],
    }


def lexer_get(language: str) -> Lexer:
    """
    Lexer for a rendering language

    Args:
        language: "diff" for formathub diff reports, anything else is looked
                  up in Pygments (e.g. "css", "json")

    Returns:
        Lexer instance, TextLexer for unknown languages
    """
    if language.lower() in ['diff', 'formathub-diff', 'fhdiff']:
        return DiffReportLexer()
    try:
        return get_lexer_by_name(language)
    except ClassNotFound:
        return TextLexer()


def html_highlight(text: str, language: str, title: str = "formathub") -> str:
    """
    Render text as a standalone, syntax-highlighted HTML document

    Uses the Pygments style named by appsettings.highlight_style with inline
    styles, so the output has no external dependencies.
    """
    formatter = HtmlFormatter(
        style=appsettings.highlight_style,
        noclasses=True,
        full=True,
        title=title,
    )
    return highlight(text, lexer_get(language), formatter)

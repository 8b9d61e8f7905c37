"""
formathub - CSS beautifier/minifier and line diff checker

Developer formatting utilities: a CSS pretty-printer/minifier with structural
validation, and an LCS-based line diff with JSON-aware comparison.
"""

__version__ = "1.0.0"
__author__ = "FreeFormatHub"

from .lib import css_process, diff_compute, Parser, tokenize, LOG, state_connectToLogger
from .models import CssConfig, DiffConfig

__all__ = [
    "css_process",
    "diff_compute",
    "Parser",
    "tokenize",
    "CssConfig",
    "DiffConfig",
    "LOG",
    "state_connectToLogger",
    "__version__",
]

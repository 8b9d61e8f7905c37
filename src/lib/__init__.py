"""
formathub - CSS beautifier/minifier and line diff checker

Hand-written CSS tokenizer, parser, validator and renderers, plus an
LCS-based line diff with unified/split/inline renderers.
"""

__version__ = "1.0.0"
__author__ = "FreeFormatHub"

from .tokenizer import tokenize
from .parser import Parser
from .validator import validate
from .renderer import beautify, minify, render
from .differ import changes_build, lcs_compute, lines_split
from .diffrender import stats_compute
from .jsondiff import json_compare
from .processor import css_process, diff_compute
from .log import LOG, state_connectToLogger

__all__ = [
    "tokenize",
    "Parser",
    "validate",
    "beautify",
    "minify",
    "render",
    "changes_build",
    "lcs_compute",
    "lines_split",
    "stats_compute",
    "json_compare",
    "css_process",
    "diff_compute",
    "LOG",
    "state_connectToLogger",
    "__version__",
]

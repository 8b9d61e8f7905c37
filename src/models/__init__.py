"""
Models package for formathub

Contains data structures and type definitions for the CSS and diff pipelines.
"""

from .state import ProgramState, pipeline
from .css import (
    TokenKind,
    Token,
    Declaration,
    StyleRule,
    AtRule,
    CommentRule,
    Rule,
    Block,
    Severity,
    ValidationIssue,
    CssConfig,
)
from .diff import ChangeType, LineRecord, DiffStats, JsonChange, JsonChangeKind, DiffConfig
from .results import CssStats, CssResult, DiffResult

__all__ = [
    "ProgramState",
    "pipeline",
    "TokenKind",
    "Token",
    "Declaration",
    "StyleRule",
    "AtRule",
    "CommentRule",
    "Rule",
    "Block",
    "Severity",
    "ValidationIssue",
    "CssConfig",
    "ChangeType",
    "LineRecord",
    "DiffStats",
    "JsonChange",
    "JsonChangeKind",
    "DiffConfig",
    "CssStats",
    "CssResult",
    "DiffResult",
]

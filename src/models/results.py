"""
Result models returned by the public entry points

Both css_process() and diff_compute() return a result object instead of
raising: success=True results carry output and stats, success=False results
carry only an error message.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .css import Rule, ValidationIssue
from .diff import DiffStats, JsonChange, LineRecord


@dataclass
class CssStats:
    """
    Statistics for one CSS processing run

    Attributes:
        original_size: UTF-8 byte length of the input
        processed_size: UTF-8 byte length of the output
        compression_ratio: processed_size / original_size
        line_count: Number of lines in the output
        rule_count: Style rules at every depth of the tree
        declaration_count: Declarations of those style rules
        errors: Validation issues with ERROR severity
        warnings: Validation issues with WARNING severity
    """
    original_size: int
    processed_size: int
    compression_ratio: float
    line_count: int
    rule_count: int
    declaration_count: int
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)


@dataclass
class CssResult:
    success: bool
    output: str = ""
    stats: Optional[CssStats] = None
    rules: List[Rule] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "CssResult":
        return cls(success=False, error=message)


@dataclass
class DiffResult:
    """
    Result of diff_compute()

    records is empty and stats is None in JSON mode, where json_changes
    holds the structural differences instead.
    """
    success: bool
    output: str = ""
    stats: Optional[DiffStats] = None
    records: List[LineRecord] = field(default_factory=list)
    json_changes: List[JsonChange] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "DiffResult":
        return cls(success=False, error=message)

"""
Diff pipeline data models
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChangeType(Enum):
    ADDED = "added"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class LineRecord:
    """
    One line of the aligned diff

    content is always the original (un-normalized) line text, taken from the
    left-hand input for UNCHANGED records. new_content holds the right-hand
    text of an UNCHANGED record, which differs from content only when
    whitespace or case is ignored. Line numbers are 1-based; old_line_number
    is None for ADDED records and new_line_number is None for REMOVED records.
    """
    type: ChangeType
    content: str
    old_line_number: Optional[int] = None
    new_line_number: Optional[int] = None
    new_content: Optional[str] = None

    @property
    def new_text(self) -> str:
        """Right-hand text of an UNCHANGED or ADDED record"""
        return self.content if self.new_content is None else self.new_content


@dataclass(frozen=True)
class DiffStats:
    """
    Summary counts for a line diff

    lines_modified is approximated as min(lines_added, lines_deleted).
    """
    lines_added: int
    lines_deleted: int
    lines_modified: int
    lines_unchanged: int
    total_lines: int
    similarity: int


class JsonChangeKind(Enum):
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"
    TYPE_CHANGED = "type-changed"
    LENGTH_CHANGED = "length-changed"


@dataclass(frozen=True)
class JsonChange:
    """
    A structural difference between two JSON documents

    Attributes:
        path: Dotted/indexed location (e.g., "user.tags[2]"), "" for the root
        kind: What changed
        old: Old value (type name for TYPE_CHANGED, length for LENGTH_CHANGED)
        new: New value (same conventions as old)
    """
    path: str
    kind: JsonChangeKind
    old: Any = None
    new: Any = None


class DiffConfig(BaseModel):
    """
    Options for the diff checker
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    diff_type: Literal["unified", "split", "inline"] = "unified"
    ignore_whitespace: bool = False
    ignore_case: bool = False
    show_line_numbers: bool = True
    context_lines: int = Field(default=3, ge=0)
    compare_mode: Literal["text", "json"] = "text"
    show_stats: bool = True

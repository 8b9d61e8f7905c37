"""
LCS-based line diff

Aligns two lists of lines with a longest-common-subsequence backbone and
classifies every line as added, removed or unchanged.

Steps:
1. Normalize each line for comparison (optional whitespace collapsing and
   case folding). Normalized text is used only for equality; records always
   carry the original line text.
2. Compute the LCS of the normalized lines with the classic O(n*m) dynamic
   programming table, then backtrack to recover the matched values.
3. Walk old lines, new lines and the LCS with three cursors. A line pair
   matching the LCS head is unchanged; otherwise a removal is emitted while
   the old line differs from the head, then additions. Removals therefore
   come before additions inside each changed hunk.

Time and space are O(n*m) in the number of lines.

Example:
    >>> records = changes_build(["a", "b", "c"], ["a", "x", "c"], DiffConfig())
    >>> [(r.type.value, r.content) for r in records]
    [('unchanged', 'a'), ('removed', 'b'), ('added', 'x'), ('unchanged', 'c')]
"""

import re
from typing import List, Sequence

from ..config import appsettings
from ..models.diff import ChangeType, DiffConfig, LineRecord
from .log import LOG, WARN

_LINE_BREAK = re.compile(r"\r?\n")
_WHITESPACE_RUN = re.compile(r"\s+")


def lines_split(text: str) -> List[str]:
    """
    Split text into lines on LF or CRLF

    An empty string yields a single empty line, like str.split().
    """
    return _LINE_BREAK.split(text)


def line_normalize(line: str, config: DiffConfig) -> str:
    """Comparison key for a line under the configured normalization"""
    if config.ignore_whitespace:
        line = _WHITESPACE_RUN.sub(" ", line).strip()
    if config.ignore_case:
        line = line.lower()
    return line


def lcs_compute(a: Sequence[str], b: Sequence[str]) -> List[str]:
    """
    Longest common subsequence of two sequences of strings

    Backtracking moves up when dp[i-1][j] > dp[i][j-1] and left otherwise,
    which fixes which of several equally long subsequences is returned.

    Args:
        a: First sequence
        b: Second sequence

    Returns:
        Matched values in order
    """
    m = len(a)
    n = len(b)

    if m * n > appsettings.diff_warn_cells:
        WARN(f"Diff table has {m * n} cells ({m} x {n} lines); this may be slow")

    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row = dp[i]
        previous = dp[i - 1]
        a_item = a[i - 1]
        for j in range(1, n + 1):
            if a_item == b[j - 1]:
                row[j] = previous[j - 1] + 1
            else:
                row[j] = max(previous[j], row[j - 1])

    lcs: List[str] = []
    i, j = m, n
    while i > 0 and j > 0:
        if a[i - 1] == b[j - 1]:
            lcs.append(a[i - 1])
            i -= 1
            j -= 1
        elif dp[i - 1][j] > dp[i][j - 1]:
            i -= 1
        else:
            j -= 1

    lcs.reverse()
    LOG(f"LCS length {len(lcs)} for {m} x {n} lines", level=3)
    return lcs


def changes_build(old_lines: Sequence[str], new_lines: Sequence[str], config: DiffConfig) -> List[LineRecord]:
    """
    Classify every line of both inputs

    Args:
        old_lines: Left-hand lines
        new_lines: Right-hand lines
        config: Normalization options (ignore_whitespace, ignore_case)

    Returns:
        Records in output order. Filtering to UNCHANGED and REMOVED
        reconstructs old_lines; UNCHANGED and ADDED reconstructs new_lines.
    """
    processed_old = [line_normalize(line, config) for line in old_lines]
    processed_new = [line_normalize(line, config) for line in new_lines]
    lcs = lcs_compute(processed_old, processed_new)

    records: List[LineRecord] = []
    old_index = 0
    new_index = 0
    lcs_index = 0

    while old_index < len(old_lines) or new_index < len(new_lines):
        head = lcs[lcs_index] if lcs_index < len(lcs) else None

        if (
            head is not None
            and old_index < len(old_lines)
            and new_index < len(new_lines)
            and processed_old[old_index] == head
            and processed_new[new_index] == head
        ):
            records.append(LineRecord(
                type=ChangeType.UNCHANGED,
                content=old_lines[old_index],
                old_line_number=old_index + 1,
                new_line_number=new_index + 1,
                new_content=new_lines[new_index],
            ))
            old_index += 1
            new_index += 1
            lcs_index += 1
        elif old_index < len(old_lines) and (head is None or processed_old[old_index] != head):
            records.append(LineRecord(
                type=ChangeType.REMOVED,
                content=old_lines[old_index],
                old_line_number=old_index + 1,
            ))
            old_index += 1
        else:
            records.append(LineRecord(
                type=ChangeType.ADDED,
                content=new_lines[new_index],
                new_line_number=new_index + 1,
            ))
            new_index += 1

    return records


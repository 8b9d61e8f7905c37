"""
Text renderers and statistics for line diffs

Renders the LineRecord sequence produced by changes_build() in one of three
formats and summarizes it.

Formats:
    unified  changed lines with up to context_lines of unchanged context on
             each side; every omitted unchanged run becomes a "..." line
    split    fenced ```diff block with OLD | NEW line-number columns
    inline   every record in order with an optional old line-number column

Every format prefixes lines with "+ " (added), "- " (removed) or "  "
(unchanged).
"""

from typing import Callable, Dict, List

from ..models.diff import ChangeType, DiffConfig, DiffStats, LineRecord

PREFIXES = {
    ChangeType.ADDED: "+ ",
    ChangeType.REMOVED: "- ",
    ChangeType.UNCHANGED: "  ",
}

HEADER_RULE = "=" * 50
STATS_RULE = "=" * 20
SPLIT_RULE = "-" * 40
GAP_MARKER = "..."


def lineNumber_format(number) -> str:
    return str(number if number is not None else "").rjust(4)


def unified_render(records: List[LineRecord], config: DiffConfig) -> str:
    """
    Render hunks of changes with surrounding context

    Args:
        records: Output of changes_build()
        config: Uses context_lines

    Returns:
        Newline-terminated lines; empty when nothing changed

    Example (context_lines=1):
        records for a,b,c,d,e -> a,b,X,d,e render as

            ...
              b
            - c
            + X
              d
            ...
    """
    context = config.context_lines
    changed = [index for index, record in enumerate(records) if record.type is not ChangeType.UNCHANGED]
    if not changed:
        return ""

    visible = set()
    for index in changed:
        visible.update(range(max(0, index - context), min(len(records), index + context + 1)))

    lines: List[str] = []
    previous = -1
    for index, record in enumerate(records):
        if index not in visible:
            continue
        if index > previous + 1:
            lines.append(GAP_MARKER)
        lines.append(PREFIXES[record.type] + record.content)
        previous = index

    if previous < len(records) - 1:
        lines.append(GAP_MARKER)

    return "".join(line + "\n" for line in lines)


def split_render(records: List[LineRecord], config: DiffConfig) -> str:
    """Render every record in a fenced block with OLD | NEW columns"""
    output = "```diff\n"
    output += "OLD (Left) | NEW (Right)\n"
    output += SPLIT_RULE + "\n"

    for record in records:
        prefix = ""
        if config.show_line_numbers:
            prefix = (
                f"{lineNumber_format(record.old_line_number)} | "
                f"{lineNumber_format(record.new_line_number)} | "
            )
        output += f"{prefix}{PREFIXES[record.type]}{record.content}\n"

    output += "```"
    return output


def inline_render(records: List[LineRecord], config: DiffConfig) -> str:
    """Render every record in order with an optional old line number column"""
    output = ""
    for record in records:
        prefix = ""
        if config.show_line_numbers:
            prefix = f"{lineNumber_format(record.old_line_number)}: "
        output += f"{prefix}{PREFIXES[record.type]}{record.content}\n"
    return output


RENDERERS: Dict[str, Callable[[List[LineRecord], DiffConfig], str]] = {
    "unified": unified_render,
    "split": split_render,
    "inline": inline_render,
}


def similarity_compute(unchanged: int, total: int) -> int:
    """
    Percentage of unchanged records, rounded half up

    100 is reserved for diffs where every record is unchanged, so a nearly
    identical pair of long inputs reports 99.
    """
    if total == 0:
        return 100
    similarity = (unchanged * 200 + total) // (2 * total)
    if similarity == 100 and unchanged < total:
        return 99
    return similarity


def stats_compute(records: List[LineRecord]) -> DiffStats:
    """
    Count records by type

    Example:
        [Unchanged a, Removed b, Added x, Unchanged c]
        -> DiffStats(lines_added=1, lines_deleted=1, lines_modified=1,
                     lines_unchanged=2, total_lines=4, similarity=50)
    """
    added = sum(1 for record in records if record.type is ChangeType.ADDED)
    deleted = sum(1 for record in records if record.type is ChangeType.REMOVED)
    unchanged = sum(1 for record in records if record.type is ChangeType.UNCHANGED)

    return DiffStats(
        lines_added=added,
        lines_deleted=deleted,
        lines_modified=min(added, deleted),
        lines_unchanged=unchanged,
        total_lines=len(records),
        similarity=similarity_compute(unchanged, len(records)),
    )


def report_build(records: List[LineRecord], stats: DiffStats, config: DiffConfig) -> str:
    """
    Assemble the full text report: header, rendered diff, optional statistics
    """
    output = f"Diff Comparison ({config.diff_type})\n{HEADER_RULE}\n"
    output += RENDERERS[config.diff_type](records, config)

    if config.show_stats:
        output += f"\n\nStatistics:\n{STATS_RULE}\n"
        output += f"Lines Added: {stats.lines_added}\n"
        output += f"Lines Deleted: {stats.lines_deleted}\n"
        output += f"Lines Modified: {stats.lines_modified}\n"
        output += f"Lines Unchanged: {stats.lines_unchanged}\n"
        output += f"Similarity: {stats.similarity}%\n"

    return output

"""
Structural comparison of JSON documents

Bypasses the line diff: both inputs are parsed and walked in parallel,
objects by key and arrays by index, reporting one JsonChange per difference.
Keys are matched by identity, so there is no alignment ambiguity.
"""

import json
from typing import Any, List, Tuple

from ..models.diff import JsonChange, JsonChangeKind


def json_typeName(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def structure_compare(old: Any, new: Any, path: str, changes: List[JsonChange]) -> None:
    """
    Recursively append the differences between old and new to changes

    Args:
        old: Decoded left-hand value
        new: Decoded right-hand value
        path: Location of the values ("" for the document root)
        changes: Accumulator
    """
    old_type = json_typeName(old)
    new_type = json_typeName(new)

    if old_type != new_type:
        changes.append(JsonChange(path, JsonChangeKind.TYPE_CHANGED, old_type, new_type))
        return

    if old_type == "array":
        if len(old) != len(new):
            changes.append(JsonChange(path, JsonChangeKind.LENGTH_CHANGED, len(old), len(new)))
        for index in range(max(len(old), len(new))):
            item_path = f"{path}[{index}]"
            if index >= len(old):
                changes.append(JsonChange(item_path, JsonChangeKind.ADDED, new=new[index]))
            elif index >= len(new):
                changes.append(JsonChange(item_path, JsonChangeKind.REMOVED, old=old[index]))
            else:
                structure_compare(old[index], new[index], item_path, changes)
        return

    if old_type == "object":
        keys = list(old) + [key for key in new if key not in old]
        for key in keys:
            key_path = f"{path}.{key}" if path else key
            if key not in old:
                changes.append(JsonChange(key_path, JsonChangeKind.ADDED, new=new[key]))
            elif key not in new:
                changes.append(JsonChange(key_path, JsonChangeKind.REMOVED, old=old[key]))
            else:
                structure_compare(old[key], new[key], key_path, changes)
        return

    if old != new:
        changes.append(JsonChange(path, JsonChangeKind.CHANGED, old, new))


def change_describe(change: JsonChange) -> str:
    """One report line for a change, e.g. 'user.age: Changed from 30 to 31'"""
    path = change.path or "(root)"
    if change.kind is JsonChangeKind.ADDED:
        return f"{path}: Added"
    if change.kind is JsonChangeKind.REMOVED:
        return f"{path}: Removed"
    if change.kind is JsonChangeKind.TYPE_CHANGED:
        return f"{path}: Type changed from {change.old} to {change.new}"
    if change.kind is JsonChangeKind.LENGTH_CHANGED:
        return f"{path}: Array length changed from {change.old} to {change.new}"
    old = json.dumps(change.old, ensure_ascii=False)
    new = json.dumps(change.new, ensure_ascii=False)
    return f"{path}: Changed from {old} to {new}"


def json_compare(old_text: str, new_text: str) -> Tuple[str, List[JsonChange]]:
    """
    Compare two JSON documents

    Args:
        old_text: Left-hand JSON text
        new_text: Right-hand JSON text

    Returns:
        (report text, structural changes)

    Raises:
        json.JSONDecodeError: If either input is not valid JSON
    """
    old = json.loads(old_text)
    new = json.loads(new_text)

    changes: List[JsonChange] = []
    structure_compare(old, new, "", changes)

    differences = "".join(change_describe(change) + "\n" for change in changes)
    if not differences:
        differences = "No structural differences\n"

    output = (
        "JSON Comparison:\n"
        "OLD JSON:\n"
        f"{json.dumps(old, indent=2, ensure_ascii=False)}\n"
        "\n"
        "NEW JSON:\n"
        f"{json.dumps(new, indent=2, ensure_ascii=False)}\n"
        "\n"
        "Structural Differences:\n"
        f"{differences}"
    )
    return output, changes

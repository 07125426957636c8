"""Helpers for Ansible group names."""

from __future__ import annotations

import re

UNGROUPED = "ungrouped"

VALID_GROUP_NAME = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_-]*$")


def normalize_group_name(name: str) -> str:
    """Spaces become underscores, lowercase; blank names map to 'ungrouped'."""
    if not name or not name.strip():
        return UNGROUPED
    return re.sub(r"\s+", "_", name).lower()


def display_group_name(name: str) -> str:
    if name == UNGROUPED:
        return "Ungrouped"
    return name.replace("_", " ")


def is_valid_group_name(name: str) -> bool:
    if not name or not name.strip():
        return False
    return VALID_GROUP_NAME.match(name) is not None


def sanitize_group_name(name: str) -> str:
    """Turn an arbitrary label into a usable group name."""
    if not name or not name.strip():
        return UNGROUPED

    sanitized = re.sub(r"[^a-zA-Z0-9_-]", "_", name)
    sanitized = re.sub(r"_+", "_", sanitized).strip("_")

    if re.match(r"^[0-9-]", sanitized):
        sanitized = "_" + sanitized

    if not sanitized:
        return UNGROUPED
    return sanitized.lower()


def group_names_equal(a: str, b: str) -> bool:
    return normalize_group_name(a) == normalize_group_name(b)


def sort_group_names(names: list[str]) -> list[str]:
    """Alphabetical, with 'ungrouped' last."""
    return sorted(names, key=lambda name: (name == UNGROUPED, name.lower(), name))

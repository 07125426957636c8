"""Render an Inventory back into INI inventory text."""

from __future__ import annotations

from typing import List

from .hostvars import host_variables
from .models import Inventory, InventoryGroup, InventoryHost


def serialize_host(host: InventoryHost) -> str:
    """Render one host line: name, typed fields, raw variables, inline comment."""
    parts = [host.name]
    parts.extend(f"{key}={value}" for key, value in host_variables(host))

    line = " ".join(parts)
    if host.inline_comment:
        line += f" {host.inline_comment}"
    return line


def _group_lines(group: InventoryGroup) -> List[str]:
    lines = list(group.comments)

    if group.hosts:
        lines.append(f"[{group.name}]")
        lines.extend(serialize_host(host) for host in group.hosts)
        lines.append("")

    if group.children:
        lines.append(f"[{group.name}:children]")
        lines.extend(group.children)
        lines.append("")

    if group.vars:
        lines.append(f"[{group.name}:vars]")
        lines.extend(f"{key}={value}" for key, value in group.vars.items())
        lines.append("")

    if not (group.hosts or group.children or group.vars):
        # keep empty groups so they survive a reload
        lines.append(f"[{group.name}]")
        lines.append("")

    return lines


def serialize(inventory: Inventory) -> str:
    """
    Render ``inventory`` as text with ``\\n`` line endings.

    Order: header comments, ungrouped comments and hosts, then every group in
    stored order with its comments and its hosts, children and vars sections.
    """
    lines: List[str] = list(inventory.header_comments)
    if inventory.header_comments:
        lines.append("")

    if inventory.ungrouped_comments or inventory.ungrouped_hosts:
        lines.extend(inventory.ungrouped_comments)
        lines.extend(serialize_host(host) for host in inventory.ungrouped_hosts)
        lines.append("")

    for group in inventory.groups:
        lines.extend(_group_lines(group))

    return "\n".join(lines)

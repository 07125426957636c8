"""INI inventory parser.

A single forward pass over the file: every line is classified on its own
(see :mod:`.lines`), then a small state machine routes it into the model.

State is the index of the open group, the kind of the open section and
whether the leading comment block is still being collected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from .hostvars import map_host
from .lines import LineKind, ParsedLine, SectionKind, classify_line, split_lines, tokenize
from .models import Inventory, InventoryGroup, InventoryHost


@dataclass
class _ParseState:
    inventory: Inventory
    current: Optional[int] = None
    section: SectionKind = SectionKind.HOSTS
    in_header: bool = True

    @property
    def group(self) -> Optional[InventoryGroup]:
        if self.current is None:
            return None
        return self.inventory.groups[self.current]


class InventoryParser:
    """
    Parse INI inventory text into an :class:`Inventory`.

    Supports:
    - Ungrouped hosts and [group] sections
    - Group children via [group:children]
    - Group variables via [group:vars]
    - Quoted values, kept verbatim for variables the model does not map
    - Header, section and inline comments

    Never raises for malformed input; unknown shapes degrade to host lines.
    """

    def parse(self, content: str) -> Inventory:
        state = _ParseState(inventory=Inventory())

        handlers = {
            LineKind.EMPTY: self._on_empty,
            LineKind.COMMENT: self._on_comment,
            LineKind.GROUP: self._on_group,
            LineKind.VARIABLE: self._on_variable,
            LineKind.CHILD: self._on_child,
            LineKind.HOST: self._on_host,
        }

        for line_number, line in enumerate(split_lines(content), 1):
            parsed = classify_line(line, line_number)
            handlers[parsed.kind](state, parsed)

        return state.inventory

    # --------------------------------------------------------------- handlers
    def _on_empty(self, state: _ParseState, parsed: ParsedLine) -> None:
        if state.in_header and state.inventory.header_comments:
            state.in_header = False

    def _on_comment(self, state: _ParseState, parsed: ParsedLine) -> None:
        group = state.group
        if group is not None:
            group.comments.append(parsed.content)
        elif state.in_header:
            state.inventory.header_comments.append(parsed.content)
        else:
            state.inventory.ungrouped_comments.append(parsed.content)

    def _on_group(self, state: _ParseState, parsed: ParsedLine) -> None:
        state.in_header = False
        state.current = self._find_or_create_group(state.inventory, parsed.group_name or "")
        state.section = parsed.section or SectionKind.HOSTS

    def _on_variable(self, state: _ParseState, parsed: ParsedLine) -> None:
        state.in_header = False
        group = state.group
        if group is None or state.section is not SectionKind.VARS:
            logger.debug("Line {}: ignoring variable outside a :vars section", parsed.line_number)
            return

        key, _, value = parsed.content.partition("=")
        group.vars[key] = value

    def _on_child(self, state: _ParseState, parsed: ParsedLine) -> None:
        state.in_header = False
        group = state.group
        if group is not None and state.section is SectionKind.CHILDREN:
            child_name = parsed.content.strip()
            if child_name and child_name not in group.children:
                group.children.append(child_name)
            return

        if group is not None and state.section is SectionKind.VARS:
            logger.debug("Line {}: ignoring bare token in [{}:vars]", parsed.line_number, group.name)
            return

        # A bare hostname without variables
        self._add_host(state, self._map_host(parsed))

    def _on_host(self, state: _ParseState, parsed: ParsedLine) -> None:
        state.in_header = False
        self._add_host(state, self._map_host(parsed))

    # ------------------------------------------------------------------ utils
    @staticmethod
    def _find_or_create_group(inventory: Inventory, name: str) -> int:
        for index, group in enumerate(inventory.groups):
            if group.name == name:
                return index
        inventory.groups.append(InventoryGroup(name=name))
        return len(inventory.groups) - 1

    @staticmethod
    def _map_host(parsed: ParsedLine) -> InventoryHost:
        return map_host(tokenize(parsed.content), parsed.line_number, parsed.inline_comment)

    @staticmethod
    def _add_host(state: _ParseState, host: InventoryHost) -> None:
        group = state.group
        if group is not None and state.section is SectionKind.HOSTS:
            group.hosts.append(host)
        else:
            state.inventory.ungrouped_hosts.append(host)


def parse(content: str) -> Inventory:
    """Parse inventory text into an :class:`Inventory`."""
    return InventoryParser().parse(content)

"""Line classification and quote-aware tokenizing for INI inventories."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

# [name], [name:children], [name:vars]; unknown modifiers fall back to hosts
GROUP_HEADER_PATTERN = re.compile(r"^\[([^\]:]+)(?::(\w+))?\]$")
# key=value line inside a [group:vars] section
VARIABLE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*=")
WHITESPACE_PATTERN = re.compile(r"\s")


class LineKind(str, enum.Enum):
    EMPTY = "empty"
    COMMENT = "comment"
    GROUP = "group"
    VARIABLE = "variable"
    CHILD = "child"
    HOST = "host"


class SectionKind(str, enum.Enum):
    HOSTS = "hosts"
    CHILDREN = "children"
    VARS = "vars"


@dataclass(frozen=True)
class ParsedLine:
    """One physical line with its syntactic role."""

    kind: LineKind
    content: str
    line_number: int
    raw: str
    inline_comment: Optional[str] = None
    group_name: Optional[str] = None
    section: Optional[SectionKind] = None


def parse_group_header(text: str) -> Optional[Tuple[str, SectionKind]]:
    """Return ``(name, section)`` for a group header, or None."""
    match = GROUP_HEADER_PATTERN.match(text)
    if not match:
        return None

    modifier = match.group(2)
    if modifier == "children":
        section = SectionKind.CHILDREN
    elif modifier == "vars":
        section = SectionKind.VARS
    else:
        section = SectionKind.HOSTS
    return match.group(1), section


def _toggles_quote(line: str, index: int) -> bool:
    return index == 0 or line[index - 1] != "\\"


def find_inline_comment(line: str) -> int:
    """
    Find where an inline comment starts, or -1.

    A ``#`` opens a comment only outside quotes and right after whitespace,
    so ``comment="Test #1"`` and ``key=a#b`` are left alone.
    """
    in_single = False
    in_double = False

    for index, char in enumerate(line):
        if char == "'" and not in_double and _toggles_quote(line, index):
            in_single = not in_single
        elif char == '"' and not in_single and _toggles_quote(line, index):
            in_double = not in_double
        elif char == "#" and not in_single and not in_double:
            if index > 0 and line[index - 1] in " \t":
                return index

    return -1


def tokenize(line: str) -> List[str]:
    """Split on unquoted whitespace, keeping quote characters in the tokens."""
    tokens: List[str] = []
    current: List[str] = []
    in_single = False
    in_double = False

    for index, char in enumerate(line):
        if char == "'" and not in_double and _toggles_quote(line, index):
            in_single = not in_single
            current.append(char)
        elif char == '"' and not in_single and _toggles_quote(line, index):
            in_double = not in_double
            current.append(char)
        elif char in " \t" and not in_single and not in_double:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        tokens.append("".join(current))

    return tokens


def classify_line(line: str, line_number: int) -> ParsedLine:
    """Classify a single line without looking at any other line."""
    trimmed = line.strip()

    if not trimmed:
        return ParsedLine(LineKind.EMPTY, "", line_number, line)

    if trimmed.startswith("#"):
        return ParsedLine(LineKind.COMMENT, trimmed, line_number, line)

    if trimmed.startswith("[") and trimmed.endswith("]"):
        header = parse_group_header(trimmed)
        if header is not None:
            name, section = header
            return ParsedLine(
                LineKind.GROUP,
                trimmed,
                line_number,
                line,
                group_name=name,
                section=section,
            )

    content = trimmed
    inline_comment = None
    comment_index = find_inline_comment(trimmed)
    if comment_index != -1:
        content = trimmed[:comment_index].strip()
        inline_comment = trimmed[comment_index:]

    # "var=value" rather than "hostname var=value"; the name part has no spaces
    if VARIABLE_PATTERN.match(content):
        return ParsedLine(LineKind.VARIABLE, content, line_number, line, inline_comment)

    if "=" not in content and not WHITESPACE_PATTERN.search(content):
        return ParsedLine(LineKind.CHILD, content, line_number, line, inline_comment)

    return ParsedLine(LineKind.HOST, content, line_number, line, inline_comment)


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` or ``\\r\\n`` only."""
    return re.split(r"\r?\n", text)

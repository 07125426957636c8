"""Mapping between host line variables and InventoryHost fields."""

from __future__ import annotations

import enum
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from loguru import logger

from .models import InventoryHost

EXT_PREFIX = "remote_mgr_"


class ValueKind(str, enum.Enum):
    TEXT = "text"
    NUMBER = "number"
    LABEL = "label"
    TAGS = "tags"


class HostVariable(NamedTuple):
    key: str
    field: str
    kind: ValueKind = ValueKind.TEXT


# Order here is also the order fields are written back out.
HOST_VARIABLES: tuple[HostVariable, ...] = (
    HostVariable("ansible_host", "ansible_host"),
    HostVariable("ansible_connection", "ansible_connection"),
    HostVariable("ansible_port", "ansible_port", ValueKind.NUMBER),
    HostVariable("ansible_user", "ansible_user"),
    HostVariable("ansible_winrm_transport", "ansible_winrm_transport"),
    HostVariable("ansible_winrm_server_cert_validation", "ansible_winrm_cert_validation"),
    HostVariable(f"{EXT_PREFIX}connection_type", "ext_connection_type"),
    HostVariable(f"{EXT_PREFIX}credential_id", "ext_credential_id"),
    HostVariable(f"{EXT_PREFIX}credential_strategy", "ext_credential_strategy"),
    HostVariable(f"{EXT_PREFIX}domain", "ext_domain"),
    HostVariable(f"{EXT_PREFIX}port", "ext_port", ValueKind.NUMBER),
    HostVariable(f"{EXT_PREFIX}display_name", "ext_display_name", ValueKind.LABEL),
    HostVariable(f"{EXT_PREFIX}identity_file", "ext_identity_file"),
    HostVariable(f"{EXT_PREFIX}proxy_jump", "ext_proxy_jump"),
    HostVariable(f"{EXT_PREFIX}tags", "ext_tags", ValueKind.TAGS),
    HostVariable("comment", "comment", ValueKind.LABEL),
)

HOST_VARIABLES_BY_KEY: Dict[str, HostVariable] = {var.key: var for var in HOST_VARIABLES}


def unquote(value: str) -> str:
    """Strip one matching pair of surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_number(value: str) -> Optional[int]:
    """Plain ASCII decimal with an optional leading minus, else None."""
    if not (value.isascii() and value.removeprefix("-").isdigit()):
        return None
    return int(value)


def parse_tags(value: str) -> List[str]:
    return [tag.strip() for tag in unquote(value).split(",") if tag.strip()]


def split_variable(token: str) -> tuple[str, str] | None:
    """Split ``key=value`` on the first ``=``; None when there is no key."""
    key, sep, value = token.partition("=")
    if not sep or not key:
        return None
    return key, value


def coerce_value(variable: HostVariable, value: str) -> Any:
    if variable.kind is ValueKind.NUMBER:
        return parse_number(value)
    if variable.kind is ValueKind.LABEL:
        return unquote(value)
    if variable.kind is ValueKind.TAGS:
        return parse_tags(value)
    return value


def map_host(
    tokens: Sequence[str],
    line_number: Optional[int] = None,
    inline_comment: Optional[str] = None,
) -> InventoryHost:
    """Build a host from a tokenized host line (identity first, then key=value)."""
    fields: Dict[str, Any] = {}
    raw_variables: Dict[str, str] = {}

    for token in tokens[1:]:
        pair = split_variable(token)
        if pair is None:
            logger.debug("Line {}: dropping token without key=value form: {!r}", line_number, token)
            continue

        key, value = pair
        variable = HOST_VARIABLES_BY_KEY.get(key)
        if variable is None:
            raw_variables[key] = value
            continue

        coerced = coerce_value(variable, value)
        if coerced is None:
            logger.debug("Line {}: ignoring non-numeric {}={!r}", line_number, key, value)
            fields.pop(variable.field, None)
            continue
        fields[variable.field] = coerced

    return InventoryHost(
        name=tokens[0] if tokens else "",
        raw_variables=raw_variables,
        line_number=line_number,
        inline_comment=inline_comment,
        **fields,
    )


def quote(value: str) -> str:
    """Wrap in double quotes, or single quotes when only those keep the value intact."""
    if '"' in value and "'" not in value:
        return f"'{value}'"
    return f'"{value}"'


def render_value(variable: HostVariable, value: Any) -> Optional[str]:
    """Text for a typed field, or None when the field is unset."""
    if variable.kind is ValueKind.NUMBER:
        return None if value is None else str(value)
    if variable.kind is ValueKind.TAGS:
        if not value:
            return None
        joined = ",".join(value)
        if any(char.isspace() or char in "\"'" for char in joined):
            return quote(joined)
        return joined
    if not value:
        return None
    if variable.kind is ValueKind.LABEL:
        return quote(value)
    return value


def host_variables(host: InventoryHost) -> List[tuple[str, str]]:
    """All ``(key, value)`` pairs of a host in write order."""
    pairs = []
    for variable in HOST_VARIABLES:
        rendered = render_value(variable, getattr(host, variable.field))
        if rendered is not None:
            pairs.append((variable.key, rendered))
    pairs.extend(host.raw_variables.items())
    return pairs

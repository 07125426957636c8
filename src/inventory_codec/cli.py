"""
Command line entrypoint for inventory-codec.

Usage:
    inventory-codec -i hosts --list [--yaml]
    inventory-codec -i hosts --host web1
    inventory-codec -i hosts --graph
    inventory-codec -i hosts --format [--write]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from .config import get_settings
from .errors import InventoryError
from .inventory.groups import UNGROUPED, sort_group_names
from .inventory.models import (
    Inventory,
    InventoryHost,
    connection_host,
    connection_port,
    detect_connection_type,
    display_label,
)
from .inventory.serializer import serialize, serialize_host
from .inventory.service import InventoryService
from .logger import logger, setup_logger

EXIT_OK = 0
EXIT_INVENTORY_ERROR = 1
EXIT_UNKNOWN_HOST = 2


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inventory-codec",
        description="Read, inspect and rewrite Ansible INI inventory files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  inventory-codec -i inventory.ini --list
  inventory-codec -i hosts --host webserver1
  inventory-codec -i hosts --format --write
        """,
    )

    parser.add_argument(
        "-i", "--inventory",
        dest="inventory",
        required=True,
        help="Inventory file",
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Never write to the inventory file",
    )

    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument(
        "--list",
        action="store_true",
        dest="list_hosts",
        help="Output the parsed inventory (JSON)",
    )
    action.add_argument(
        "--host",
        dest="host",
        default=None,
        help="Output a single host (JSON)",
    )
    action.add_argument(
        "--graph",
        action="store_true",
        help="Output the group tree",
    )
    action.add_argument(
        "--format",
        action="store_true",
        help="Print the inventory as this tool would write it",
    )

    parser.add_argument(
        "--write",
        action="store_true",
        help="With --format, write the result back to the file",
    )
    parser.add_argument(
        "-y", "--yaml",
        action="store_true",
        help="Output in YAML format",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log to stderr at debug level",
    )

    return parser


def _dump(data: Any, as_yaml: bool) -> str:
    if as_yaml:
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    return json.dumps(data, indent=2)


def host_summary(host: InventoryHost) -> dict[str, Any]:
    settings = get_settings()
    summary = host.model_dump(exclude_none=True)
    connection_type = detect_connection_type(host)
    summary["_connection"] = {
        "label": display_label(host),
        "host": connection_host(host, settings.connection_host_preference),
        "type": connection_type,
        "port": connection_port(host, connection_type),
    }
    return summary


def render_graph(inventory: Inventory) -> str:
    """Render groups and hosts as a tree, children nested under parents."""
    lines = ["@all:"]
    child_names = {name for group in inventory.groups for name in group.children}
    reached: set[str] = set()

    def walk(name: str, depth: int, seen: frozenset[str]) -> None:
        indent = "  " * depth
        lines.append(f"{indent}|--@{name}:")
        group = inventory.find_group(name)
        if group is None or name in seen:
            return
        reached.add(name)
        for child in inventory.resolve_children(group):
            walk(child.name, depth + 1, seen | {name})
        for host in group.hosts:
            lines.append(f"{indent}  |--{host.name}")

    roots = [group.name for group in inventory.groups if group.name not in child_names]
    for name in sort_group_names(roots):
        walk(name, 1, frozenset())
    # groups only reachable through a cycle have no root above them
    for name in sort_group_names([group.name for group in inventory.groups]):
        if name not in reached:
            walk(name, 1, frozenset())

    if inventory.ungrouped_hosts:
        lines.append(f"  |--@{UNGROUPED}:")
        for host in inventory.ungrouped_hosts:
            lines.append(f"  |  |--{host.name}")

    return "\n".join(lines)


def main(args: list[str] | None = None) -> int:
    """Main entrypoint for the inventory-codec CLI."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    settings = get_settings()
    setup_logger(verbose=parsed.verbose, log_file=settings.log_file, level=settings.log_level)

    service = InventoryService(settings)
    try:
        source = service.add_source(Path(parsed.inventory).resolve(), read_only=parsed.read_only)
        if source.inventory is None:
            service.load_source(source, strict=True)
    except InventoryError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_INVENTORY_ERROR

    inventory = source.inventory or Inventory()

    if parsed.list_hosts:
        print(_dump(inventory.model_dump(exclude_none=True), parsed.yaml))
        return EXIT_OK

    if parsed.host:
        host = inventory.find_host(parsed.host)
        if host is None:
            print(f"ERROR: host not found: {parsed.host}", file=sys.stderr)
            return EXIT_UNKNOWN_HOST
        logger.debug("Host line: {}", serialize_host(host))
        print(_dump(host_summary(host), parsed.yaml))
        return EXIT_OK

    if parsed.graph:
        print(render_graph(inventory))
        return EXIT_OK

    if parsed.write:
        try:
            service.save_source(source)
        except InventoryError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return EXIT_INVENTORY_ERROR
        logger.info("Rewrote {}", source.path)
    else:
        sys.stdout.write(serialize(inventory))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

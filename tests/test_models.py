from __future__ import annotations

from inventory_codec.inventory.models import (
    Inventory,
    InventoryGroup,
    InventoryHost,
    connection_host,
    connection_port,
    detect_connection_type,
    display_label,
)


def test_display_label_priority() -> None:
    assert display_label(InventoryHost(name="h", ext_display_name="Nice", comment="c")) == "Nice"
    assert display_label(InventoryHost(name="h", comment="c")) == "c"
    assert display_label(InventoryHost(name="h")) == "h"


def test_connection_host_preference() -> None:
    host = InventoryHost(name="web1", ansible_host="10.0.0.1")
    assert connection_host(host, "name") == "web1"
    assert connection_host(host, "ansible_host") == "10.0.0.1"
    assert connection_host(InventoryHost(name="web2"), "ansible_host") == "web2"


def test_detect_connection_type() -> None:
    assert detect_connection_type(InventoryHost(name="h", ext_connection_type="sftp")) == "sftp"
    assert detect_connection_type(InventoryHost(name="h", ansible_connection="winrm")) == "rdp"
    assert detect_connection_type(InventoryHost(name="h", ansible_connection="ssh")) == "ssh"
    assert detect_connection_type(InventoryHost(name="h")) == "ssh"


def test_connection_port() -> None:
    winrm = InventoryHost(name="w", ansible_connection="winrm", ansible_port=5985)
    assert connection_port(winrm) == 3389
    assert connection_port(InventoryHost(name="s", ansible_port=2222)) == 2222
    assert connection_port(InventoryHost(name="s", ext_port=2200, ansible_port=2222)) == 2200
    assert connection_port(InventoryHost(name="f"), "ftp") == 21
    assert connection_port(InventoryHost(name="r", ext_connection_type="rdp", ansible_port=22)) == 3389


def test_inventory_lookups() -> None:
    inventory = Inventory(
        ungrouped_hosts=[InventoryHost(name="a")],
        groups=[
            InventoryGroup(name="parent", children=["child", "missing"]),
            InventoryGroup(name="child", hosts=[InventoryHost(name="b"), InventoryHost(name="a")]),
        ],
    )
    assert inventory.host_count() == 3
    assert [h.name for h in inventory.all_hosts()] == ["a", "b", "a"]
    assert inventory.find_host("b") is inventory.groups[1].hosts[0]
    assert inventory.find_host("nope") is None
    assert inventory.find_group("missing") is None
    parent = inventory.find_group("parent")
    assert parent is not None
    assert [g.name for g in inventory.resolve_children(parent)] == ["child"]

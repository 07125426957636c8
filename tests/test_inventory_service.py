from __future__ import annotations

from pathlib import Path

import pytest

from inventory_codec.config import InventoryFileEntry, Settings
from inventory_codec.errors import (
    EmptyInventoryError,
    InventoryDecodeError,
    InventoryNotFoundError,
    InventoryReadError,
    ReadOnlyInventoryError,
)
from inventory_codec.inventory.models import InventoryHost
from inventory_codec.inventory.parser import parse
from inventory_codec.inventory.service import InventoryService
from inventory_codec.inventory.source import InventorySource

SAMPLE = "# header\n\n[web]\nweb01 ansible_host=10.0.0.10 ansible_user=root custom='keep me'\n"


def _service(tmp_path: Path, *entries) -> InventoryService:
    return InventoryService(Settings(base_dir=tmp_path, inventory_files=list(entries)))


def test_load_from_settings(tmp_path: Path) -> None:
    (tmp_path / "hosts").write_text(SAMPLE, encoding="utf-8")
    (tmp_path / "cloud").write_text("db1\n", encoding="utf-8")
    service = _service(tmp_path, "hosts", InventoryFileEntry(path="cloud", read_only=True), "missing")

    sources = service.load_from_settings()

    assert [s.name for s in sources] == ["hosts", "cloud", "missing"]
    assert sources[0].inventory is not None
    assert sources[0].last_loaded is not None
    assert sources[1].read_only
    assert sources[2].inventory is None
    assert sources[2].error is not None and "not found" in sources[2].error
    assert service.editable_source() is sources[0]


def test_upsert_and_delete_host(tmp_path: Path) -> None:
    inventory_path = tmp_path / "hosts"
    inventory_path.write_text(SAMPLE, encoding="utf-8")
    service = _service(tmp_path)
    source = service.add_source("hosts")

    record = InventoryHost(name="web02", ansible_host="10.0.0.11", ansible_user="root")
    service.add_host(source, record, "web")
    service.save_source(source)

    saved = parse(inventory_path.read_text(encoding="utf-8"))
    web = saved.find_group("web")
    assert web is not None
    assert [h.name for h in web.hosts] == ["web01", "web02"]
    assert web.hosts[0].raw_variables == {"custom": "'keep me'"}
    assert saved.header_comments == ["# header"]

    assert service.remove_host(source, "web01")
    assert not service.remove_host(source, "web01")
    service.save_source(source)
    assert [h.name for h in parse(inventory_path.read_text(encoding="utf-8")).all_hosts()] == ["web02"]


def test_add_host_creates_group_and_sanitizes_name(tmp_path: Path) -> None:
    service = _service(tmp_path)
    source = service.add_source("new_inventory")
    assert source.inventory is None

    service.add_host(source, InventoryHost(name="lonely"))
    service.add_host(source, InventoryHost(name="db1"), "Database Servers")

    assert source.inventory is not None
    assert [h.name for h in source.inventory.ungrouped_hosts] == ["lonely"]
    assert [g.name for g in source.inventory.groups] == ["database_servers"]

    service.save_source(source)
    assert (tmp_path / "new_inventory").read_text(encoding="utf-8") == (
        "lonely\n\n[database_servers]\ndb1\n"
    )


def test_read_only_source_rejects_changes(tmp_path: Path) -> None:
    (tmp_path / "hosts").write_text(SAMPLE, encoding="utf-8")
    service = _service(tmp_path)
    source = service.add_source("hosts", read_only=True)

    with pytest.raises(ReadOnlyInventoryError):
        service.add_host(source, InventoryHost(name="x"))
    with pytest.raises(ReadOnlyInventoryError):
        service.remove_host(source, "web01")
    with pytest.raises(ReadOnlyInventoryError) as excinfo:
        service.save_source(source)
    assert "save" in str(excinfo.value)
    assert (tmp_path / "hosts").read_text(encoding="utf-8") == SAMPLE


def test_save_without_inventory_fails(tmp_path: Path) -> None:
    service = _service(tmp_path)
    source = InventorySource.for_path(tmp_path / "nothing")
    with pytest.raises(EmptyInventoryError):
        service.save_source(source)


def test_strict_load_raises(tmp_path: Path) -> None:
    service = _service(tmp_path)
    with pytest.raises(InventoryNotFoundError):
        service.load_source(InventorySource.for_path(tmp_path / "absent"), strict=True)

    binary = tmp_path / "binary"
    binary.write_bytes(b"\xff\xfe\x00bad")
    source = InventorySource.for_path(binary)
    with pytest.raises(InventoryDecodeError):
        service.load_source(source, strict=True)
    assert source.inventory is None
    assert source.error is not None


def test_unreadable_entry_does_not_stop_loading(tmp_path: Path) -> None:
    (tmp_path / "adir").mkdir()
    (tmp_path / "hosts").write_text(SAMPLE, encoding="utf-8")
    service = _service(tmp_path, "adir", "hosts")

    sources = service.load_from_settings()

    assert [s.name for s in sources] == ["adir", "hosts"]
    assert sources[0].inventory is None
    assert sources[0].error is not None and "Cannot read" in sources[0].error
    assert sources[1].inventory is not None
    assert sources[1].error is None

    with pytest.raises(InventoryReadError):
        service.load_source(sources[0], strict=True)


def test_sources_are_unique_by_path(tmp_path: Path) -> None:
    (tmp_path / "hosts").write_text(SAMPLE, encoding="utf-8")
    service = _service(tmp_path)

    first = service.add_source("hosts")
    second = service.add_source(tmp_path / "hosts")
    assert first is second
    assert service.get_source("hosts") is first
    assert len(service.list_sources()) == 1

    assert service.remove_source("hosts")
    assert not service.remove_source("hosts")
    assert service.list_sources() == []


def test_find_host_and_refresh(tmp_path: Path) -> None:
    path = tmp_path / "hosts"
    path.write_text(SAMPLE, encoding="utf-8")
    service = _service(tmp_path)
    source = service.add_source("hosts")

    found = service.find_host("web01")
    assert found is not None
    host, owner = found
    assert owner is source
    assert host.ansible_host == "10.0.0.10"
    assert service.find_host("ghost") is None

    path.write_text("[web]\nweb01\nweb09\n", encoding="utf-8")
    service.refresh()
    assert [h.name for h in service.all_hosts()] == ["web01", "web09"]

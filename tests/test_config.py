from __future__ import annotations

from pathlib import Path

import pytest

from inventory_codec.config import InventoryFileEntry, Settings
from inventory_codec.inventory.source import normalize_inventory_config


def test_resolve_path(tmp_path: Path) -> None:
    settings = Settings(base_dir=tmp_path)
    assert settings.resolve_path("hosts") == tmp_path / "hosts"
    assert settings.resolve_path("/etc/ansible/hosts") == Path("/etc/ansible/hosts")


def test_settings_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INVENTORY_CODEC_BASE_DIR", str(tmp_path))
    monkeypatch.setenv("INVENTORY_CODEC_LOG_LEVEL", "debug")
    monkeypatch.setenv(
        "INVENTORY_CODEC_INVENTORY_FILES",
        '["hosts", {"path": "cloud", "read_only": true}]',
    )

    settings = Settings()

    assert settings.base_dir == tmp_path
    assert settings.log_level == "DEBUG"
    assert [normalize_inventory_config(entry) for entry in settings.inventory_files] == [
        ("hosts", False),
        ("cloud", True),
    ]


def test_normalize_inventory_config() -> None:
    assert normalize_inventory_config("a") == ("a", False)
    assert normalize_inventory_config(InventoryFileEntry(path="b", read_only=True)) == ("b", True)

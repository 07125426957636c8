"""Inventory sources: one inventory file plus its load state."""

from __future__ import annotations

import secrets
import time
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from ..config import InventoryFileConfig
from .models import Inventory


def generate_source_id() -> str:
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"


class InventorySource(BaseModel):
    """An inventory file and the result of loading it."""

    id: str = Field(default_factory=generate_source_id)
    path: Path
    name: str = Field(description="File name shown to users.")
    read_only: bool = False
    inventory: Inventory | None = None
    last_loaded: datetime | None = None
    error: str | None = None

    @classmethod
    def for_path(cls, path: Path, read_only: bool = False) -> "InventorySource":
        return cls(path=path, name=path.name or str(path), read_only=read_only)


def normalize_inventory_config(config: InventoryFileConfig) -> tuple[str, bool]:
    """Return ``(path, read_only)`` for a plain path or a mapping entry."""
    if isinstance(config, str):
        return config, False
    return config.path, config.read_only

"""Inventory management backed by INI files on disk."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from ..config import Settings, get_settings
from ..errors import (
    EmptyInventoryError,
    InventoryDecodeError,
    InventoryError,
    InventoryNotFoundError,
    InventoryReadError,
    ReadOnlyInventoryError,
)
from .groups import is_valid_group_name, sanitize_group_name
from .models import Inventory, InventoryGroup, InventoryHost
from .parser import InventoryParser
from .serializer import serialize
from .source import InventorySource, normalize_inventory_config


class InventoryService:
    """Thread-safe access to a set of inventory files."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._lock = threading.RLock()
        self._parser = InventoryParser()
        self._sources: list[InventorySource] = []

    # ------------------------------------------------------------------ utils
    def _resolve(self, path: str | Path) -> Path:
        return self._settings.resolve_path(path)

    def _read(self, source: InventorySource) -> Inventory:
        if not source.path.exists():
            raise InventoryNotFoundError(source.path)
        try:
            content = source.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise InventoryDecodeError(source.path, str(exc)) from exc
        except OSError as exc:
            raise InventoryReadError(source.path, str(exc)) from exc
        return self._parser.parse(content)

    @staticmethod
    def _ensure_writable(source: InventorySource) -> None:
        if source.read_only:
            raise ReadOnlyInventoryError(source.path)

    # ------------------------------------------------------------------- API
    def load_from_settings(self) -> list[InventorySource]:
        """Replace the current sources with the configured inventory files."""
        with self._lock:
            self._sources = []
            for entry in self._settings.inventory_files:
                raw_path, read_only = normalize_inventory_config(entry)
                source = InventorySource.for_path(self._resolve(raw_path), read_only)
                logger.info("Loading inventory file: {} (read_only: {})", source.path, read_only)
                self.load_source(source)
                self._sources.append(source)
            logger.info("Total inventory sources loaded: {}", len(self._sources))
            return list(self._sources)

    def load_source(self, source: InventorySource, strict: bool = False) -> InventorySource:
        """
        (Re)load ``source`` from disk.

        Failures are recorded on ``source.error`` unless ``strict`` is set,
        in which case they are raised.
        """
        try:
            inventory = self._read(source)
        except InventoryError as exc:
            logger.error("Failed to load inventory {}: {}", source.path, exc.message)
            source.inventory = None
            source.error = exc.message
            if strict:
                raise
            return source

        source.inventory = inventory
        source.error = None
        source.last_loaded = datetime.now(timezone.utc)
        logger.info(
            "Loaded {} groups, {} ungrouped hosts from {}",
            len(inventory.groups),
            len(inventory.ungrouped_hosts),
            source.path,
        )
        return source

    def save_source(self, source: InventorySource) -> None:
        if source.read_only:
            raise ReadOnlyInventoryError(source.path, action="save")
        if source.inventory is None:
            raise EmptyInventoryError(source.path)

        with self._lock:
            source.path.write_text(serialize(source.inventory), encoding="utf-8")
            source.last_loaded = datetime.now(timezone.utc)
        logger.info("Saved inventory {}", source.path)

    def list_sources(self) -> list[InventorySource]:
        with self._lock:
            return list(self._sources)

    def get_source(self, path: str | Path) -> InventorySource | None:
        resolved = self._resolve(path)
        with self._lock:
            for source in self._sources:
                if source.path == resolved:
                    return source
            return None

    def add_source(self, path: str | Path, read_only: bool = False) -> InventorySource:
        with self._lock:
            existing = self.get_source(path)
            if existing is not None:
                return existing
            source = InventorySource.for_path(self._resolve(path), read_only)
            self.load_source(source)
            self._sources.append(source)
            return source

    def remove_source(self, path: str | Path) -> bool:
        with self._lock:
            source = self.get_source(path)
            if source is None:
                return False
            self._sources.remove(source)
            return True

    def refresh(self) -> None:
        with self._lock:
            for source in self._sources:
                self.load_source(source)

    def add_host(
        self,
        source: InventorySource,
        host: InventoryHost,
        group_name: str | None = None,
    ) -> InventoryHost:
        self._ensure_writable(source)

        with self._lock:
            if source.inventory is None:
                source.inventory = Inventory()

            if not group_name:
                source.inventory.ungrouped_hosts.append(host)
                return host

            if not is_valid_group_name(group_name):
                sanitized = sanitize_group_name(group_name)
                logger.warning("Invalid group name {!r}, using {!r}", group_name, sanitized)
                group_name = sanitized

            group = source.inventory.find_group(group_name)
            if group is None:
                group = InventoryGroup(name=group_name)
                source.inventory.groups.append(group)
            group.hosts.append(host)
            return host

    def remove_host(self, source: InventorySource, name: str) -> bool:
        """Remove the first host called ``name``, ungrouped hosts first."""
        self._ensure_writable(source)

        with self._lock:
            if source.inventory is None:
                return False

            for hosts in [source.inventory.ungrouped_hosts] + [
                group.hosts for group in source.inventory.groups
            ]:
                for index, host in enumerate(hosts):
                    if host.name == name:
                        del hosts[index]
                        return True
            return False

    def find_host(self, name: str) -> tuple[InventoryHost, InventorySource] | None:
        with self._lock:
            for source in self._sources:
                if source.inventory is None:
                    continue
                host = source.inventory.find_host(name)
                if host is not None:
                    return host, source
            return None

    def all_hosts(self) -> list[InventoryHost]:
        with self._lock:
            hosts: list[InventoryHost] = []
            for source in self._sources:
                if source.inventory is not None:
                    hosts.extend(source.inventory.all_hosts())
            return hosts

    def editable_source(self) -> InventorySource | None:
        """First source that is not read-only."""
        with self._lock:
            for source in self._sources:
                if not source.read_only:
                    return source
            return None

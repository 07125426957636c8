"""Exceptions raised at the inventory file boundary.

The codec itself never raises for string input; these are used by the
inventory service and the command line tool.
"""

from __future__ import annotations

from pathlib import Path


class InventoryError(Exception):
    """Base exception for inventory handling errors."""

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n  Details: {self.details}"
        return self.message


class InventoryFileError(InventoryError):
    """Error tied to a specific inventory file."""

    def __init__(self, message: str, path: Path | str, details: str | None = None) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}", details)


class InventoryNotFoundError(InventoryFileError):
    def __init__(self, path: Path | str) -> None:
        super().__init__("Inventory file not found", path)


class InventoryDecodeError(InventoryFileError):
    def __init__(self, path: Path | str, details: str | None = None) -> None:
        super().__init__("Inventory file is not valid UTF-8 text", path, details)


class ReadOnlyInventoryError(InventoryFileError):
    def __init__(self, path: Path | str, action: str = "modify") -> None:
        self.action = action
        super().__init__(f"Cannot {action} read-only inventory file", path)


class EmptyInventoryError(InventoryFileError):
    def __init__(self, path: Path | str) -> None:
        super().__init__("No inventory data to save", path)


class InventoryReadError(InventoryFileError):
    def __init__(self, path: Path | str, details: str | None = None) -> None:
        super().__init__("Cannot read inventory file", path, details)

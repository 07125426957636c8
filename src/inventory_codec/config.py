"""Configuration management for the inventory codec tooling."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class InventoryFileEntry(BaseModel):
    path: str
    read_only: bool = False


InventoryFileConfig = Union[str, InventoryFileEntry]


class Settings(BaseSettings):
    """Centralised runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_CODEC_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    base_dir: Path = Field(
        default_factory=Path.home,
        description="Directory that relative inventory paths are resolved against.",
    )

    # Inventory
    inventory_files: list[InventoryFileConfig] = Field(default_factory=list)
    connection_host_preference: Literal["name", "ansible_host"] = Field(default="ansible_host")

    # Logging
    log_level: str = Field(default="WARNING")
    log_file: Optional[Path] = Field(default=None)

    @field_validator("base_dir", mode="before")
    @classmethod
    def _expand_base_dir(cls, value: Path | str) -> Path:
        return Path(value).expanduser()

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.upper()

    def resolve_path(self, path: str | Path) -> Path:
        candidate = Path(path).expanduser()
        if candidate.is_absolute():
            return candidate
        return self.base_dir / candidate


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()

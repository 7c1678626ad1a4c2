"""
Application settings.

Settings are pydantic models grouped into sections. `ConfigManager`
keeps them in a JSON file (written back on every update) or a
hand-edited TOML file (read-only).
"""
import json
import os
import tomllib
from typing import Any, Dict, Optional

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from .events import Signal


class GeneralSettings(BaseModel):
    debug_mode: bool = True
    log_dir: str = "logs"


class ContainerSettings(BaseModel):
    # Only registrations whose type lives under this module prefix are checked
    namespace: Optional[str] = None
    check_cycles: bool = True


class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    container: ContainerSettings = Field(default_factory=ContainerSettings)


def _read_json(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _read_toml(path: str) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


class ConfigManager:
    """
    Loads, validates and persists `AppConfig`.

    A missing or unreadable file falls back to defaults, which are then
    written out (JSON only). `on_changed(section, key, value)` fires after
    every successful `update`.
    """

    def __init__(self, filepath: str = "config.json"):
        self.filepath = filepath
        self._data = AppConfig()
        self.on_changed = Signal("ConfigChanged")
        self.reload()

    @property
    def data(self) -> AppConfig:
        return self._data

    @property
    def read_only(self) -> bool:
        return self.filepath.endswith(".toml")

    def reload(self) -> None:
        if not os.path.isfile(self.filepath):
            logger.debug(f"No config at {self.filepath}, using defaults")
            self._data = AppConfig()
            self.save()
            return

        reader = _read_toml if self.read_only else _read_json
        try:
            self._data = AppConfig.model_validate(reader(self.filepath))
        except (OSError, ValueError) as e:
            # json.JSONDecodeError, TOMLDecodeError and ValidationError are all ValueErrors
            logger.error(f"Failed to load config from {self.filepath}: {e}")
            self._data = AppConfig()
            self.save()

    def save(self) -> None:
        if self.read_only:
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except OSError as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")

    def update(self, section: str, key: str, value: Any) -> None:
        """
        Set one setting.

        Raises:
            ValueError: Unknown section or key, or a value the section model rejects
        """
        if section not in AppConfig.model_fields:
            raise ValueError(f"Invalid section: {section}")
        current = getattr(self._data, section)
        model = type(current)
        if key not in model.model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        try:
            updated = model.model_validate({**current.model_dump(), key: value})
        except ValidationError as e:
            raise ValueError(f"Invalid value for {section}.{key}: {e}") from e

        setattr(self._data, section, updated)
        self.save()
        self.on_changed.emit(section, key, getattr(updated, key))

    def get(self, section: str, key: str) -> Any:
        return getattr(getattr(self._data, section), key)

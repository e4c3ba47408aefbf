"""
Простой загрузчик/сохранитель конфигурации в формате JSON.
Без пути – только настройки по‑умолчанию; с путём – файл читается,
а если его нет, создаётся с настройками по‑умолчанию.
"""

import copy
import json
from pathlib import Path
from typing import Optional

from objmesh.errors import ConfigError
from objmesh.utils.logger import logger, set_level

TANGENT_STRATEGIES = ("direct", "accessor")

DEFAULT_CONFIG = {
    "tangents": {"strategy": "direct", "default": [1.0, 0.0, 0.0, 1.0]},
    "weld": {"split_winding": True},
    "workers": 1,
    "log_level": "INFO",
}

class Config:
    """Настройки конвертации OBJ → меш."""

    def __init__(self, path: Optional[str] = None, **overrides):
        self.path = Path(path) if path is not None else None
        self.data = copy.deepcopy(DEFAULT_CONFIG)
        if self.path is not None:
            self._load()
        self._merge(overrides)
        self.validate()
        if self.path is not None or "log_level" in overrides:
            try:
                set_level(self["log_level"])
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc

    def _load(self):
        if self.path.is_file():
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    loaded = json.load(f)
            except (OSError, json.JSONDecodeError) as exc:
                raise ConfigError(f"Failed to read config {self.path}: {exc}") from exc
            if not isinstance(loaded, dict):
                raise ConfigError(f"Config {self.path} must hold a JSON object")
            self._merge(loaded)
            logger.info(f"[Config] Loaded configuration from {self.path}.")
        else:
            logger.info("[Config] No config file – creating default.")
            self.save()

    def _merge(self, values: dict):
        for key, value in values.items():
            if isinstance(value, dict) and isinstance(self.data.get(key), dict):
                self.data[key].update(value)
            else:
                self.data[key] = value

    def save(self):
        if self.path is None:
            raise ConfigError("Config has no path to save to")
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=4)
        logger.info("[Config] Configuration saved.")

    def validate(self):
        """Проверить значения; ConfigError при ошибке."""
        for section in ("tangents", "weld"):
            if not isinstance(self[section], dict):
                raise ConfigError(f"'{section}' must be a mapping, got {self[section]!r}")
        strategy = self.tangent_strategy
        if strategy not in TANGENT_STRATEGIES:
            raise ConfigError(
                f"Unknown tangent strategy '{strategy}', "
                f"expected one of {TANGENT_STRATEGIES}"
            )
        default = self["tangents"].get("default")
        if (not isinstance(default, (list, tuple)) or len(default) != 4
                or not all(isinstance(c, (int, float)) for c in default)):
            raise ConfigError(f"tangents.default must be 4 numbers, got {default!r}")
        workers = self["workers"]
        if not isinstance(workers, int) or workers < 1:
            raise ConfigError(f"workers must be a positive integer, got {workers!r}")
        if not isinstance(self["log_level"], (str, int)):
            raise ConfigError(f"log_level must be a name or a number, got {self['log_level']!r}")

    # -----------------------------------------------------------------
    # удобные свойства
    # -----------------------------------------------------------------
    @property
    def tangent_strategy(self) -> str:
        return self["tangents"].get("strategy", "direct")

    @property
    def default_tangent(self) -> tuple:
        return tuple(float(c) for c in self["tangents"]["default"])

    @property
    def split_winding(self) -> bool:
        return bool(self["weld"].get("split_winding", True))

    @property
    def workers(self) -> int:
        return self["workers"]

    def __getitem__(self, key):
        return self.data.get(key, DEFAULT_CONFIG.get(key))

    def get(self, key, default=None):
        return self.data.get(key, default)

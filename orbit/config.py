import os
from pathlib import Path

import yaml

ORBIT_DIR = Path(os.environ.get("ORBIT_HOME", Path.home() / ".orbit"))
DB_PATH = ORBIT_DIR / "orbit.db"
CONFIG_PATH = ORBIT_DIR / "config.yaml"
BACKUP_DIR = ORBIT_DIR / "backups"

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_TIMEOUT = 30


class Config:
    """Single-instance config manager. Load once, cache in memory."""

    _instance: "Config | None" = None
    _data: dict[str, object]

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._data = {}
            cls._instance._load()
        return cls._instance

    def _load(self) -> None:
        """Load config from disk."""
        if not CONFIG_PATH.exists():
            self._data = {}
            return
        try:
            with CONFIG_PATH.open() as f:
                self._data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            self._data = {}

    def _save(self) -> None:
        """Persist config to disk."""
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with CONFIG_PATH.open("w") as f:
            yaml.dump(self._data, f, default_flow_style=False, allow_unicode=True)

    def get(self, key: str, default: object = None) -> object:
        """Get config value."""
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> None:
        """Set config value and persist."""
        self._data[key] = value
        self._save()


_config = Config()


def get_model() -> str:
    """Text-generation model name."""
    val = _config.get("model")
    return str(val).strip() if val else DEFAULT_MODEL


def set_model(model: str) -> None:
    _config.set("model", model)


def get_timeout() -> float:
    """Seconds to wait on the text-generation service."""
    val = _config.get("timeout")
    try:
        return float(val) if val is not None else DEFAULT_TIMEOUT
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT

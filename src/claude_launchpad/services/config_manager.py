"""User preferences stored in a JSON document."""

import logging
from pathlib import Path

import orjson

logger = logging.getLogger(__name__)

# Default values
DEFAULTS = {
    "defaultDays": 0,
    "defaultModel": "sonnet-4",
    "archived": [],
    "projectBaseDir": "",
    "telemetry": False,
    "debugLogging": False,
}


class ConfigManager:
    """Typed access to the preferences document.

    Every setter reads the current document, updates one key and writes the
    whole document back.
    """

    def __init__(self, config_file: str | Path):
        self._config_file = Path(config_file)

    def load(self) -> dict:
        """The stored preferences. A missing or corrupt document is empty."""
        try:
            data = orjson.loads(self._config_file.read_bytes())
        except FileNotFoundError:
            return {}
        except (OSError, orjson.JSONDecodeError):
            logger.debug("Unreadable config %s", self._config_file, exc_info=True)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict):
        self._config_file.parent.mkdir(parents=True, exist_ok=True)
        self._config_file.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))

    def _set(self, key: str, value):
        data = self.load()
        data[key] = value
        self._save(data)

    def get_string(self, key: str) -> str:
        val = self.load().get(key, DEFAULTS.get(key, ""))
        return val if isinstance(val, str) else str(DEFAULTS.get(key, ""))

    def get_int(self, key: str) -> int:
        val = self.load().get(key, DEFAULTS.get(key, 0))
        if isinstance(val, bool):
            return DEFAULTS.get(key, 0)
        try:
            return int(val)
        except (ValueError, TypeError):
            return DEFAULTS.get(key, 0)

    def get_bool(self, key: str) -> bool:
        val = self.load().get(key, DEFAULTS.get(key, False))
        if isinstance(val, bool):
            return val
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    def set_string(self, key: str, value: str):
        self._set(key, value)

    def set_int(self, key: str, value: int):
        self._set(key, value)

    def set_bool(self, key: str, value: bool):
        self._set(key, value)

    # Archived projects
    def get_archived(self) -> list[str]:
        val = self.load().get("archived", [])
        if not isinstance(val, list):
            return []
        return [p for p in val if isinstance(p, str)]

    def archive(self, project_path: str) -> bool:
        """Hide a project. Returns False if it was already archived."""
        archived = self.get_archived()
        if project_path in archived:
            return False
        archived.append(project_path)
        self._set("archived", archived)
        return True

    def unarchive(self, project_path: str) -> bool:
        """Restore a project. Returns False if it was not archived."""
        archived = self.get_archived()
        if project_path not in archived:
            return False
        self._set("archived", [p for p in archived if p != project_path])
        return True

    # Base directory for `new`
    def get_project_base_dir(self) -> str:
        return self.get_string("projectBaseDir")

    def set_project_base_dir(self, path: str):
        self.set_string("projectBaseDir", path)

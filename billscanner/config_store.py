"""Device-local storage for the one durable setting: the Google Sheet webhook URL."""
import abc
import json
from pathlib import Path
from typing import Optional

from loguru import logger

from billscanner.exceptions import ConfigStoreError

SHEET_URL_KEY = "googleSheetUrl"


class ConfigStore(abc.ABC):
    @abc.abstractmethod
    def load(self) -> Optional[str]:
        raise NotImplementedError

    @abc.abstractmethod
    def save(self, value: str) -> None:
        raise NotImplementedError


class FileConfigStore(ConfigStore):
    """Keeps the value under one key of a small JSON file."""

    def __init__(self, path: Path, key: str = SHEET_URL_KEY):
        self.path = Path(path)
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.path}: {str(e)}")
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> Optional[str]:
        value = self._read().get(self.key)
        return value if isinstance(value, str) and value else None

    def save(self, value: str) -> None:
        data = self._read()
        data[self.key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise ConfigStoreError(f"Could not save settings to {self.path}: {e}") from e
        logger.info("Saved {} to {}", self.key, self.path)


class InMemoryConfigStore(ConfigStore):
    def __init__(self, value: Optional[str] = None):
        self.value = value

    def load(self) -> Optional[str]:
        return self.value or None

    def save(self, value: str) -> None:
        self.value = value

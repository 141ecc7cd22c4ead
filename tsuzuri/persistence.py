"""Persistence of the editor's content and settings.

The state is stored as a single JSON record in an OS-appropriate data
directory. Loading never fails: a missing or corrupt record falls back to
empty content and default settings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, NamedTuple, Optional

import platformdirs

from .constants import LayoutConstants
from .settings import DEFAULT_SETTINGS, EditorSettings

logger = logging.getLogger(__name__)


class MalformedStateError(ValueError):
    """A persisted record could not be interpreted."""


class PersistedState(NamedTuple):
    content: str
    settings: EditorSettings


EMPTY_STATE = PersistedState(content="", settings=DEFAULT_SETTINGS)


def parse_record(data: Any) -> PersistedState:
    """Interpret a decoded JSON record.

    Settings are a partial mapping merged over the defaults; a missing
    ``settings`` key means all defaults.

    Raises:
        MalformedStateError: If the record is not a dict or its content is
            not a string.
    """
    if not isinstance(data, dict):
        raise MalformedStateError(f"record is a {type(data).__name__}, not an object")

    content = data.get("content") or ""
    if not isinstance(content, str):
        raise MalformedStateError(f"content is a {type(content).__name__}, not a string")

    settings = data.get("settings")
    if settings is not None and not isinstance(settings, Mapping):
        raise MalformedStateError(f"settings is a {type(settings).__name__}, not an object")

    return PersistedState(content=content, settings=EditorSettings.from_dict(settings))


class StatePersistence:
    """Reads and writes the editor state record."""

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize state persistence.

        Args:
            data_dir: Directory holding the state file. Defaults to the
                platform's per-user data directory.
        """
        if data_dir is None:
            data_dir = Path(platformdirs.user_data_dir(LayoutConstants.APP_NAME, appauthor=False))
        self._data_dir = Path(data_dir)
        self._state_file = self._data_dir / LayoutConstants.STATE_FILENAME

    @property
    def state_file(self) -> Path:
        return self._state_file

    def _ensure_data_dir(self) -> None:
        """Ensure the data directory exists."""
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create data directory {self._data_dir}: {e}")

    def load(self) -> PersistedState:
        """Load the persisted state.

        Returns:
            The stored content and settings, or empty content with default
            settings if nothing usable is stored.
        """
        if not self._state_file.exists():
            return EMPTY_STATE

        try:
            with open(self._state_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return parse_record(data)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"Could not load state from {self._state_file}: {e}")
        except MalformedStateError as e:
            logger.warning(f"Discarding malformed state in {self._state_file}: {e}")
        return EMPTY_STATE

    def save(self, snapshot: Mapping[str, Any]) -> bool:
        """Save a ``{content, settings}`` snapshot atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        self._ensure_data_dir()

        record: Dict[str, Any] = {
            "content": snapshot.get("content", ""),
            "settings": snapshot.get("settings", {}),
        }
        temp_file = self._state_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(record, f, ensure_ascii=False, indent=2)

            # Atomic rename
            temp_file.replace(self._state_file)
            return True

        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not save state to {self._state_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def clear(self) -> None:
        """Remove the stored state, if any."""
        try:
            self._state_file.unlink()
        except FileNotFoundError:
            pass


# Global instance
_persistence: Optional[StatePersistence] = None


def get_persistence() -> StatePersistence:
    """Get the global state persistence instance.

    Returns:
        The singleton StatePersistence instance.
    """
    global _persistence
    if _persistence is None:
        _persistence = StatePersistence()
    return _persistence

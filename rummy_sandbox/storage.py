from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from .errors import CorruptSave, NoSavedState
from .state import GameState

logger = logging.getLogger(__name__)

SAVE_KEY = "rummikub_save"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """String values keyed by name, kept together in one JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise CorruptSave(f"{self.path} does not hold a key-value object")
        return data

    def get(self, key: str) -> Optional[str]:
        try:
            return self._read_all().get(key)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CorruptSave(f"{self.path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except (json.JSONDecodeError, UnicodeDecodeError, CorruptSave):
            logger.warning("overwriting unreadable store %s", self.path)
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # write then rename so a crash never leaves a half-written file
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise


def save_game(state: GameState, store: KeyValueStore, key: str = SAVE_KEY) -> None:
    store.set(key, json.dumps(state.to_dict()))
    logger.info("game saved under %r", key)


def load_game(store: KeyValueStore, key: str = SAVE_KEY) -> GameState:
    """Return the saved state as a new object; the caller swaps it in wholesale."""
    raw = store.get(key)
    if raw is None:
        raise NoSavedState(f"nothing saved under {key!r}")
    try:
        state = GameState.from_dict(json.loads(raw))
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        raise CorruptSave(f"saved state under {key!r} is unusable: {exc}") from exc
    logger.info("game loaded from %r", key)
    return state

# src/game/storage.py
"""High-score persistence: a tiny key -> string store backed by a JSON file."""
from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from .config import HIGH_SCORE_KEY, HIGH_SCORE_FILE_ENV

logger = logging.getLogger(__name__)


def default_store_path() -> Path:
    override = os.environ.get(HIGH_SCORE_FILE_ENV)
    if override:
        return Path(override)
    return Path.home() / ".dino_runner" / "highscore.json"


class MemoryStore:
    """In-process store (tests)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)


class JsonFileStore:
    """
    Keeps all keys in one JSON object on disk. A missing or corrupt file reads
    as empty; writes go through a temp file + replace.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else default_store_path()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable store %s: %s", self.path, e)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = str(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(f"{self.path.name}.{os.getpid()}.tmp")
        try:
            tmp.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
            tmp.replace(self.path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise


def load_high_score(store) -> int:
    """Read once at startup. Anything absent or malformed counts as 0."""
    try:
        raw = store.get(HIGH_SCORE_KEY)
    except OSError as e:
        logger.warning("Could not read high score: %s", e)
        return 0
    if raw is None:
        return 0
    try:
        value = int(str(raw).strip(), 10)
    except ValueError:
        logger.warning("Malformed high score %r, using 0", raw)
        return 0
    return max(0, value)


def save_high_score(store, value: int) -> bool:
    """Persist a new record. Returns False (and logs) if the write failed."""
    try:
        store.set(HIGH_SCORE_KEY, str(int(value)))
    except OSError as e:
        logger.warning("Could not save high score %d: %s", value, e)
        return False
    logger.info("New high score saved: %d", value)
    return True

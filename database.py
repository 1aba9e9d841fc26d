"""
Snapshot storage: one serialized record per store key.

Records look like {"state": {...}, "version": 0}. With STORAGE_PATH set,
each key is a JSON file in that directory; otherwise records live in memory
for the lifetime of the process.
"""

import json
import logging
import os
from typing import Dict, Optional, Union

from pydantic import BaseModel

from config import STORAGE_PATH
from errors import MalformedSnapshot

logger = logging.getLogger(__name__)

RECORD_VERSION = 0


class SnapshotStorage:
    def __init__(self, path: str = ""):
        self.path = path
        self._memory: Dict[str, str] = {}
        if path:
            os.makedirs(path, exist_ok=True)

    def _file(self, key: str) -> str:
        return os.path.join(self.path, f"{key}.json")

    def get(self, key: str) -> Optional[str]:
        if not self.path:
            return self._memory.get(key)
        try:
            with open(self._file(key), "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Could not read snapshot %s: %s", key, e)
            return None

    def set(self, key: str, value: str) -> None:
        if not self.path:
            self._memory[key] = value
            return
        tmp = self._file(key) + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(value)
        os.replace(tmp, self._file(key))

    def remove(self, key: str) -> None:
        if not self.path:
            self._memory.pop(key, None)
            return
        try:
            os.remove(self._file(key))
        except FileNotFoundError:
            pass

    def keys(self):
        if not self.path:
            return sorted(self._memory)
        return sorted(name[:-5] for name in os.listdir(self.path) if name.endswith(".json"))


def encode_record(state: BaseModel) -> str:
    return json.dumps({"state": state.model_dump(mode="json"), "version": RECORD_VERSION}, ensure_ascii=False)


def decode_record(raw: Union[str, bytes, dict, None]) -> dict:
    """Return the bare state dict of a record. Accepts a wrapped or bare state."""
    if raw is None:
        raise MalformedSnapshot("Empty snapshot")
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedSnapshot(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise MalformedSnapshot(f"Snapshot must be an object, got {type(raw).__name__}")
    state = raw.get("state", raw)
    if not isinstance(state, dict):
        raise MalformedSnapshot("Snapshot state must be an object")
    return state


db = SnapshotStorage(STORAGE_PATH)


def save_snapshot(key: str, state: BaseModel, storage: Optional[SnapshotStorage] = None) -> str:
    raw = encode_record(state)
    (storage or db).set(key, raw)
    return raw


def load_snapshot(key: str, storage: Optional[SnapshotStorage] = None) -> Optional[str]:
    return (storage or db).get(key)

"""
Cross-session synchronization.

Sessions of the same client share one snapshot storage. After a local
mutation a session publishes its new record on the channel; every other
session subscribed to that key validates the payload and adopts it.
There is no conflict resolution: the last record applied wins.
"""

import logging
from typing import Callable, Dict, List, Tuple, Type

from pydantic import BaseModel, ValidationError

from database import decode_record
from errors import MalformedSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class SyncChannel:
    def __init__(self):
        self._subscribers: Dict[str, List[Tuple[str, Listener]]] = {}

    def subscribe(self, key: str, origin: str, listener: Listener) -> Callable[[], None]:
        entry = (origin, listener)
        self._subscribers.setdefault(key, []).append(entry)

        def unsubscribe():
            subs = self._subscribers.get(key, [])
            if entry in subs:
                subs.remove(entry)

        return unsubscribe

    def publish(self, key: str, origin: str, payload: str) -> int:
        """Deliver `payload` to every subscriber of `key` except `origin`."""
        delivered = 0
        for sub_origin, listener in list(self._subscribers.get(key, [])):
            if sub_origin == origin:
                continue
            try:
                listener(payload)
            except Exception:
                logger.exception("Sync listener for %s failed", key)
                continue
            delivered += 1
        return delivered


class SyncedStore:
    """Base for stores whose state can be snapshotted and restored.

    Subclasses set `snapshot_model` and implement `snapshot()` and
    `_apply()`. Mutations call `_changed()` so listeners (persistence,
    sync) see the new snapshot.
    """

    snapshot_model: Type[BaseModel]

    def __init__(self):
        self._listeners: List[Callable[[BaseModel], None]] = []

    def on_change(self, listener: Callable[[BaseModel], None]) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        snapshot = self.snapshot()
        for listener in self._listeners:
            listener(snapshot)

    def snapshot(self) -> BaseModel:
        raise NotImplementedError

    def _apply(self, snapshot: BaseModel) -> None:
        raise NotImplementedError

    def restore(self, raw) -> bool:
        """Adopt an external record. Malformed input is logged and ignored."""
        try:
            state = decode_record(raw)
            snapshot = self.snapshot_model.model_validate(state)
            self._apply(snapshot)
        except (MalformedSnapshot, ValidationError) as e:
            logger.warning("Ignoring malformed %s snapshot: %s", type(self).__name__, e)
            return False
        return True

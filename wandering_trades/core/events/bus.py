from __future__ import annotations

from dataclasses import dataclass, field
import logging
from threading import Lock
from typing import Any, Callable


LOG = logging.getLogger(__name__)

EventHandler = Callable[[Any], None]


@dataclass
class EventBus:
    _subs: dict[type, list[EventHandler]] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    def subscribe(self, event_type: type, handler: EventHandler) -> Callable[[], None]:
        with self._lock:
            handlers = self._subs.setdefault(event_type, [])
            handlers.append(handler)

        def _unsubscribe() -> None:
            with self._lock:
                rows = self._subs.get(event_type, [])
                self._subs[event_type] = [row for row in rows if row is not handler]

        return _unsubscribe

    def publish(self, event: Any) -> None:
        event_type = type(event)
        with self._lock:
            handlers = list(self._subs.get(event_type, []))
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                LOG.exception("event_bus: handler %r failed on %s", handler, event_type.__name__)

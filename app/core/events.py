"""Small observer used to tell readers that cached menu data changed.

Event names:
  timelines.changed -> payload {"location": "FB38" | "N58" | None}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

TIMELINES_CHANGED = "timelines.changed"

Listener = Callable[[str, Any], None]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Listener):
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Listener):
        try:
            self._subscribers[event_name].remove(callback)
        except ValueError:
            pass

    def publish(self, event_name: str, payload: Any = None):
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(event_name, payload)
            except Exception:
                logger.exception("Error delivering %s to %r", event_name, cb)


def log_listener(event_name: str, payload: Any):
    logger.info("EVENT %s: %s", event_name, payload)

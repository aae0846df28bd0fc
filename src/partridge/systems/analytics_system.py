import logging
from typing import Any, Dict

from partridge.events.bus import (
    EventBus,
    EVENT_APP_LOADED,
    EVENT_BOARD_RESET,
    EVENT_PUZZLE_COMPLETED,
    EVENT_SQUARE_PLACED,
    EVENT_SQUARE_REMOVED,
    EVENT_SQUARE_REPOSITIONED,
)

log = logging.getLogger(__name__)

TRACKED_EVENTS = (
    EVENT_APP_LOADED,
    EVENT_SQUARE_PLACED,
    EVENT_SQUARE_REPOSITIONED,
    EVENT_SQUARE_REMOVED,
    EVENT_BOARD_RESET,
    EVENT_PUZZLE_COMPLETED,
)


class AnalyticsSystem:
    """Usage tallies for the puzzle. Observes the bus only; never affects game state."""

    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self.counts: Dict[str, int] = {name: 0 for name in TRACKED_EVENTS}
        self.last_payload: Dict[str, Dict[str, Any]] = {}
        for name in TRACKED_EVENTS:
            self.event_bus.subscribe(name, self._make_handler(name))

    def _make_handler(self, name: str):
        def handler(sender, **payload):
            self.track(name, payload)
        return handler

    def track(self, name: str, payload: Dict[str, Any]) -> None:
        self.counts[name] = self.counts.get(name, 0) + 1
        self.last_payload[name] = dict(payload)
        log.info("%s %s", name, self._describe(name, payload))

    @staticmethod
    def _describe(name: str, payload: Dict[str, Any]) -> str:
        if name in (EVENT_SQUARE_PLACED, EVENT_SQUARE_REPOSITIONED):
            return "size=%s position=%s,%s total_squares=%s" % (
                payload.get('size'), payload.get('x'), payload.get('y'), payload.get('total_squares'),
            )
        if name == EVENT_SQUARE_REMOVED:
            return "size=%s total_squares=%s" % (payload.get('size'), payload.get('total_squares'))
        if name == EVENT_BOARD_RESET:
            return "squares_placed=%s" % payload.get('squares_placed')
        return " ".join(f"{k}={v}" for k, v in sorted(payload.items()))

"""Entry point for the Partridge tiling puzzle.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import logging
import os

from arcade import Window, run, set_background_color, color
from partridge.world import create_world
from partridge.events.bus import (
    EventBus,
    EVENT_APP_LOADED,
    EVENT_KEY_PRESS,
    EVENT_MOUSE_LEAVE,
    EVENT_MOUSE_MOVE,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
)
from partridge.systems.analytics_system import AnalyticsSystem
from partridge.systems.input import InputSystem
from partridge.systems.puzzle_system import PuzzleSystem
from partridge.systems.render import RenderSystem


class PartridgeWindow(Window):
    def __init__(self):
        super().__init__(1100, 820, "Partridge Puzzle", resizable=True)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)

        self.analytics_system = AnalyticsSystem(self.event_bus)
        self.puzzle_system = PuzzleSystem(self.world, self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)

        set_background_color(color.WHITE)
        self.event_bus.emit(EVENT_APP_LOADED, width=self.width, height=self.height)

    def on_resize(self, width: int, height: int):
        self.render_system.notify_resize(width, height)
        return super().on_resize(width, height)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button, modifiers=modifiers)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_RELEASE, x=x, y=y, button=button, modifiers=modifiers)

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        self.event_bus.emit(EVENT_MOUSE_MOVE, x=x, y=y, dx=dx, dy=dy)

    def on_mouse_drag(self, x: float, y: float, dx: float, dy: float, buttons: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_MOVE, x=x, y=y, dx=dx, dy=dy)

    def on_mouse_leave(self, x: float, y: float):
        self.event_bus.emit(EVENT_MOUSE_LEAVE, x=x, y=y)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def configure_logging() -> None:
    """Configure application-wide logging; PARTRIDGE_LOG_LEVEL overrides INFO."""
    logging.basicConfig(
        level=os.environ.get("PARTRIDGE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main():
    configure_logging()
    window = PartridgeWindow()
    run()


if __name__ == "__main__":
    main()

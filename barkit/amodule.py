"""Behaviour shared by every bar module: click, scroll and update commands."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable


class ScrollDirection(enum.Enum):
    NONE = "none"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class EventType(enum.Enum):
    BUTTON_PRESS = 1
    DOUBLE_BUTTON_PRESS = 2
    TRIPLE_BUTTON_PRESS = 3


@dataclass(frozen=True)
class ButtonEvent:
    """A mouse button press on a module."""

    button: int
    type: EventType = EventType.BUTTON_PRESS


@dataclass(frozen=True)
class ScrollEvent:
    """A scroll on a module; a direction of None means a smooth scroll by deltas."""

    direction: ScrollDirection | None = None
    delta_x: float = 0.0
    delta_y: float = 0.0


_BUTTON_SUFFIX = {1: "", 2: "-middle", 3: "-right", 8: "-backward", 9: "-forward"}
_PRESS_PREFIX = {
    EventType.BUTTON_PRESS: "on-click",
    EventType.DOUBLE_BUTTON_PRESS: "on-double-click",
    EventType.TRIPLE_BUTTON_PRESS: "on-triple-click",
}

EVENT_MAP: dict[tuple[int, EventType], str] = {
    (button, kind): prefix + suffix
    for button, suffix in _BUTTON_SUFFIX.items()
    for kind, prefix in _PRESS_PREFIX.items()
}


def _is_uint(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Module:
    """A bar module driven by its JSON configuration.

    Commands the configuration asks for are recorded in ``commands`` and handed
    to ``runner`` when one is set; callbacks in ``on_change`` are called
    whenever the module wants to be redrawn.
    """

    def __init__(
        self,
        config: Any,
        name: str,
        id: str = "",
        enable_click: bool = False,
        enable_scroll: bool = False,
    ) -> None:
        self.config: dict[str, Any] = config if isinstance(config, dict) else {}
        self.name = name
        self.id = id
        self.commands: list[str] = []
        self.runner: Callable[[str], None] | None = None
        self.on_change: list[Callable[[], None]] = []
        self._scrolled_x = 0.0
        self._scrolled_y = 0.0
        self.click_enabled = enable_click or any(
            isinstance(self.config.get(key), str) for key in EVENT_MAP.values()
        )
        self.scroll_enabled = (
            enable_scroll
            or isinstance(self.config.get("on-scroll-up"), str)
            or isinstance(self.config.get("on-scroll-down"), str)
        )

    def _run(self, command: str) -> None:
        self.commands.append(command)
        if self.runner is not None:
            self.runner(command)

    def _emit(self) -> None:
        for callback in list(self.on_change):
            callback()

    def update(self) -> None:
        """Issue the configured on-update command, if any."""
        command = self.config.get("on-update")
        if isinstance(command, str):
            self._run(command)

    def handle_toggle(self, event: ButtonEvent) -> bool:
        """Issue the command bound to the pressed button and request a redraw."""
        key = EVENT_MAP.get((event.button, event.type))
        if key is not None:
            command = self.config.get(key)
            if isinstance(command, str) and command:
                self._run(command)
        self._emit()
        return True

    def get_scroll_dir(self, event: ScrollEvent) -> ScrollDirection:
        """Resolve a scroll event to a direction, accumulating smooth deltas."""
        if event.direction is not None:
            return event.direction
        self._scrolled_y += event.delta_y
        self._scrolled_x += event.delta_x
        setting = self.config.get("smooth-scrolling-threshold")
        threshold = float(setting) if _is_number(setting) else 0.0

        if self._scrolled_y < -threshold:
            direction = ScrollDirection.UP
        elif self._scrolled_y > threshold:
            direction = ScrollDirection.DOWN
        elif self._scrolled_x > threshold:
            direction = ScrollDirection.RIGHT
        elif self._scrolled_x < -threshold:
            direction = ScrollDirection.LEFT
        else:
            direction = ScrollDirection.NONE

        if direction in (ScrollDirection.UP, ScrollDirection.DOWN):
            self._scrolled_y = 0.0
        elif direction in (ScrollDirection.LEFT, ScrollDirection.RIGHT):
            self._scrolled_x = 0.0
        return direction

    def handle_scroll(self, event: ScrollEvent) -> bool:
        """Issue the scroll command for the event's direction and request a redraw."""
        direction = self.get_scroll_dir(event)
        up = self.config.get("on-scroll-up")
        down = self.config.get("on-scroll-down")
        if direction is ScrollDirection.UP and isinstance(up, str):
            self._run(up)
        elif direction is ScrollDirection.DOWN and isinstance(down, str):
            self._run(down)
        self._emit()
        return True

    def tooltip_enabled(self) -> bool:
        value = self.config.get("tooltip")
        return value if isinstance(value, bool) else True
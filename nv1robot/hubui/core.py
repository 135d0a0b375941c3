"""Input events and the top-level user interface that owns the menus."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from .canvas import BinaryColor


class EventKey(enum.Enum):
    UP = "up"
    DOWN = "down"
    ENTER = "enter"


class EventKind(enum.Enum):
    NONE = "none"
    KEY_DOWN = "key_down"
    KEY_UP = "key_up"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    key: Optional[EventKey] = None

    def __post_init__(self) -> None:
        if (self.kind is EventKind.NONE) != (self.key is None):
            raise ValueError("a key event needs a key and an empty event must have none")

    @classmethod
    def none(cls) -> "Event":
        return cls(EventKind.NONE)

    @classmethod
    def key_down(cls, key: EventKey) -> "Event":
        return cls(EventKind.KEY_DOWN, key)

    @classmethod
    def key_up(cls, key: EventKey) -> "Event":
        return cls(EventKind.KEY_UP, key)


class HubUI:
    """Passes events to every menu, then redraws them all on a cleared display."""

    def __init__(self, display, menus: Iterable) -> None:
        self.display = display
        self.menus = list(menus)

    def update(self, event: Event):
        for menu in self.menus:
            menu.event(event)
        self.display.clear(BinaryColor.OFF)
        for menu in self.menus:
            menu.draw(self.display)
        return self.display
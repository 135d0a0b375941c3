"""Items shown in a list menu: labels, live values, buttons and sliders."""

from __future__ import annotations

import abc
import math
import struct
from dataclasses import dataclass
from typing import Any, Callable

from .canvas import BinaryColor, MonoFont, Point, Size
from .core import Event, EventKey


@dataclass(frozen=True)
class ElementInfo:
    selected: bool
    position: Point
    size: Size


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _format_number(value: Any) -> str:
    """Shortest decimal text of a number, floats treated as single precision."""
    if isinstance(value, bool):
        return str(value).lower()
    if not isinstance(value, float):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    target = _f32(value)
    for places in range(0, 60):
        text = f"{target:.{places}f}"
        if _f32(float(text)) == target:
            return text
    return repr(target)


def _format_value(value: Any) -> str:
    if isinstance(value, float) and math.isfinite(value):
        return f"{value:<4.2f}"
    if isinstance(value, str):
        return f"{value[:2]:<4}"
    return f"{_format_number(value)[:2] if isinstance(value, bool) else _format_number(value):<4}"


def centered_text_position(text: str, font: MonoFont, info: ElementInfo) -> Point:
    """Baseline position that centres ``text`` in the element's box."""
    return Point(
        info.position.x
        + info.size.width // 2
        - font.character_width * len(text) // 2,
        info.position.y + info.size.height // 2 + font.character_height // 4,
    )


class Element(abc.ABC):
    @abc.abstractmethod
    def draw(self, display, info: ElementInfo) -> None:
        """Draw the element inside the box described by ``info``."""

    @abc.abstractmethod
    def event(self, event: Event, info: ElementInfo) -> bool:
        """Handle an event; return True while the element holds the input focus."""


class Text(Element):
    def __init__(self, text: str, font: MonoFont) -> None:
        self.text = text
        self.font = font

    def draw(self, display, info: ElementInfo) -> None:
        position = centered_text_position(self.text, self.font, info)
        display.draw_text(self.text, position, self.font, BinaryColor.ON)

    def event(self, event: Event, info: ElementInfo) -> bool:
        return False


class Value(Element):
    """Shows ``title: value``; every event replaces the value with ``request(value)``."""

    def __init__(
        self, title: str, value: Any, request: Callable[[Any], Any], font: MonoFont
    ) -> None:
        self.title = title
        self.value = value
        self._request = request
        self.font = font

    def text(self) -> str:
        return f"{self.title}: {_format_value(self.value)}"

    def draw(self, display, info: ElementInfo) -> None:
        text = self.text()
        position = centered_text_position(text, self.font, info)
        display.draw_text(text, position, self.font, BinaryColor.ON)

    def event(self, event: Event, info: ElementInfo) -> bool:
        self.value = self._request(self.value)
        return False


class Button(Element):
    """Pressed while Enter is held on the selected button; reports that state to ``callback``."""

    def __init__(self, text: str, callback: Callable[[bool], None], font: MonoFont) -> None:
        self.text = text
        self.pressed = False
        self._callback = callback
        self.font = font

    def draw(self, display, info: ElementInfo) -> None:
        if self.pressed:
            display.draw_rectangle(info.position, info.size, BinaryColor.ON, fill=True, stroke=0)
            text_color = BinaryColor.OFF
        else:
            display.draw_rectangle(info.position, info.size, BinaryColor.ON, fill=False, stroke=1)
            text_color = BinaryColor.ON
        position = centered_text_position(self.text, self.font, info)
        display.draw_text(self.text, position, self.font, text_color)

    def event(self, event: Event, info: ElementInfo) -> bool:
        self.pressed = info.selected and event == Event.key_down(EventKey.ENTER)
        if info.selected:
            self._callback(self.pressed)
        return False


class Slider(Element):
    """A number changed by ``step`` with Up and Down after Enter has taken focus."""

    def __init__(
        self,
        value: Any,
        minimum: Any,
        maximum: Any,
        step: Any,
        callback: Callable[[Any], None],
        font: MonoFont,
    ) -> None:
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        self.step = step
        self.entering = False
        self._callback = callback
        self.font = font

    def _adjust(self, delta: Any) -> None:
        value = self.value + delta
        self.value = _f32(value) if isinstance(value, float) else value
        self._callback(self.value)

    def text(self) -> str:
        return _format_number(self.value)

    def draw(self, display, info: ElementInfo) -> None:
        text = self.text()
        position = centered_text_position(text, self.font, info)
        display.draw_text(text, position, self.font, BinaryColor.ON)

    def event(self, event: Event, info: ElementInfo) -> bool:
        if event == Event.key_down(EventKey.ENTER):
            self.entering = not self.entering
        elif event == Event.key_down(EventKey.UP):
            if self.entering and self.value < self.maximum:
                self._adjust(self.step)
        elif event == Event.key_down(EventKey.DOWN):
            if self.entering and self.value > self.minimum:
                self._adjust(-self.step)
        return self.entering
"""Menus shown on the hub display: a scrolling list of elements and a robot status view."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Iterable

from .canvas import BinaryColor, Point, Size, circle_center
from .core import Event, EventKey
from .elements import Element, ElementInfo

_WHEEL_INSET = 8
_WHEEL_HALF_LENGTH = 8
_WHEEL_STROKE = 8
_BODY_STROKE = 2


class Menu(abc.ABC):
    @abc.abstractmethod
    def draw(self, display) -> None:
        """Draw the menu on ``display``."""

    @abc.abstractmethod
    def event(self, event: Event) -> None:
        """Handle an input event."""


@dataclass(frozen=True)
class ListMenuOption:
    position: Point
    size: Size
    vertical_num: int
    element_margin: int
    cursor_line_len: int

    def __post_init__(self) -> None:
        if self.vertical_num <= 0:
            raise ValueError("vertical_num must be positive")


class ListMenu(Menu):
    """Shows ``vertical_num`` elements at a time with a cursor on the selected one.

    Only the selected element receives events. While it holds the input
    focus the cursor is drawn as a full frame and Up/Down do not move it.
    """

    def __init__(self, elements: Iterable[Element], option: ListMenuOption) -> None:
        self.option = option
        self.elements = list(elements)
        self.selected_element = 0
        self.scroll = 0
        self.entering_cursor = False

    def _row_height(self) -> int:
        return self.option.size.height // self.option.vertical_num

    def element_position(self, index: int) -> Point:
        return Point(
            self.option.position.x,
            self.option.position.y + self._row_height() * (index - self.scroll),
        )

    def element_size(self) -> Size:
        margin = self.option.element_margin
        return Size(
            self.option.size.width - margin * 2,
            self._row_height() - margin * 2,
        )

    def _info(self, index: int) -> ElementInfo:
        return ElementInfo(
            selected=index == self.selected_element,
            position=self.element_position(index),
            size=self.element_size(),
        )

    def draw(self, display) -> None:
        for index, element in enumerate(self.elements):
            element.draw(display, self._info(index))
        self._draw_cursor(display)

    def _draw_cursor(self, display) -> None:
        margin = self.option.element_margin
        position = self.element_position(self.selected_element) - Point(margin, margin)
        inner = self.element_size()
        size = Size(inner.width + margin * 2, inner.height + margin * 2)

        if self.entering_cursor:
            display.draw_rectangle(position, size, BinaryColor.ON, fill=False, stroke=1)
            return

        length = self.option.cursor_line_len
        right = position.x + size.width - 1
        bottom = position.y + size.height - 1
        corners = (
            (Point(position.x, position.y), 1, 1),
            (Point(right, position.y), -1, 1),
            (Point(position.x, bottom), 1, -1),
            (Point(right, bottom), -1, -1),
        )
        for corner, sx, sy in corners:
            display.draw_line(corner, Point(corner.x + sx * length, corner.y), BinaryColor.ON, 1)
            display.draw_line(corner, Point(corner.x, corner.y + sy * length), BinaryColor.ON, 1)

    def event(self, event: Event) -> None:
        entering = False
        if 0 <= self.selected_element < len(self.elements):
            element = self.elements[self.selected_element]
            entering = bool(element.event(event, self._info(self.selected_element)))

        self.entering_cursor = entering
        if entering:
            return

        if event == Event.key_down(EventKey.UP):
            if self.selected_element > 0:
                self.selected_element -= 1
            if self.selected_element < self.scroll:
                self.scroll -= 1
        elif event == Event.key_down(EventKey.DOWN):
            if self.selected_element < len(self.elements) - 1:
                self.selected_element += 1
            if self.selected_element >= self.option.vertical_num + self.scroll:
                self.scroll += 1


@dataclass(frozen=True)
class RobotStatusMenuOption:
    position: Point
    size: Size


class RobotStatusMenu(Menu):
    """Outline of the robot body with its four omni wheels."""

    def __init__(self, option: RobotStatusMenuOption) -> None:
        if min(option.size.width, option.size.height) // 2 < _WHEEL_INSET:
            raise ValueError("robot status area is too small")
        self.option = option

    def draw(self, display) -> None:
        diameter = min(self.option.size.width, self.option.size.height)
        display.draw_circle(self.option.position, diameter, BinaryColor.ON, _BODY_STROKE)
        center = circle_center(self.option.position, diameter)

        r = diameter // 2 - _WHEEL_INSET
        o = _WHEEL_HALF_LENGTH
        cx, cy = center.x, center.y
        wheels = (
            (Point(cx - r - o, cy - r + o), Point(cx - r + o, cy - r - o)),
            (Point(cx + r - o, cy - r - o), Point(cx + r + o, cy - r + o)),
            (Point(cx - r - o, cy + r - o), Point(cx - r + o, cy + r + o)),
            (Point(cx + r - o, cy + r + o), Point(cx + r + o, cy + r - o)),
        )
        for start, end in wheels:
            display.draw_line(start, end, BinaryColor.ON, _WHEEL_STROKE)

    def event(self, event: Event) -> None:
        return None
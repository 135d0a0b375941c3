"""A monochrome pixel canvas with the drawing primitives the hub display needs."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Iterator


class BinaryColor(enum.Enum):
    OFF = 0
    ON = 1


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class MonoFont:
    """A fixed-width font, described by the size of one character cell."""

    name: str
    character_width: int
    character_height: int

    @property
    def character_size(self) -> Size:
        return Size(self.character_width, self.character_height)


FONT_5X8 = MonoFont("5x8", 5, 8)
FONT_6X10 = MonoFont("6x10", 6, 10)


@dataclass(frozen=True)
class TextRun:
    """A piece of text placed on the canvas; ``position`` is its baseline start."""

    text: str
    position: Point
    font: MonoFont
    color: BinaryColor


def circle_center(top_left: Point, diameter: int) -> Point:
    """Centre pixel of a circle whose bounding box starts at ``top_left``."""
    offset = max(diameter - 1, 0) // 2
    return Point(top_left.x + offset, top_left.y + offset)


def _line_points(x0: int, y0: int, x1: int, y1: int) -> Iterator[tuple[int, int]]:
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


class Canvas:
    """A width x height grid of binary pixels.

    Drawing outside the grid is clipped. Text is not rasterised: each call to
    :meth:`draw_text` is recorded in :attr:`texts`. Outlines of rectangles and
    circles lie inside the shape.
    """

    def __init__(self, width: int = 128, height: int = 64) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas size must be positive")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)
        self.texts: list[TextRun] = []

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _put(self, x: int, y: int, color: BinaryColor) -> None:
        if self._inside(x, y):
            self._pixels[y * self.width + x] = color.value

    def clear(self, color: BinaryColor) -> None:
        self._pixels[:] = bytes([color.value]) * len(self._pixels)
        self.texts.clear()

    def set_pixel(self, point: Point, color: BinaryColor) -> None:
        self._put(point.x, point.y, color)

    def pixel(self, point: Point) -> BinaryColor:
        """Colour at ``point``; points outside the canvas read as OFF."""
        if not self._inside(point.x, point.y):
            return BinaryColor.OFF
        return BinaryColor(self._pixels[point.y * self.width + point.x])

    def draw_line(
        self, start: Point, end: Point, color: BinaryColor, stroke: int = 1
    ) -> None:
        if stroke <= 0:
            return
        horizontal = abs(end.x - start.x) >= abs(end.y - start.y)
        offsets = range(-((stroke - 1) // 2), stroke // 2 + 1)
        for x, y in _line_points(start.x, start.y, end.x, end.y):
            for offset in offsets:
                if horizontal:
                    self._put(x, y + offset, color)
                else:
                    self._put(x + offset, y, color)

    def draw_rectangle(
        self,
        position: Point,
        size: Size,
        color: BinaryColor,
        fill: bool = False,
        stroke: int = 1,
    ) -> None:
        x0, y0 = position.x, position.y
        x1, y1 = x0 + size.width, y0 + size.height
        for y in range(y0, y1):
            for x in range(x0, x1):
                on_border = (
                    x < x0 + stroke
                    or x >= x1 - stroke
                    or y < y0 + stroke
                    or y >= y1 - stroke
                )
                if fill or (stroke > 0 and on_border):
                    self._put(x, y, color)

    def draw_circle(
        self, top_left: Point, diameter: int, color: BinaryColor, stroke: int = 1
    ) -> None:
        if diameter <= 0 or stroke <= 0:
            return
        radius = diameter / 2.0
        inner = max(radius - stroke, 0.0)
        cx = top_left.x + radius
        cy = top_left.y + radius
        for y in range(top_left.y, top_left.y + diameter):
            for x in range(top_left.x, top_left.x + diameter):
                dist = math.hypot(x + 0.5 - cx, y + 0.5 - cy)
                if inner <= dist < radius:
                    self._put(x, y, color)

    def draw_text(
        self, text: str, position: Point, font: MonoFont, color: BinaryColor
    ) -> None:
        self.texts.append(TextRun(text, position, font, color))
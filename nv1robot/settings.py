"""Persistent robot settings and the flash region that holds them."""

from __future__ import annotations

import dataclasses
import enum
import math
from dataclasses import dataclass

from .constants import (
    DEFAULT_HAVE_BALL_THRESHOLD,
    DEFAULT_LINE_THRESHOLD,
    DEFAULT_OPENCV_GOAL_BLUE,
    DEFAULT_OPENCV_GOAL_YELLOW,
    DEFAULT_ROBOT_SPEED_MULTIPLIER,
    FLASH_SETTINGS_ADDRESS,
    FLASH_SETTINGS_SIZE,
    SETTINGS_BUFFER_SIZE,
)
from .messages import HSV
from .wire import Decoder, Encoder, WireError

_ERASED = 0xFF


class GoalColor(enum.IntEnum):
    BLUE = 0
    YELLOW = 1


def _write_hsv(enc: Encoder, color: HSV) -> None:
    for value in dataclasses.astuple(color):
        enc.write_u8(value)


def _read_hsv(dec: Decoder) -> HSV:
    return HSV(*(dec.read_u8() for _ in range(6)))


@dataclass
class Settings:
    line_threshold: float = DEFAULT_LINE_THRESHOLD
    have_ball_threshold: int = DEFAULT_HAVE_BALL_THRESHOLD
    opp_goal_color: GoalColor = GoalColor.BLUE
    opencv_goal_blue: HSV = DEFAULT_OPENCV_GOAL_BLUE
    opencv_goal_yellow: HSV = DEFAULT_OPENCV_GOAL_YELLOW
    robot_speed_multiplier: float = DEFAULT_ROBOT_SPEED_MULTIPLIER

    @classmethod
    def default(cls) -> "Settings":
        return cls()

    def opp_color(self) -> HSV:
        """Colour range of the goal to attack."""
        if self.opp_goal_color is GoalColor.BLUE:
            return self.opencv_goal_blue
        return self.opencv_goal_yellow

    def own_color(self) -> HSV:
        """Colour range of the goal to defend."""
        if self.opp_goal_color is GoalColor.BLUE:
            return self.opencv_goal_yellow
        return self.opencv_goal_blue

    def toggle_goal_color(self) -> None:
        self.opp_goal_color = (
            GoalColor.YELLOW if self.opp_goal_color is GoalColor.BLUE else GoalColor.BLUE
        )

    def to_bytes(self) -> bytes:
        enc = Encoder()
        enc.write_f32(self.line_threshold)
        enc.write_varint(self.have_ball_threshold)
        enc.write_varint(int(self.opp_goal_color))
        _write_hsv(enc, self.opencv_goal_blue)
        _write_hsv(enc, self.opencv_goal_yellow)
        enc.write_f32(self.robot_speed_multiplier)
        return enc.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Settings":
        """Decode settings; trailing bytes are ignored."""
        dec = Decoder(data)
        line_threshold = dec.read_f32()
        have_ball_threshold = dec.read_varint()
        if have_ball_threshold > 0xFFFF:
            raise WireError(f"have-ball threshold out of range: {have_ball_threshold}")
        tag = dec.read_varint()
        try:
            goal = GoalColor(tag)
        except ValueError as exc:
            raise WireError(f"invalid goal colour: {tag}") from exc
        blue = _read_hsv(dec)
        yellow = _read_hsv(dec)
        speed = dec.read_f32()
        return cls(line_threshold, have_ball_threshold, goal, blue, yellow, speed)


class FlashStore:
    """In-memory flash: bytes read back as 0xFF once erased, and only erased bytes may be programmed."""

    def __init__(self, size: int = FLASH_SETTINGS_ADDRESS + FLASH_SETTINGS_SIZE) -> None:
        self._memory = bytearray([_ERASED]) * size

    def _check_range(self, start: int, end: int) -> None:
        if start < 0 or end > len(self._memory) or start > end:
            raise ValueError(f"flash range {start:#x}..{end:#x} out of bounds")

    def read(self, address: int, length: int) -> bytes:
        self._check_range(address, address + length)
        return bytes(self._memory[address : address + length])

    def write(self, address: int, data: bytes) -> None:
        end = address + len(data)
        self._check_range(address, end)
        if any(byte != _ERASED for byte in self._memory[address:end]):
            raise ValueError("flash must be erased before it is written")
        self._memory[address:end] = data

    def erase(self, start: int, end: int) -> None:
        self._check_range(start, end)
        self._memory[start:end] = bytes([_ERASED]) * (end - start)


def flash_read(store: FlashStore) -> Settings:
    """Read the stored settings, falling back to the defaults if they do not decode."""
    buffer = store.read(FLASH_SETTINGS_ADDRESS, SETTINGS_BUFFER_SIZE)
    try:
        return Settings.from_bytes(buffer)
    except WireError:
        return Settings.default()


def flash_write(store: FlashStore, settings: Settings) -> None:
    """Erase the settings region and store ``settings`` in it."""
    data = settings.to_bytes()
    if len(data) > SETTINGS_BUFFER_SIZE:
        raise WireError("settings do not fit in the buffer")
    buffer = data + bytes(SETTINGS_BUFFER_SIZE - len(data))
    store.erase(FLASH_SETTINGS_ADDRESS, FLASH_SETTINGS_ADDRESS + FLASH_SETTINGS_SIZE)
    store.write(FLASH_SETTINGS_ADDRESS, buffer)


def validate_and_fix_settings(settings: Settings, store: FlashStore) -> bool:
    """Replace invalid values in place and save them; return whether anything was saved."""
    needs_save = False
    if math.isnan(settings.line_threshold):
        settings.line_threshold = DEFAULT_LINE_THRESHOLD
        needs_save = True
    if needs_save:
        flash_write(store, settings)
    return needs_save
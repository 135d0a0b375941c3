"""Ring of addressable RGB LEDs: colour scaling, PWM bit encoding and animation."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Optional, Sequence

from .constants import LED_COUNT, SPREAD_PATTERN

NEO_PIXEL_NUM = 32
_MAX_BRIGHTNESS = 45
_PAUSE_DELAY_MS = 30
_RUN_DELAY_MS = 100


def _f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _saturate_u8(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(min(max(value, 0.0), 255.0))


@dataclass(frozen=True)
class RGB:
    r: int = 0
    g: int = 0
    b: int = 0


BLACK = RGB(0, 0, 0)
WHITE = RGB(255, 255, 255)
GREEN = RGB(0, 255, 0)
RED = RGB(255, 0, 0)


@dataclass
class NeoPixelData:
    """State the LED ring shows."""

    jetson_connecting: bool = False
    pause: bool = False
    ball_dir: float = 0.0


class NeoPixelEncoder:
    """Turns colours into PWM duty values, one per bit, for the LED data line."""

    def __init__(self, max_duty: int, pwm_hz: int = 500_000, brightness: int = _MAX_BRIGHTNESS) -> None:
        self.one_duty = max_duty // 2
        self.zero_duty = int(_f32(max_duty * _f32(260.0e-6 * (pwm_hz // 1000))))
        self.brightness = _MAX_BRIGHTNESS
        self.set_brightness(brightness)

    def set_brightness(self, brightness: int) -> None:
        """Set brightness, capped at 45; lower values scale colours up."""
        self.brightness = min(brightness, _MAX_BRIGHTNESS)

    def scale(self, colors: Sequence[RGB]) -> tuple[RGB, ...]:
        """Scale each channel by tan(90 - brightness degrees), saturating at 255."""
        angle = _f32(_f32(_f32(90.0 - self.brightness) * _f32(math.pi)) / 180.0)
        factor = _f32(math.tan(angle))
        return tuple(
            RGB(
                _saturate_u8(_f32(c.r * factor)),
                _saturate_u8(_f32(c.g * factor)),
                _saturate_u8(_f32(c.b * factor)),
            )
            for c in colors
        )

    def encode(self, colors: Sequence[RGB]) -> list[int]:
        """Duty values for up to 32 LEDs: green, red, blue, most significant bit first.

        Slots for LEDs beyond ``colors`` hold zero duty.
        """
        if len(colors) > NEO_PIXEL_NUM:
            raise ValueError(f"at most {NEO_PIXEL_NUM} LEDs can be driven")
        duty: list[int] = []
        for color in colors:
            for channel in (color.g, color.r, color.b):
                duty.extend(
                    self.one_duty if channel & (0x80 >> bit) else self.zero_duty
                    for bit in range(8)
                )
        duty.extend([0] * (24 * NEO_PIXEL_NUM - len(duty)))
        return duty


def ball_led_index(ball_dir: float) -> int:
    """LED that points at the ball; values of LED_COUNT or more light nothing."""
    direction = -ball_dir + math.pi / 2.0
    direction = math.fmod(direction + 2.0 * math.pi, 2.0 * math.pi)
    position = direction / (2.0 * math.pi) * LED_COUNT
    if math.isnan(position) or position <= 0.0:
        return 0
    return int(position)


class RingAnimator:
    """Produces LED frames from :class:`NeoPixelData`.

    While paused a spinning pattern is sent (green when the Jetson is
    connected, red otherwise). While running, the ball direction is only
    written into the buffer; it is shown with the next paused frame.
    Sending a frame leaves the buffer black.
    """

    def __init__(self, encoder: Optional[NeoPixelEncoder] = None, led_count: int = LED_COUNT) -> None:
        self.encoder = encoder or NeoPixelEncoder(max_duty=180)
        self.led_count = led_count
        self.loop_count = 0
        self._buffer = [BLACK] * led_count

    @property
    def buffer(self) -> tuple[RGB, ...]:
        return tuple(self._buffer)

    def step(self, data: NeoPixelData) -> tuple[Optional[tuple[RGB, ...]], int]:
        """Advance one frame; return the colours to send (or None) and the delay in ms."""
        frame: Optional[tuple[RGB, ...]] = None
        if data.pause:
            color = GREEN if data.jetson_connecting else RED
            base = self.loop_count % self.led_count
            spread = SPREAD_PATTERN[self.loop_count % len(SPREAD_PATTERN)]
            for j in range(3):
                self._buffer[(base + spread * (j - 1)) % self.led_count] = color
            frame = self.encoder.scale(self._buffer)
            self._buffer = [BLACK] * self.led_count
            delay = _PAUSE_DELAY_MS
        else:
            index = ball_led_index(data.ball_dir)
            self._buffer = [WHITE if i == index else BLACK for i in range(self.led_count)]
            delay = _RUN_DELAY_MS
        self.loop_count = (self.loop_count + 1) % self.led_count
        return frame, delay
"""Line and IR ball sensor processing of the hub board."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .constants import (
    ADC_RESOLUTION,
    IR_SENSORS_COUNT,
    LINE_OVER_CENTER_THRESHOLD,
    LINE_SENSORS_COUNT,
)
from .vector import Vector2

_COUNTER_TIMEOUT_LIMIT = 100
_ADC_FULL_SCALE = 4096
_DEFAULT_LINE_THRESHOLD = 0.1


@dataclass(frozen=True)
class OnGround:
    """No line is under the robot."""


@dataclass(frozen=True)
class OnLine:
    """A line was first seen in direction ``first_angle``."""

    first_angle: float
    first_x: float
    first_y: float
    counter: int


@dataclass(frozen=True)
class OutOfLineOverCenter:
    """The robot has crossed the middle of the line it first saw."""

    first_angle: float
    first_x: float
    first_y: float
    counter: int


LineState = Union[OnGround, OnLine, OutOfLineOverCenter]


class LineProcessor:
    """Turns line detections into an escape vector pointing away from the line."""

    def __init__(self) -> None:
        self.state: LineState = OnGround()

    def process_line(
        self, line_vector: Optional[Vector2], threshold: float = 0.0
    ) -> Optional[Vector2]:
        state = self.state
        if isinstance(state, OnLine):
            return self._on_line(line_vector, state)
        if isinstance(state, OutOfLineOverCenter):
            return self._over_center(line_vector, state)
        return self._on_ground(line_vector)

    def _on_ground(self, line_vector: Optional[Vector2]) -> Optional[Vector2]:
        if line_vector is None:
            self.state = OnGround()
            return None
        self.state = OnLine(line_vector.angle(), line_vector.x, line_vector.y, 0)
        return -line_vector

    def _on_line(self, line_vector: Optional[Vector2], state: OnLine) -> Optional[Vector2]:
        if line_vector is not None:
            tolerance = LINE_OVER_CENTER_THRESHOLD / 2.0
            low = state.first_angle - tolerance
            high = state.first_angle + tolerance
            if not is_angle_in_range(line_vector.angle(), low, high):
                self.state = OutOfLineOverCenter(
                    state.first_angle, state.first_x, state.first_y, 0
                )
            else:
                self.state = OnLine(state.first_angle, state.first_x, state.first_y, 0)
            return -line_vector
        if state.counter > _COUNTER_TIMEOUT_LIMIT:
            self.state = OnGround()
            return None
        self.state = OnLine(state.first_angle, state.first_x, state.first_y, state.counter + 1)
        return -Vector2(state.first_x, state.first_y)

    def _over_center(
        self, line_vector: Optional[Vector2], state: OutOfLineOverCenter
    ) -> Optional[Vector2]:
        original = Vector2(state.first_x, state.first_y)
        if line_vector is None and state.counter > _COUNTER_TIMEOUT_LIMIT:
            self.state = OnGround()
            return None
        self.state = OutOfLineOverCenter(
            state.first_angle, state.first_x, state.first_y, state.counter + 1
        )
        return -original


@dataclass(frozen=True)
class SensorReadings:
    line_vector: Optional[Vector2]
    ir_angle: float
    ir_position: Vector2
    adc_have_ball: int
    adc_line_max: float
    adc_line: tuple[float, ...]


def multiplexer_levels(index: int) -> tuple[bool, bool, bool, bool]:
    """Levels of the select pins S0..S3 that choose multiplexer input ``index``."""
    return tuple(bool(index & (1 << bit)) for bit in range(4))  # type: ignore[return-value]


def generate_adc_vec(
    count: int, offset: float, one_angle: float, mul: float
) -> tuple[tuple[float, ...], tuple[float, ...]]:
    """Sine and cosine of the direction of each of ``count`` sensors on a ring."""
    angles = [i * one_angle + offset for i in range(count)]
    sin = tuple(math.sin(a) * mul for a in angles)
    cos = tuple(math.cos(a) * mul for a in angles)
    return sin, cos


def _div(numerator: float, denominator: float) -> float:
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def calculate_adc_vec(
    adc: Sequence[float],
    adc_sin: Sequence[float],
    adc_cos: Sequence[float],
    mul: float = 1.0,
) -> tuple[float, float, float]:
    """Weighted unit direction of the readings, and the largest reading."""
    max_adc = 0
    sum_x = 0.0
    sum_y = 0.0
    for value, s, c in zip(adc, adc_sin, adc_cos):
        if value > max_adc:
            max_adc = value
        sum_x += c * value
        sum_y += s * value
    count = len(adc)
    mean_x = _div(sum_x, count)
    mean_y = _div(sum_y, count)
    norm = math.sqrt(mean_x**2 + mean_y**2)
    return _div(mean_x, norm), _div(mean_y, norm), max_adc


def calculate_line_vec_with_threshold(
    adc: Sequence[float],
    adc_sin: Sequence[float],
    adc_cos: Sequence[float],
    threshold: float,
) -> Optional[Vector2]:
    """Unit direction of the sensors reading above ``threshold``, or None."""
    active = [(s, c) for value, s, c in zip(adc, adc_sin, adc_cos) if value > threshold]
    if not active:
        return None
    sum_x = sum(c for _, c in active)
    sum_y = sum(s for s, _ in active)
    norm = math.sqrt(sum_x**2 + sum_y**2)
    return Vector2(_div(sum_x, norm), _div(sum_y, norm))


def _normalize_angle(x: float) -> float:
    if not math.isfinite(x):
        return x
    while x > math.pi:
        x -= 2.0 * math.pi
    while x <= -math.pi:
        x += 2.0 * math.pi
    return x


def is_angle_in_range(angle: float, a: float, b: float) -> bool:
    """Whether ``angle`` lies on the arc from ``a`` to ``b``, all wrapped to (-pi, pi]."""
    a = _normalize_angle(a)
    b = _normalize_angle(b)
    angle = _normalize_angle(angle)
    if abs(b - a) <= math.pi:
        return a <= angle <= b
    return not (b <= angle <= a)


class SensorArray:
    """Geometry of the line ring and IR ring, and conversion of raw ADC samples."""

    def __init__(self) -> None:
        self.line_sin, self.line_cos = generate_adc_vec(
            LINE_SENSORS_COUNT,
            math.radians(90.0),
            -math.radians(360.0 / LINE_SENSORS_COUNT),
            1.0,
        )
        self.ir_sin, self.ir_cos = generate_adc_vec(
            IR_SENSORS_COUNT,
            math.radians(90.0),
            -math.radians(360.0 / IR_SENSORS_COUNT),
            1.0,
        )

    def process(
        self,
        adc_have_ball: int,
        adc_line: Sequence[int],
        adc_ir: Sequence[int],
    ) -> SensorReadings:
        """Convert raw samples of the ball sensor, the line ring and the IR ring."""
        if len(adc_line) != LINE_SENSORS_COUNT:
            raise ValueError(f"expected {LINE_SENSORS_COUNT} line samples, got {len(adc_line)}")
        if len(adc_ir) != IR_SENSORS_COUNT:
            raise ValueError(f"expected {IR_SENSORS_COUNT} IR samples, got {len(adc_ir)}")
        if any(not 0 <= value <= _ADC_FULL_SCALE for value in adc_ir):
            raise ValueError(f"IR samples must lie in 0..{_ADC_FULL_SCALE}")

        line = tuple(value / ADC_RESOLUTION for value in adc_line)
        ir = [(_ADC_FULL_SCALE - value) / ADC_RESOLUTION for value in adc_ir]

        line_vector = calculate_line_vec_with_threshold(
            line, self.line_sin, self.line_cos, _DEFAULT_LINE_THRESHOLD
        )
        ir_x, ir_y, _ = calculate_adc_vec(ir, self.ir_sin, self.ir_cos, 1.0)
        return SensorReadings(
            line_vector=line_vector,
            ir_angle=math.atan2(ir_y, ir_x),
            ir_position=Vector2(ir_x, ir_y),
            adc_have_ball=adc_have_ball,
            adc_line_max=max(line, default=0.0),
            adc_line=line,
        )
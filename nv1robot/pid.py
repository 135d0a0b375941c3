"""Proportional-integral-derivative controller with per-term limits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


def _apply_limit(limit: float, value: float) -> float:
    bound = abs(limit)
    return min(max(value, -bound), bound)


@dataclass(frozen=True)
class ControlOutput:
    """The terms of one controller step and their limited sum."""

    p: float
    i: float
    d: float
    output: float


class Pid:
    """PID controller.

    Each term is clamped to its own symmetric limit and the sum is clamped
    to ``output_limit``. Gains and term limits start at zero. The derivative
    acts on the measurement, not on the error, so a change of setpoint
    causes no derivative kick.
    """

    def __init__(self, setpoint: float = 0.0, output_limit: float = 0.0) -> None:
        self.setpoint = setpoint
        self.output_limit = output_limit
        self.kp = 0.0
        self.ki = 0.0
        self.kd = 0.0
        self.p_limit = 0.0
        self.i_limit = 0.0
        self.d_limit = 0.0
        self._integral = 0.0
        self._prev_measurement: Optional[float] = None

    def p(self, gain: float, limit: float) -> "Pid":
        self.kp = gain
        self.p_limit = limit
        return self

    def i(self, gain: float, limit: float) -> "Pid":
        self.ki = gain
        self.i_limit = limit
        return self

    def d(self, gain: float, limit: float) -> "Pid":
        self.kd = gain
        self.d_limit = limit
        return self

    def reset_integral(self) -> None:
        self._integral = 0.0

    def next_control_output(self, measurement: float) -> ControlOutput:
        error = self.setpoint - measurement
        p = _apply_limit(self.p_limit, error * self.kp)

        self._integral = _apply_limit(self.i_limit, self._integral + error * self.ki)

        change = 0.0 if self._prev_measurement is None else measurement - self._prev_measurement
        self._prev_measurement = measurement
        d = _apply_limit(self.d_limit, -change * self.kd)

        output = _apply_limit(self.output_limit, p + self._integral + d)
        return ControlOutput(p=p, i=self._integral, d=d, output=output)
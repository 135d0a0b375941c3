"""One cycle of the hub board's control loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .constants import LINE_SPEED_MULTIPLIER, LOOP_US
from .messages import (
    Ir,
    Movement,
    OpenCVConfig,
    Sensor,
    System,
    ToHub,
    ToJetson,
    ToMD,
)
from .motor_controller import MotorController
from .sensors import SensorArray, SensorReadings, calculate_line_vec_with_threshold
from .settings import Settings


@dataclass(frozen=True)
class LoopOutput:
    """Everything one loop cycle produces."""

    md: ToMD
    jetson: ToJetson
    ball_dir: float
    pause: bool
    value_line: float
    value_have_ball: int
    motors: tuple[float, float, float, float] = field(default=(0.0, 0.0, 0.0, 0.0))


def remaining_sleep_us(elapsed_us: int) -> int:
    """Microseconds to wait so that a cycle lasts ``LOOP_US``."""
    return LOOP_US - elapsed_us if LOOP_US > elapsed_us else 0


class HubLoop:
    """Combines sensor readings, the Jetson command and settings into outgoing messages."""

    def __init__(
        self,
        motor_controller: Optional[MotorController] = None,
        sensor_array: Optional[SensorArray] = None,
    ) -> None:
        self.motor_controller = motor_controller or MotorController()
        self.sensor_array = sensor_array or SensorArray()

    def step(
        self,
        settings: Settings,
        yaw: float,
        readings: SensorReadings,
        pause: bool,
        received: ToHub,
    ) -> LoopOutput:
        on_line = calculate_line_vec_with_threshold(
            readings.adc_line,
            self.sensor_array.line_sin,
            self.sensor_array.line_cos,
            settings.line_threshold,
        )
        escape = self.motor_controller.process_line(on_line, settings.line_threshold)

        if escape is not None:
            vel_x = escape.x * LINE_SPEED_MULTIPLIER
            vel_y = escape.y * LINE_SPEED_MULTIPLIER
        else:
            vel_x = received.vel.x * settings.robot_speed_multiplier
            vel_y = received.vel.y * settings.robot_speed_multiplier

        motors = self.motor_controller.calculate_motor_values(vel_x, vel_y, yaw)

        md = ToMD() if pause else ToMD(True, *motors)

        jetson = ToJetson(
            sys=System(pause=pause, shutdown=False, reboot=False),
            vel=Movement(received.vel.x, received.vel.y, yaw),
            sensor=Sensor(
                ir=Ir(readings.ir_position.x, readings.ir_position.y, 0.0),
                on_line=on_line is not None,
                have_ball=readings.adc_have_ball < settings.have_ball_threshold,
            ),
            config=OpenCVConfig(settings.opp_color(), settings.own_color()),
        )

        return LoopOutput(
            md=md,
            jetson=jetson,
            ball_dir=readings.ir_angle,
            pause=pause,
            value_line=readings.adc_line_max,
            value_have_ball=readings.adc_have_ball,
            motors=motors,
        )
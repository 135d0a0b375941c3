import pytest

from nv1robot.constants import (
    IR_SENSORS_COUNT,
    LINE_SENSORS_COUNT,
    LINE_SPEED_MULTIPLIER,
    LOOP_US,
)
from nv1robot.hub_loop import HubLoop, remaining_sleep_us
from nv1robot.messages import Movement, OpenCVConfig, ToHub, ToMD, decode_frame, encode_frame
from nv1robot.motor_controller import MotorController
from nv1robot.sensors import SensorArray, calculate_line_vec_with_threshold
from nv1robot.settings import Settings


def _readings(have_ball=1000, line_index=None):
    arr = SensorArray()
    line = [0] * LINE_SENSORS_COUNT
    if line_index is not None:
        line[line_index] = 4000
    ir = [4096] * IR_SENSORS_COUNT
    ir[2] = 0
    return arr, arr.process(have_ball, line, ir)


def test_remaining_sleep():
    assert remaining_sleep_us(200) == LOOP_US - 200
    assert remaining_sleep_us(LOOP_US) == 0
    assert remaining_sleep_us(LOOP_US + 5) == 0


def test_paused_sends_disabled_motor_command():
    _, readings = _readings()
    out = HubLoop().step(Settings(), 0.2, readings, True, ToHub(Movement(1.0, 0.5, 0.0)))
    assert out.md == ToMD()
    assert out.jetson.sys.pause is True
    assert out.pause is True


def test_follows_jetson_command_without_line():
    settings = Settings()
    _, readings = _readings()
    received = ToHub(Movement(0.4, -0.3, 0.0))
    yaw = 0.1
    out = HubLoop().step(settings, yaw, readings, False, received)
    expected = MotorController().calculate_motor_values(
        0.4 * settings.robot_speed_multiplier, -0.3 * settings.robot_speed_multiplier, yaw
    )
    assert out.md.enable is True
    assert (out.md.m1, out.md.m2, out.md.m3, out.md.m4) == pytest.approx(expected)
    assert out.jetson.sensor.on_line is False


def test_line_overrides_jetson_command():
    settings = Settings()
    arr, readings = _readings(line_index=3)
    out = HubLoop().step(settings, 0.0, readings, False, ToHub(Movement(1.0, 1.0, 0.0)))
    vec = calculate_line_vec_with_threshold(
        readings.adc_line, arr.line_sin, arr.line_cos, settings.line_threshold
    )
    reference = MotorController()
    escape = reference.process_line(vec, settings.line_threshold)
    expected = reference.calculate_motor_values(
        escape.x * LINE_SPEED_MULTIPLIER, escape.y * LINE_SPEED_MULTIPLIER, 0.0
    )
    assert out.motors == pytest.approx(expected)
    assert out.jetson.sensor.on_line is True


def test_jetson_status_fields():
    settings = Settings()
    _, readings = _readings(have_ball=settings.have_ball_threshold - 1)
    received = ToHub(Movement(0.25, 0.5, 3.0))
    out = HubLoop().step(settings, 0.7, readings, False, received)
    assert out.jetson.vel == Movement(0.25, 0.5, 0.7)
    assert out.jetson.sensor.have_ball is True
    assert out.jetson.sensor.ir.x == readings.ir_position.x
    assert out.jetson.sensor.ir.y == readings.ir_position.y
    assert out.jetson.sensor.ir.strength == 0.0
    assert out.ball_dir == readings.ir_angle
    assert out.value_line == readings.adc_line_max
    assert out.value_have_ball == readings.adc_have_ball


def test_have_ball_threshold_is_strict():
    settings = Settings()
    _, readings = _readings(have_ball=settings.have_ball_threshold)
    out = HubLoop().step(settings, 0.0, readings, False, ToHub())
    assert out.jetson.sensor.have_ball is False


def test_goal_colours_follow_settings():
    settings = Settings()
    _, readings = _readings()
    loop = HubLoop()
    before = loop.step(settings, 0.0, readings, False, ToHub()).jetson.config
    settings.toggle_goal_color()
    after = loop.step(settings, 0.0, readings, False, ToHub()).jetson.config
    assert before == OpenCVConfig(settings.own_color(), settings.opp_color())
    assert after == OpenCVConfig(before.own_color, before.opp_color)


def test_status_frame_round_trip():
    _, readings = _readings()
    out = HubLoop().step(Settings(), 0.5, readings, True, ToHub(Movement(0.5, 0.25, 0.0)))
    decoded = decode_frame(type(out.jetson), encode_frame(out.jetson))
    assert decoded.sys == out.jetson.sys
    assert decoded.config == out.jetson.config
    assert decoded.vel == out.jetson.vel
import math

import pytest

from nv1robot.constants import (
    DEFAULT_LINE_THRESHOLD,
    DEFAULT_OPENCV_GOAL_BLUE,
    DEFAULT_OPENCV_GOAL_YELLOW,
    FLASH_SETTINGS_ADDRESS,
    SETTINGS_BUFFER_SIZE,
)
from nv1robot.messages import HSV
from nv1robot.settings import (
    FlashStore,
    GoalColor,
    Settings,
    flash_read,
    flash_write,
    validate_and_fix_settings,
)
from nv1robot.wire import Encoder, WireError


def custom_settings():
    return Settings(
        line_threshold=0.25,
        have_ball_threshold=1200,
        opp_goal_color=GoalColor.YELLOW,
        opencv_goal_blue=HSV(1, 2, 3, 4, 5, 6),
        opencv_goal_yellow=HSV(10, 20, 30, 40, 50, 60),
        robot_speed_multiplier=2.5,
    )


def test_default_uses_constants():
    s = Settings.default()
    assert s.line_threshold == DEFAULT_LINE_THRESHOLD
    assert s.opp_goal_color is GoalColor.BLUE
    assert s.opencv_goal_blue == DEFAULT_OPENCV_GOAL_BLUE
    assert s.opencv_goal_yellow == DEFAULT_OPENCV_GOAL_YELLOW


def test_default_colours():
    s = Settings.default()
    assert s.opp_color() == DEFAULT_OPENCV_GOAL_BLUE
    assert s.own_color() == DEFAULT_OPENCV_GOAL_YELLOW


def test_toggle_swaps_goals():
    s = Settings.default()
    opp, own = s.opp_color(), s.own_color()
    s.toggle_goal_color()
    assert s.opp_goal_color is GoalColor.YELLOW
    assert (s.opp_color(), s.own_color()) == (own, opp)
    s.toggle_goal_color()
    assert s.opp_goal_color is GoalColor.BLUE


def test_bytes_round_trip():
    s = custom_settings()
    assert Settings.from_bytes(s.to_bytes()) == s


def test_from_bytes_ignores_trailing_bytes():
    s = custom_settings()
    assert Settings.from_bytes(s.to_bytes() + bytes(50)) == s


def test_default_round_trip_close():
    s = Settings.from_bytes(Settings.default().to_bytes())
    assert s.line_threshold == pytest.approx(DEFAULT_LINE_THRESHOLD)
    assert s.opp_color() == DEFAULT_OPENCV_GOAL_BLUE


def test_from_bytes_rejects_bad_goal_colour():
    data = bytearray(Settings(have_ball_threshold=100).to_bytes())
    data[5] = 7
    with pytest.raises(WireError):
        Settings.from_bytes(bytes(data))


def test_from_bytes_rejects_threshold_over_u16():
    enc = Encoder()
    enc.write_f32(0.5)
    enc.write_varint(70000)
    with pytest.raises(WireError):
        Settings.from_bytes(enc.getvalue())


def test_blank_flash_reads_default():
    assert flash_read(FlashStore()) == Settings.default()


def test_flash_write_then_read():
    store = FlashStore()
    s = custom_settings()
    flash_write(store, s)
    assert flash_read(store) == s


def test_flash_write_pads_buffer_with_zeros():
    store = FlashStore()
    s = custom_settings()
    flash_write(store, s)
    data = s.to_bytes()
    stored = store.read(FLASH_SETTINGS_ADDRESS, SETTINGS_BUFFER_SIZE)
    assert stored[: len(data)] == data
    assert stored[len(data):] == bytes(SETTINGS_BUFFER_SIZE - len(data))


def test_flash_write_overwrites_previous():
    store = FlashStore()
    flash_write(store, Settings(line_threshold=0.5))
    second = custom_settings()
    flash_write(store, second)
    assert flash_read(store) == second


def test_write_without_erase_raises():
    store = FlashStore()
    store.write(FLASH_SETTINGS_ADDRESS, b"\x00")
    with pytest.raises(ValueError):
        store.write(FLASH_SETTINGS_ADDRESS, b"\x01")


def test_store_bounds_checked():
    store = FlashStore(size=16)
    with pytest.raises(ValueError):
        store.read(10, 10)


def test_erase_restores_blank_bytes():
    store = FlashStore(size=32)
    store.write(4, b"\x01\x02\x03")
    store.erase(0, 32)
    assert store.read(0, 32) == FlashStore(size=32).read(0, 32)


def test_validate_fixes_nan_and_saves():
    store = FlashStore()
    s = Settings(line_threshold=math.nan)
    assert validate_and_fix_settings(s, store) is True
    assert s.line_threshold == DEFAULT_LINE_THRESHOLD
    assert flash_read(store).line_threshold == pytest.approx(DEFAULT_LINE_THRESHOLD)


def test_validate_leaves_valid_settings_alone():
    store = FlashStore()
    blank = store.read(FLASH_SETTINGS_ADDRESS, SETTINGS_BUFFER_SIZE)
    s = custom_settings()
    assert validate_and_fix_settings(s, store) is False
    assert s == custom_settings()
    assert store.read(FLASH_SETTINGS_ADDRESS, SETTINGS_BUFFER_SIZE) == blank
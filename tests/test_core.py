import pytest

from nv1robot.hubui.canvas import BinaryColor, Canvas, Point
from nv1robot.hubui.core import Event, EventKey, EventKind, HubUI


class _RecordingMenu:
    def __init__(self, name, log, pixel):
        self.name = name
        self.log = log
        self.pixel = pixel

    def event(self, event):
        self.log.append(("event", self.name, event))

    def draw(self, display):
        self.log.append(("draw", self.name))
        display.set_pixel(self.pixel, BinaryColor.ON)


def test_event_constructors():
    assert Event.key_down(EventKey.UP) == Event(EventKind.KEY_DOWN, EventKey.UP)
    assert Event.key_up(EventKey.ENTER) == Event(EventKind.KEY_UP, EventKey.ENTER)
    assert Event.none().key is None
    assert Event.key_down(EventKey.UP) != Event.key_up(EventKey.UP)


def test_event_validation():
    with pytest.raises(ValueError):
        Event(EventKind.KEY_DOWN)
    with pytest.raises(ValueError):
        Event(EventKind.NONE, EventKey.DOWN)


def test_update_sends_events_then_draws():
    log = []
    canvas = Canvas(8, 8)
    ui = HubUI(canvas, [_RecordingMenu("a", log, Point(0, 0)), _RecordingMenu("b", log, Point(1, 1))])
    event = Event.key_down(EventKey.DOWN)
    result = ui.update(event)
    assert result is canvas
    assert log == [
        ("event", "a", event),
        ("event", "b", event),
        ("draw", "a"),
        ("draw", "b"),
    ]


def test_update_clears_before_drawing():
    canvas = Canvas(8, 8)
    ui = HubUI(canvas, [_RecordingMenu("a", [], Point(2, 2))])
    canvas.set_pixel(Point(5, 5), BinaryColor.ON)
    ui.update(Event.none())
    assert canvas.pixel(Point(5, 5)) is BinaryColor.OFF
    assert canvas.pixel(Point(2, 2)) is BinaryColor.ON
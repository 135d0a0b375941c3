import pytest

from nv1robot.hubui.canvas import FONT_6X10, BinaryColor, Canvas, Point, Size, circle_center
from nv1robot.hubui.core import Event, EventKey
from nv1robot.hubui.elements import Element, Slider, Text
from nv1robot.hubui.menu import (
    ListMenu,
    ListMenuOption,
    Menu,
    RobotStatusMenu,
    RobotStatusMenuOption,
)


class Recorder(Element):
    def __init__(self):
        self.events = []

    def draw(self, display, info):
        display.draw_text("r", info.position, FONT_6X10, BinaryColor.ON)

    def event(self, event, info):
        self.events.append((event, info.selected))
        return False


def option(vertical_num=4):
    return ListMenuOption(
        position=Point(10, 10),
        size=Size(64, 48),
        vertical_num=vertical_num,
        element_margin=1,
        cursor_line_len=4,
    )


DOWN = Event.key_down(EventKey.DOWN)
UP = Event.key_down(EventKey.UP)
ENTER = Event.key_down(EventKey.ENTER)


def test_menu_is_abstract():
    with pytest.raises(TypeError):
        Menu()


def test_element_positions_are_spaced_by_row_height():
    opt = option()
    menu = ListMenu([Recorder() for _ in range(3)], opt)
    row = opt.size.height // opt.vertical_num
    assert menu.element_position(0) == opt.position
    assert menu.element_position(2).y - menu.element_position(1).y == row
    assert menu.element_position(1).x == opt.position.x


def test_element_size_leaves_margin():
    menu = ListMenu([Recorder()], option())
    size = menu.element_size()
    assert size.width == 62
    assert size.height == 10


def test_only_selected_element_receives_events():
    elements = [Recorder(), Recorder()]
    menu = ListMenu(elements, option())
    menu.event(DOWN)
    assert menu.selected_element == 1
    menu.event(Event.none())
    assert elements[0].events == [(DOWN, True)]
    assert elements[1].events == [(Event.none(), True)]


def test_up_at_top_stays_and_down_at_bottom_stays():
    menu = ListMenu([Recorder(), Recorder()], option())
    menu.event(UP)
    assert menu.selected_element == 0
    menu.event(DOWN)
    menu.event(DOWN)
    assert menu.selected_element == 1


def test_scrolls_when_selection_leaves_view():
    opt = option(vertical_num=2)
    menu = ListMenu([Recorder() for _ in range(3)], opt)
    menu.event(DOWN)
    assert menu.scroll == 0
    menu.event(DOWN)
    assert menu.scroll == 1
    assert menu.element_position(1) == opt.position
    menu.event(UP)
    menu.event(UP)
    assert menu.selected_element == 0
    assert menu.scroll == 0


def test_empty_menu_ignores_navigation():
    menu = ListMenu([], option())
    menu.event(DOWN)
    menu.event(UP)
    assert menu.selected_element == 0
    assert menu.entering_cursor is False


def test_focused_slider_blocks_navigation():
    values = []
    slider = Slider(5, 0, 10, 1, values.append, FONT_6X10)
    menu = ListMenu([slider, Recorder()], option())
    menu.event(ENTER)
    assert menu.entering_cursor is True
    menu.event(DOWN)
    assert menu.selected_element == 0
    assert slider.value == 4
    assert values == [4]
    menu.event(ENTER)
    assert menu.entering_cursor is False
    menu.event(DOWN)
    assert menu.selected_element == 1


def test_cursor_draws_corners_only_when_not_focused():
    opt = option()
    menu = ListMenu([Text("a", FONT_6X10), Text("b", FONT_6X10)], opt)
    canvas = Canvas()
    menu.draw(canvas)
    top_left = Point(opt.position.x - 1, opt.position.y - 1)
    top_middle = Point(opt.position.x + opt.size.width // 2, opt.position.y - 1)
    assert canvas.pixel(top_left) is BinaryColor.ON
    assert canvas.pixel(top_middle) is BinaryColor.OFF
    assert [run.text for run in canvas.texts] == ["a", "b"]


def test_cursor_draws_full_frame_when_focused():
    opt = option()
    slider = Slider(1, 0, 2, 1, lambda v: None, FONT_6X10)
    menu = ListMenu([slider], opt)
    menu.event(ENTER)
    canvas = Canvas()
    menu.draw(canvas)
    top_middle = Point(opt.position.x + opt.size.width // 2, opt.position.y - 1)
    assert canvas.pixel(top_middle) is BinaryColor.ON


def test_robot_status_draws_body_outline():
    opt = RobotStatusMenuOption(position=Point(2, 2), size=Size(56, 56))
    menu = RobotStatusMenu(opt)
    canvas = Canvas()
    menu.draw(canvas)
    top = Point(opt.position.x + opt.size.width // 2, opt.position.y)
    assert canvas.pixel(top) is BinaryColor.ON
    assert canvas.pixel(circle_center(opt.position, opt.size.width)) is BinaryColor.OFF


def test_robot_status_rejects_small_area():
    with pytest.raises(ValueError):
        RobotStatusMenu(RobotStatusMenuOption(position=Point(0, 0), size=Size(10, 40)))
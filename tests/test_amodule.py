import pytest

from barkit.amodule import ButtonEvent, EventType, Module, ScrollDirection, ScrollEvent


def test_click_runs_configured_command():
    module = Module({"on-click": "notify left"}, "test")
    assert module.click_enabled is True
    assert module.handle_toggle(ButtonEvent(1)) is True
    assert module.commands == ["notify left"]


def test_click_on_unbound_button_runs_nothing():
    module = Module({"on-click-right": "menu"}, "test")
    module.handle_toggle(ButtonEvent(2))
    assert module.commands == []
    module.handle_toggle(ButtonEvent(3))
    assert module.commands == ["menu"]


def test_double_click_binding():
    module = Module({"on-double-click": "twice"}, "test")
    module.handle_toggle(ButtonEvent(1))
    module.handle_toggle(ButtonEvent(1, EventType.DOUBLE_BUTTON_PRESS))
    assert module.commands == ["twice"]


def test_click_disabled_without_bindings():
    assert Module({}, "test").click_enabled is False
    assert Module({}, "test", enable_click=True).click_enabled is True


def test_runner_and_change_callbacks():
    seen = []
    redraws = []
    module = Module({"on-click-forward": "next"}, "test")
    module.runner = seen.append
    module.on_change.append(lambda: redraws.append(True))
    module.handle_toggle(ButtonEvent(9))
    assert seen == ["next"]
    assert redraws == [True]


def test_update_runs_on_update():
    module = Module({"on-update": "refresh"}, "test")
    module.update()
    module.update()
    assert module.commands == ["refresh", "refresh"]


@pytest.mark.parametrize(
    "direction",
    [ScrollDirection.UP, ScrollDirection.DOWN, ScrollDirection.LEFT, ScrollDirection.RIGHT],
)
def test_discrete_scroll_direction(direction):
    assert Module({}, "test").get_scroll_dir(ScrollEvent(direction)) is direction


def test_smooth_scroll_accumulates_past_threshold():
    module = Module({"smooth-scrolling-threshold": 1}, "test")
    assert module.get_scroll_dir(ScrollEvent(delta_y=0.6)) is ScrollDirection.NONE
    assert module.get_scroll_dir(ScrollEvent(delta_y=0.6)) is ScrollDirection.DOWN
    # distance was reset after reporting
    assert module.get_scroll_dir(ScrollEvent(delta_y=0.6)) is ScrollDirection.NONE


def test_smooth_scroll_horizontal_and_up():
    module = Module({}, "test")
    assert module.get_scroll_dir(ScrollEvent(delta_y=-0.1)) is ScrollDirection.UP
    assert module.get_scroll_dir(ScrollEvent(delta_x=0.1)) is ScrollDirection.RIGHT
    assert module.get_scroll_dir(ScrollEvent(delta_x=-0.1)) is ScrollDirection.LEFT
    assert module.get_scroll_dir(ScrollEvent()) is ScrollDirection.NONE


def test_handle_scroll_commands():
    module = Module({"on-scroll-up": "louder", "on-scroll-down": "quieter"}, "test")
    assert module.scroll_enabled is True
    module.handle_scroll(ScrollEvent(ScrollDirection.UP))
    module.handle_scroll(ScrollEvent(ScrollDirection.LEFT))
    module.handle_scroll(ScrollEvent(ScrollDirection.DOWN))
    assert module.commands == ["louder", "quieter"]


def test_tooltip_enabled():
    assert Module({}, "test").tooltip_enabled() is True
    assert Module({"tooltip": False}, "test").tooltip_enabled() is False
    assert Module({"tooltip": "no"}, "test").tooltip_enabled() is True
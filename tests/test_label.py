import pytest

from barkit.amodule import ButtonEvent
from barkit.label import ONCE_INTERVAL, Button, IconLabel, Label


def test_format_and_interval_defaults():
    label = Label({}, "clock", "", "{:%H}", 60)
    assert label.format == "{:%H}"
    assert label.default_format == "{:%H}"
    assert label.interval == 60


def test_format_and_interval_from_config():
    label = Label({"format": "X {}", "interval": 5}, "cpu", "", "{}", 60)
    assert label.format == "X {}"
    assert label.interval == 5


def test_interval_once():
    label = Label({"interval": "once"}, "cpu", "", "{}", 60)
    assert label.interval == ONCE_INTERVAL == 100000000


def test_id_class_and_lengths():
    label = Label({"max-length": 12, "min-length": 4}, "window", "main")
    assert "main" in label.style_classes
    assert label.max_width_chars == 12
    assert label.width_chars == 4
    assert label.ellipsize and label.single_line


def test_ellipsize_without_max_length():
    assert Label({}, "w", ellipsize=True).ellipsize is True
    assert Label({}, "w").ellipsize is False


def test_rotation_selects_alignment_axis():
    rotated = Label({"rotate": 90, "align": 0.2}, "w")
    assert rotated.angle == 90
    assert rotated.yalign == 0.2
    flat = Label({"align": 0.2}, "w")
    assert flat.xalign == 0.2


def test_format_alt_toggle():
    label = Label({"format-alt": "ALT", "format-alt-click": 1}, "w", "", "MAIN")
    assert label.click_enabled is True
    label.handle_toggle(ButtonEvent(1))
    assert label.format == "ALT"
    label.handle_toggle(ButtonEvent(3))
    assert label.format == "ALT"
    label.handle_toggle(ButtonEvent(1))
    assert label.format == "MAIN"


def test_get_icon_from_list():
    label = Label({"format-icons": ["low", "mid", "high"]}, "w")
    assert label.get_icon(0) == "low"
    assert label.get_icon(50) == "mid"
    assert label.get_icon(100) == "high"


def test_get_icon_from_mapping():
    icons = {"default": ["d0", "d1"], "charging": "chg", "muted": ["m0"]}
    label = Label({"format-icons": icons}, "w")
    assert label.get_icon(10, "charging") == "chg"
    assert label.get_icon(10, "unknown") == "d0"
    assert label.get_icon(10) == "d0"
    assert label.get_icon(10, ["", "nothing", "muted", "charging"]) == "m0"


def test_get_icon_plain_string_and_missing():
    assert Label({"format-icons": "only"}, "w").get_icon(42) == "only"
    assert Label({}, "w").get_icon(42) == ""
    assert Label({"format-icons": []}, "w").get_icon(42) == ""


def test_button_rejects_empty_icon_list():
    button = Button({"format-icons": {"default": []}}, "w")
    with pytest.raises(ValueError):
        button.get_icon(10)
    assert Button({"format-icons": ["a"]}, "w").get_icon(10) == "a"


def test_get_state_lesser():
    label = Label({"states": {"warning": 30, "critical": 15, "bad": "x"}}, "battery")
    assert label.get_state(10, True) == "critical"
    assert "critical" in label.style_classes
    assert label.get_state(20, True) == "warning"
    assert "critical" not in label.style_classes
    assert "warning" in label.style_classes
    assert label.get_state(50, True) == ""
    assert not {"warning", "critical"} & label.style_classes


def test_get_state_greater():
    label = Label({"states": {"good": 80, "ok": 40}}, "cpu")
    assert label.get_state(90) == "good"
    assert label.get_state(50) == "ok"
    assert label.get_state(10) == ""
    assert Label({}, "cpu").get_state(10) == ""


def test_button_sensitivity():
    assert Button({}, "w").sensitive is False
    assert Button({"on-click-right": "menu"}, "w").sensitive is True
    assert Button({}, "w", enable_click=True).sensitive is True


def test_icon_label_visibility():
    hidden = IconLabel({}, "w")
    assert hidden.icon_enabled() is False
    hidden.update()
    assert hidden.image_visible is False
    shown = IconLabel({"icon": True}, "w")
    shown.update()
    assert shown.image_visible is True


def test_update_runs_on_update():
    label = Label({"on-update": "hook"}, "w")
    label.update()
    assert label.commands == ["hook"]
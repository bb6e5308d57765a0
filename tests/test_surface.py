from types import SimpleNamespace

from barkit.surface import HORIZONTAL_ANCHOR, VERTICAL_ANCHOR, Anchor, LayerSurface


def margins(top=0, right=0, bottom=0, left=0):
    return SimpleNamespace(top=top, right=right, bottom=bottom, left=left)


def test_default_anchor_is_top() -> None:
    surface = LayerSurface("DP-1")
    assert surface.anchor == HORIZONTAL_ANCHOR | Anchor.TOP
    assert surface.vertical is False


def test_position_left_is_vertical() -> None:
    surface = LayerSurface()
    assert surface.set_position("left") == VERTICAL_ANCHOR | Anchor.LEFT
    assert surface.vertical is True


def test_position_bottom() -> None:
    surface = LayerSurface()
    surface.set_position("bottom")
    assert surface.anchor == HORIZONTAL_ANCHOR | Anchor.BOTTOM


def test_exclusive_zone_top_adds_bottom_margin() -> None:
    surface = LayerSurface()
    surface.set_size(0, 30)
    surface.set_margins(margins(5, 2, 7, 1))
    assert surface.exclusive_zone(True) == 30 + 7


def test_exclusive_zone_bottom_adds_top_margin() -> None:
    surface = LayerSurface()
    surface.set_position("bottom")
    surface.set_size(0, 30)
    surface.set_margins(margins(5, 2, 7, 1))
    assert surface.exclusive_zone(True) == 30 + 5


def test_exclusive_zone_left_adds_right_margin() -> None:
    surface = LayerSurface()
    surface.set_position("left")
    surface.set_size(40, 0)
    surface.set_margins(margins(5, 2, 7, 1))
    assert surface.exclusive_zone(True) == 40 + 2


def test_exclusive_zone_disabled() -> None:
    surface = LayerSurface()
    surface.set_size(0, 30)
    assert surface.exclusive_zone(False) == 0
    assert surface.exclusive is False


def test_surface_size_horizontal() -> None:
    surface = LayerSurface()
    surface.set_margins(margins(left=3, right=4))
    assert surface.surface_size(0, 0) == (0, 1)
    assert surface.surface_size(100, 20) == (100 + 3 + 4, 20)


def test_surface_size_vertical() -> None:
    surface = LayerSurface()
    surface.set_position("right")
    surface.set_margins(margins(top=5, bottom=7))
    assert surface.surface_size(0, 20) == (1, 20 + 5 + 7)


def test_configure_reports_change() -> None:
    surface = LayerSurface()
    surface.set_size(0, 30)
    assert surface.configure(1920, 30) is True
    assert surface.width == 1920
    assert surface.configure(1920, 30) is False
    assert surface.configured_width == 0


def test_set_layer() -> None:
    surface = LayerSurface()
    assert surface.set_layer("top") == "top"
    assert surface.set_layer("overlay") == "overlay"
    assert surface.set_layer("bogus") == "bottom"
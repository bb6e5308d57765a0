"""Bar modes, layers and margins read from the bar configuration."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, replace
from typing import Any

log = logging.getLogger(__name__)

MODE_DEFAULT = "default"
MODE_INVISIBLE = "invisible"

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_ALT_CLICK_BUTTONS = {
    "click-right": 3,
    "click-middle": 2,
    "click-backward": 8,
    "click-forward": 9,
}


class BarLayer(enum.Enum):
    BOTTOM = "bottom"
    TOP = "top"
    OVERLAY = "overlay"


@dataclass(frozen=True)
class BarMode:
    """How the bar sits on the screen in one mode."""

    layer: BarLayer = BarLayer.BOTTOM
    exclusive: bool = True
    passthrough: bool = False
    visible: bool = True


@dataclass(frozen=True)
class BarMargins:
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


PRESET_MODES: dict[str, BarMode] = {
    "default": BarMode(BarLayer.BOTTOM, exclusive=True, passthrough=False, visible=True),
    "dock": BarMode(BarLayer.BOTTOM, exclusive=True, passthrough=False, visible=True),
    "hide": BarMode(BarLayer.TOP, exclusive=False, passthrough=False, visible=True),
    "invisible": BarMode(BarLayer.BOTTOM, exclusive=False, passthrough=True, visible=False),
    "overlay": BarMode(BarLayer.TOP, exclusive=False, passthrough=True, visible=True),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _stoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid integer: {text!r}")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def parse_layer(value: Any, default: BarLayer = BarLayer.BOTTOM) -> BarLayer:
    """Return the layer named by value, or default if it names none."""
    if isinstance(value, str):
        for layer in BarLayer:
            if layer.value == value:
                return layer
    return default


def parse_mode(value: Any, base: BarMode | None = None) -> BarMode:
    """Return base with the options value sets; options of the wrong type are ignored."""
    base = base if base is not None else BarMode()
    if not isinstance(value, dict):
        return base
    changes: dict[str, Any] = {}
    if isinstance(value.get("layer"), str):
        changes["layer"] = parse_layer(value["layer"], base.layer)
    for key in ("exclusive", "passthrough", "visible"):
        if isinstance(value.get(key), bool):
            changes[key] = value[key]
    return replace(base, **changes)


def parse_modes(value: Any) -> dict[str, BarMode]:
    """Return the preset modes updated and extended by a "modes" object."""
    modes = dict(PRESET_MODES)
    if isinstance(value, dict):
        for name, mode in value.items():
            modes[str(name)] = parse_mode(mode, modes.get(str(name)))
    return modes


def parse_margins(config: Any) -> BarMargins:
    """Read margin-* integers, or a CSS-like "margin" string, or a single margin."""
    config = config if isinstance(config, dict) else {}
    sides = ("margin-top", "margin-right", "margin-bottom", "margin-left")
    if any(_is_int(config.get(key)) for key in sides):
        top, right, bottom, left = (
            config[key] if _is_int(config.get(key)) else 0 for key in sides
        )
        return BarMargins(top, right, bottom, left)

    margin = config.get("margin")
    if isinstance(margin, str):
        parts = margin.split()
        try:
            if len(parts) == 1:
                gaps = _stoi(parts[0])
                return BarMargins(gaps, gaps, gaps, gaps)
            if len(parts) == 2:
                vertical = _stoi(parts[0])
                horizontal = _stoi(parts[1])
                return BarMargins(vertical, horizontal, vertical, horizontal)
            if len(parts) == 3:
                horizontal = _stoi(parts[1])
                return BarMargins(_stoi(parts[0]), horizontal, _stoi(parts[2]), horizontal)
            if len(parts) == 4:
                top, right, bottom, left = (_stoi(part) for part in parts)
                return BarMargins(top, right, bottom, left)
        except ValueError:
            log.warning("Invalid margins: %s", margin)
        return BarMargins()

    if _is_int(margin):
        return BarMargins(margin, margin, margin, margin)
    return BarMargins()


def setup_alt_format_key(config: dict[str, Any], module_name: str) -> dict[str, Any]:
    """Turn a module's format-alt-click name into a button number, in place."""
    module = config.get(module_name)
    if isinstance(module, dict) and "format-alt" in module:
        click = module.get("format-alt-click")
        if isinstance(click, str):
            module["format-alt-click"] = _ALT_CLICK_BUTTONS.get(click, 1)
        else:
            module["format-alt-click"] = 1
    return config


def setup_alt_format_key_list(config: dict[str, Any], list_name: str) -> dict[str, Any]:
    """Apply setup_alt_format_key to every module named in a module list."""
    names = config.get(list_name)
    if isinstance(names, list):
        for name in names:
            if isinstance(name, str):
                setup_alt_format_key(config, name)
    return config
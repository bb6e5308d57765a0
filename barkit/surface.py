"""Geometry of the layer surface that holds a bar."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

log = logging.getLogger(__name__)

MIN_HEIGHT_MSG = "Requested height: %s is less than the minimum height: %s required by the modules"
MIN_WIDTH_MSG = "Requested width: %s is less than the minimum width: %s required by the modules"
BAR_SIZE_MSG = "Bar configured (width: %s, height: %s) for output: %s"


class Anchor(enum.IntFlag):
    TOP = 1
    BOTTOM = 2
    LEFT = 4
    RIGHT = 8


VERTICAL_ANCHOR = Anchor.TOP | Anchor.BOTTOM
HORIZONTAL_ANCHOR = Anchor.LEFT | Anchor.RIGHT


@dataclass
class _Margins:
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


class LayerSurface:
    """Anchoring, size, margins and exclusive zone of a bar on one output."""

    def __init__(self, output_name: str = "") -> None:
        self.output_name = output_name
        self.configured_width = 0
        self.configured_height = 0
        self.width = 0
        self.height = 0
        self.anchor = HORIZONTAL_ANCHOR | Anchor.TOP
        self.vertical = False
        self.exclusive = True
        self.margins: Any = _Margins()
        self.layer = "bottom"

    def set_position(self, position: str) -> Anchor:
        """Anchor the surface to the edge named by position; default is top."""
        anchors = {
            "bottom": HORIZONTAL_ANCHOR | Anchor.BOTTOM,
            "left": VERTICAL_ANCHOR | Anchor.LEFT,
            "right": VERTICAL_ANCHOR | Anchor.RIGHT,
        }
        self.anchor = anchors.get(position, HORIZONTAL_ANCHOR | Anchor.TOP)
        self.vertical = position in ("left", "right")
        return self.anchor

    def set_size(self, width: int, height: int) -> None:
        self.configured_width = self.width = width
        self.configured_height = self.height = height

    def set_margins(self, margins: Any) -> None:
        """Store margins given as an object with top, right, bottom and left."""
        self.margins = margins

    def set_layer(self, layer: Any) -> str:
        """Select top or overlay by name; anything else is the bottom layer."""
        for candidate in (layer, getattr(layer, "value", None), getattr(layer, "name", None)):
            if isinstance(candidate, str) and candidate.lower() in ("top", "overlay"):
                self.layer = candidate.lower()
                return self.layer
        self.layer = "bottom"
        return self.layer

    def _is_vertical_anchor(self) -> bool:
        return (self.anchor & VERTICAL_ANCHOR) == VERTICAL_ANCHOR

    def exclusive_zone(self, enable: bool) -> int:
        """Record whether the bar reserves space and return the size it reserves."""
        self.exclusive = enable
        zone = 0
        if enable:
            m = self.margins
            if self._is_vertical_anchor():
                zone = self.width + (m.right if self.anchor & Anchor.LEFT else m.left)
            else:
                zone = self.height + (m.bottom if self.anchor & Anchor.TOP else m.top)
        log.debug("Set exclusive zone %s for output %s", zone, self.output_name)
        return zone

    def surface_size(self, width: int, height: int) -> tuple[int, int]:
        """Return the size to request, margins added on the stretched axis."""
        m = self.margins
        if self._is_vertical_anchor():
            width = width if width > 0 else 1
            if height > 1:
                height += m.top + m.bottom
        else:
            height = height if height > 0 else 1
            if width > 1:
                width += m.right + m.left
        log.debug("Set surface size %sx%s for output %s", width, height, self.output_name)
        return width, height

    def configure(self, width: int, height: int) -> bool:
        """Apply a size from the compositor; return whether it changed."""
        if width == self.width and height == self.height:
            return False
        self.width = width
        self.height = height
        log.info(
            BAR_SIZE_MSG,
            "auto" if width == 1 else width,
            "auto" if height == 1 else height,
            self.output_name,
        )
        return True
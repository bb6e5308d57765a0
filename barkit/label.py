"""Text modules: a label, a clickable button and a label with an icon."""

from __future__ import annotations

from typing import Any, Sequence

from barkit.amodule import ButtonEvent, Module, _is_number, _is_uint

ONCE_INTERVAL = 100000000

_CLICK_KEYS = (
    "on-click",
    "on-click-middle",
    "on-click-backward",
    "on-click-forward",
    "on-click-right",
    "format-alt",
)


class Label(Module):
    """A module that shows formatted text and picks icons and states from its config."""

    def __init__(
        self,
        config: Any,
        name: str,
        id: str = "",
        format: str = "{}",
        interval: int = 0,
        ellipsize: bool = False,
        enable_click: bool = False,
        enable_scroll: bool = False,
    ) -> None:
        config = config if isinstance(config, dict) else {}
        super().__init__(
            config,
            name,
            id,
            isinstance(config.get("format-alt"), str) or enable_click,
            enable_scroll,
        )
        cfg = self.config
        self.format = cfg["format"] if isinstance(cfg.get("format"), str) else format
        if cfg.get("interval") == "once":
            self.interval = ONCE_INTERVAL
        elif _is_uint(cfg.get("interval")):
            self.interval = cfg["interval"]
        else:
            self.interval = interval
        self.default_format = self.format
        self.alt = False

        self.text = ""
        self.visible = True
        self.style_classes: set[str] = set()
        if id:
            self.style_classes.add(id)
        self.max_width_chars = -1
        self.width_chars = -1
        self.ellipsize = False
        self.single_line = False
        self.angle = 0
        self.xalign = 0.5
        self.yalign = 0.5

        if _is_uint(cfg.get("max-length")):
            self.max_width_chars = cfg["max-length"]
            self.ellipsize = True
            self.single_line = True
        elif ellipsize and self.max_width_chars == -1:
            self.ellipsize = True
            self.single_line = True

        if _is_uint(cfg.get("min-length")):
            self.width_chars = cfg["min-length"]

        if _is_uint(cfg.get("rotate")):
            self.angle = cfg["rotate"]

        if _is_number(cfg.get("align")):
            align = float(cfg["align"])
            if self.angle in (90, 270):
                self.yalign = align
            else:
                self.xalign = align

    def update(self) -> None:
        super().update()

    def _select_icons(self, alt: str | Sequence[str]) -> Any:
        icons = self.config.get("format-icons")
        if isinstance(icons, dict):
            alts = [alt] if isinstance(alt, str) else list(alt)
            key = next(
                (a for a in alts if a and isinstance(icons.get(a), (str, list))),
                "default",
            )
            icons = icons.get(key)
        return icons

    def get_icon(self, percentage: int, alt: str | Sequence[str] = "", max: int = 0) -> str:
        """Pick the icon for a percentage, preferring the first matching alternative."""
        icons = self._select_icons(alt)
        if isinstance(icons, list) and icons:
            step = (max or 100) // len(icons)
            index = percentage // step if step else len(icons) - 1
            icons = icons[min(index, len(icons) - 1)]
        return icons if isinstance(icons, str) else ""

    def get_state(self, value: int, lesser: bool = False) -> str:
        """Return the configured state that value falls in and mark it as a style class."""
        states_config = self.config.get("states")
        if not isinstance(states_config, dict):
            return ""
        states = [
            (name, threshold)
            for name, threshold in states_config.items()
            if _is_uint(threshold)
        ]
        states.sort(key=lambda item: item[1], reverse=not lesser)
        valid = ""
        for name, threshold in states:
            matches = value <= threshold if lesser else value >= threshold
            if matches and not valid:
                self.style_classes.add(name)
                valid = name
            else:
                self.style_classes.discard(name)
        return valid

    def handle_toggle(self, event: ButtonEvent) -> bool:
        """Switch between format and format-alt on the configured button."""
        click = self.config.get("format-alt-click")
        if _is_uint(click) and event.button == click:
            self.alt = not self.alt
            alt_format = self.config.get("format-alt")
            if self.alt and isinstance(alt_format, str):
                self.format = alt_format
            else:
                self.format = self.default_format
        return super().handle_toggle(event)


class Button(Label):
    """A label inside a button; the button is insensitive unless clicks do something."""

    def __init__(
        self,
        config: Any,
        name: str,
        id: str = "",
        format: str = "{}",
        interval: int = 0,
        ellipsize: bool = False,
        enable_click: bool = False,
        enable_scroll: bool = False,
    ) -> None:
        super().__init__(config, name, id, format, interval, ellipsize, enable_click, enable_scroll)
        self.sensitive = enable_click or any(
            isinstance(self.config.get(key), str) for key in _CLICK_KEYS
        )

    def get_icon(self, percentage: int, alt: str | Sequence[str] = "", max: int = 0) -> str:
        """Like Label.get_icon, but an empty icon list is a configuration error."""
        if self._select_icons(alt) == []:
            raise ValueError("format-icons list is empty")
        return super().get_icon(percentage, alt, max)


class IconLabel(Label):
    """A label with an image beside it, shown only when the config enables icons."""

    def __init__(
        self,
        config: Any,
        name: str,
        id: str = "",
        format: str = "{}",
        interval: int = 0,
        ellipsize: bool = False,
        enable_click: bool = False,
        enable_scroll: bool = False,
    ) -> None:
        super().__init__(config, name, id, format, interval, ellipsize, enable_click, enable_scroll)
        self.spacing = 8
        self.image_visible = True

    def update(self) -> None:
        self.image_visible = self.image_visible and self.icon_enabled()
        super().update()

    def icon_enabled(self) -> bool:
        value = self.config.get("icon")
        return value if isinstance(value, bool) else False
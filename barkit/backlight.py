"""Screen backlight devices and the module that shows their brightness."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable

from barkit.label import Button

log = logging.getLogger(__name__)

DEFAULT_ROOT = "/sys/class/backlight"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class BacklightDevice:
    """Brightness and power state of one backlight."""

    name: str
    actual: int = 0
    max: int = 0
    powered: bool = True


def _stoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid integer attribute: {text!r}")
    return int(match.group(1))


def best_device(
    devices: Iterable[BacklightDevice], preferred_device: str = ""
) -> BacklightDevice | None:
    """Return the preferred device, else the first with the highest max brightness."""
    devices = list(devices)
    for device in devices:
        if device.name == preferred_device:
            return device
    best: BacklightDevice | None = None
    for device in devices:
        if best is None or best.max < device.max:
            best = device
    return best


def upsert_device(
    devices: list[BacklightDevice],
    name: str,
    actual: str | None = None,
    max: str | None = None,
    power: str | None = None,
) -> BacklightDevice:
    """Update the named device from raw attribute values, adding it if new."""
    for device in devices:
        if device.name == name:
            if actual is not None:
                device.actual = _stoi(actual)
            if max is not None:
                device.max = _stoi(max)
            if power is not None:
                device.powered = _stoi(power) == 0
            return device
    device = BacklightDevice(
        name,
        0 if actual is None else _stoi(actual),
        0 if max is None else _stoi(max),
        True if power is None else _stoi(power) == 0,
    )
    devices.append(device)
    return device


def _attribute(directory: Path, name: str) -> str | None:
    try:
        return (directory / name).read_text(encoding="utf-8", errors="replace").rstrip("\n")
    except OSError:
        return None


def enumerate_devices(
    devices: list[BacklightDevice], root: str | Path = DEFAULT_ROOT
) -> list[BacklightDevice]:
    """Scan a backlight class directory and upsert every device found."""
    try:
        entries = sorted(Path(root).iterdir())
    except OSError:
        return devices
    for entry in entries:
        if not entry.is_dir():
            continue
        name = entry.name
        actual_attr = "brightness" if name.startswith("amdgpu_bl") else "actual_brightness"
        upsert_device(
            devices,
            name,
            _attribute(entry, actual_attr),
            _attribute(entry, "max_brightness"),
            _attribute(entry, "bl_power"),
        )
    return devices


def _percent(device: BacklightDevice) -> int:
    if device.max == 0:
        return 100
    value = device.actual * 100.0 / device.max
    return (int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)) & 0xFF


class Backlight(Button):
    """Shows the brightness of the preferred or brightest backlight."""

    def __init__(self, id: str, config: Any, root: str | Path = DEFAULT_ROOT) -> None:
        super().__init__(config, "backlight", id, "{percent}%", 2)
        device = self.config.get("device")
        self.preferred_device = device if isinstance(device, str) else ""
        self.root = Path(root)
        self.devices: list[BacklightDevice] = enumerate_devices([], self.root)
        if not self.devices:
            raise RuntimeError("No backlight found")
        self._previous_best: BacklightDevice | None = None
        self._previous_format = ""
        self._emit()

    def refresh(self) -> None:
        """Rescan the devices and request a redraw."""
        devices = [replace(device) for device in self.devices]
        self.devices = enumerate_devices(devices, self.root)
        self._emit()

    def update(self) -> None:
        best = best_device(self.devices, self.preferred_device)
        if best is not None:
            if (
                self._previous_best is not None
                and self._previous_best == best
                and self._previous_format
                and self._previous_format == self.format
            ):
                return
            if best.powered:
                self.visible = True
                percent = _percent(best)
                self.text = self.format.format(
                    percent=str(percent), icon=self.get_icon(percent)
                )
                self.get_state(percent)
            else:
                self.visible = False
        else:
            if self._previous_best is None:
                return
            self.text = ""
        self._previous_best = None if best is None else replace(best)
        self._previous_format = self.format
        super().update()
"""The battery module: finds power-supply batteries and shows their state."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from barkit.battery_info import BatteryInfo, adapter_status, compute_infos, read_battery
from barkit.label import Button

log = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "/sys/class/power_supply/"


def _first_token(path: Path) -> str:
    try:
        tokens = path.read_text(encoding="utf-8", errors="replace").split()
    except OSError:
        return ""
    return tokens[0] if tokens else ""


def _css_status(status: str) -> str:
    return "".join("-" if ch == " " else ch.lower() for ch in status)


class Battery(Button):
    """Shows the combined capacity, status and remaining time of the batteries."""

    def __init__(
        self, id: str = "", config: Any = None, data_dir: str | Path = DEFAULT_DATA_DIR
    ) -> None:
        super().__init__(config, "battery", id, "{capacity}%", 60)
        self.data_dir = Path(data_dir)
        self.batteries: list[Path] = []
        self.adapter: Path | None = None
        self.tooltip = ""
        self._old_status = ""
        self._warn_first_time = True
        self.refresh_batteries()
        self._emit()

    def refresh_batteries(self) -> None:
        """Rescan the data directory for batteries and the AC adapter."""
        try:
            entries = sorted(self.data_dir.iterdir())
        except OSError as exc:
            raise RuntimeError(str(exc)) from exc

        bat = self.config.get("bat")
        adapter_name = self.config.get("adapter")
        found: list[Path] = []
        for node in entries:
            if not node.is_dir():
                continue
            name_matches = not isinstance(bat, str) or node.name == bat
            if (
                name_matches
                and ((node / "capacity").exists() or (node / "charge_now").exists())
                and (node / "uevent").exists()
                and (node / "status").exists()
                and (node / "type").exists()
                and _first_token(node / "type") == "Battery"
            ):
                found.append(node)
            adapter_matches = not isinstance(adapter_name, str) or node.name == adapter_name
            if adapter_matches and ((node / "online").exists() or (node / "status").exists()):
                self.adapter = node

        if self._warn_first_time and not found:
            if isinstance(bat, str):
                log.warning("No battery named %s", bat)
            else:
                log.warning("No batteries.")
            self._warn_first_time = False
        self.batteries = found

    def get_infos(self) -> BatteryInfo:
        """Return capacity, hours remaining, status and power of all batteries."""
        try:
            readings = [read_battery(path) for path in self.batteries]
            return compute_infos(readings, self.adapter, self.config)
        except Exception as exc:  # noqa: BLE001 - reported and shown as unknown
            log.error("Battery: %s", exc)
            return BatteryInfo(0, 0.0, "Unknown", 0.0)

    def get_adapter_status(self, capacity: int) -> str:
        return adapter_status(self.adapter, capacity)

    def format_time_remaining(self, hours_remaining: float) -> str:
        """Format hours as text using format-time, or '' when under a minute."""
        hours_remaining = abs(hours_remaining)
        full_hours = int(hours_remaining)
        minutes = int(60 * (hours_remaining - full_hours))
        if full_hours == 0 and minutes == 0:
            return ""
        fmt = self.config.get("format-time")
        if not isinstance(fmt, str):
            fmt = "{H} h {M} min"
        return fmt.format(H=full_hours, M=minutes, m=f"{minutes:02d}")

    def _pick(self, prefix: str, status: str, state: str) -> str | None:
        candidates = []
        if state:
            candidates.append(f"{prefix}-{status}-{state}")
        candidates.append(f"{prefix}-{status}")
        if state:
            candidates.append(f"{prefix}-{state}")
        for key in candidates:
            value = self.config.get(key)
            if isinstance(value, str):
                return value
        return None

    def update(self) -> None:
        if not self.batteries:
            self.visible = False
            return
        info = self.get_infos()
        capacity, time_remaining, status, power = (
            info.capacity,
            info.time_remaining,
            info.status,
            info.power,
        )
        if status == "Unknown":
            status = self.get_adapter_status(capacity)
        status_pretty = status
        status = _css_status(status)
        state = self.get_state(capacity, True)
        time_text = self.format_time_remaining(time_remaining)

        if self.tooltip_enabled():
            if time_remaining != 0:
                direction = "empty" if time_remaining > 0 else "full"
                default_text = f"Time to {direction}: {time_text}"
            else:
                default_text = status_pretty
            tooltip_format = self._pick("tooltip-format", status, state)
            if tooltip_format is None:
                generic = self.config.get("tooltip-format")
                tooltip_format = generic if isinstance(generic, str) else "{timeTo}"
            self.tooltip = tooltip_format.format(
                timeTo=default_text, power=power, capacity=capacity, time=time_text
            )

        if self._old_status:
            self.style_classes.discard(self._old_status)
        self.style_classes.add(status)
        self._old_status = status

        fmt = self._pick("format", status, state)
        if fmt is None:
            fmt = self.format
        if not fmt:
            self.visible = False
        else:
            self.visible = True
            icons = [f"{status}-{state}", status, state]
            self.text = fmt.format(
                capacity=capacity,
                power=power,
                icon=self.get_icon(capacity, icons),
                time=time_text,
            )
        super().update()
"""Reading power-supply attributes and combining them into one battery state."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable

_U32 = 0xFFFFFFFF
_LEADING_UINT = re.compile(r"\s*\+?(\d+)")

# Ordering used to pick the status shown for several batteries.
_STATUS_RANK = ("Unknown", "Full", "Not charging", "Discharging")


def _u32(value: int) -> int:
    return value & _U32


def _round(value: float) -> int:
    """Round half away from zero."""
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def _read_uint(path: Path) -> int | None:
    """Return the leading unsigned integer of a file, 0 if unreadable, None if absent."""
    if not path.exists():
        return None
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return 0
    match = _LEADING_UINT.match(text)
    return _u32(int(match.group(1))) if match else 0


def _read_line(path: Path) -> str:
    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            return handle.readline().rstrip("\n")
    except OSError:
        return ""


def _read_flag(path: Path) -> bool:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    tokens = text.split()
    return bool(tokens) and tokens[0] == "1"


@dataclass(frozen=True)
class BatteryReading:
    """Raw attributes of one battery; None marks an attribute the device lacks.

    Currents and charges are in µA/µAh, power and energy in µW/µWh,
    voltages in µV.
    """

    status: str = ""
    capacity: int | None = None
    current_now: int | None = None
    voltage_now: int | None = None
    charge_full: int | None = None
    charge_full_design: int | None = None
    charge_now: int | None = None
    power_now: int | None = None
    energy_now: int | None = None
    energy_full: int | None = None
    energy_full_design: int | None = None


@dataclass(frozen=True)
class BatteryInfo:
    """The combined state of all batteries."""

    capacity: int
    time_remaining: float
    status: str
    power: float


def status_gt(a: str, b: str) -> bool:
    """Order statuses: Unknown > Full > Not charging > Discharging > anything else."""
    if a == b:
        return False
    for rank, name in enumerate(_STATUS_RANK):
        if a == name:
            return b not in _STATUS_RANK[:rank]
    return False


def read_battery(path: str | Path) -> BatteryReading:
    """Read the attributes of a power-supply directory."""
    bat = Path(path)
    current = _read_uint(bat / "current_now")
    if current is None:
        current = _read_uint(bat / "current_avg")
    voltage = _read_uint(bat / "voltage_now")
    if voltage is None:
        voltage = _read_uint(bat / "voltage_avg")
    return BatteryReading(
        status=_read_line(bat / "status"),
        capacity=_read_uint(bat / "capacity"),
        current_now=current,
        voltage_now=voltage,
        charge_full=_read_uint(bat / "charge_full"),
        charge_full_design=_read_uint(bat / "charge_full_design"),
        charge_now=_read_uint(bat / "charge_now"),
        power_now=_read_uint(bat / "power_now"),
        energy_now=_read_uint(bat / "energy_now"),
        energy_full=_read_uint(bat / "energy_full"),
        energy_full_design=_read_uint(bat / "energy_full_design"),
    )


def derive_reading(reading: BatteryReading) -> BatteryReading:
    """Fill in attributes the device lacks from those it reports."""
    cap = reading.capacity
    cur = reading.current_now
    volt = reading.voltage_now
    cf = reading.charge_full
    cfd = reading.charge_full_design
    cn = reading.charge_now
    pn = reading.power_now
    en = reading.energy_now
    ef = reading.energy_full
    efd = reading.energy_full_design

    if volt is None:
        if pn is not None and cur:
            volt = _u32(1000000 * pn // cur)
        elif efd is not None and cfd:
            volt = _u32(1000000 * efd // cfd)
        elif en is not None:
            if cn:
                volt = _u32(1000000 * en // cn)
            elif cap is not None and cf is not None:
                cn = _u32(cf * cap // 100)
                if cf and cap:
                    volt = _u32(1000000 * en * 100 // cf // cap)
        elif ef is not None:
            if cf:
                volt = _u32(1000000 * ef // cf)
            elif cn is not None and cap is not None:
                if cap:
                    cf = _u32(100 * cn // cap)
                if cn:
                    volt = _u32(10000 * ef * cap // cn)

    if cap is None:
        if cn is not None and cf:
            cap = _u32(100 * cn // cf)
        elif en is not None and ef:
            cap = _u32(100 * en // ef)
        elif cn is not None and ef is not None and volt is not None:
            if cf is None and volt:
                cf = _u32(1000000 * ef // volt)
            if ef:
                cap = _u32(cn * volt // 10000 // ef)
        elif cf is not None and en is not None and volt is not None:
            if cn is None and volt:
                cn = _u32(1000000 * en // volt)
            if volt and cf:
                cap = _u32(100 * 1000000 * en // volt // cf)

    if en is None and volt is not None:
        if cn is not None:
            en = _u32(cn * volt // 1000000)
        elif cap is not None and cf is not None:
            cn = _u32(cap * cf // 100)
            en = _u32(volt * cap * cf // 1000000 // 100)
        elif cap is not None and ef:
            if volt:
                cf = _u32(1000000 * ef // volt)
                cn = _u32(cap * 10000 * ef // volt)
            en = _u32(cap * ef // 100)

    if ef is None and volt is not None:
        if cf is not None:
            ef = _u32(cf * volt // 1000000)
        elif cn is not None and cap:
            cf = _u32(100 * cn // cap)
            ef = _u32(cn * volt // cap // 10000)
        elif cap is not None and en:
            if volt:
                cn = _u32(1000000 * en // volt)
            if cap:
                ef = _u32(100 * en // cap)
                if volt:
                    cf = _u32(100 * 1000000 * en // volt // cap)

    if pn is None and volt is not None and cur is not None:
        pn = _u32(volt * cur // 1000000)

    if efd is None and volt is not None and cfd is not None:
        efd = _u32(volt * cfd // 1000000)

    return replace(
        reading,
        capacity=cap,
        voltage_now=volt,
        charge_full=cf,
        charge_now=cn,
        power_now=pn,
        energy_now=en,
        energy_full=ef,
        energy_full_design=efd,
    )


def adapter_status(adapter: str | Path | None, capacity: int) -> str:
    """Guess the status from the AC adapter when the batteries do not tell."""
    if not adapter:
        return "Unknown"
    adapter = Path(adapter)
    online = _read_flag(adapter / "online")
    status = _read_line(adapter / "status")
    if capacity == 100:
        return "Full"
    if online and status != "Discharging":
        return "Plugged"
    return "Discharging"


def _sum(values: Iterable[int | None]) -> int | None:
    present = [value for value in values if value is not None]
    return _u32(sum(present)) if present else None


def compute_infos(
    readings: Iterable[BatteryReading],
    adapter: str | Path | None = None,
    config: Any = None,
) -> BatteryInfo:
    """Combine battery readings into capacity, hours remaining, status and watts."""
    config = config if isinstance(config, dict) else {}
    derived = [derive_reading(reading) for reading in readings]

    status = "Unknown"
    for reading in derived:
        if status_gt(status, reading.status):
            status = reading.status

    total_power = _sum(r.power_now for r in derived)
    total_energy = _sum(r.energy_now for r in derived)
    total_energy_full = _sum(r.energy_full for r in derived)
    total_energy_full_design = _sum(r.energy_full_design for r in derived)
    total_capacity = _sum(r.capacity for r in derived)

    if adapter and status in ("Discharging", "Not charging"):
        adapter_path = Path(adapter)
        online = _read_flag(adapter_path / "online")
        current_status = _read_line(adapter_path / "status")
        if online and current_status != "Discharging":
            status = "Plugged"

    time_remaining = 0.0
    if status == "Discharging" and total_power is not None and total_energy is not None:
        if total_power:
            time_remaining = total_energy / total_power
    elif (
        status == "Charging"
        and total_energy is not None
        and total_energy_full is not None
        and total_power is not None
    ):
        if total_power:
            time_remaining = -_u32(total_energy_full - total_energy) / total_power
        if time_remaining > 0.0:
            time_remaining = 0.0

    capacity = 0.0
    if total_capacity is not None:
        if total_capacity > 0:
            capacity = float(total_capacity)
        elif total_energy_full is not None and total_energy is not None and total_energy_full > 0:
            capacity = total_energy * 100.0 / total_energy_full

    design = config.get("design-capacity")
    if (
        design is True
        and total_energy is not None
        and total_energy_full_design is not None
        and total_energy_full_design > 0
    ):
        capacity = total_energy * 100.0 / total_energy_full_design

    full_at = config.get("full-at")
    if isinstance(full_at, int) and not isinstance(full_at, bool) and 0 < full_at < 100:
        capacity = 100.0 * capacity / full_at

    if capacity > 100.0:
        capacity = 100.0

    cap = _round(capacity) & 0xFF
    if cap == 100 and status == "Charging":
        status = "Full"

    return BatteryInfo(cap, time_remaining, status, (total_power or 0) / 1e6)
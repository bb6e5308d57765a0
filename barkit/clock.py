"""The clock module: the time in one of several zones, with a calendar tooltip."""

from __future__ import annotations

import calendar
import logging
import unicodedata
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from barkit.amodule import Module, ScrollDirection, ScrollEvent
from barkit.label import Button

log = logging.getLogger(__name__)

CALENDAR_PLACEHOLDER = "calendar"
TIMEZONED_TIME_LIST_PLACEHOLDER = "tz_list"

# Weekdays are numbered from Sunday = 0, as in C's tm_wday.
SUNDAY = 0
MONDAY = 1

_UTC_NAMES = ("UTC", "Etc/UTC", "GMT", "Etc/GMT")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _locate_zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        if name in _UTC_NAMES:
            return timezone.utc
        raise ValueError(f"Unknown time zone: {name}") from exc


def _local_zone() -> tzinfo:
    zone = datetime.now().astimezone().tzinfo
    return zone if zone is not None else timezone.utc


def _add_months(moment: datetime, months: int) -> datetime:
    if not months:
        return moment
    years, month_index = divmod(moment.month - 1 + months, 12)
    year = moment.year + years
    month = month_index + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _char_width(text: str) -> int:
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def _weekday(day: date) -> int:
    return (day.weekday() + 1) % 7


def _day_abbr(weekday: int) -> str:
    return calendar.day_abbr[(weekday - 1) % 7]


class Clock(Button):
    """Shows the current time and, in its tooltip, a calendar and other zones."""

    def __init__(self, id: str = "", config: Any = None) -> None:
        super().__init__(config, "clock", id, "{:%H:%M}", 60, False, False, True)
        self.current_time_zone_idx = 0
        self.time_zones: list[tzinfo | None] = []

        zones = self.config.get("timezones")
        single = self.config.get("timezone")
        if isinstance(zones, list) and zones:
            for zone_name in zones:
                if not isinstance(zone_name, str) or not zone_name:
                    self.time_zones.append(None)
                else:
                    self.time_zones.append(_locate_zone(zone_name))
        elif isinstance(single, str) and single:
            self.time_zones.append(_locate_zone(single))

        if not self.time_zones:
            self.time_zones.append(None)

        if not self.is_timezone_fixed():
            log.warning(
                "As using a timezone, some format args may be missing as the date library "
                "haven't got a release since 2018."
            )

        self.is_calendar_in_tooltip = False
        self.is_timezoned_list_in_tooltip = False
        tooltip_format = self.config.get("tooltip-format")
        if isinstance(tooltip_format, str):
            trimmed = "".join(tooltip_format.split())
            if "{" + CALENDAR_PLACEHOLDER + "}" in trimmed:
                self.is_calendar_in_tooltip = True
            if "{" + TIMEZONED_TIME_LIST_PLACEHOLDER + "}" in trimmed:
                self.is_timezoned_list_in_tooltip = True

        self.calendar_shift_init = 0
        self.calendar_shift = 0
        if self.is_calendar_in_tooltip:
            on_scroll = self.config.get("on-scroll")
            if isinstance(on_scroll, dict) and _is_int(on_scroll.get(CALENDAR_PLACEHOLDER)):
                self.calendar_shift_init = on_scroll[CALENDAR_PLACEHOLDER]

        locale_name = self.config.get("locale")
        self.locale = locale_name if isinstance(locale_name, str) else ""

        self.tooltip = ""
        self._cached_ymd: date | None = None
        self._cached_text = ""

    def current_timezone(self) -> tzinfo:
        """Return the selected zone, or the local zone when none is fixed."""
        zone = self.time_zones[self.current_time_zone_idx]
        return zone if zone is not None else _local_zone()

    def is_timezone_fixed(self) -> bool:
        return self.time_zones[self.current_time_zone_idx] is not None

    def update(self, now: datetime | None = None) -> None:
        """Render the label and tooltip for the moment now (default: the present)."""
        if now is None:
            now = datetime.now(timezone.utc)
        floored = now.replace(microsecond=0)
        zoned = _add_months(floored.astimezone(self.current_timezone()), self.calendar_shift)

        if not self.is_timezone_fixed():
            self.text = self.format.format(now.astimezone())
        else:
            self.text = self.format.format(zoned)

        if self.tooltip_enabled():
            tooltip_format = self.config.get("tooltip-format")
            if isinstance(tooltip_format, str):
                calendar_lines = self.calendar_text(zoned) if self.is_calendar_in_tooltip else ""
                zone_lines = (
                    self.timezones_text(now) if self.is_timezoned_list_in_tooltip else ""
                )
                self.tooltip = tooltip_format.format(
                    zoned,
                    **{
                        CALENDAR_PLACEHOLDER: calendar_lines,
                        TIMEZONED_TIME_LIST_PLACEHOLDER: zone_lines,
                    },
                )
        super().update()

    def handle_scroll(self, event: ScrollEvent) -> bool:
        """Shift the calendar by months, or cycle through the time zones."""
        if isinstance(self.config.get("on-scroll-up"), str) or isinstance(
            self.config.get("on-scroll-down"), str
        ):
            return Module.handle_scroll(self, event)

        direction = self.get_scroll_dir(event)
        if self.calendar_shift_init > 0:
            if direction is ScrollDirection.UP:
                self.calendar_shift += self.calendar_shift_init
            else:
                self.calendar_shift -= self.calendar_shift_init
        else:
            if direction not in (ScrollDirection.UP, ScrollDirection.DOWN):
                return True
            count = len(self.time_zones)
            if count == 1:
                return True
            step = 1 if direction is ScrollDirection.UP else -1
            self.current_time_zone_idx = (self.current_time_zone_idx + step) % count

        self.update()
        return True

    def calendar_text(self, today: date) -> str:
        """Render the month containing today as a text calendar."""
        day = date(today.year, today.month, today.day)
        if self._cached_ymd == day:
            return self._cached_text

        shifted = self.calendar_shift_init > 0 and self.calendar_shift != 0
        current_day = 0 if shifted else day.day
        week_format = self.config.get("format-calendar-weeks")
        week_format = week_format if isinstance(week_format, str) else ""
        today_format = self.config.get("today-format")
        day_format = self.config.get("format-calendar")

        first_dow = self.first_day_of_week()
        parts: list[str] = []
        side = 0
        position = self.config.get("calendar-weeks-pos")
        if position == "left":
            side = 1
            parts.append(" " * 4)
        elif position == "right":
            side = 2

        parts.append(self.weekdays_header(first_dow))

        first = date(day.year, day.month, 1)
        weekday = _weekday(first)
        empty_days = (weekday - first_dow) % 7
        week_day = first + timedelta(days=7 - empty_days)
        if first_dow == MONDAY:
            week_day -= timedelta(days=1)
        week = timedelta(weeks=1)

        if side == 1:
            parts.append(week_format.format(week_day))
            parts.append(" ")
            week_day += week

        if empty_days > 0:
            parts.append(" " * (empty_days * 3 - 1))

        last_day = calendar.monthrange(day.year, day.month)[1]
        for number in range(1, last_day + 1):
            if weekday != first_dow:
                parts.append(" ")
            elif number != 1:
                if side == 2:
                    parts.append(" ")
                    parts.append(week_format.format(week_day))
                    week_day += week
                parts.append("\n")
                if side == 1:
                    parts.append(week_format.format(week_day))
                    parts.append(" ")
                    week_day += week

            text = f"{number:>2}"
            if number == current_day:
                if isinstance(today_format, str):
                    parts.append(today_format.format(text))
                else:
                    parts.append(f"<b><u>{text}</u></b>")
            elif isinstance(day_format, str):
                parts.append(day_format.format(text))
            else:
                parts.append(text)

            if side == 2 and number == last_day:
                trailing = 6 - (weekday - first_dow) % 7
                if trailing > 0:
                    parts.append(" " * (trailing * 3 + 1))
                    parts.append(week_format.format(week_day))
            weekday = (weekday + 1) % 7

        result = "".join(parts)
        self._cached_ymd = day
        self._cached_text = result
        return result

    def weekdays_header(self, first_dow: int) -> str:
        """Return the line of two-column weekday names, starting at first_dow."""
        names = []
        for offset in range(7):
            name = _day_abbr((first_dow + offset) % 7)
            while _char_width(name) > 2:
                name = name[:-1]
            names.append(" " * (2 - _char_width(name)) + name)
        header = " ".join(names) + "\n"
        header_format = self.config.get("format-calendar-weekdays")
        if isinstance(header_format, str):
            return header_format.format(header)
        return header

    def timezones_text(self, now: datetime | None = None) -> str:
        """Return the time in every zone except the selected one, a line each."""
        if len(self.time_zones) == 1:
            return ""
        if now is None:
            now = datetime.now(timezone.utc)
        floored = now.replace(microsecond=0)
        lines = []
        for index, zone in enumerate(self.time_zones):
            if index == self.current_time_zone_idx:
                continue
            moment = floored.astimezone(zone if zone is not None else _local_zone())
            lines.append(self.format.format(moment) + "\n")
        return "".join(lines)

    def first_day_of_week(self) -> int:
        """Return the first day of the week; Sunday unless the locale says otherwise."""
        return SUNDAY
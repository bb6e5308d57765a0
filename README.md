# barkit

Building blocks for a desktop status bar: a layered JSON configuration
loader, modules that turn system state into text, and the rules for bar
modes, margins and surface geometry. The package has no dependencies
outside the standard library.

## Installing

```
pip install barkit
```

For running the tests:

```
pip install "barkit[test]"
pytest
```

## Configuration

`barkit.config.Config` loads a JSON file that may contain `//` and `/* */`
comments (`parse_jsonc` does the parsing). Called without a path,
`Config.load()` looks for `config` or `config.jsonc` first in the directory
named by the `BARKIT_CONFIG_DIR` environment variable, then in
`$XDG_CONFIG_HOME/barkit/`, `$HOME/.config/barkit/`, `$HOME/barkit/`,
`/etc/xdg/barkit/` and `./resources/`. A missing file raises
`barkit.config.ConfigError`.

A configuration may pull in other files through an `include` key (a string
or a list). Values already set are never overridden by included files;
nested objects are merged (`merge_config`). Include chains deeper than 100
files are rejected as recursive.

```python
from barkit.config import Config

config = Config()
config.load()
for bar_config in config.get_output_configs("DP-1", "Some Monitor"):
    print(bar_config.get("position", "top"))
```

`is_valid_output` decides whether a bar configuration applies to an output:
`output` may be a name or identifier, a list of them, or `"!name"` to
exclude one.

## Modules

All modules derive from `barkit.amodule.Module`, which reads the
`on-click*`, `on-scroll-up`/`on-scroll-down` and `on-update` options.
Commands are not executed: they are appended to `Module.commands` and
passed to `Module.runner` if you set one. Callbacks in `Module.on_change`
are called whenever the module wants to be redrawn. Input arrives as
`ButtonEvent` and `ScrollEvent` values; smooth scroll deltas are accumulated
against `smooth-scrolling-threshold`.

`barkit.label` adds text handling:

- `Label` reads `format`, `format-alt`, `interval` (`"once"` included),
  `max-length`, `min-length`, `rotate` and `align`; `get_icon` picks from
  `format-icons` by percentage and alternative names, `get_state` picks the
  matching entry of `states` and keeps it in `style_classes`.
- `Button` is a label that is only `sensitive` when a click does something;
  its `get_icon` raises `ValueError` for an empty icon list.
- `IconLabel` shows an image only when `icon` is true.

After `update()`, a module's output is in `text`, `visible`,
`style_classes` and, where it has one, `tooltip`.

### Clock

`barkit.clock.Clock` formats the time with `str.format` (default
`"{:%H:%M}"`) in the local zone or in zones from `timezone`/`timezones`.
Scrolling cycles through the zones, or shifts the tooltip calendar by
`on-scroll.calendar` months. A `tooltip-format` containing `{calendar}`
gets a month calendar (`calendar_text`, with `calendar-weeks-pos`,
`format-calendar`, `format-calendar-weeks`, `format-calendar-weekdays` and
`today-format`); `{tz_list}` gets the time in the other zones. Pass a
`datetime` to `update(now)` for a fixed moment. Weeks start on Sunday.

### Battery

`barkit.battery.Battery(id, config, data_dir)` scans a power-supply
directory (default `/sys/class/power_supply/`) for batteries and the AC
adapter, honouring `bat` and `adapter`. It shows capacity, status, power
and time remaining, with `format-<status>-<state>`, `format-<status>`,
`format-<state>`, matching `tooltip-format-*` keys, `format-time`,
`full-at` and `design-capacity`.

The arithmetic is in `barkit.battery_info`: `read_battery` reads one
directory into a `BatteryReading`, `derive_reading` fills in missing values
from the others, and `compute_infos` combines readings into a
`BatteryInfo`.

### Backlight

`barkit.backlight.Backlight(id, config, root)` reads backlight devices from
a class directory (default `/sys/class/backlight`) and shows the brightness
of the `device` named in the config, or else of the device with the highest
maximum. It raises `RuntimeError` when no device is found. `refresh()`
rescans the directory; `best_device`, `upsert_device` and
`enumerate_devices` are usable on their own.

### Group

`barkit.group.Group` holds other modules (`add`) and draws nothing itself.

## Bar settings

`barkit.bar_config` interprets bar-wide options:

- `PRESET_MODES` (`default`, `dock`, `hide`, `invisible`, `overlay`),
  `parse_modes` for a `modes` object and `parse_mode`/`parse_layer` for one
  entry, giving `BarMode` and `BarLayer` values.
- `parse_margins` reads `margin-top`…`margin-left`, a CSS-like `margin`
  string of one to four numbers, or a single integer `margin`, into
  `BarMargins`.
- `setup_alt_format_key` and `setup_alt_format_key_list` turn
  `format-alt-click` names (`click-right`, `click-middle`,
  `click-backward`, `click-forward`) into button numbers.

`barkit.surface.LayerSurface` computes anchoring from a position, the
exclusive zone, the requested surface size with margins, and size changes
from the compositor.

```python
from barkit.bar_config import parse_margins
from barkit.surface import LayerSurface

surface = LayerSurface("DP-1")
surface.set_margins(parse_margins({"margin": "4 8"}))
surface.set_position("bottom")
surface.set_size(0, 30)
print(surface.exclusive_zone(True))  # 34
```

## What barkit does not do

barkit draws nothing and talks to no compositor: there is no window, no
command-line program and no event loop. It does not build modules from
their configuration names or lay them out into a bar, and it has no
bluetooth, network or audio modules. Commands from the configuration are
recorded, never started.
"""Status bar configuration, clock, battery and backlight modules, and bar geometry."""

__version__ = "0.1.0"
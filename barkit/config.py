"""Locating, reading and merging the bar configuration files."""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Iterable

log = logging.getLogger(__name__)

CONFIG_DIRS = (
    "$XDG_CONFIG_HOME/barkit/",
    "$HOME/.config/barkit/",
    "$HOME/barkit/",
    "/etc/xdg/barkit/",
    "./resources/",
)

CONFIG_PATH_ENV = "BARKIT_CONFIG_DIR"

MAX_INCLUDE_DEPTH = 100

_COMMENT_OR_STRING = re.compile(r'"(?:\\.|[^"\\])*"|//[^\n]*|/\*.*?\*/', re.DOTALL)
_VARIABLE = re.compile(r"\$(?:\{(\w+)\}|(\w+))")


class ConfigError(RuntimeError):
    """Raised when the configuration cannot be found or read."""


def parse_jsonc(text: str) -> Any:
    """Parse JSON that may hold // and /* */ comments."""

    def keep_strings(match: re.Match[str]) -> str:
        token = match.group(0)
        return token if token.startswith('"') else " "

    return json.loads(_COMMENT_OR_STRING.sub(keep_strings, text))


def _expand(path: str) -> str:
    path = os.path.expanduser(path)
    return _VARIABLE.sub(lambda m: os.environ.get(m.group(1) or m.group(2), ""), path)


def try_expand_path(base: str, filename: str = "") -> str | None:
    """Expand variables in base/filename; return the path if it exists."""
    path = os.path.join(base, filename) if filename else base
    log.debug("Try expanding: %s", path)
    expanded = _expand(path)
    if expanded and os.path.exists(expanded):
        log.debug("Found config file: %s", path)
        return expanded
    return None


def find_config_path(names: Iterable[str], dirs: Iterable[str] | None = None) -> str | None:
    """Search the override directory, then the standard ones, for any of names."""
    names = list(names)
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        for name in names:
            found = try_expand_path(override, name)
            if found:
                return found
    for directory in CONFIG_DIRS if dirs is None else dirs:
        for name in names:
            found = try_expand_path(directory, name)
            if found:
                return found
    return None


def merge_config(a: Any, b: Any) -> Any:
    """Merge b into a without overriding values already set in a; return the result."""
    if a is None:
        return b
    if isinstance(a, dict) and isinstance(b, dict):
        for key, value in b.items():
            if isinstance(a.get(key), dict) and isinstance(value, dict):
                merge_config(a[key], value)
            elif key not in a:
                a[key] = value
            else:
                log.debug("Option %s is already set; ignoring value %r", key, value)
    else:
        log.error("Cannot merge config, conflicting or invalid JSON types")
    return a


def is_valid_output(config: Any, name: str, identifier: str) -> bool:
    """Tell whether a bar configuration applies to the given output."""
    output = config.get("output") if isinstance(config, dict) else None
    if isinstance(output, list):
        return any(isinstance(item, str) and item in (name, identifier) for item in output)
    if isinstance(output, str) and output:
        if output.startswith("!"):
            return output[1:] != name and output[1:] != identifier
        return output in (name, identifier)
    return True


def _load_into(dst: Any, config_file: str, depth: int) -> Any:
    if depth > MAX_INCLUDE_DEPTH:
        raise ConfigError("Aborting due to likely recursive include in config files")
    try:
        with open(config_file, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise ConfigError("Can't open config file") from exc
    try:
        loaded = parse_jsonc(text)
    except ValueError as exc:
        raise ConfigError(f"Invalid config file {config_file}: {exc}") from exc
    if isinstance(loaded, list):
        loaded = [_resolve_includes(part, depth) for part in loaded]
    else:
        loaded = _resolve_includes(loaded, depth)
    return merge_config(dst, loaded)


def _resolve_includes(config: Any, depth: int) -> Any:
    if not isinstance(config, dict):
        return config
    includes = config.get("include")
    if isinstance(includes, str):
        includes = [includes]
    if isinstance(includes, list):
        for include in includes:
            log.info("Including resource file: %s", include)
            depth += 1
            config = _load_into(config, try_expand_path(str(include)) or "", depth)
    return config


class Config:
    """The loaded configuration, a single bar object or a list of them."""

    def __init__(self) -> None:
        self.config: Any = None
        self.config_file = ""

    def load(self, path: str | None = None) -> None:
        """Load the given file, or the first default config file found."""
        found = path if path else find_config_path(["config", "config.jsonc"])
        if not found:
            raise ConfigError("Missing required resource files")
        self.config_file = found
        log.info("Using configuration file %s", found)
        self.setup_config(found, 0)

    def setup_config(self, config_file: str, depth: int = 0) -> None:
        """Read config_file with its includes and merge it into the configuration."""
        self.config = _load_into(self.config, config_file, depth)

    def get_output_configs(self, name: str, identifier: str) -> list[Any]:
        """Return the bar configurations that apply to an output."""
        if isinstance(self.config, list):
            return [
                bar
                for bar in self.config
                if isinstance(bar, dict) and is_valid_output(bar, name, identifier)
            ]
        if is_valid_output(self.config, name, identifier):
            return [self.config]
        return []
"""A module that holds other modules in a box of its own."""

from __future__ import annotations

from typing import Any

from barkit.amodule import Module


class Group(Module):
    """Lays out its children across the bar's direction."""

    def __init__(self, name: str, vertical: bool = False, config: Any = None) -> None:
        super().__init__(config, name, "", False, False)
        self.orientation = "horizontal" if vertical else "vertical"
        self.modules: list[Module] = []

    def update(self) -> None:
        """Groups draw nothing themselves."""

    def add(self, module: Module) -> None:
        self.modules.append(module)
from __future__ import annotations

from dataclasses import dataclass

from ptable_svg.data.loader import DataLoader

DEFAULT_THEME = "light"
DEFAULT_LAYOUT = "normal"


@dataclass(frozen=True)
class RenderSettings:
    theme: str = DEFAULT_THEME
    layout: str = DEFAULT_LAYOUT
    elements_source: str | None = None
    config_source: str | None = None

    def make_loader(self) -> DataLoader:
        return DataLoader(self.elements_source, self.config_source)

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

import cmcrameri.cm as cmc
import matplotlib
import numpy as np
from matplotlib.colors import Colormap, to_hex

from ptable_svg.data.models import TableConfig
from ptable_svg.errors import ValidationError

# Colormap interval sampled for category fills.
SAMPLE_RANGE = (0.15, 0.85)


def resolve_cmap(name: str) -> Colormap:
    for candidate in (name, f"cmc.{name}"):
        if candidate in matplotlib.colormaps:
            return matplotlib.colormaps[candidate]
    cmap = getattr(cmc, name.removeprefix("cmc."), None)
    if isinstance(cmap, Colormap):
        return cmap
    raise ValidationError(f"Unknown colormap: {name}", field="palette", key=name)


def category_colors(categories: Sequence[str], cmap_name: str) -> dict[str, str]:
    cmap = resolve_cmap(cmap_name)
    unique = list(dict.fromkeys(categories))
    if not unique:
        return {}
    if len(unique) == 1:
        positions = np.array([0.5])
    else:
        positions = np.linspace(SAMPLE_RANGE[0], SAMPLE_RANGE[1], len(unique))
    return {category: to_hex(cmap(float(pos))).upper() for category, pos in zip(unique, positions)}


def with_category_colors(config: TableConfig, theme: str, colors: dict[str, str]) -> TableConfig:
    current = config.theme(theme)
    return config.with_theme(theme, replace(current, categories=dict(colors)))

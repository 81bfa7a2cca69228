from __future__ import annotations

from ptable_svg.data.loader import DataLoader, get_loader
from ptable_svg.data.models import Element, TableConfig
from ptable_svg.errors import FormatError, PeriodicTableError, ResourceError, ValidationError
from ptable_svg.render.renderer import PeriodicTableRenderer

__version__ = "0.1.0"

__all__ = [
    "DataLoader",
    "Element",
    "FormatError",
    "PeriodicTableError",
    "PeriodicTableRenderer",
    "ResourceError",
    "TableConfig",
    "ValidationError",
    "get_loader",
]

from __future__ import annotations


class PeriodicTableError(Exception):
    """Base class for every error raised by ptable_svg."""


class FormatError(PeriodicTableError, ValueError):
    """A document does not have the expected top-level shape."""


class ValidationError(PeriodicTableError, ValueError):
    """A record, field, section or key fails its constraint."""

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        field: str | None = None,
        section: str | None = None,
        key: str | None = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.field = field
        self.section = section
        self.key = key


class ResourceError(PeriodicTableError, OSError):
    """A document could not be retrieved."""

    def __init__(self, message: str, *, locator: str | None = None) -> None:
        super().__init__(message)
        self.locator = locator

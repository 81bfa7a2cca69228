from __future__ import annotations

from importlib import resources


def read_default_document(filename: str) -> str:
    return resources.files(__name__).joinpath(filename).read_text(encoding="utf-8")

from __future__ import annotations

import base64
import logging
import math
from pathlib import Path

from ptable_svg.errors import ResourceError, ValidationError

LOGGER = logging.getLogger(__name__)

DATA_URL_PREFIX = "data:image/svg+xml;base64,"


def to_data_url(svg: str) -> str:
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return DATA_URL_PREFIX + encoded


def write_svg(svg: str, path: str | Path) -> Path:
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(svg, encoding="utf-8")
    except OSError as exc:
        raise ResourceError(f"Failed to write {target}: {exc.strerror or exc}", locator=str(target)) from exc
    LOGGER.info("Wrote %s (%d bytes)", target, len(svg.encode("utf-8")))
    return target


_app = None


def _ensure_gui_application() -> None:
    # QSvgRenderer needs an application instance for font lookups when drawing text.
    global _app
    from PySide6 import QtWidgets

    if QtWidgets.QApplication.instance() is None:
        _app = QtWidgets.QApplication([])


def render_png(svg: str, path: str | Path, scale: float = 1.0) -> Path:
    if not math.isfinite(scale) or scale <= 0:
        raise ValidationError(f"Invalid PNG scale: {scale!r}", field="scale")
    from PySide6 import QtCore, QtGui, QtSvg

    _ensure_gui_application()
    renderer = QtSvg.QSvgRenderer(QtCore.QByteArray(svg.encode("utf-8")))
    if not renderer.isValid():
        raise ValidationError("Generated SVG could not be parsed for rasterization")

    view_box = renderer.viewBoxF()
    width = max(1, math.ceil(view_box.width() * scale))
    height = max(1, math.ceil(view_box.height() * scale))
    image = QtGui.QImage(width, height, QtGui.QImage.Format.Format_ARGB32)
    image.fill(QtCore.Qt.GlobalColor.transparent)

    painter = QtGui.QPainter(image)
    painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
    painter.setRenderHint(QtGui.QPainter.TextAntialiasing, True)
    renderer.render(painter, QtCore.QRectF(0, 0, width, height))
    painter.end()

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    if not image.save(str(target), "PNG"):
        raise ResourceError(f"Failed to write {target}", locator=str(target))
    LOGGER.info("Wrote %s (%dx%d)", target, width, height)
    return target

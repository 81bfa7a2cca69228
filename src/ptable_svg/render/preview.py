from __future__ import annotations

import sys

from PySide6 import QtCore, QtSvgWidgets, QtWidgets


class SvgPreviewWindow(QtWidgets.QMainWindow):
    def __init__(self, svg: str, title: str = "Periodic Table", parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setMinimumSize(640, 400)

        self.view = QtSvgWidgets.QSvgWidget()
        self.view.load(QtCore.QByteArray(svg.encode("utf-8")))

        self.setCentralWidget(self.view)
        self.statusBar().showMessage(f"{len(svg)} characters of SVG")


def show_preview(svg: str, title: str = "Periodic Table") -> int:
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    app.setStyle("Fusion")
    window = SvgPreviewWindow(svg, title)
    window.show()
    return app.exec()

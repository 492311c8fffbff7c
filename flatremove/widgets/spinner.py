from qtpy import QtCore, QtGui, QtWidgets
from qtpy.QtCore import Qt


class SpinnerOverlay(QtWidgets.QWidget):
    """
    Transparent child widget painting the progress ring of a Decoration
    in the center of its parent.
    """

    def __init__(self, parent, decoration):
        super().__init__(parent=parent)
        self.decoration = decoration
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WA_NoSystemBackground)
        self.setFocusPolicy(Qt.NoFocus)
        self.decoration.connect(self.update)
        self.match_geometry()
        self.show()
        self.raise_()

    def match_geometry(self):
        parent = self.parentWidget()
        self.setGeometry(0, 0, parent.width(), parent.height())

    def ring_rect(self):
        ring = self.decoration.ring
        size = min(ring.size, self.width(), self.height())
        inset = ring.line_width / 2
        rect = QtCore.QRectF(0, 0, size - 2 * inset, size - 2 * inset)
        rect.moveCenter(QtCore.QRectF(self.rect()).center())
        return rect

    def paintEvent(self, event):
        ring = self.decoration.ring

        painter = QtGui.QPainter()
        painter.begin(self)
        painter.setRenderHint(QtGui.QPainter.Antialiasing)

        rect = self.ring_rect()

        track = QtGui.QPen(QtGui.QColor(255, 255, 255, 60))
        track.setWidthF(ring.line_width)
        painter.setPen(track)
        painter.drawEllipse(rect)

        pen = QtGui.QPen(self.palette().color(QtGui.QPalette.Highlight))
        pen.setWidthF(ring.line_width)
        pen.setCapStyle(Qt.RoundCap)
        painter.setPen(pen)
        # Qt angles are in 1/16 degree, counter clockwise from 3 o'clock
        start = int((90 - ring.angle) * 16)
        span = int(-ring.span_degrees * 16)
        painter.drawArc(rect, start, span)

        painter.end()

    def close_overlay(self):
        self.decoration.disconnect(self.update)
        self.hide()
        self.setParent(None)
        self.deleteLater()

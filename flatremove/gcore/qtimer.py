"""The animation tick source in the Qt Event Loop."""

from qtpy.QtCore import QObject, QTimer


class QtTimer(QObject):
    """
    Repeating QTimer calling one callback.

    The callback is disconnected on stop, so a stopped timer keeps no
    reference to what it was animating.
    """

    def __init__(self, parent=None):
        QObject.__init__(self, parent)
        self.timer = QTimer(self)
        self.callback = None

    def start(self, interval_ms, callback):
        self.stop()
        self.callback = callback
        self.timer.timeout.connect(self.callback)
        self.timer.start(int(interval_ms))

    def stop(self):
        self.timer.stop()
        if not self.callback is None:
            self.timer.timeout.disconnect(self.callback)
            self.callback = None

    def is_active(self):
        return self.timer.isActive()


class QtTimerFactory(object):

    def __init__(self, parent=None):
        self.parent = parent

    def create_timer(self):
        return QtTimer(self.parent)

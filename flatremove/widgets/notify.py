import logging

from qtpy import QtGui, QtWidgets
from qtpy.QtCore import QTimer

logger = logging.getLogger(__name__)


class TrayNotifier(object):
    """
    Transient toasts through a system tray icon.

    Without a system tray the notification is only logged.
    """

    def __init__(self, source_title='Bazaar', icon_name='', timeout_ms=8000, parent=None):
        self.source_title = source_title
        self.icon_name = icon_name
        self.timeout_ms = timeout_ms
        self.parent = parent
        self.tray = None

    def ensure_tray(self):
        if not QtWidgets.QSystemTrayIcon.isSystemTrayAvailable():
            return None

        if self.tray is None:
            icon = QtGui.QIcon.fromTheme(self.icon_name) if self.icon_name else QtGui.QIcon()
            if icon.isNull():
                style = QtWidgets.QApplication.style()
                icon = style.standardIcon(QtWidgets.QStyle.SP_MessageBoxInformation)
            self.tray = QtWidgets.QSystemTrayIcon(icon, self.parent)
            self.tray.setToolTip(self.source_title)

        return self.tray

    def notify(self, title, body, is_error=False):
        log = logger.error if is_error else logger.info
        log(f'{self.source_title}: {title}: {body}')

        tray = self.ensure_tray()
        if tray is None:
            return

        if is_error:
            icon = QtWidgets.QSystemTrayIcon.Critical
        else:
            icon = QtWidgets.QSystemTrayIcon.Information

        tray.show()
        tray.showMessage(title, body, icon, self.timeout_ms)
        QTimer.singleShot(self.timeout_ms + 500, tray.hide)

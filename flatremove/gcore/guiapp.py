import sys
import asyncio
import logging

import qasync

from qtpy import API_NAME
from qtpy.QtWidgets import QApplication

if API_NAME in ['PySide6']:
    from qtpy.QtGui import QGuiApplication
else:
    from qtpy.QtWidgets import QDesktopWidget

from .. import config, PROGNAME

from ..core.backend import FlatpakBackend
from ..core.executor import UninstallExecutor
from ..core.feedback import FeedbackSettings
from ..core.flow import RemoveFlow

from ..dialogs.remove import QtDialogPresenter
from ..panels.launcher import LauncherWindow, LauncherSurfaceProvider
from ..widgets.notify import TrayNotifier

from .qtimer import QtTimerFactory

logger = logging.getLogger(__name__)


class GuiApplication(QApplication):

    def __init__(self, argv):
        super().__init__(argv)
        self.setApplicationName(PROGNAME)
        self.notifier = TrayNotifier(
            config['notification']['source_title'],
            config['notification']['icon_name'],
            config['notification']['timeout_ms'],
            parent=self)


def build_flow(window, backend, notifier):
    """Wire the remove flow to the launcher window."""
    manager_name = config['manager']['name']

    executor = UninstallExecutor(
        backend,
        LauncherSurfaceProvider(window),
        notifier,
        QtTimerFactory(),
        FeedbackSettings.from_config(config['feedback']),
        manager_name)

    return RemoveFlow(backend, QtDialogPresenter(window), notifier, executor, manager_name)


def center_window(window):
    if API_NAME in ['PySide6']:
        desktopGeometry = QGuiApplication.primaryScreen().availableGeometry()
    else:
        desktopGeometry = QDesktopWidget().availableGeometry()

    window.resize(int(desktopGeometry.width()*3/5), int(desktopGeometry.height()*3/5))

    qtRectangle = window.frameGeometry()
    centerPoint = desktopGeometry.center()
    qtRectangle.moveCenter(centerPoint)
    window.move(qtRectangle.topLeft())


def eventloop(argv=None):
    """
    Run the launcher with the asyncio loop on top of the Qt event loop.
    """
    qapp = GuiApplication(sys.argv if argv is None else argv)
    loop = qasync.QEventLoop(qapp)
    asyncio.set_event_loop(loop)

    backend = FlatpakBackend(config['flatpak']['command'])
    window = LauncherWindow(config['launcher'], backend=backend)
    window.flow = build_flow(window, backend, qapp.notifier)

    center_window(window)
    window.show()
    window.schedule(window.loadApps())

    closing = asyncio.Event()
    qapp.aboutToQuit.connect(closing.set)

    with loop:
        loop.run_until_complete(closing.wait())

    logger.info(f'Exiting {PROGNAME}')

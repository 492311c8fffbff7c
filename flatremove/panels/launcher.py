"""
A small application launcher hosting the remove flow.

Tiles show up in three places: the grid (optionally inside folders), the
dock and the search results. All of them offer Uninstall in their context
menu.
"""
import asyncio
import logging

from qtpy import QtCore, QtGui, QtWidgets
from qtpy.QtCore import Qt, Signal

from ..core.flow import FlowState
from ..core.models import strip_desktop_suffix
from ..utils.desktop import LauncherApp, scan_applications
from ..widgets.surfaces import QtIconSurface

logger = logging.getLogger(__name__)


def app_icon(app):
    for name in (app.icon_name, strip_desktop_suffix(app.app_id)):
        if name and QtGui.QIcon.hasThemeIcon(name):
            return QtGui.QIcon.fromTheme(name)
    style = QtWidgets.QApplication.style()
    return style.standardIcon(QtWidgets.QStyle.SP_DesktopIcon)


class AppTile(QtWidgets.QToolButton):

    uninstallRequested = Signal(object)

    def __init__(self, app, icon_size=64, parent=None):
        super().__init__(parent=parent)
        self.app = app
        self.setText(app.name)
        self.setToolTip(app.app_id)
        self.setIcon(app_icon(app))
        self.setIconSize(QtCore.QSize(icon_size, icon_size))
        self.setToolButtonStyle(Qt.ToolButtonTextUnderIcon)
        self.setAutoRaise(True)
        self.setFixedSize(icon_size + 48, icon_size + 40)
        self.setContextMenuPolicy(Qt.CustomContextMenu)
        self.customContextMenuRequested.connect(self.showMenu_)

    @property
    def app_id(self):
        return self.app.app_id

    def showMenu_(self, pos):
        menu = QtWidgets.QMenu(self)
        action = menu.addAction('Uninstall')
        action.triggered.connect(lambda checked=False: self.uninstallRequested.emit(self.app))
        menu.exec_(self.mapToGlobal(pos))


class FolderTile(QtWidgets.QToolButton):
    """A grid tile opening a view with its own tiles."""

    def __init__(self, name, parent=None):
        super().__init__(parent=parent)
        self.setText(name)
        self.setCheckable(True)
        self.setAutoRaise(True)
        self.setToolButtonStyle(Qt.ToolButtonTextUnderIcon)
        self.setIcon(QtWidgets.QApplication.style().standardIcon(QtWidgets.QStyle.SP_DirIcon))
        self.view = QtWidgets.QWidget()
        self.view.setLayout(QtWidgets.QHBoxLayout())
        self.view.hide()
        self.tiles = []
        self.toggled.connect(self.view.setVisible)

    def addTile(self, tile):
        tile.setParent(self.view)
        self.view.layout().addWidget(tile)
        self.tiles.append(tile)


class LauncherGrid(QtWidgets.QWidget):

    def __init__(self, parent=None, columns=6):
        super().__init__(parent=parent)
        self.columns = columns
        self.items = []
        self.setLayout(QtWidgets.QVBoxLayout())
        self.grid = QtWidgets.QGridLayout()
        self.layout().addLayout(self.grid)
        self.layout().addStretch(1)

    def clear(self):
        for item in self.items:
            if isinstance(item, FolderTile):
                item.view.deleteLater()
            item.deleteLater()
        self.items = []

    def addItem(self, item):
        index = len(self.items)
        self.grid.addWidget(item, index // self.columns, index % self.columns)
        if isinstance(item, FolderTile):
            self.layout().insertWidget(1, item.view)
        self.items.append(item)

    def tiles(self):
        for item in self.items:
            if isinstance(item, FolderTile):
                yield from item.tiles
            else:
                yield item


class SearchResults(QtWidgets.QWidget):
    """Tiles matching the search text, rebuilt on every change."""

    def __init__(self, make_tile, parent=None):
        super().__init__(parent=parent)
        self.make_tile = make_tile
        self.apps = []
        self.results = []
        self.setLayout(QtWidgets.QHBoxLayout())
        self.layout().setAlignment(Qt.AlignLeft)

    def search(self, text):
        for tile in self.results:
            tile.deleteLater()
        self.results = []

        text = text.strip().lower()
        if not text:
            self.hide()
            return

        for app in self.apps:
            if text in app.name.lower() or text in app.app_id.lower():
                tile = self.make_tile(app, self)
                self.layout().addWidget(tile)
                self.results.append(tile)

        self.setVisible(len(self.results) > 0)

    def tiles(self):
        return list(self.results)


class LauncherSurfaceProvider(object):
    """Find the tiles of an application over grid, folders, dock and search."""

    def __init__(self, window):
        self.window = window

    def find_surfaces(self, identity):
        return [QtIconSurface(tile) for tile in self.window.tiles() if identity.matches(tile.app_id)]


class LauncherWindow(QtWidgets.QMainWindow):

    def __init__(self, launcher_config, flow=None, backend=None):
        super().__init__()
        self.launcher_config = launcher_config
        self.flow = flow
        self.backend = backend
        self.tasks = set()
        self.icon_size = launcher_config.get('icon_size', 64)
        self.setWindowTitle('Applications')
        self.initgui()

    def initgui(self):
        self.searchEdit = QtWidgets.QLineEdit(self)
        self.searchEdit.setPlaceholderText('Search')

        self.results = SearchResults(self.makeTile, self)
        self.results.hide()
        self.searchEdit.textChanged.connect(self.results.search)

        self.grid = LauncherGrid(self, self.launcher_config.get('columns', 6))
        scroll = QtWidgets.QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.grid)

        central = QtWidgets.QWidget(self)
        layout = QtWidgets.QVBoxLayout()
        layout.addWidget(self.searchEdit)
        layout.addWidget(self.results)
        layout.addWidget(scroll, 1)
        central.setLayout(layout)
        self.setCentralWidget(central)

        self.dock = QtWidgets.QToolBar('Dock', self)
        self.dock.setMovable(False)
        self.addToolBar(Qt.BottomToolBarArea, self.dock)
        self.dockTiles = []

    def makeTile(self, app, parent=None):
        tile = AppTile(app, self.icon_size, parent)
        tile.uninstallRequested.connect(self.requestUninstall)
        return tile

    def setApps(self, apps):
        """Rebuild grid, folders and dock for the list of LauncherApp."""
        self.grid.clear()
        # Clearing the toolbar deletes the dock tiles
        self.dock.clear()
        self.dockTiles = []

        self.results.apps = list(apps)
        by_id = dict((app.app_id, app) for app in apps)

        folders = self.launcher_config.get('folders', {})
        in_folder = dict()
        for folder_name, members in folders.items():
            for member in members:
                in_folder.setdefault(member, folder_name)

        folder_tiles = dict()
        for app in apps:
            folder_name = in_folder.get(app.app_id) or in_folder.get(strip_desktop_suffix(app.app_id))
            if folder_name is None:
                self.grid.addItem(self.makeTile(app, self.grid))
                continue
            if not folder_name in folder_tiles:
                folder_tiles[folder_name] = FolderTile(folder_name, self.grid)
                self.grid.addItem(folder_tiles[folder_name])
            folder_tiles[folder_name].addTile(self.makeTile(app))

        for dock_id in self.launcher_config.get('dock', []):
            app = by_id.get(dock_id) or by_id.get(f'{dock_id}.desktop')
            if app is None:
                continue
            tile = self.makeTile(app, self.dock)
            self.dock.addWidget(tile)
            self.dockTiles.append(tile)

        self.results.search(self.searchEdit.text())

    def tiles(self):
        yield from self.grid.tiles()
        yield from self.dockTiles
        yield from self.results.tiles()

    async def loadApps(self):
        apps = scan_applications(self.launcher_config.get('application_dirs', []))
        if len(apps) == 0 and not self.backend is None:
            apps = [LauncherApp(identity.app_id, identity.name)
                for identity in await self.backend.list_apps()]
        self.setApps(apps)

    def schedule(self, coro):
        task = asyncio.ensure_future(coro)
        self.tasks.add(task)
        task.add_done_callback(self.tasks.discard)
        return task

    def requestUninstall(self, app):
        if self.flow is None:
            return
        task = self.schedule(self.flow.show_remove_dialog(app))
        task.add_done_callback(self.uninstallDone)

    def uninstallDone(self, task):
        if task.cancelled():
            return
        if task.exception() is not None:
            logger.error('Remove flow failed', exc_info=task.exception())
            return
        if task.result() is FlowState.UNINSTALLED:
            self.schedule(self.loadApps())

import asyncio
import gc

from qtpy import QtCore, QtGui, QtWidgets

from flatremove.core.feedback import Decoration, FeedbackHandle, FeedbackSettings, ProgressRing
from flatremove.core.flow import FlowState
from flatremove.core.models import AppIdentity
from flatremove.gcore.qtimer import QtTimer, QtTimerFactory
from flatremove.panels.launcher import LauncherSurfaceProvider, LauncherWindow
from flatremove.utils.desktop import LauncherApp
from flatremove.widgets.spinner import SpinnerOverlay
from flatremove.widgets.surfaces import QtIconSurface


def make_tile(parent=None):
    tile = QtWidgets.QToolButton(parent)
    pixmap = QtGui.QPixmap(32, 32)
    pixmap.fill(QtGui.QColor('red'))
    tile.setIcon(QtGui.QIcon(pixmap))
    tile.resize(80, 60)
    return tile


def overlays_of(tile):
    return tile.findChildren(SpinnerOverlay)


def test_timer_start_stop(qapp):
    timer = QtTimer()
    timer.start(16, lambda: None)
    assert timer.is_active()
    timer.stop()
    assert not timer.is_active()
    assert timer.callback is None
    timer.stop()


def test_feedback_on_tile_is_fully_removed(qapp):
    tile = make_tile()
    surface = QtIconSurface(tile)
    icon_key = tile.icon().cacheKey()
    handle = FeedbackHandle.create(surface, QtTimerFactory(), FeedbackSettings())

    assert surface.geometry() == (80, 60)

    handle.attach()
    assert not tile.isEnabled()
    assert isinstance(tile.graphicsEffect(), QtWidgets.QGraphicsOpacityEffect)
    assert tile.graphicsEffect().opacity() == 0.5
    assert len(overlays_of(tile)) == 1
    assert handle.driver.active
    assert tile.icon().cacheKey() != icon_key

    handle.release()
    assert tile.isEnabled()
    assert tile.graphicsEffect() is None
    assert tile.icon().cacheKey() == icon_key
    assert overlays_of(tile) == []
    assert not handle.driver.active


def test_host_effect_is_kept(qapp):
    tile = make_tile()
    effect = QtWidgets.QGraphicsColorizeEffect(tile)
    tile.setGraphicsEffect(effect)
    surface = QtIconSurface(tile)
    decoration = Decoration(ProgressRing(24))

    surface.attach_overlay(decoration)
    assert tile.graphicsEffect() is effect
    surface.detach_overlay(decoration)
    assert tile.graphicsEffect() is effect


def test_spinner_paints(qapp):
    tile = make_tile()
    decoration = Decoration(ProgressRing(40, line_width=4))
    overlay = SpinnerOverlay(tile, decoration)
    assert overlay.geometry() == QtCore.QRect(0, 0, 80, 60)

    decoration.ring.set_elapsed(0.3)
    decoration.changed()
    assert not overlay.grab().isNull()

    rect = overlay.ring_rect()
    assert rect.width() == 36
    assert rect.center() == QtCore.QRectF(overlay.rect()).center()

    overlay.close_overlay()
    assert decoration.listeners == []


def test_deleted_tile_turns_into_no_op(qapp):
    parent = QtWidgets.QWidget()
    surface = QtIconSurface(make_tile(parent))

    parent = None
    gc.collect()

    assert not surface.alive
    surface.set_interactive(False)
    surface.hide()
    surface.attach_overlay(Decoration(ProgressRing(24)))
    assert surface.geometry() is None


def test_tile_deleted_while_spinning(qapp):
    parent = QtWidgets.QWidget()
    tile = make_tile(parent)
    surface = QtIconSurface(tile)
    handle = FeedbackHandle.create(surface, QtTimerFactory(), FeedbackSettings())
    handle.attach()
    assert len(handle.decoration.listeners) == 1

    tile.deleteLater()
    QtCore.QCoreApplication.sendPostedEvents(None, QtCore.QEvent.DeferredDelete)

    assert not surface.alive
    assert handle.decoration.listeners == []
    handle.driver.tick()
    handle.release()
    assert not handle.driver.active


def test_interaction_restored_as_before(qapp):
    tile = make_tile()
    policy = tile.focusPolicy()
    surface = QtIconSurface(tile)
    handle = FeedbackHandle.create(surface, QtTimerFactory(), FeedbackSettings())

    handle.attach()
    assert tile.focusPolicy() == QtCore.Qt.NoFocus
    handle.release()
    assert (tile.isEnabled(), tile.focusPolicy()) == (True, policy)

    surface.set_interactive(True)
    assert tile.focusPolicy() == policy


def test_disabled_tile_stays_disabled(qapp):
    tile = make_tile()
    tile.setEnabled(False)
    surface = QtIconSurface(tile)
    handle = FeedbackHandle.create(surface, QtTimerFactory(), FeedbackSettings())

    handle.attach()
    handle.release()
    surface.set_interactive(True)

    assert not tile.isEnabled()


def launcher(qapp):
    launcher_config = dict(
        columns=4,
        icon_size=32,
        dock=['org.example.App'],
        folders={'Tools': ['org.example.App.desktop']},
        application_dirs=[])
    window = LauncherWindow(launcher_config)
    window.setApps([
        LauncherApp('org.example.App.desktop', 'Example'),
        LauncherApp('org.other.App.desktop', 'Other'),
        ])
    return window


def test_provider_finds_folder_dock_and_search_tiles(qapp):
    window = launcher(qapp)
    provider = LauncherSurfaceProvider(window)
    identity = AppIdentity('org.example.App', 'Example')

    assert len(provider.find_surfaces(identity)) == 2

    window.searchEdit.setText('exam')
    surfaces = provider.find_surfaces(identity)
    assert len(surfaces) == 3
    assert all(surface.tile.app_id == 'org.example.App.desktop' for surface in surfaces)

    window.searchEdit.setText('nothing matches')
    assert len(provider.find_surfaces(identity)) == 2


def test_uninstall_requested_from_tile(qapp):
    window = launcher(qapp)
    seen = []

    class Flow:
        async def show_remove_dialog(self, app):
            seen.append(app)
            return FlowState.CANCELLED

    window.flow = Flow()
    tile = next(window.tiles())

    async def request():
        tile.uninstallRequested.emit(tile.app)
        await asyncio.gather(*list(window.tasks))

    asyncio.run(request())

    assert seen == [tile.app]
    assert window.tasks == set()

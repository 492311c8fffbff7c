"""
Launcher tiles seen as icon surfaces by the uninstall executor.
"""
import logging

from qtpy import QtCore, QtGui, QtWidgets

from .spinner import SpinnerOverlay

logger = logging.getLogger(__name__)


class QtIconSurface(object):
    """
    Non owning handle on a tile button.

    The host may delete the tile at any time; from then on every call is
    a no-op.
    """

    def __init__(self, tile):
        self.tile = tile
        self.alive = True
        self.overlays = dict()
        self.saved = None
        self.interaction = None
        tile.destroyed.connect(self._on_destroyed)

    def _on_destroyed(self, *args):
        logger.debug('Icon surface deleted by the host')
        self.alive = False
        # The overlays went down with the tile, stop redrawing them
        for decoration, overlay in self.overlays.values():
            decoration.disconnect(overlay.update)
        self.overlays.clear()
        self.saved = None
        self.interaction = None

    def set_interactive(self, interactive):
        """
        Disable the tile, or put back the enabled state and focus policy
        it had before it was disabled here.
        """
        if not self.alive:
            return

        if not interactive:
            if self.interaction is None:
                self.interaction = (self.tile.isEnabled(), self.tile.focusPolicy())
            self.tile.setEnabled(False)
            self.tile.setFocusPolicy(QtCore.Qt.NoFocus)

        elif not self.interaction is None:
            enabled, policy = self.interaction
            self.tile.setEnabled(enabled)
            self.tile.setFocusPolicy(policy)
            self.interaction = None

    def hide(self):
        if not self.alive:
            return
        self.tile.hide()

    def geometry(self):
        if not self.alive:
            return None
        size = self.tile.size()
        if size.width() <= 0 or size.height() <= 0:
            return None
        return (size.width(), size.height())

    def attach_overlay(self, decoration):
        if not self.alive or id(decoration) in self.overlays:
            return

        if self.saved is None:
            self.saved = (self.tile.icon(), self.tile.graphicsEffect())
            self.desaturate(decoration.dim_opacity)

        self.overlays[id(decoration)] = (decoration, SpinnerOverlay(self.tile, decoration))

    def detach_overlay(self, decoration):
        if not self.alive:
            return

        _, overlay = self.overlays.pop(id(decoration), (None, None))
        if not overlay is None:
            overlay.close_overlay()

        if len(self.overlays) == 0 and not self.saved is None:
            self.restore()

    def desaturate(self, opacity):
        icon, effect = self.saved
        size = self.tile.iconSize()
        gray = QtGui.QIcon(icon.pixmap(size, QtGui.QIcon.Disabled))
        self.tile.setIcon(gray)

        # Only dim when the host has no effect of its own on the tile
        if effect is None:
            dim = QtWidgets.QGraphicsOpacityEffect(self.tile)
            dim.setOpacity(opacity)
            self.tile.setGraphicsEffect(dim)

    def restore(self):
        icon, effect = self.saved
        self.tile.setIcon(icon)
        if effect is None:
            self.tile.setGraphicsEffect(None)
        self.saved = None

"""
The modal dialogs of the remove flow.
"""
import asyncio
import logging

from qtpy import QtWidgets
from qtpy.QtCore import Qt

logger = logging.getLogger(__name__)

STYLE = """
QDialog#removeDialog QLabel#title { font-size: 14pt; font-weight: bold; }
QPushButton#radioRow { text-align: left; border: none; padding: 6px; }
QPushButton#radioRow:hover { background-color: palette(midlight); }
QLabel#radioSubtitle { color: palette(mid); }
QPushButton#destructive { background-color: #c01c28; color: white; padding: 4px 12px; }
"""


class RadioRow(QtWidgets.QPushButton):
    """
    A clickable row with a radio indicator, a title and a subtitle.

    The indicator itself takes no input, the whole row selects the option.
    """

    def __init__(self, group, option, parent=None):
        super().__init__(parent=parent)
        self.setObjectName('radioRow')
        self.setFlat(True)
        self.group = group
        self.option = option

        self.radio = QtWidgets.QRadioButton(self)
        self.radio.setAutoExclusive(False)
        self.radio.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.radio.setFocusPolicy(Qt.NoFocus)

        title = QtWidgets.QLabel(option.title, self)
        subtitle = QtWidgets.QLabel(option.subtitle, self)
        subtitle.setObjectName('radioSubtitle')
        subtitle.setWordWrap(True)

        textbox = QtWidgets.QVBoxLayout()
        textbox.addWidget(title)
        textbox.addWidget(subtitle)

        layout = QtWidgets.QHBoxLayout()
        layout.addWidget(self.radio, 0, Qt.AlignVCenter)
        layout.addLayout(textbox, 1)
        self.setLayout(layout)
        self.setMinimumHeight(layout.sizeHint().height())

        self.clicked.connect(self.select)
        self.refresh()

    def select(self):
        self.group.select(self.option.value)

    def refresh(self, *args):
        self.radio.setChecked(self.group.is_selected(self.option.value))

    def sizeHint(self):
        return self.layout().sizeHint()


class RemoveDialog(QtWidgets.QDialog):

    def __init__(self, spec, parent=None):
        super().__init__(parent)
        self.spec = spec
        self.activated = None
        self.rows = []
        self.buttons = dict()
        self.setObjectName('removeDialog')
        self.setStyleSheet(STYLE)
        self.setWindowTitle(spec.title)
        self.initgui()

    def initgui(self):
        title = QtWidgets.QLabel(self.spec.title, self)
        title.setObjectName('title')
        title.setAlignment(Qt.AlignCenter)

        body = QtWidgets.QLabel(self.spec.body, self)
        body.setWordWrap(True)
        body.setAlignment(Qt.AlignCenter)

        layout = QtWidgets.QVBoxLayout()
        layout.addWidget(title)
        layout.addWidget(body)

        if not self.spec.choice is None:
            layout.addWidget(self.make_choice_list(self.spec.choice))

        hlayout = QtWidgets.QHBoxLayout()
        hlayout.addStretch(1)
        for button in self.spec.buttons:
            hlayout.addWidget(self.make_button(button))
        layout.addLayout(hlayout)

        self.setLayout(layout)

    def make_choice_list(self, group):
        frame = QtWidgets.QFrame(self)
        frame.setFrameShape(QtWidgets.QFrame.StyledPanel)
        vlayout = QtWidgets.QVBoxLayout()
        vlayout.setContentsMargins(0, 0, 0, 0)
        vlayout.setSpacing(0)

        for index, option in enumerate(group.options):
            if index > 0:
                separator = QtWidgets.QFrame(frame)
                separator.setFrameShape(QtWidgets.QFrame.HLine)
                separator.setFrameShadow(QtWidgets.QFrame.Sunken)
                vlayout.addWidget(separator)
            row = RadioRow(group, option, frame)
            group.connect(row.refresh)
            self.rows.append(row)
            vlayout.addWidget(row)

        frame.setLayout(vlayout)
        return frame

    def make_button(self, button):
        qbutton = QtWidgets.QPushButton(button.label, self)
        qbutton.setAutoDefault(False)
        if button.destructive:
            qbutton.setObjectName('destructive')
        qbutton.clicked.connect(lambda checked=False, button=button: self.activate(button))
        self.buttons[button.label] = qbutton
        return qbutton

    def activate(self, button):
        self.activated = button
        if button.is_cancel:
            self.reject()
        else:
            self.accept()

    def activated_button(self):
        """The activated button, rejecting counts as the cancel button."""
        if self.activated is None:
            return self.spec.cancel_button
        return self.activated


class QtDialogPresenter(object):
    """Open a RemoveDialog and wait for it without blocking the event loop."""

    def __init__(self, parent=None):
        self.parent = parent
        self.current = None

    async def present(self, spec):
        future = asyncio.get_running_loop().create_future()
        dialog = RemoveDialog(spec, self.parent)

        def finished(result):
            if not future.done():
                future.set_result(dialog.activated_button())

        dialog.finished.connect(finished)
        self.current = dialog
        dialog.open()

        try:
            button = await future
        finally:
            self.current = None
            dialog.deleteLater()

        logger.debug(f'Dialog "{spec.title}" closed by {button.label if button else None}')
        return button

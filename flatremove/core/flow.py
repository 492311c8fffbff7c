"""
The remove flow: resolve where an application is installed, ask for
confirmation and hand a confirmed request to the executor.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .models import AppIdentity, DataChoice, UninstallRequest
from .resolver import resolve_scopes

logger = logging.getLogger(__name__)


class FlowState(enum.Enum):
    IDLE = 'idle'
    RESOLVING = 'resolving'
    ABORTED = 'aborted'
    NONE_INSTALLED = 'none installed'
    MULTIPLE_INSTALLED = 'multiple installed'
    CONFIRMING = 'confirming'
    CANCELLED = 'cancelled'
    UNINSTALLED = 'uninstalled'
    FAILED = 'failed'
    BUSY = 'busy'


class Response(enum.Enum):
    CANCEL = 'cancel'
    CONFIRM = 'confirm'
    DISMISS = 'dismiss'


@dataclass(frozen=True)
class RadioOption:
    value: object
    title: str
    subtitle: str = ''


class RadioGroup(object):
    """Single selection group, exactly one option is selected at any time."""

    def __init__(self, options, selected=None):
        if len(options) == 0:
            raise ValueError('A radio group needs at least one option')
        self.options = list(options)
        self._selected = self.options[0] if selected is None else self._find(selected)
        self.listeners = []

    def _find(self, value):
        for option in self.options:
            if option.value == value or option is value:
                return option
        raise ValueError(f'{value!r} is not an option of this group')

    @property
    def selected(self):
        return self._selected.value

    def is_selected(self, value):
        return self._find(value) is self._selected

    def select(self, value):
        option = self._find(value)
        if option is self._selected:
            return
        self._selected = option
        for callback in list(self.listeners):
            callback(option.value)

    def connect(self, callback):
        self.listeners.append(callback)


@dataclass(frozen=True)
class DialogButton:
    label: str
    response: Response
    is_cancel: bool = False
    destructive: bool = False


@dataclass
class DialogSpec:
    title: str
    body: str
    buttons: List[DialogButton] = field(default_factory=list)
    choice: Optional[RadioGroup] = None

    @property
    def cancel_button(self):
        for button in self.buttons:
            if button.is_cancel:
                return button
        return None


def data_choice_group():
    return RadioGroup([
        RadioOption(DataChoice.KEEP, 'Keep Data', 'Allow restoring settings and content'),
        RadioOption(DataChoice.DELETE, 'Delete Data', 'Permanently remove app data to save space'),
        ], selected=DataChoice.KEEP)


def confirm_spec(name):
    return DialogSpec(
        title=f'Remove {name}?',
        body=f'It will not be possible to use {name} after it is uninstalled.',
        buttons=[
            DialogButton('Cancel', Response.CANCEL, is_cancel=True),
            DialogButton('Uninstall', Response.CONFIRM, destructive=True),
            ],
        choice=data_choice_group())


def multiple_spec(name, manager_name):
    return DialogSpec(
        title=f'Remove {name}?',
        body=f'{name} is installed in multiple locations. Please use {manager_name} to manage it.',
        buttons=[DialogButton('OK', Response.DISMISS, is_cancel=True)])


class RemoveFlow(object):
    """
    One remove flow per host; each show_remove_dialog call handles one request.

    :param backend: scope queries, see FlatpakBackend
    :param presenter: has ``async present(spec) -> DialogButton``
    :param notifier: has ``notify(title, body, is_error=False)``
    :param executor: has ``async run(identity, scope, delete_data) -> bool``
    """

    def __init__(self, backend, presenter, notifier, executor, manager_name='Bazaar'):
        self.backend = backend
        self.presenter = presenter
        self.notifier = notifier
        self.executor = executor
        self.manager_name = manager_name
        self.state = FlowState.IDLE
        self.request = None

    def _enter(self, state):
        logger.debug(f'Remove flow {self.state.value} -> {state.value}')
        self.state = state
        return state

    async def show_remove_dialog(self, app):
        identity = AppIdentity.from_app(app)
        if identity is None:
            return self._enter(FlowState.ABORTED)

        self._enter(FlowState.RESOLVING)
        scopes = await resolve_scopes(self.backend, identity.app_id)
        name = identity.name

        if len(scopes) == 0:
            self.notifier.notify('Cannot Uninstall App',
                f'{name} does not appear to be installed as a Flatpak.', is_error=True)
            return self._enter(FlowState.NONE_INSTALLED)

        if len(scopes) > 1:
            self._enter(FlowState.MULTIPLE_INSTALLED)
            await self.presenter.present(multiple_spec(name, self.manager_name))
            return self.state

        self.request = UninstallRequest(identity, scopes)
        try:
            return await self._confirm_and_run(self.request)
        finally:
            self.request = None

    async def _confirm_and_run(self, request):
        self._enter(FlowState.CONFIRMING)
        spec = confirm_spec(request.identity.name)
        button = await self.presenter.present(spec)

        if button is None or button.response is not Response.CONFIRM:
            return self._enter(FlowState.CANCELLED)

        delete_data = spec.choice.selected is DataChoice.DELETE
        success = await self.executor.run(request.identity, request.scope, delete_data)
        if success is None:
            return self._enter(FlowState.BUSY)
        return self._enter(FlowState.UNINSTALLED if success else FlowState.FAILED)

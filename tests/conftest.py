import pytest

from flatremove.core.executor import UninstallExecutor
from flatremove.core.feedback import FeedbackSettings
from flatremove.core.flow import RemoveFlow
from flatremove.core.models import Scope

from fakes import FakeBackend, FakeNotifier, FakeProvider, FakeSurface, FakeTimerFactory


@pytest.fixture
def backend():
    return FakeBackend(installed=[Scope.USER])


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def timers():
    return FakeTimerFactory()


@pytest.fixture
def surfaces():
    return [
        FakeSurface('org.example.App.desktop'),
        FakeSurface('org.example.App'),
        FakeSurface('org.example.App.desktop', size=None),
        FakeSurface('org.other.App.desktop'),
        ]


@pytest.fixture
def provider(surfaces):
    return FakeProvider(surfaces)


@pytest.fixture
def executor(backend, provider, notifier, timers):
    return UninstallExecutor(backend, provider, notifier, timers, FeedbackSettings(), 'Bazaar')


@pytest.fixture
def make_flow(backend, notifier, executor):
    def make_flow(presenter):
        return RemoveFlow(backend, presenter, notifier, executor, 'Bazaar')
    return make_flow

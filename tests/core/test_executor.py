import asyncio

from flatremove.core.executor import UninstallExecutor
from flatremove.core.feedback import FeedbackSettings
from flatremove.core.models import AppIdentity, Scope

from fakes import FakeProvider, FakeSurface

IDENTITY = AppIdentity('org.example.App', 'Example')


def matching(surfaces):
    return [surface for surface in surfaces if IDENTITY.matches(surface.desktop_id)]


def test_feedback_while_removing(executor, backend, surfaces, timers):
    seen = dict()

    def during_remove():
        seen['interactive'] = [surface.interactive for surface in surfaces]
        seen['overlays'] = [len(surface.overlays) for surface in surfaces]
        seen['opacity'] = [surface.opacity for surface in surfaces]
        seen['active_timers'] = len(timers.active())

    backend.during_remove = during_remove
    asyncio.run(executor.run(IDENTITY, Scope.USER, False))

    assert seen['interactive'] == [False, False, False, True]
    assert seen['overlays'] == [1, 1, 1, 0]
    assert seen['opacity'] == [0.5, 0.5, 0.5, 1.0]
    assert seen['active_timers'] == 3


def test_success_hides_and_notifies_once(executor, surfaces, notifier, timers):
    assert asyncio.run(executor.run(IDENTITY, Scope.USER, True)) is True

    for surface in matching(surfaces):
        assert surface.hidden
        assert surface.overlays == []
        assert surface.opacity == 1.0

    assert not surfaces[-1].hidden
    assert surfaces[-1].calls == []
    assert notifier.notifications == [('Example Uninstalled', 'Example was successfully removed.', False)]
    assert timers.active() == []


def test_failure_restores_and_notifies_once(executor, backend, surfaces, notifier, timers):
    backend.remove_result = False

    assert asyncio.run(executor.run(IDENTITY, Scope.SYSTEM, False)) is False

    for surface in matching(surfaces):
        assert not surface.hidden
        assert surface.interactive
        assert surface.overlays == []
        assert surface.opacity == 1.0

    assert notifier.notifications == [
        ('Failed to Remove Example', 'Could not uninstall Example. Try using Bazaar instead.', True)]
    assert timers.active() == []


def test_no_surfaces_still_removes(backend, notifier, timers):
    executor = UninstallExecutor(backend, FakeProvider(), notifier, timers)

    assert asyncio.run(executor.run(IDENTITY, Scope.USER, False)) is True
    assert backend.removals == [('org.example.App', Scope.USER, False)]
    assert len(notifier.notifications) == 1


def test_duplicate_surface_decorated_once(backend, notifier, timers):
    surface = FakeSurface('org.example.App.desktop')
    executor = UninstallExecutor(backend, FakeProvider([surface, surface]), notifier, timers)

    backend.during_remove = lambda: surface.calls.append(('overlays', len(surface.overlays)))
    asyncio.run(executor.run(IDENTITY, Scope.USER, False))

    assert ('overlays', 1) in surface.calls
    assert len(timers.timers) == 1


def test_no_leaked_timers_after_many_cycles(executor, backend, surfaces, timers):
    for cycle in range(50):
        backend.remove_result = cycle % 2 == 0
        for surface in surfaces:
            surface.hidden = False
        asyncio.run(executor.run(IDENTITY, Scope.USER, False))

    assert len(timers.timers) == 50 * 3
    assert timers.active() == []
    assert all(timer.callback is None for timer in timers.timers)
    assert all(surface.overlays == [] for surface in surfaces)


def test_backend_error_counts_as_failure(executor, backend, surfaces, notifier, timers, caplog):
    def boom():
        raise ValueError('embedded null byte')

    backend.during_remove = boom

    assert asyncio.run(executor.run(IDENTITY, Scope.USER, False)) is False

    assert 'embedded null byte' in caplog.text
    assert notifier.notifications == [
        ('Failed to Remove Example', 'Could not uninstall Example. Try using Bazaar instead.', True)]
    assert not any(surface.hidden for surface in surfaces)
    assert timers.active() == []
    assert all(surface.overlays == [] and surface.interactive for surface in surfaces)
    assert executor.in_flight == set()


def test_second_run_for_same_identity_refused(backend, provider, notifier, timers):
    executor = UninstallExecutor(backend, provider, notifier, timers)

    async def both():
        return await asyncio.gather(
            executor.run(IDENTITY, Scope.USER, False),
            executor.run(IDENTITY, Scope.USER, False))

    async def slow_remove(app_id, scope, delete_data=False):
        backend.removals.append((app_id, scope, delete_data))
        await asyncio.sleep(0)
        return True

    backend.remove = slow_remove

    assert asyncio.run(both()) == [True, None]
    assert len(backend.removals) == 1
    assert len(notifier.notifications) == 1


def test_ring_size_from_geometry(backend, notifier, timers):
    sizes = dict()
    small = FakeSurface('org.example.App', size=(40, 100))
    unknown = FakeSurface('org.example.App.desktop', size=None)
    settings = FeedbackSettings(size_ratio=0.5, default_size=32)
    executor = UninstallExecutor(backend, FakeProvider([small, unknown]), notifier, timers, settings)

    def during_remove():
        sizes['small'] = small.overlays[0].ring.size
        sizes['unknown'] = unknown.overlays[0].ring.size

    backend.during_remove = during_remove
    asyncio.run(executor.run(IDENTITY, Scope.USER, False))

    assert sizes == {'small': 20, 'unknown': 32}

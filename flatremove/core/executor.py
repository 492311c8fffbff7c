import logging

from .feedback import FeedbackHandle, FeedbackSettings

logger = logging.getLogger(__name__)


class UninstallExecutor(object):
    """
    Remove one application and drive the feedback on all its icons.

    run() returns True or False for the removal, or None when a removal of
    the same application is still running.

    :param backend: has ``async remove(app_id, scope, delete_data) -> bool``
    :param provider: has ``find_surfaces(identity) -> list``
    :param notifier: has ``notify(title, body, is_error=False)``
    :param timer_factory: has ``create_timer()``
    :param settings: FeedbackSettings
    :param manager_name: application suggested when removal fails
    """

    def __init__(self, backend, provider, notifier, timer_factory, settings=None, manager_name='Bazaar'):
        self.backend = backend
        self.provider = provider
        self.notifier = notifier
        self.timer_factory = timer_factory
        self.settings = settings or FeedbackSettings()
        self.manager_name = manager_name
        self.in_flight = set()

    def discover(self, identity):
        """Snapshot of the surfaces showing identity, each surface once."""
        surfaces = []
        seen = set()
        for surface in self.provider.find_surfaces(identity):
            if id(surface) in seen:
                continue
            seen.add(id(surface))
            surfaces.append(surface)
        return surfaces

    def begin_feedback(self, surfaces):
        handles = []
        try:
            for surface in surfaces:
                handle = FeedbackHandle.create(surface, self.timer_factory, self.settings)
                handles.append(handle)
                handle.attach()
        except Exception:
            self.end_feedback(handles)
            raise
        return handles

    def end_feedback(self, handles):
        for handle in handles:
            handle.release()

    async def run(self, identity, scope, delete_data=False):
        app_id, name = identity.app_id, identity.name

        if app_id in self.in_flight:
            logger.warning(f'Uninstall of {app_id} already running')
            return None

        self.in_flight.add(app_id)

        try:
            surfaces = self.discover(identity)
            logger.debug(f'{len(surfaces)} icon surfaces found for {app_id}')
            handles = self.begin_feedback(surfaces)

            try:
                logger.info(f'Uninstalling {app_id} {scope.flag} deleteData={delete_data}')
                try:
                    success = await self.backend.remove(app_id, scope, delete_data)
                except Exception:
                    logger.exception(f'Uninstall of {app_id} raised')
                    success = False
                logger.info(f'Uninstall {scope.flag} {"succeeded" if success else "failed"} for {app_id}')
            finally:
                self.end_feedback(handles)

        finally:
            self.in_flight.discard(app_id)

        if success:
            for surface in surfaces:
                surface.hide()
            self.notifier.notify(f'{name} Uninstalled', f'{name} was successfully removed.')

        else:
            for surface in surfaces:
                surface.set_interactive(True)
            self.notifier.notify(f'Failed to Remove {name}',
                f'Could not uninstall {name}. Try using {self.manager_name} instead.', is_error=True)

        return success

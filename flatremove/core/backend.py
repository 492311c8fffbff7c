"""
The flatpak command line as package backend.

All process errors end here: scope queries downgrade them to
"not installed", removal reports them as a failed removal.
"""
import asyncio
import logging

from .models import AppIdentity, Scope


class FlatpakBackend(object):

    def __init__(self, command='flatpak', logger=None):
        self.command = command
        self.logger = logger or logging.getLogger(__name__)

    async def _run(self, argv, silent=True):
        kwargs = dict()
        if silent:
            kwargs = dict(stdout=asyncio.subprocess.DEVNULL, stderr=asyncio.subprocess.DEVNULL)
        proc = await asyncio.create_subprocess_exec(*argv, **kwargs)
        return await proc.wait()

    async def query_installed(self, app_id: str, scope: Scope) -> bool:
        """Return True if ``flatpak info`` finds app_id in this scope."""
        argv = [self.command, 'info', scope.flag, app_id]
        try:
            returncode = await self._run(argv)
        except OSError as ex:
            self.logger.debug(f'{" ".join(argv)} could not run: {ex}')
            return False

        if returncode != 0:
            self.logger.debug(f'{" ".join(argv)} exited with {returncode}')
            return False

        return True

    async def remove(self, app_id: str, scope: Scope, delete_data: bool = False) -> bool:
        """Uninstall app_id from scope, return True on exit code zero."""
        argv = [self.command, 'uninstall', scope.flag, '-y', app_id]
        if delete_data:
            argv.append('--delete-data')
        try:
            returncode = await self._run(argv, silent=False)
        except OSError as ex:
            self.logger.error(f'{" ".join(argv)} could not run: {ex}')
            return False

        if returncode != 0:
            self.logger.warning(f'{" ".join(argv)} exited with {returncode}')

        return returncode == 0

    async def list_apps(self):
        """List the installed applications as AppIdentity values."""
        argv = [self.command, 'list', '--app', '--columns=application,name']
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.DEVNULL)
            stdout, _ = await proc.communicate()
        except OSError as ex:
            self.logger.debug(f'{" ".join(argv)} could not run: {ex}')
            return []

        if proc.returncode != 0:
            self.logger.debug(f'{" ".join(argv)} exited with {proc.returncode}')
            return []

        apps = []
        seen = set()
        for line in stdout.decode('utf-8', errors='replace').splitlines():
            parts = line.strip().split('\t', 1)
            if not parts[0] or parts[0] in seen:
                continue
            seen.add(parts[0])
            name = parts[1].strip() if len(parts) > 1 and parts[1].strip() else parts[0]
            apps.append(AppIdentity(parts[0], name))
        return apps

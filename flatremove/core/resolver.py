import asyncio
import logging

from .models import Scope

logger = logging.getLogger(__name__)

SCOPES = (Scope.USER, Scope.SYSTEM)


async def resolve_scopes(backend, app_id):
    """
    Return the frozenset of scopes in which app_id is installed.

    Every scope is queried once. A failing query counts as not installed.
    """
    answers = await asyncio.gather(*(backend.query_installed(app_id, scope) for scope in SCOPES))
    scopes = frozenset(scope for scope, installed in zip(SCOPES, answers) if installed)
    logger.debug(f'{app_id} installed in {sorted(scope.name for scope in scopes)}')
    return scopes

"""
Values passed around during one uninstall request.
"""
import enum
from dataclasses import dataclass
from typing import FrozenSet, Optional

DESKTOP_SUFFIX = '.desktop'
UNKNOWN_NAME = 'this app'


class Scope(enum.Enum):
    """Installation where the package backend tracks an installed ref."""

    USER = '--user'
    SYSTEM = '--system'

    @property
    def flag(self):
        return self.value


class DataChoice(enum.Enum):
    KEEP = 'keep'
    DELETE = 'delete'


def strip_desktop_suffix(desktop_id):
    """
    Remove one trailing .desktop from a desktop-entry id.

    An application id that itself ends in .desktop can not be told apart
    from a desktop-entry id and loses the suffix as well.
    """
    if desktop_id.endswith(DESKTOP_SUFFIX):
        return desktop_id[:-len(DESKTOP_SUFFIX)]
    return desktop_id


def _attribute_or_getter(app, attribute, getter):
    value = getattr(app, attribute, None)
    if value is None and callable(getattr(app, getter, None)):
        value = getattr(app, getter)()
    return value


@dataclass(frozen=True)
class AppIdentity:
    app_id: str
    name: str = UNKNOWN_NAME

    @classmethod
    def from_app(cls, app) -> Optional['AppIdentity']:
        """
        Build the identity of a host application object.

        The object either has ``app_id`` and ``name`` attributes or
        ``get_id()`` and ``get_name()`` methods.
        Return None if there is no app or no usable id.
        """
        if app is None:
            return None

        desktop_id = _attribute_or_getter(app, 'app_id', 'get_id')
        if not desktop_id:
            return None

        app_id = strip_desktop_suffix(str(desktop_id))
        if not app_id:
            return None

        name = _attribute_or_getter(app, 'name', 'get_name') or UNKNOWN_NAME
        return cls(app_id, str(name))

    def desktop_ids(self):
        """Both ids a launcher might show this application under."""
        return (self.app_id, f'{self.app_id}{DESKTOP_SUFFIX}')

    def matches(self, desktop_id) -> bool:
        return desktop_id in self.desktop_ids()


@dataclass(frozen=True)
class UninstallRequest:
    identity: AppIdentity
    scopes: FrozenSet[Scope]

    @property
    def scope(self) -> Scope:
        if len(self.scopes) != 1:
            raise ValueError(f'{self.identity.app_id} has {len(self.scopes)} installed scopes, expected 1')
        return next(iter(self.scopes))

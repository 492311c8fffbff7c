"""
Exported .desktop entries of installed Flatpak applications.
"""
import configparser
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SECTION = 'Desktop Entry'


@dataclass(frozen=True)
class LauncherApp:
    """What the launcher needs to show one application."""

    app_id: str
    name: str
    icon_name: str = ''

    def get_id(self):
        return self.app_id

    def get_name(self):
        return self.name


def read_desktop_file(path):
    """Return a LauncherApp for a visible application entry, else None."""
    path = Path(path)
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str

    try:
        parser.read(path, encoding='utf-8')
    except (configparser.Error, UnicodeDecodeError) as ex:
        logger.debug(f'Skipping {path}: {ex}')
        return None

    if not parser.has_section(SECTION):
        return None

    entry = parser[SECTION]

    if entry.get('Type', '') != 'Application':
        return None

    for key in ('NoDisplay', 'Hidden'):
        if entry.get(key, 'false').lower() == 'true':
            return None

    desktop_id = path.name
    name = entry.get('Name', '') or desktop_id
    return LauncherApp(desktop_id, name, entry.get('Icon', ''))


def scan_applications(application_dirs):
    """
    List the applications exported in application_dirs.

    The first directory exporting a desktop id wins.
    """
    apps = []
    seen = set()

    for app_dir in application_dirs:
        app_dir = Path(app_dir).expanduser()
        if not app_dir.is_dir():
            continue
        for desktop_file in sorted(app_dir.glob('*.desktop')):
            if desktop_file.name in seen:
                continue
            app = read_desktop_file(desktop_file)
            if app is None:
                continue
            seen.add(desktop_file.name)
            apps.append(app)

    logger.debug(f'{len(apps)} applications found')
    return apps

#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Build an installable package."""

from pathlib import Path

from setuptools import find_packages, setup

herepath = Path(__file__).parent.absolute()

MODULE_NAME = 'flatremove'
DISTRO_NAME = 'flat-remove'
DESCRIPTION = 'Uninstall Flatpak applications from an application launcher'
EMAIL = 'thomas.cools@telenet.be'
AUTHOR = 'Thomas Cools'

modpath = herepath / MODULE_NAME

REQUIRED = [
    'PySide6',
    'qtpy',
    'qasync',
    'toml',
]

EXTRAS = {
    'test': ['pytest'],
}

PYTHON_REQUIRED = '>=3.8'

def get_resources():
    found_resources = []

    found_resources.append(str(Path('config') / 'defaults.json'))

    return found_resources

with open(modpath / 'version.py') as fp:
    exec(fp.read())

# Import the README and use it as the long-description.
with open(herepath / 'README.md', encoding='utf-8') as fp:
    LONG_DESCRIPTION = '\n' + fp.read()

setup(
    name=DISTRO_NAME,
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    author=AUTHOR,
    author_email=EMAIL,
    license='Apache License 2.0',
    packages=find_packages(exclude=('tests', 'tests.*')),
    package_data={MODULE_NAME: get_resources()},
    entry_points={'gui_scripts': [f'{MODULE_NAME} = {MODULE_NAME}.console:argexec']},
    install_requires=REQUIRED,
    extras_require=EXTRAS,
    include_package_data=True,
    python_requires=PYTHON_REQUIRED,
    classifiers=[
        # Trove classifiers
        # Full list: https://pypi.python.org/pypi?%3Aaction=list_classifiers
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Environment :: X11 Applications :: Qt',
    ],
)

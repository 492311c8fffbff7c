import os

import pytest

os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

try:
    from qtpy import QtWidgets
except Exception:
    QtWidgets = None
    collect_ignore_glob = ['test_*.py']


@pytest.fixture(scope='session')
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app

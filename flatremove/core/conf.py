import os
import sys
from collections.abc import Mapping
from pathlib import Path
import json
import re
import logging

import toml

logger = logging.getLogger(__name__)

config = dict()
configured = False

here = Path(__file__).parent.absolute()

FIRST_CONFIG_FILE = here.parent / 'config' / 'defaults.json'

PATHPATTERN = re.compile(r'(path|application)_\w*')


def deep_update(source, overrides):
    """
    Update a nested dictionary or similar mapping.
    Modify ``source`` in place.
    """
    for key, value in overrides.items():
        if isinstance(value, Mapping) and value:
            returned = deep_update(source.get(key, {}), value)
            source[key] = returned
        else:
            source[key] = overrides[key]
            if PATHPATTERN.match(str(key)):
                if not source[key] is None:
                    if isinstance(source[key], list):
                        source[key] = [os.path.expandvars(val) for val in source[key]]
                    else:
                        source[key] = os.path.expandvars(source[key])
    return source


def configure(**overwrites):
    """
    Fill the global config.

    Order of precedence, lowest first: the packaged defaults, every file
    of ``path_config_files`` and finally the keyword overwrites.
    """
    global configured

    if configured:
        name = sys._getframe(1).f_globals['__name__']
        logger.warning(f'configure unexpected called from {name} but already configured, no reconfiguring done')
        return
    else:
        configured = True

    config_file = FIRST_CONFIG_FILE
    logger.debug(f'Loading config: {config_file}')
    deep_update(config, load_config(config_file))

    config_files = list(overwrites.get('path_config_files', None) or config.get('path_config_files', []))
    loaded = set()

    while len(config_files) > 0:
        next_config_file = config_files.pop(0)
        config_file = Path(next_config_file).expanduser()
        if config_file in loaded:
            continue
        if not config_file.exists():
            logger.debug(f'Configfile not found: {config_file}')
            continue
        logger.info(f'Loading config: {config_file}')
        file_config = load_config(config_file)
        deep_update(config, file_config)
        loaded.add(config_file)
        config_files.extend(file_config.get('path_config_files', []))

    deep_update(config, overwrites)

    if 'QT_API' in os.environ.keys():
        pass

    elif 'qt_api' in config.keys():
        logger.debug('Configuring Qt binding by the config')
        os.environ['QT_API'] = config['qt_api']
        os.environ['FORCE_QT_API'] = '1'

    logging.root.setLevel(config['logging_level'])


def load_config(path):
    config_file = Path(path)

    if config_file.suffix in ['.toml']:
        config_dict = load_config_toml(config_file)

    elif config_file.suffix in ['.json']:
        config_dict = load_config_json(config_file)

    else:
        raise ValueError(f'Unsupported config file type: {config_file}')

    return config_dict


def load_config_json(path=None):
    with open(path, 'r') as fp:
        loaded_config = json.load(fp)
    return loaded_config


def load_config_toml(path=None):
    with open(path, 'r') as fp:
        loaded_config = toml.load(fp)
    return loaded_config


"""
Flat Remove interface to the command line
"""
import sys
import logging
import argparse

from . import __release__
from . import configure

logger = logging.getLogger(__name__)

boot_handler = logging.StreamHandler(sys.stdout)
boot_handler.set_name('boot')
logging.root.addHandler(boot_handler)


MODNAME = '.'.join(globals()['__name__'].split('.')[:-1])

HEADER = f"Flat Remove {__release__}"
HEADER += '\n' + len(HEADER) * '=' + '\n'

epilog = f"""\
Examples
--------

{MODNAME} -c ~/.config/flatremove/config.toml
{MODNAME} -d
"""


def argparser():
    parser = argparse.ArgumentParser(description=HEADER, prog=f'python -m {MODNAME}',
        formatter_class=argparse.RawDescriptionHelpFormatter, epilog=epilog)

    parser.add_argument("-c", "--config_file", action='append', help="Use this configuration file")
    parser.add_argument("-d", "--debug", action='store_true', help="Set logging level to debug")

    return parser


def argexec(argv=None, **config_kwargs):
    parser = argparser()
    args = parser.parse_args(argv)

    if args.debug:
        config_kwargs['logging_level'] = 'DEBUG'
        logging.root.setLevel(config_kwargs['logging_level'])

    if args.config_file:
        config_kwargs['path_config_files'] = args.config_file

    configure(**config_kwargs)

    # Configure has to be done before the Qt binding gets imported
    from .gcore.guiapp import eventloop
    eventloop()

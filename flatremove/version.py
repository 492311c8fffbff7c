"""Version details of Flat Remove"""

VERSION_INFO = (0, 3, 0)
VERSION = '.'.join(map(str, VERSION_INFO))

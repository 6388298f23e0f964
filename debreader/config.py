# Copyright (C) 2006-09 Andrea Mennucci.
# License: GNU Library General Public License, version 2 or later

import configparser
import logging
from os.path import expanduser
from pathlib import Path

from .deb import DEFAULT_ENCODING, DEFAULT_ERRORS
from .utils import DebReaderError

logger = logging.getLogger(__name__)

SECTION = "debreader"

CONFIG_FILES = (
    Path("/etc") / "debreader" / "debreader.conf",
    Path(expanduser("~")) / ".debreader" / "debreader.conf",
)


class Config(object):
    encoding = DEFAULT_ENCODING
    errors = DEFAULT_ERRORS
    verbose = 0
    copy_data = False

    def __init__(self, parser=None):
        if parser is None or not parser.has_section(SECTION):
            return
        s = parser[SECTION]
        self.encoding = s.get("encoding", self.encoding)
        self.errors = s.get("errors", self.errors)
        self.verbose = s.getint("verbose", self.verbose)
        self.copy_data = s.getboolean("copy_data", self.copy_data)

    def __repr__(self):
        return "Config(encoding=%r, errors=%r, verbose=%r, copy_data=%r)" % (
            self.encoding,
            self.errors,
            self.verbose,
            self.copy_data,
        )


def load_config(paths=None, extra=()):
    """read the system and user configuration files (or 'paths'),
    then those in 'extra'; later files override earlier ones"""
    if paths is None:
        paths = CONFIG_FILES
    paths = [str(p) for p in paths] + [str(p) for p in extra]
    parser = configparser.ConfigParser()
    try:
        found = parser.read(paths)
        config = Config(parser)
    except (configparser.Error, ValueError) as e:
        raise DebReaderError("Error in configuration: %s" % e, exitcode=3)
    logger.debug("configuration read from %r", found)
    return config

#!/usr/bin/python

# Copyright (C) 2006-09 Andrea Mennucci.
# License: GNU Library General Public License, version 2 or later

"""Read Debian binary packages (.deb) from a stream, in one forward pass:
the control fields, the raw control file, the list of shipped files.

A .deb is an 'ar' archive holding 'debian-binary', 'control.tar[.ext]'
and 'data.tar[.ext]'; see ar.ArReader, control.parse_control and
deb.DebReader for the three layers.
"""

import logging
import sys
import traceback

from . import utils
from .utils import DebReaderError, FormatError, UnsupportedError, read_all, de_n, de_dot
from .substream import BoundedStream
from .ar import AR_MAGIC, HEADER_LEN, ArEntry, ArReader, parse_header
from .control import control_fields, iter_key_values, parse_control
from .deb import (
    DEFAULT_ENCODING,
    DEFAULT_ERRORS,
    MEMBER_CONTROL,
    MEMBER_DATA,
    MEMBER_DEBIAN_BINARY,
    DebReader,
    DebReadResult,
    check_deb,
    classify_member,
    open_decompressed,
    read_deb,
)

logger = logging.getLogger(__name__)

__version__ = "0.1.0"


def puke(s, e=None):
    " write informations on the log, if DEBUG also traceback"
    (typ, value, trace) = sys.exc_info()
    if e is None or len(str(e)) < 2:
        logger.error(str(s) + " : " + str(e) + " " + str(typ) + " " + str(value))
    else:
        logger.error(str(s) + " : " + str(e))
    if utils.DEBUG and trace:
        logger.error("".join(traceback.format_tb(trace)))

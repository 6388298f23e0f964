# Copyright (C) 2006-09 Andrea Mennucci.
# License: GNU Library General Public License, version 2 or later

import logging

logger = logging.getLogger(__name__)

VERBOSE = 0
DEBUG = 0


class DebReaderError(Exception):
    # Subclasses that define an __init__ must call Exception.__init__
    # or define self.args.  Otherwise, str() will fail.
    default_exitcode = 1

    def __init__(self, s, exitcode=None):
        assert isinstance(s, str)
        Exception.__init__(self, s)
        if exitcode is None:
            exitcode = self.default_exitcode
        self.exitcode = exitcode


class FormatError(DebReaderError, ValueError):
    "malformed container: ar header, tar stream, missing member"
    default_exitcode = 2


class UnsupportedError(DebReaderError, NotImplementedError):
    "well formed, but a version or compression we do not know"
    default_exitcode = 3


def read_all(f, count):
    """read exactly 'count' bytes from 'f', unless the stream ends first;
    short reads from pipes and sockets are retried"""
    chunks = []
    while count > 0:
        a = f.read(count)
        if not a:
            break
        chunks.append(a)
        count -= len(a)
    return b"".join(chunks)


def de_n(a):
    if a and a[-1] == "\n":
        a = a[:-1]
    if a and a[-1] == "\r":
        a = a[:-1]
    return a


def de_dot(a):
    "tar entry names may carry a leading './', drop it"
    if a[:2] == "./":
        a = a[2:]
    return a

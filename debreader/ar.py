# Copyright (C) 2006-09 Andrea Mennucci.
# License: GNU Library General Public License, version 2 or later

# reader for 'ar' archives, see 'man 5 ar'

import datetime
import io
import logging
import re

from . import utils
from .substream import BoundedStream
from .utils import FormatError, read_all

logger = logging.getLogger(__name__)

AR_MAGIC = b"!<arch>\n"
AR_ENTRY_MAGIC = b"`\n"

# name, mtime, uid, gid, mode, size, magic
HEADER_FIELDS = (16, 12, 6, 6, 8, 10, 2)
HEADER_LEN = sum(HEADER_FIELDS)

_digits = re.compile(r"[0-9]+\Z")


class ArEntry(object):
    "one member of an 'ar' archive; 'data' is valid until the reader moves on"

    __slots__ = ("name", "timestamp", "uid", "gid", "mode", "length", "data")

    def __init__(self, name, timestamp, uid, gid, mode, length, data=None):
        assert length >= 0
        self.name = name
        self.timestamp = timestamp
        self.uid = uid
        self.gid = gid
        self.mode = mode
        self.length = length
        self.data = data

    @property
    def modification_time(self):
        return datetime.datetime.fromtimestamp(self.timestamp, datetime.timezone.utc)

    def __repr__(self):
        return "ArEntry(%r, length=%d, mode=%r)" % (self.name, self.length, self.mode)


def _split_header(header):
    fields = []
    i = 0
    for l in HEADER_FIELDS:
        fields.append(header[i : i + l])
        i += l
    return fields


def _ascii(a):
    try:
        return a.decode("ascii").rstrip(" ")
    except UnicodeDecodeError:
        raise FormatError("Invalid ar entry header: non-ASCII field %r" % a)


def _number(a):
    s = _ascii(a)
    if not _digits.match(s):
        raise FormatError("Invalid integer value %r in ar entry header" % s)
    return int(s)


def parse_header(header):
    """parse the 60 bytes header of an ar member, return an ArEntry
    without data"""
    if len(header) != HEADER_LEN:
        raise FormatError("Unexpected end of stream")
    name, mtime, uid, gid, mode, size, magic = _split_header(header)
    # checked first: a shifted header would otherwise be reported
    # as a bogus number
    if magic != AR_ENTRY_MAGIC:
        raise FormatError("Invalid ar entry header: bad magic %r" % magic)
    return ArEntry(
        _ascii(name).rstrip("/"),
        _number(mtime),
        _number(uid),
        _number(gid),
        _ascii(mode),
        _number(size),
    )


class ArReader(object):
    """Forward-only reader of an 'ar' archive.

    The magic is checked at construction. Entries are then pulled with
    get_next_entry(), or by iterating; each entry carries in 'data' a
    stream limited to its own content. Moving to the next entry closes
    the stream of the previous one, which skips whatever was not read
    and the alignment padding.
    """

    def __init__(self, fileobj):
        self.fileobj = fileobj
        self.current = None
        magic = read_all(fileobj, len(AR_MAGIC))
        if magic != AR_MAGIC:
            raise FormatError("Not an ar stream")

    def get_next_entry(self, copy_data=False):
        self.release()
        header = read_all(self.fileobj, HEADER_LEN)
        if not header:
            return None
        entry = parse_header(header)
        if utils.VERBOSE > 2:
            logger.debug("   ar member %r size %d mode %r", entry.name, entry.length, entry.mode)
        stream = BoundedStream(self.fileobj, entry.length, entry.length % 2)
        if copy_data:
            with stream:
                entry.data = io.BytesIO(stream.read())
        else:
            self.current = stream
            entry.data = stream
        return entry

    def __iter__(self):
        while True:
            entry = self.get_next_entry()
            if entry is None:
                return
            yield entry

    def read_content(self, copy_data=False):
        "yield (entry, stream) pairs; each stream is closed before the next pair"
        while True:
            entry = self.get_next_entry(copy_data)
            if entry is None:
                return
            with entry.data as stream:
                yield entry, stream

    def release(self):
        if self.current is not None:
            try:
                self.current.close()
            finally:
                self.current = None

    close = release

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()

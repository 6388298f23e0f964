# Copyright (C) 2006-09 Andrea Mennucci.
# License: GNU Library General Public License, version 2 or later

import io
import logging

from . import utils
from .utils import FormatError

logger = logging.getLogger(__name__)

SKIP_CHUNK = 64 * 1024


def _is_seekable(f):
    try:
        return bool(f.seekable())
    except (AttributeError, ValueError):
        return False


class BoundedStream(io.RawIOBase):
    """A read-only window of 'length' bytes over 'fileobj', starting at the
    current position of 'fileobj'.

    Reads never go past the window, whatever the caller asks for.
    When 'padding' is not None, closing the stream leaves 'fileobj'
    positioned exactly 'length' + 'padding' bytes after the start of
    the window, however much of it was read; so a caller may read a
    member partially (or not at all) and the next record is still found.
    A source that ends inside the window raises FormatError.
    """

    def __init__(self, fileobj, length, padding=None):
        assert length >= 0
        assert padding in (None, 0, 1)
        io.RawIOBase.__init__(self)
        self.fileobj = fileobj
        self.length = length
        self.padding = padding
        self.position = 0
        self._seekable = _is_seekable(fileobj)
        self._start = fileobj.tell() if self._seekable else 0

    def readable(self):
        return True

    def seekable(self):
        return self._seekable

    def readinto(self, b):
        if self.closed:
            raise ValueError("I/O operation on closed file")
        n = min(len(b), self.length - self.position)
        if n <= 0:
            return 0
        a = self.fileobj.read(n)
        if not a:
            raise FormatError("archive truncated")
        b[: len(a)] = a
        self.position += len(a)
        return len(a)

    def tell(self):
        if self.closed:
            raise ValueError("I/O operation on closed file")
        return self.position

    def seek(self, offset, whence=io.SEEK_SET):
        if self.closed:
            raise ValueError("I/O operation on closed file")
        if not self._seekable:
            raise io.UnsupportedOperation("underlying stream is not seekable")
        if whence == io.SEEK_SET:
            p = offset
        elif whence == io.SEEK_CUR:
            p = self.position + offset
        elif whence == io.SEEK_END:
            p = self.length + offset
        else:
            raise ValueError("invalid whence (%r)" % whence)
        self.position = min(self.length, max(0, p))
        self.fileobj.seek(self._start + self.position)
        return self.position

    def close(self):
        if self.closed:
            return
        try:
            if self.padding is not None:
                self._skip_to_end()
        finally:
            io.RawIOBase.close(self)

    def _skip_to_end(self):
        if self._seekable:
            end = self._start + self.length
            if self.fileobj.seek(0, io.SEEK_END) < end:
                raise FormatError("archive truncated")
            # may land past the end, if the last pad byte is missing
            self.fileobj.seek(end + self.padding)
            self.position = self.length
            return
        remaining = self.length - self.position
        if utils.VERBOSE > 2 and remaining:
            logger.debug("   skipping %d unread bytes", remaining)
        while remaining > 0:
            a = self.fileobj.read(min(SKIP_CHUNK, remaining))
            if not a:
                raise FormatError("archive truncated")
            remaining -= len(a)
        self.position = self.length
        # the last member of some archives lacks its pad byte
        if self.padding:
            self.fileobj.read(self.padding)

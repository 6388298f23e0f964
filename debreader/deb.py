# Copyright (C) 2006-09 Andrea Mennucci.
# License: GNU Library General Public License, version 2 or later

# https://tldp.org/HOWTO/html_single/Debian-Binary-Package-Building-HOWTO/

import bz2
import gzip
import logging
import lzma
import os
import tarfile

from . import utils
from .ar import AR_MAGIC, ArReader
from .control import CONTROL_FILE, control_fields
from .utils import FormatError, UnsupportedError, de_dot, de_n

logger = logging.getLogger(__name__)

INFO_PART = "debian-binary"
CTRL_PART = "control.tar"  # w/o extension
DATA_PART = "data.tar"
DEB_VERSION = "2.0"

MEMBER_DEBIAN_BINARY = "debian-binary"
MEMBER_CONTROL = "control"
MEMBER_DATA = "data"

DEFAULT_ENCODING = "ascii"
DEFAULT_ERRORS = "replace"


def _open_gzip(f):
    return gzip.GzipFile(fileobj=f, mode="rb")


def _open_xz(f):
    return lzma.LZMAFile(f, mode="rb")


def _open_bzip2(f):
    return bz2.BZ2File(f, mode="rb")


ext2Decompressor = {
    "gz": _open_gzip,
    "gzip": _open_gzip,
    "xz": _open_xz,
    "bzip2": _open_bzip2,
}


def open_decompressed(f, codec):
    "wrap 'f' in the decompressor for 'codec'; None means not compressed"
    if codec is None:
        return f
    try:
        opener = ext2Decompressor[codec]
    except KeyError:
        raise UnsupportedError("Unsupported extension %s" % codec)
    return opener(f)


def _match(name, prefix):
    """return (True, codec) if 'name' is 'prefix' or 'prefix.codec'"""
    if name == prefix:
        return True, None
    if name.startswith(prefix + "."):
        return True, name[len(prefix) + 1 :]
    return False, None


def classify_member(name):
    "return (kind, codec) of an ar member of a .deb; kind is None if unknown"
    if name == INFO_PART:
        return MEMBER_DEBIAN_BINARY, None
    for kind, prefix in (MEMBER_CONTROL, CTRL_PART), (MEMBER_DATA, DATA_PART):
        matched, codec = _match(name, prefix)
        if matched:
            return kind, codec
    return None, None


class DebReadResult(object):
    "what a single pass over a .deb produced; parts not requested are None"

    __slots__ = ("control", "raw_control", "files")

    def __init__(self, control=None, raw_control=None, files=None):
        self.control = control
        self.raw_control = raw_control
        self.files = files

    def __iter__(self):
        return iter((self.control, self.raw_control, self.files))


def read_debian_binary(f):
    a = de_n(f.readline().decode("ascii", "replace"))
    if a != DEB_VERSION:
        raise UnsupportedError("Unsupported package version: %s" % a)


def _open_tar(f, what):
    try:
        return tarfile.open(mode="r|", fileobj=f)
    except tarfile.TarError as e:
        raise FormatError("Corrupt %s: %s" % (what, e))


def read_control_tar(f, encoding=DEFAULT_ENCODING, errors=DEFAULT_ERRORS):
    "return (fields, raw bytes) of the 'control' file in the tar stream 'f'"
    raw = None
    with _open_tar(f, CTRL_PART) as tar:
        try:
            for tarinfo in tar:
                if de_dot(tarinfo.name) == CONTROL_FILE and tarinfo.isreg():
                    raw = tar.extractfile(tarinfo).read()
                    break
        except tarfile.TarError as e:
            raise FormatError("Corrupt %s: %s" % (CTRL_PART, e))
    if raw is None:
        raise FormatError("No control file found")
    return control_fields(raw.decode(encoding, errors)), raw


def read_data_tar(f):
    """return the names of all entries in the tar stream 'f', without the
    leading './'; directories end in '/', the root is ''"""
    files = []
    with _open_tar(f, DATA_PART) as tar:
        try:
            for tarinfo in tar:
                name = tarinfo.name
                # tarfile drops the trailing slash of directories
                if tarinfo.isdir():
                    name += "/"
                files.append(de_dot(name))
        except tarfile.TarError as e:
            raise FormatError("Corrupt %s: %s" % (DATA_PART, e))
    return files


class DebReader(object):
    """Reads a Debian binary package from a stream in a single forward
    pass; the stream need not be seekable."""

    def __init__(self, fileobj, encoding=DEFAULT_ENCODING, errors=DEFAULT_ERRORS, copy_data=False):
        self.ar = ArReader(fileobj)
        self.encoding = encoding
        self.errors = errors
        self.copy_data = copy_data

    def read(self, want_control=True, want_files=True):
        result = DebReadResult()
        found_control = found_data = False
        with self.ar:
            for entry, stream in self.ar.read_content(self.copy_data):
                kind, codec = classify_member(entry.name)
                if utils.VERBOSE > 1:
                    logger.debug("  member %r kind %r codec %r", entry.name, kind, codec)
                if kind == MEMBER_DEBIAN_BINARY:
                    read_debian_binary(stream)
                elif kind == MEMBER_CONTROL:
                    found_control = True
                    if want_control:
                        with open_decompressed(stream, codec) as f:
                            result.control, result.raw_control = read_control_tar(f, self.encoding, self.errors)
                elif kind == MEMBER_DATA:
                    found_data = True
                    if want_files:
                        with open_decompressed(stream, codec) as f:
                            result.files = read_data_tar(f)
        if want_control and not found_control:
            raise FormatError("No control found")
        if want_files and not found_data:
            raise FormatError("No data.tar found")
        return result


def read_deb(filename, want_control=True, want_files=True, encoding=DEFAULT_ENCODING, errors=DEFAULT_ERRORS):
    with open(filename, "rb") as f:
        return DebReader(f, encoding, errors).read(want_control, want_files)


def check_deb(f):
    if not os.path.exists(f):
        raise FormatError("Error: the file `%s' does not exist." % f)
    if not os.path.isfile(f):
        raise FormatError("Error: `%s' is not a regular file." % f)
    with open(f, "rb") as p:
        if p.read(len(AR_MAGIC) + len(INFO_PART)) != AR_MAGIC + INFO_PART.encode("ascii"):
            raise FormatError("Error: `%s' does not seem to be a Debian package." % f)

# Copyright (C) 2006-09 Andrea Mennucci.
# License: GNU Library General Public License, version 2 or later

# build 'ar' archives and .deb packages in memory for the tests

import bz2
import gzip
import io
import lzma
import tarfile

AR_MAGIC = b"!<arch>\n"


def ar_header(name, size, mtime=0, uid=0, gid=0, mode="100644", ending=b"`\n"):
    header = (
        name.ljust(16) + str(mtime).ljust(12) + str(uid).ljust(6) + str(gid).ljust(6) + mode.ljust(8) + str(size).ljust(10)
    ).encode("ascii") + ending
    assert len(header) == 60
    return header


def make_ar(members):
    "members is a sequence of (name, content)"
    out = io.BytesIO()
    out.write(AR_MAGIC)
    for name, content in members:
        out.write(ar_header(name, len(content)))
        out.write(content)
        if len(content) % 2 == 1:
            out.write(b"\n")
    return out.getvalue()


def make_tar(entries):
    "entries is a sequence of (name, content); content None makes a directory"
    out = io.BytesIO()
    with tarfile.open(fileobj=out, mode="w", format=tarfile.GNU_FORMAT) as tar:
        for name, content in entries:
            info = tarfile.TarInfo(name)
            if content is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(content)
                info.mode = 0o644
                tar.addfile(info, io.BytesIO(content))
    return out.getvalue()


def compress(data, codec):
    if codec is None:
        return data
    if codec in ("gz", "gzip"):
        return gzip.compress(data)
    if codec == "xz":
        return lzma.compress(data)
    if codec == "bzip2":
        return bz2.compress(data)
    raise ValueError(codec)


CONTROL = b"""Package: foo
Version: 1.0-1
Architecture: amd64
Maintainer: Jane Doe <jane@example.org>
Depends: libc6 (>= 2.34), bar
Description: an example package
 It does nothing at all.
 .
 Really.
"""

DATA_ENTRIES = (
    ("./", None),
    ("./usr/", None),
    ("./usr/bin/", None),
    ("./usr/bin/foo", b"#!/bin/sh\necho foo\n"),
    ("./usr/share/doc/foo/copyright", b"public domain\n"),
)

DATA_FILES = ["", "usr/", "usr/bin/", "usr/bin/foo", "usr/share/doc/foo/copyright"]


def make_deb(
    control=CONTROL,
    data=DATA_ENTRIES,
    control_codec="gz",
    data_codec="xz",
    version=b"2.0\n",
    control_entries=None,
    extra=(),
):
    """a .deb; pass None for 'control' / 'data' to leave that member out"""
    members = [("debian-binary", version)]
    if control is not None:
        if control_entries is None:
            control_entries = [("./", None), ("./control", control), ("./md5sums", b"")]
        name = "control.tar" + ("." + control_codec if control_codec else "")
        members.append((name, compress(make_tar(control_entries), control_codec)))
    if data is not None:
        name = "data.tar" + ("." + data_codec if data_codec else "")
        members.append((name, compress(make_tar(data), data_codec)))
    members.extend(extra)
    return make_ar(members)


class NonSeekable(io.RawIOBase):
    "forward-only view of some bytes, like a pipe; 'chunk' limits each read"

    def __init__(self, data, chunk=None):
        io.RawIOBase.__init__(self)
        self._f = io.BytesIO(data)
        self.chunk = chunk

    def readable(self):
        return True

    def readinto(self, b):
        n = len(b)
        if self.chunk:
            n = min(n, self.chunk)
        a = self._f.read(n)
        b[: len(a)] = a
        return len(a)

    def position(self):
        return self._f.tell()

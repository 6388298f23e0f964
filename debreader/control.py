# Copyright (C) 2006-09 Andrea Mennucci.
# License: GNU Library General Public License, version 2 or later

import io

from debian.deb822 import Deb822Dict

from .utils import de_n

CONTROL_FILE = "control"

# value lines of a folded field are joined with this
LINE_SEPARATOR = "\n"


def iter_key_values(lines):
    """yield (key, value) for each meaningful line of a control file;
    key is None for continuation lines"""
    for a in lines:
        a = de_n(a)
        if a == "":
            continue
        if a[0] == " ":
            yield None, a.lstrip(" ")
            continue
        i = a.find(":")
        if i == -1:
            # not a field, not a continuation: ignored
            continue
        yield a[:i], a[i + 1 :].strip()


def parse_control(lines):
    """yield (key, [value lines]) in order of appearance; each 'Key:' line
    starts a new field, continuation lines extend the current one"""
    key = None
    values = []
    for k, v in iter_key_values(lines):
        if k is None:
            if key is not None:
                values.append(v)
            continue
        if key is not None:
            yield key, values
        key = k
        values = [v]
    if key is not None:
        yield key, values


def control_fields(text):
    """build the case-insensitive map of the fields in 'text';
    the key '' holds 'text' itself"""
    fields = Deb822Dict()
    fields[""] = text
    for k, values in parse_control(io.StringIO(text, newline=None)):
        fields[k] = LINE_SEPARATOR.join(values)
    return fields

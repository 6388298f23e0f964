#!/usr/bin/python

# Copyright (C) 2006-09 Andrea Mennucci.
# License: GNU Library General Public License, version 2 or later

# main program, do stuff

import getopt
import json
import logging
import os
import sys

from . import utils
from . import DebReaderError, DebReader, check_deb, puke
from .config import load_config

logger = logging.getLogger(__name__)

_ = None
try:
    import gettext

    gettext.bindtextdomain("debreader", "/usr/share/locale")
    gettext.textdomain("debreader")
    _ = gettext.gettext
except Exception:
    a = sys.exc_info()[1]
    sys.stderr.write('Could not initialize "gettext", translations will be unavailable\n' + str(a))

    def __(x):
        return x

    _ = __


doc = _(
    """\
Usage: debreader [ option...  ] [deb files and dirs]
  Reads Debian packages, and prints their control file and the list of
  files they ship; directories are scanned for *.deb files.

Options:
--no-control   do not read the control part
--no-files     do not read the data part
--encoding ENC encoding of the control file (default ascii)
--field NAME   print only this control field (may be repeated)
--json         print a JSON object for each package
--config FILE  read also this configuration file
 -v            verbose (can be added multiple times)
 -d            print tracebacks on errors
 -h, --help    this help
"""
)

LONG_OPTIONS = ["help", "no-control", "no-files", "encoding=", "field=", "json", "config="]


def iter_debs(args):
    for arg in args:
        if os.path.isfile(arg):
            yield arg
        else:
            for n in sorted(os.listdir(arg)):
                if n[-4:] == ".deb":
                    yield os.path.join(arg, n)


def print_result(deb, result, fields=(), as_json=False, out=None):
    if out is None:
        out = sys.stdout
    control = result.control
    wanted = set(k.lower() for k in fields)
    if as_json:
        o = {"file": deb}
        if control is not None:
            o["control"] = {k: v for k, v in control.items() if k and (not wanted or k.lower() in wanted)}
        if result.files is not None:
            o["files"] = result.files
        out.write(json.dumps(o) + "\n")
        return
    if control is not None:
        if fields:
            stored = dict((k.lower(), k) for k in control.keys() if k)
            for k in fields:
                k = stored.get(k.lower())
                if k is not None:
                    out.write("%s: %s\n" % (k, control[k].replace("\n", "\n ")))
        else:
            out.write(control[""])
            if control[""] and control[""][-1] != "\n":
                out.write("\n")
    if control is not None and result.files is not None:
        out.write("\n")
    if result.files is not None:
        for f in result.files:
            out.write(f + "\n")


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    try:
        opts, args = getopt.getopt(argv, "vdh", LONG_OPTIONS)
    except getopt.GetoptError:
        a = sys.exc_info()[1]
        sys.stderr.write(str(a) + "\n" + _("Try --help.") + "\n")
        return 3

    want_control = want_files = True
    encoding = None
    fields = []
    as_json = False
    verbose = 0
    extra_configs = []
    for o, v in opts:
        if o in ("-h", "--help"):
            sys.stdout.write(doc)
            return 0
        elif o == "-v":
            verbose += 1
        elif o == "-d":
            utils.DEBUG += 1
        elif o == "--no-control":
            want_control = False
        elif o == "--no-files":
            want_files = False
        elif o == "--encoding":
            encoding = v
        elif o == "--field":
            fields.append(v)
        elif o == "--json":
            as_json = True
        elif o == "--config":
            extra_configs.append(v)

    if not args:
        sys.stderr.write(_("Need a filename; try --help.") + "\n")
        return 3
    for v in args:
        if not (os.path.isfile(v) or os.path.isdir(v)):
            sys.stderr.write(_("Error: argument is not a directory or a regular file:") + " " + v + "\n")
            return 3

    try:
        config = load_config(extra=extra_configs)
    except DebReaderError:
        s = sys.exc_info()[1]
        sys.stderr.write(str(s) + "\n")
        return s.exitcode
    utils.VERBOSE = max(verbose, config.verbose)
    if encoding is None:
        encoding = config.encoding

    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=logging.DEBUG if utils.VERBOSE else logging.INFO
    )

    exitcode = 0
    for deb in iter_debs(args):
        if utils.VERBOSE:
            logger.debug("reading %r", deb)
        try:
            check_deb(deb)
            with open(deb, "rb") as f:
                r = DebReader(f, encoding, config.errors, config.copy_data)
                result = r.read(want_control, want_files)
        except KeyboardInterrupt:
            puke("debreader exited by keyboard interrupt")
            return 5
        except DebReaderError:
            s = sys.exc_info()[1]
            puke("debreader " + deb, s)
            exitcode = max(exitcode, s.exitcode)
            continue
        except Exception:
            s = sys.exc_info()[1]
            puke("debreader " + deb, s)
            exitcode = max(exitcode, 4)
            continue
        print_result(deb, result, fields, as_json)
    return exitcode


if __name__ == "__main__":
    sys.exit(main())

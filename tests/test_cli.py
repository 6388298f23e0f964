# Copyright (C) 2006-09 Andrea Mennucci.
# License: GNU Library General Public License, version 2 or later

import json
from typing import Any

import pytest

from debreader import utils
from debreader.__main__ import main
from debreader.config import load_config

from helpers import CONTROL, DATA_FILES, make_deb


@pytest.fixture(autouse=True)
def reset_globals():
    # type: () -> Any
    yield
    utils.VERBOSE = 0
    utils.DEBUG = 0


@pytest.fixture
def debdir(tmp_path):
    # type: (Any) -> Any
    (tmp_path / "foo_1.0-1_amd64.deb").write_bytes(make_deb())
    (tmp_path / "bar_2.0_all.deb").write_bytes(make_deb(control=CONTROL.replace(b"foo", b"bar")))
    (tmp_path / "README").write_text("not a package\n")
    return tmp_path


class TestMain:
    def test_text_output(self, debdir, capsys):
        # type: (Any, Any) -> None
        assert main([str(debdir / "foo_1.0-1_amd64.deb")]) == 0
        out = capsys.readouterr().out
        assert out == CONTROL.decode("ascii") + "\n" + "".join(f + "\n" for f in DATA_FILES)

    def test_json_directory(self, debdir, capsys):
        # type: (Any, Any) -> None
        assert main(["--json", "--no-files", str(debdir)]) == 0
        lines = capsys.readouterr().out.splitlines()
        objs = [json.loads(l) for l in lines]
        # sorted by file name, README skipped
        assert [o["control"]["Package"] for o in objs] == ["bar", "foo"]
        assert "files" not in objs[0]
        assert "" not in objs[0]["control"]

    def test_fields(self, debdir, capsys):
        # type: (Any, Any) -> None
        assert main(["--no-files", "--field", "package", "--field", "Description", "--field", "DEPENDS", "--field", "nope", str(debdir / "foo_1.0-1_amd64.deb")]) == 0
        out = capsys.readouterr().out
        assert out == (
            "Package: foo\n"
            "Description: an example package\n It does nothing at all.\n .\n Really.\n"
            "Depends: libc6 (>= 2.34), bar\n"
        )

    def test_no_control(self, debdir, capsys):
        # type: (Any, Any) -> None
        assert main(["--no-control", str(debdir / "foo_1.0-1_amd64.deb")]) == 0
        assert capsys.readouterr().out.splitlines() == DATA_FILES

    def test_bad_package_exit_code(self, tmp_path, capsys):
        # type: (Any, Any) -> None
        p = tmp_path / "old.deb"
        p.write_bytes(make_deb(version=b"1.0\n"))
        assert main([str(p)]) == 3
        p.write_bytes(make_deb(data=None))
        assert main([str(p)]) == 2

    def test_not_a_deb(self, debdir):
        # type: (Any) -> None
        assert main([str(debdir / "README")]) == 2

    def test_usage_errors(self, tmp_path, capsys):
        # type: (Any, Any) -> None
        assert main([]) == 3
        assert main(["--bogus"]) == 3
        assert main([str(tmp_path / "missing.deb")]) == 3

    def test_help(self, capsys):
        # type: (Any) -> None
        assert main(["--help"]) == 0
        assert "Usage: debreader" in capsys.readouterr().out


class TestConfig:
    def test_defaults(self, tmp_path):
        # type: (Any) -> None
        c = load_config(paths=[tmp_path / "absent.conf"])
        assert c.encoding == "ascii"
        assert c.errors == "replace"
        assert c.verbose == 0
        assert c.copy_data is False

    def test_override(self, tmp_path):
        # type: (Any) -> None
        a = tmp_path / "a.conf"
        a.write_text("[debreader]\nencoding = latin-1\nverbose = 2\n")
        b = tmp_path / "b.conf"
        b.write_text("[debreader]\nencoding = utf-8\ncopy_data = yes\n")
        c = load_config(paths=[a], extra=[b])
        assert c.encoding == "utf-8"
        assert c.verbose == 2
        assert c.copy_data is True

    def test_broken(self, tmp_path):
        # type: (Any) -> None
        a = tmp_path / "a.conf"
        a.write_text("[debreader]\nverbose = lots\n")
        with pytest.raises(utils.DebReaderError):
            load_config(paths=[a])

    def test_cli_uses_config_file(self, tmp_path, capsys):
        # type: (Any, Any) -> None
        control = "Package: foo\nMaintainer: José\n".encode("utf-8")
        p = tmp_path / "foo.deb"
        p.write_bytes(make_deb(control=control))
        conf = tmp_path / "x.conf"
        conf.write_text("[debreader]\nencoding = utf-8\n")
        assert main(["--no-files", "--json", "--config", str(conf), str(p)]) == 0
        o = json.loads(capsys.readouterr().out)
        assert o["control"]["Maintainer"] == "José"

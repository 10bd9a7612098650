"""
Tests for the command line entry point.
"""

import io
import runpy
import sys
from datetime import date, timedelta

import pytest

from wordbox.cli import main
from wordbox.constants import EXIT_OK, EXIT_STORE_ERROR, EXIT_USAGE
from wordbox.database import WordStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("WORD_FAIL_DELAY_DAYS", raising=False)
    monkeypatch.delenv("WORD_NEW_DELAY_DAYS", raising=False)


def run(args, stdin=""):
    out, err = io.StringIO(), io.StringIO()
    code = main(args, stdin=io.StringIO(stdin), stdout=out, stderr=err)
    return code, out.getvalue(), err.getvalue()


class TestUsage:

    @pytest.mark.parametrize("args", [
        [],
        ["frobnicate", "words.db"],
        ["new"],
        ["export"],
        ["a", "b", "c"],
        ["--fail-delay", "x", "words.db"],
        ["--fail-delay", "-1", "words.db"],
    ])
    def test_usage_error(self, args, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        code, out, err = run(args)
        assert code == EXIT_USAGE
        assert "Usage:" in err
        assert out == ""
        assert list(tmp_path.iterdir()) == []

    def test_bad_environment_is_usage_error(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WORD_FAIL_DELAY_DAYS", "soon")
        code, _, err = run([str(tmp_path / "words.db")])
        assert code == EXIT_USAGE
        assert "WORD_FAIL_DELAY_DAYS" in err


class TestStoreErrors:

    def test_new_twice(self, tmp_path):
        path = str(tmp_path / "words.db")
        assert run(["new", path])[0] == EXIT_OK
        code, _, err = run(["new", path])
        assert code == EXIT_STORE_ERROR
        assert err.startswith("error:")

    def test_study_missing_database(self, tmp_path):
        code, out, err = run([str(tmp_path / "missing.db")])
        assert code == EXIT_STORE_ERROR
        assert "no such database" in err
        assert out == ""


class TestCommands:

    def test_new_add_export(self, tmp_path):
        path = str(tmp_path / "words.db")
        assert run(["new", path])[0] == EXIT_OK

        code, out, _ = run(["add", path], stdin="huis\nhouse\n")
        assert code == EXIT_OK
        assert "Front => " in out
        assert "Back => " in out

        code, out, _ = run(["export", path])
        assert code == EXIT_OK
        assert out == f"huis,house,0,{date.today().isoformat()}\n"

    def test_new_delay_flag(self, tmp_path):
        path = str(tmp_path / "words.db")
        run(["new", path])
        run(["--new-delay", "1", "add", path], stdin="huis\nhouse\n")
        _, out, _ = run(["export", path])
        assert out.endswith(f",{(date.today() + timedelta(days=1)).isoformat()}\n")

    def test_new_delay_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WORD_NEW_DELAY_DAYS", "2")
        path = str(tmp_path / "words.db")
        run(["new", path])
        run(["add", path], stdin="huis\nhouse\n")
        _, out, _ = run(["export", path])
        assert out.endswith(f",{(date.today() + timedelta(days=2)).isoformat()}\n")

    def test_import_reports_skips(self, tmp_path):
        path = str(tmp_path / "words.db")
        run(["new", path])
        code, _, err = run(
            ["import", path],
            stdin='huis,house,1,2024-01-10\n"a","b","notanumber","2024-01-01"\n',
        )
        assert code == EXIT_OK
        assert "invalid record on line 2" in err
        assert "Imported 1 words, skipped 1" in err

        with WordStore.open(path) as store:
            [card] = store.all_cards()
        assert (card.front, card.back, card.box, card.due) == ("huis", "house", 1, date(2024, 1, 10))

    def test_study_session(self, tmp_path):
        path = str(tmp_path / "words.db")
        run(["new", path])
        run(["import", path], stdin="huis,house,2,2020-01-01\nboom,tree,0,2999-01-01\n")

        code, out, _ = run([path], stdin="house\n")
        assert code == EXIT_OK
        assert "huis => " in out
        assert "Correct!" in out
        assert "boom" not in out
        assert out.endswith("Done for today!\n✓ Reviewed 1 words, 1 correct\n")

        with WordStore.open(path) as store:
            first = store.all_cards()[0]
        assert first.box == 3
        assert first.due == date.today() + timedelta(days=8)

    def test_import_replaces_undecodable_bytes(self, tmp_path):
        path = str(tmp_path / "words.db")
        run(["new", path])
        raw = io.TextIOWrapper(
            io.BytesIO(b"a,b,0,2024-01-01\n\xff\xfe,b,0,2024-01-02\n"),
            encoding="utf-8",
        )
        err = io.StringIO()
        code = main(["import", path], stdin=raw, stdout=io.StringIO(), stderr=err)

        assert code == EXIT_OK
        assert "Imported 2 words, skipped 0" in err.getvalue()
        with WordStore.open(path) as store:
            fronts = [c.front for c in store.all_cards()]
        assert fronts == ["a", "\ufffd\ufffd"]

    def test_study_nothing_due(self, tmp_path):
        path = str(tmp_path / "words.db")
        run(["new", path])
        code, out, _ = run([path])
        assert code == EXIT_OK
        assert out == "Done for today!\n"

    def test_study_end_of_input(self, tmp_path):
        path = str(tmp_path / "words.db")
        run(["new", path])
        run(["import", path], stdin="huis,house,2,2020-01-01\n")
        code, out, _ = run([path], stdin="")
        assert code == EXIT_OK
        assert out == "huis => \n"


class TestModuleEntry:

    def test_python_dash_m(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["word", "frobnicate", "words.db"])
        with pytest.raises(SystemExit) as exc:
            runpy.run_module("wordbox", run_name="__main__")
        assert exc.value.code == EXIT_USAGE
        assert "Usage:" in capsys.readouterr().err

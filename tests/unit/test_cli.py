"""Tests for CLI commands."""

import json
import logging
import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from legosigno.cli import main
from legosigno.installer import HEADER


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("legosigno")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def storage(tmp_path: Path, monkeypatch) -> Path:
    folder = tmp_path / "store"
    monkeypatch.setenv("LEGOSIGNO_CONF", str(folder))
    return folder


def _invoke(*args, input=None):
    return CliRunner().invoke(main, list(args), input=input)


def _saved(storage: Path) -> dict:
    return json.loads((storage / "bookmarks.json").read_text())


class TestCLI:
    def test_help(self):
        result = _invoke("--help")
        assert result.exit_code == 0
        assert "Legosigno" in result.output
        assert "cdb" in result.output

    def test_version(self):
        result = _invoke("--version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_malformed_config(self, tmp_path: Path, storage: Path):
        bad = tmp_path / "bad.yaml"
        bad.write_text(":\n  :\n    - :\n      :::invalid")
        result = _invoke("--config", str(bad), "list")
        assert result.exit_code == 1
        assert "Malformed YAML" in result.output


class TestVisitAndList:
    def test_visit_only_appends(self, storage: Path, tmp_path: Path):
        result = _invoke("visit", str(tmp_path))
        assert result.exit_code == 0
        line = (storage / "visited_folders").read_text()
        assert line.startswith(f"{tmp_path} ")
        assert not (storage / "bookmarks.json").exists()

    def test_list_shows_sections(self, storage: Path, tmp_path: Path):
        _invoke("bookmark", "/work")
        _invoke("visit", "/tmp")

        result = _invoke("list")

        assert result.exit_code == 0
        assert "Bookmarks:" in result.output
        assert "Visited often:" in result.output
        assert " 0) /work" in result.output
        assert " 1) /tmp" in result.output
        assert _saved(storage)["visits"][0]["folder"] == "/tmp"


class TestBookmark:
    def test_bookmark_twice(self, storage: Path):
        _invoke("bookmark", "/a")
        result = _invoke("bookmark", "/a")
        assert result.exit_code == 0
        assert _saved(storage)["bookmarks"] == [{"folder": "/a", "score": 2}]

    def test_bookmark_defaults_to_cwd(self, storage: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        _invoke("bookmark")
        assert _saved(storage)["bookmarks"][0]["folder"] == str(Path.cwd())


class TestCd:
    def test_prints_folder(self, storage: Path):
        _invoke("bookmark", "/a")
        _invoke("bookmark", "/b")
        result = _invoke("cd", "1")
        assert result.exit_code == 0
        assert result.output == "/b\n"

    def test_non_utf8_folder_printed_as_raw_bytes(self, storage: Path):
        folder = os.fsdecode(b"/tmp/caf\xe9")
        _invoke("bookmark", folder)
        result = _invoke("cd", "0")
        assert result.exit_code == 0
        assert result.stdout_bytes == b"/tmp/caf\xe9\n"

    def test_negative_index_jumps_to_visit(self, storage: Path):
        _invoke("visit", "/old")
        _invoke("visit", "/new")
        result = _invoke("cd", "-1")
        assert result.exit_code == 0
        assert result.output == "/new\n"

    def test_out_of_range_fails(self, storage: Path):
        result = _invoke("cd", "3")
        assert result.exit_code == 1
        assert "No folder with index 3" in result.output

    def test_not_a_number(self, storage: Path):
        result = _invoke("cd", "abc")
        assert result.exit_code == 1

    def test_interactive(self, storage: Path):
        _invoke("bookmark", "/a")
        _invoke("bookmark", "/b")
        result = _invoke("cd", "?", input="1\n")
        assert result.exit_code == 0
        assert result.output.rstrip().endswith("/b")

    def test_interactive_beyond_total(self, storage: Path):
        _invoke("bookmark", "/a")
        result = _invoke("cd", "?", input="5\n")
        assert result.exit_code == 1


class TestRemove:
    def test_remove_confirmed(self, storage: Path):
        _invoke("bookmark", "/a")
        _invoke("bookmark", "/b")
        result = _invoke("remove", "0", input="maybe\nyes\n")
        assert result.exit_code == 0
        assert 'remove "/a"' in result.output
        assert _saved(storage)["bookmarks"] == [{"folder": "/b", "score": 1}]

    def test_remove_declined(self, storage: Path):
        _invoke("bookmark", "/a")
        result = _invoke("remove", "0", input="n\n")
        assert result.exit_code == 0
        assert _saved(storage)["bookmarks"] == [{"folder": "/a", "score": 1}]

    def test_remove_by_name(self, storage: Path):
        _invoke("bookmark", "/a")
        _invoke("visit", "/v")
        result = _invoke("remove", "/v", input="y\n")
        assert result.exit_code == 0
        assert _saved(storage)["visits"] == []

    def test_remove_unknown_name(self, storage: Path):
        result = _invoke("remove", "/nowhere")
        assert result.exit_code == 1


class TestCorruptLog:
    def test_corrupt_log_is_fatal(self, storage: Path):
        storage.mkdir(parents=True)
        (storage / "visited_folders").write_text("/a notanumber\n")
        result = _invoke("list")
        assert result.exit_code == 1
        assert (storage / "visited_folders").read_text() == "/a notanumber\n"


class TestInstall:
    def test_install_and_uninstall(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("PROMPT_COMMAND", raising=False)
        rc = tmp_path / ".bashrc"
        rc.write_text("# mine\n")

        result = _invoke("install", "--rc-file", str(rc))
        assert result.exit_code == 0
        assert "legosigno installed" in result.output
        assert HEADER in rc.read_text()

        result = _invoke("install", "--rc-file", str(rc))
        assert "Nothing to do" in result.output

        result = _invoke("uninstall", "--rc-file", str(rc))
        assert result.exit_code == 0
        assert rc.read_text() == "# mine\n"

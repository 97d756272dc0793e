"""Tests for the tagexpander command line."""

import json
import sys

import pytest

from tagexpander.__main__ import _main
from tagexpander.loader import clear_cache


@pytest.fixture(autouse=True)
def _clear():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def grammar_file(tmp_path):
    path = tmp_path / "g.json"
    path.write_text(
        json.dumps({"origin": "#[a:y]say# #a#", "a": "x", "say": "#a#!"}),
        encoding="utf-8",
    )
    return path


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["tagexpander", *argv])
    return _main()


class TestCli:
    """Tests for _main."""

    def test_generate(self, monkeypatch, capsys, grammar_file):
        assert _run(monkeypatch, str(grammar_file)) == 0
        assert capsys.readouterr().out == "y! x\n"

    def test_count_and_rule(self, monkeypatch, capsys, grammar_file):
        assert _run(monkeypatch, str(grammar_file), "--rule", "#a#-#a#", "-n", "3") == 0
        assert capsys.readouterr().out.splitlines() == ["x-x", "x-x", "x-x"]

    def test_errors_flag(self, monkeypatch, capsys, grammar_file):
        assert _run(monkeypatch, str(grammar_file), "--rule", "#nope#", "--errors") == 1
        captured = capsys.readouterr()
        assert captured.out == "((nope))\n"
        assert "No symbol for 'nope'" in captured.err

    def test_json(self, monkeypatch, capsys, grammar_file):
        assert _run(monkeypatch, str(grammar_file), "--rule", "[a:z]", "--json") == 0
        out = capsys.readouterr().out
        assert json.loads(out[out.index("{"):])["a"] == ["z"]

    def test_uses(self, monkeypatch, capsys, grammar_file):
        assert _run(monkeypatch, str(grammar_file), "--uses") == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[1] == "symbol\tdepth\tuses\tcounts"

    def test_save(self, monkeypatch, tmp_path, grammar_file):
        out = tmp_path / "live.yml"
        assert _run(monkeypatch, str(grammar_file), "--save", str(out)) == 0
        assert out.exists()

    def test_scan(self, monkeypatch, capsys):
        assert _run(monkeypatch, "--scan", "a #b# [c:d]") == 0
        assert capsys.readouterr().out.splitlines() == ["LIT  'a '", "TAG  'b'", "LIT  ' '", "ACT  'c:d'"]

    def test_scan_errors(self, monkeypatch, capsys):
        assert _run(monkeypatch, "--scan", "#open") == 1
        assert "Unclosed tag" in capsys.readouterr().err

    def test_missing_file(self, monkeypatch, capsys, tmp_path):
        assert _run(monkeypatch, str(tmp_path / "nope.json")) == 1
        assert "Error:" in capsys.readouterr().err

    def test_bad_max_depth(self, monkeypatch, capsys, grammar_file):
        assert _run(monkeypatch, str(grammar_file), "--max-depth", "0") == 1
        assert "max depth must be >= 1" in capsys.readouterr().err

    def test_path_required(self, monkeypatch):
        with pytest.raises(SystemExit):
            _run(monkeypatch, "--rule", "#a#")

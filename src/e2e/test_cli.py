# src/e2e/test_cli.py

import json

import pytest

from completion.__main__ import main


def test_json_output(capsys):
    assert main(["--text", "local player = 1\npl", "--json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["word"] == "pl"
    assert out["open"] is True
    assert out["identifiers"] == ["player"]
    assert [c["text"] for c in out["candidates"]] == ["player"]


def test_table_output_from_file(tmp_path, capsys):
    src = tmp_path / "main.lua"
    src.write_text("pri", encoding="utf-8")
    assert main(["--file", str(src)]) == 0
    assert "print" in capsys.readouterr().out


def test_offset_picks_the_word(capsys):
    assert main(["--text", "wh x", "--offset", "2", "--json"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["word"] == "wh"
    assert out["candidates"][0]["text"] == "while"


def test_bad_max_candidates_exits():
    with pytest.raises(SystemExit) as exc:
        main(["--text", "x", "--max-candidates", "0"])
    assert exc.value.code == 2


def test_repl_accepts_with_tab(monkeypatch, capsys):
    lines = iter(["loc", ":tab", ":show", ""])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(lines))
    assert main(["--repl"]) == 0
    out = capsys.readouterr().out
    assert "(accepted 'local')" in out
    assert "Goodbye!" in out

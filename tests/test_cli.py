"""
tests/test_cli.py
End-to-end CLI runs: single utterance, transcript file, search, errors.
"""

import json
from pathlib import Path

import pytest

from meetsense.cli import main

NOW = "2026-10-14T15:30:00+08:00"

TRANSCRIPT = """\
[00:00:05] Alice: We decided to go with Postgres, sounds good.
[00:00:20] Bob: I'll update the release notes by tomorrow.
[00:00:41] Alice: I disagree, the schema is wrong.
"""


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch):
    # keep any meetsense_config.json in the real cwd out of the run
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def transcript(tmp_path: Path) -> Path:
    path = tmp_path / "sync.txt"
    path.write_text(TRANSCRIPT, encoding="utf-8")
    return path


class TestSingleUtterance:
    def test_json_output(self, capsys):
        assert main(["I'll send the report by tomorrow", "--json", "--now", NOW]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["actionItem"] == "I'll send the report by tomorrow"
        assert out["dueDate"] == "2026-10-15T15:30:00+08:00"

    def test_text_output(self, capsys):
        assert main(["This is amazing, I love it!"]) == 0
        assert "enthusiastic" in capsys.readouterr().out

    def test_bad_now(self):
        with pytest.raises(SystemExit) as exc:
            main(["today", "--now", "whenever"])
        assert exc.value.code == 1

    def test_nothing_to_do(self):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 2


class TestTranscriptFile:
    def test_summary(self, transcript: Path, capsys):
        assert main(["--file", str(transcript), "--now", NOW]) == 0
        out = capsys.readouterr().out
        assert "3 utterances analyzed" in out
        assert "Decisions (1)" in out
        assert "Action items (1)" in out
        assert "Conflicts (1) / Agreements (1)" in out

    def test_summary_json(self, transcript: Path, capsys):
        assert main(["--file", str(transcript), "--now", NOW, "--json"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["utterance_count"] == 3
        assert out["action_items"][0]["due_date"] == "2026-10-15T15:30:00+08:00"

    def test_search(self, transcript: Path, capsys):
        assert main(["--file", str(transcript), "--search", "schema", "--json"]) == 0
        hits = json.loads(capsys.readouterr().out)
        assert [h["line"] for h in hits] == [3]
        assert hits[0]["speaker"] == "Alice"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SystemExit) as exc:
            main(["--file", str(tmp_path / "missing.txt")])
        assert exc.value.code == 1

"""Tests for the tour-toolkit command line."""

import json

import pytest

from tour_toolkit.cli import main


@pytest.fixture(autouse=True)
def overlay_env(monkeypatch, tmp_path):
    monkeypatch.setenv("TOUR_OVERLAY_PATH", str(tmp_path / "overlay.json"))


class TestLoadCommand:

    def test_load_when_no_sources_then_prints_fallback(self, capsys):
        assert main(["load"]) == 0
        tour = json.loads(capsys.readouterr().out)
        assert tour[0]["id"] == 0
        assert tour[1]["name"] == "Petra"

    def test_load_when_dataset_file_then_used(self, tmp_path, capsys):
        dataset = tmp_path / "rows.json"
        dataset.write_text(json.dumps([{"city": "Lima", "coordinates": [-12, -77]}, {"city": "Bad"}]), encoding="utf-8")

        assert main(["load", "--dataset", str(dataset)]) == 0

        captured = capsys.readouterr()
        assert [l["name"] for l in json.loads(captured.out)] == ["Introduction", "Lima"]
        assert "record_invalid: 1" in captured.err


class TestValidateCommand:

    def test_validate_when_valid_then_exit_zero(self, tmp_path, capsys):
        path = tmp_path / "upload.json"
        path.write_text(json.dumps([{"id": 3, "name": "Giza", "coords": [29.9, 31.1]}]), encoding="utf-8")

        assert main(["validate", str(path)]) == 0
        assert "1 valid landmarks" in capsys.readouterr().out

    def test_validate_when_all_invalid_then_exit_one(self, tmp_path, capsys):
        path = tmp_path / "upload.json"
        path.write_text(json.dumps([{"name": "No coords"}]), encoding="utf-8")

        assert main(["validate", str(path)]) == 1
        assert "batch_empty" in capsys.readouterr().err

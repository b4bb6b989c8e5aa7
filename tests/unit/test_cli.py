"""Tests for the yamlorigin command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from yamlorigin.cli import EXIT_KEY_NOT_FOUND, EXIT_LOAD_ERROR, main

TEST_YAML = Path(__file__).parents[1] / "fixtures" / "test-yaml.yml"


class TestMain:
    """Printing flattened documents with origins."""

    def test_prints_properties_with_origins(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Each property line ends with its origin."""
        assert main([str(TEST_YAML)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert f"name=Martin D'vloper  # file [{TEST_YAML}] - 3:7" in lines
        assert f"employed=true  # file [{TEST_YAML}] - 6:11" in lines
        assert "emptymap={}" in lines
        assert "emptylist=[]" in lines

    def test_single_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--key prints one property."""
        assert main([str(TEST_YAML), "--key", "languages.pascal"]) == 0
        out = capsys.readouterr().out
        assert out == f"languages.pascal=Lame  # file [{TEST_YAML}] - 15:13\n"

    def test_missing_key(self, capsys: pytest.CaptureFixture[str]) -> None:
        """An unknown key exits with its own status."""
        assert main([str(TEST_YAML), "--key", "nope"]) == EXIT_KEY_NOT_FOUND
        assert "not found" in capsys.readouterr().err

    def test_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON output lists value and origin fields."""
        assert main([str(TEST_YAML), "--format", "json"]) == 0
        (document,) = json.loads(capsys.readouterr().out)
        assert document["languages.perl"] == {
            "value": "Elite",
            "resource": f"file [{TEST_YAML}]",
            "line": 13,
            "column": 11,
        }
        assert document["emptylist"] == {"value": []}

    def test_documents_are_separated(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Documents are separated by a --- line."""
        path = tmp_path / "multi.yml"
        path.write_text("a: 1\n---\nb: 2\n", encoding="utf-8")
        assert main([str(path)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[1] == "---"
        assert lines[2].startswith("b=2  # ")

    def test_load_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Load errors print their code and exit non-zero."""
        path = tmp_path / "broken.yml"
        path.write_text("value: !!java.net.URL [x]\n", encoding="utf-8")
        assert main([str(path)]) == EXIT_LOAD_ERROR
        assert capsys.readouterr().err.startswith("YAML_CONSTRUCTION_ERROR: ")

"""Unit tests for the command-line entry point."""

import io
import json

import pytest

from snakeflow import __version__
from snakeflow.cli import main, parse_args, resolve_format


@pytest.fixture
def payload_file(tmp_path, survey_payload):
    path = tmp_path / "workflow.json"
    path.write_text(survey_payload, encoding="utf-8")
    return path


class TestArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = parse_args(["in.json"])
        assert args.width == 1200
        assert args.ticks is None
        assert args.scale == 2

    @pytest.mark.parametrize(
        "argv,expected",
        [
            (["in.json"], "svg"),
            (["in.json", "--out", "x.PNG"], "png"),
            (["in.json", "--out", "x.json"], "json"),
            (["in.json", "--out", "x.txt"], "svg"),
            (["in.json", "--out", "x.png", "--format", "svg"], "svg"),
        ],
    )
    def test_resolve_format(self, argv, expected):
        assert resolve_format(parse_args(argv)) == expected

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            parse_args(["--version"])
        assert __version__ in capsys.readouterr().out


class TestMain:
    """Tests for main()."""

    def test_json_fully_revealed(self, payload_file, capsys):
        assert main([str(payload_file), "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["row_capacity"] == 4
        assert [p["id"] for p in data["placements"]] == ["node-1", "node-2", "node-3"]
        assert data["connectors"][0]["path"] == "M 140 36 L 180 36"
        assert data["reveal"] == {"nodes_revealed": 3, "connectors_revealed": 2}

    def test_json_partial_reveal(self, payload_file, capsys):
        assert main([str(payload_file), "--format", "json", "--ticks", "2"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["reveal"] == {"nodes_revealed": 2, "connectors_revealed": 0}

    def test_narrow_width(self, payload_file, capsys):
        assert main([str(payload_file), "--format", "json", "--width", "500"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["row_capacity"] == 2
        assert data["compact"] is True
        assert data["placements"][2]["direction"] == "rtl"
        assert data["connectors"][1]["kind"] == "elbow"

    def test_svg_to_file(self, payload_file, tmp_path):
        out = tmp_path / "workflow.svg"
        assert main([str(payload_file), "--out", str(out)]) == 0
        assert out.read_text(encoding="utf-8").startswith("<svg ")

    def test_png_to_file(self, payload_file, tmp_path):
        out = tmp_path / "workflow.png"
        assert main([str(payload_file), "--out", str(out), "--scale", "1"]) == 0
        assert out.read_bytes().startswith(b"\x89PNG")

    def test_png_requires_out(self, payload_file, capsys):
        assert main([str(payload_file), "--format", "png"]) == 1
        assert "--out is required" in capsys.readouterr().err

    def test_stdin(self, monkeypatch, capsys, survey_payload):
        monkeypatch.setattr("sys.stdin", io.StringIO(survey_payload))
        assert main(["-", "--format", "json"]) == 0
        assert len(json.loads(capsys.readouterr().out)["placements"]) == 3

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == 1
        assert "snakeflow: error:" in capsys.readouterr().err

    def test_invalid_payload(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"nodes": [{"id": "a"}]}', encoding="utf-8")
        assert main([str(path)]) == 1
        assert "Node 0" in capsys.readouterr().err

    def test_negative_ticks(self, payload_file, capsys):
        assert main([str(payload_file), "--ticks", "-1"]) == 1
        assert "--ticks" in capsys.readouterr().err

    @pytest.mark.parametrize("name", ["x.svg", "x.png", "x.json"])
    def test_unwritable_out(self, payload_file, tmp_path, capsys, name):
        out = tmp_path / "missing-dir" / name
        assert main([str(payload_file), "--out", str(out)]) == 1
        assert "snakeflow: error:" in capsys.readouterr().err
        assert not out.exists()

    def test_negative_width(self, payload_file):
        assert main([str(payload_file), "--width", "-5"]) == 1

"""
CLI 테스트
"""
import json
import pytest
from gcode_estimator.cli import main


@pytest.fixture
def gcode_file(tmp_path, monkeypatch):
    monkeypatch.delenv("GCODE_DEFAULT_FEED_RATE", raising=False)
    monkeypatch.delenv("GCODE_COUNT_EACH_LAYER_PATTERN", raising=False)
    monkeypatch.delenv("GCODE_SLICER_DETECT_LINES", raising=False)
    path = tmp_path / "part.gcode"
    path.write_text(";FLAVOR:Marlin\n;LAYER:0\nG1 X60 F600\n;LAYER:1\nG1 Y60\n", encoding="utf-8")
    return path


class TestCli:

    def test_summarize(self, gcode_file, capsys):
        main(["summarize", str(gcode_file)])
        result = json.loads(capsys.readouterr().out)
        assert result["file_name"] == "part.gcode"
        assert result["flavor"] == "Marlin"
        assert result["layer_count"] == 2
        assert result["estimated_seconds"] == 12
        assert result["time_source"] == "simulation"

    def test_metadata(self, gcode_file, capsys):
        main(["metadata", str(gcode_file)])
        result = json.loads(capsys.readouterr().out)
        assert result == {
            "flavor": "Marlin",
            "estimated_time": None,
            "filament_used": None,
            "layer_height": None,
        }

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["summarize", str(tmp_path / "missing.gcode")])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")

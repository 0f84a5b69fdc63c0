"""
GCodeParser / 파일 분석 테스트
"""
import pytest
from gcode_estimator import EncodingError, GCodeParser, SlicerType, analyze_gcode_file
from gcode_estimator.config import EstimatorConfig
from gcode_estimator.parser import load_gcode, split_lines


CURA_GCODE = "\n".join([
    ";FLAVOR:Marlin",
    ";TIME:6458",
    ";Filament used: 2.45m",
    ";Layer height: 0.2",
    ";Generated with Cura_SteamEngine 5.4.0",
    "M104 S200",
    ";LAYER:0",
    "G1 X60 F600",
    ";LAYER:1",
    "G1 Y60",
])

PLAIN_GCODE = "\n".join([
    "G28",
    "; layer change",
    "G1 X60 F600 E1.0",
    "; layer change",
    "G1 Y60 E2.0",
])


class TestGCodeParser:
    """파서 인스턴스"""

    def test_flavor(self):
        assert GCodeParser(";FLAVOR: Marlin").metadata.flavor == "Marlin"

    def test_declared_time_skips_simulation(self):
        gcode = GCodeParser(";TIME:120\nG1 X1000 F600")
        assert gcode.metadata.estimated_time == 120
        assert gcode.estimate_print_time() == 120

    def test_simulated_time(self):
        assert GCodeParser(PLAIN_GCODE).estimate_print_time() == 12

    def test_estimated_printing_time_comment(self):
        gcode = GCodeParser("; estimated printing time (normal mode) = 1h 2m 3s")
        assert gcode.metadata.estimated_time == 3723
        assert gcode.estimate_print_time() == 3723

    def test_layer_count(self):
        assert GCodeParser(";LAYER:3\n; layer change").get_layer_count() == 2

    def test_layer_count_each_pattern(self):
        config = EstimatorConfig(count_each_layer_pattern=True)
        assert GCodeParser(";LAYER:3\n; layer change", config).get_layer_count() == 4

    def test_crlf_input(self):
        gcode = GCodeParser("G1 X60 F600\r\nG1 Y60\r\n")
        assert all("\r" not in line for line in gcode.lines)
        assert gcode.estimate_print_time() == 12

    def test_idempotent(self):
        gcode = GCodeParser(CURA_GCODE)
        assert gcode.estimate_print_time() == gcode.estimate_print_time()
        assert gcode.metadata == gcode.metadata
        assert gcode.get_layer_count() == gcode.get_layer_count()

        plain = GCodeParser(PLAIN_GCODE)
        assert plain.estimate_print_time() == plain.estimate_print_time() == 12

    def test_config_default_feed_rate(self):
        gcode = GCodeParser("G1 X60", EstimatorConfig(default_feed_rate=600))
        assert gcode.estimate_print_time() == 6

    def test_report_from_metadata(self):
        report = GCodeParser(CURA_GCODE).report()
        assert report.slicer == "cura"
        assert report.slicer_version == "5.4.0"
        assert report.flavor == "Marlin"
        assert report.filament_used == pytest.approx(2.45)
        assert report.layer_height == pytest.approx(0.2)
        # ;Layer height: 주석도 레이어 단어 마커로 카운트됨
        assert report.layer_count == 3
        assert report.estimated_seconds == 6458
        assert report.formatted_time == "01:47:38"
        assert report.time_source == "metadata"
        assert report.total_lines == 10
        assert report.encoding is None

    def test_report_from_simulation(self):
        report = GCodeParser(PLAIN_GCODE).report()
        assert report.slicer == "unknown"
        assert report.estimated_seconds == 12
        assert report.formatted_time == "00:00:12"
        assert report.time_source == "simulation"


class TestFileLoading:
    """파일 로드 / 인코딩"""

    def test_split_lines(self):
        assert split_lines("a\r\nb\nc") == ["a", "b", "c"]

    def test_utf8_file(self, tmp_path):
        path = tmp_path / "part.gcode"
        path.write_bytes(CURA_GCODE.encode("utf-8"))
        loaded = load_gcode(str(path))
        assert loaded.encoding == "utf-8"
        assert loaded.is_fallback is False

    def test_cp949_file(self, tmp_path):
        path = tmp_path / "part.gcode"
        path.write_bytes("; 한글 주석\r\n;FLAVOR:Marlin\r\nG1 X60 F600\r\n".encode("cp949"))
        gcode = GCodeParser.from_file(str(path))
        assert gcode.source.encoding == "cp949"
        assert gcode.metadata.flavor == "Marlin"
        assert gcode.estimate_print_time() == 6

    def test_bare_cr_newlines(self, tmp_path):
        path = tmp_path / "old_mac.gcode"
        path.write_bytes(b"G1 X60 F600\rG1 Y60\r")
        assert GCodeParser.from_file(str(path)).estimate_print_time() == 12

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            analyze_gcode_file(str(tmp_path / "nope.gcode"))


class TestAnalyzeGCodeFile:

    def test_report(self, tmp_path):
        path = tmp_path / "cube.gcode"
        path.write_text(CURA_GCODE, encoding="utf-8")
        report = analyze_gcode_file(str(path))
        assert report.file_name == "cube.gcode"
        assert report.encoding == "utf-8"
        assert report.slicer == SlicerType.CURA.value
        assert report.estimated_seconds == 6458

    def test_undecodable_file_raises(self, tmp_path):
        path = tmp_path / "broken.gcode"
        path.write_bytes(b"\xff\xfe\xff G1 X10\n")
        with pytest.raises(EncodingError):
            analyze_gcode_file(str(path))

    def test_fallback_with_known_slicer(self, tmp_path):
        path = tmp_path / "latin.gcode"
        path.write_bytes(b";FLAVOR:Marlin\n; \xff\nG1 X60 F600\n")
        report = analyze_gcode_file(str(path))
        assert report.encoding == "latin-1 (fallback)"
        assert report.estimated_seconds == 6

"""
G-code Parser / Estimator

원본 G-code 텍스트 하나를 받아서
1. 슬라이서 메타데이터 (생성 시 즉시 추출)
2. 레이어 마커 수 (요청 시 계산)
3. 예상 출력 시간 (요청 시 계산, 메타데이터 우선)
을 제공한다. 인스턴스는 입력 텍스트를 변경하지 않으므로 반복 호출해도 결과가 같다.
"""
import logging
import os
from typing import Optional, Tuple
from .config import EstimatorConfig, get_default_config
from .estimator import estimate_print_time, format_seconds
from .layers import count_layers
from .metadata import SlicerDetector, extract_metadata
from .models import GCodeMetadata, PrintReport, SlicerType, TimeSource
from .parser import LoadResult, load_gcode, split_lines

logger = logging.getLogger(__name__)


class EncodingError(Exception):
    """인코딩 오류로 파일 파싱 실패"""
    pass


class GCodeParser:
    """G-code 메타데이터 추출 + 출력 시간 추정"""

    def __init__(self, gcode: str, config: Optional[EstimatorConfig] = None):
        self.config = config or get_default_config()
        self._lines: Tuple[str, ...] = tuple(split_lines(gcode))
        self._metadata = extract_metadata(self._lines)
        self.source: Optional[LoadResult] = None  # from_file()로 만든 경우만

    @classmethod
    def from_file(cls, file_path: str, config: Optional[EstimatorConfig] = None) -> "GCodeParser":
        config = config or get_default_config()
        loaded = load_gcode(file_path, config.encodings)
        parser = cls(loaded.text, config)
        parser.source = loaded
        return parser

    @property
    def lines(self) -> Tuple[str, ...]:
        return self._lines

    @property
    def metadata(self) -> GCodeMetadata:
        return self._metadata

    def get_layer_count(self) -> int:
        return count_layers(self._lines, self.config.count_each_layer_pattern)

    def estimate_print_time(self) -> int:
        return estimate_print_time(
            self._lines,
            declared_time=self._metadata.estimated_time,
            feed_rate=self.config.default_feed_rate,
        )

    def detect_slicer(self) -> Tuple[SlicerType, Optional[str]]:
        return SlicerDetector.detect(list(self._lines[:self.config.slicer_detect_lines]),
                                     max_lines=self.config.slicer_detect_lines)

    def report(self, file_name: Optional[str] = None) -> PrintReport:
        """전체 결과를 PrintReport로 정리"""
        slicer, version = self.detect_slicer()
        seconds = self.estimate_print_time()
        meta = self._metadata
        return PrintReport(
            file_name=file_name,
            total_lines=len(self._lines),
            encoding=self.source.encoding if self.source else None,
            slicer=slicer,
            slicer_version=version,
            flavor=meta.flavor,
            filament_used=meta.filament_used,
            layer_height=meta.layer_height,
            layer_count=self.get_layer_count(),
            estimated_seconds=seconds,
            formatted_time=format_seconds(seconds),
            time_source=TimeSource.METADATA if meta.estimated_time else TimeSource.SIMULATION,
        )


def analyze_gcode_file(file_path: str, config: Optional[EstimatorConfig] = None) -> PrintReport:
    """G-code 파일 분석

    Raises:
        EncodingError: 인코딩 오류로 파일을 제대로 파싱할 수 없는 경우
    """
    parser = GCodeParser.from_file(file_path, config)
    slicer, _ = parser.detect_slicer()

    # 인코딩 폴백 + unknown 슬라이서 = 인코딩 에러로 판단
    if parser.source.is_fallback and slicer == SlicerType.UNKNOWN:
        raise EncodingError(
            f"Failed to decode file with supported encodings ({', '.join(parser.config.encodings)}). "
            f"File may be corrupted or use an unsupported encoding. "
            f"Fallback encoding: {parser.source.encoding}"
        )

    report = parser.report(file_name=os.path.basename(file_path))
    logger.info("Analyzed %s: %d layers, %s (%s)",
                report.file_name, report.layer_count, report.formatted_time, report.time_source)
    return report

"""
G-code Metadata Extractor
슬라이서가 주석으로 남긴 메타데이터 추출 (flavor, 예상 시간, 필라멘트, 레이어 높이)

지원 주석 형식:
- Cura: ;FLAVOR:Marlin, ;TIME:1234, ;Filament used: 1.2m, ;Layer height: 0.2
- PrusaSlicer/OrcaSlicer: ; estimated printing time (normal mode) = 1h 2m 3s

각 인식 함수는 한 줄만 보고 값 또는 None을 반환한다.
None이면 해당 필드는 건드리지 않는다 (마지막 매칭이 우선).
"""
import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple
from .models import GCodeMetadata, SlicerType

logger = logging.getLogger(__name__)

FLAVOR_MARKER = ";FLAVOR:"
TIME_MARKER = ";TIME:"
# 대소문자 무시 마커
FILAMENT_USED_MARKER = re.compile(re.escape(";filament used:"), re.IGNORECASE)
LAYER_HEIGHT_MARKER = re.compile(re.escape(";layer height:"), re.IGNORECASE)
ESTIMATED_TIME_MARKER = re.compile(re.escape("; estimated printing time"), re.IGNORECASE)

_LEADING_INT = re.compile(r"\s*(\d+)")
_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")
_DURATION = re.compile(
    r"(?:(\d+)d\s*)?(?:(\d+)h\s*)?(?:(\d+)m\s*)?(?:(\d+)s)?",
    re.IGNORECASE,
)
_DURATION_UNITS = (86400, 3600, 60, 1)


def _after_marker(line: str, marker: "re.Pattern[str]") -> Optional[str]:
    """marker 뒤의 문자열 반환 (없으면 None)"""
    match = marker.search(line)
    return line[match.end():] if match else None


def _first_number(text: str) -> Optional[float]:
    match = _NUMBER.search(text)
    return float(match.group(0)) if match else None


def parse_flavor(line: str) -> Optional[str]:
    if FLAVOR_MARKER not in line:
        return None
    return line.split(FLAVOR_MARKER, 1)[1].strip()


def parse_time_tag(line: str) -> Optional[int]:
    """;TIME:<seconds> (Cura)"""
    if TIME_MARKER not in line:
        return None
    match = _LEADING_INT.match(line.split(TIME_MARKER, 1)[1])
    return int(match.group(1)) if match else None


def parse_filament_used(line: str) -> Optional[float]:
    rest = _after_marker(line, FILAMENT_USED_MARKER)
    return None if rest is None else _first_number(rest)


def parse_layer_height(line: str) -> Optional[float]:
    rest = _after_marker(line, LAYER_HEIGHT_MARKER)
    return None if rest is None else _first_number(rest)


def parse_duration(text: str) -> Optional[int]:
    """
    "1h 2m 3s" 형식을 초로 변환

    각 단위는 선택적이며 d, h, m, s 순서로 최대 한 번씩.
    숫자가 하나도 없으면 None.
    """
    for match in _DURATION.finditer(text):
        if not any(match.groups()):
            continue
        return sum(
            int(value) * unit
            for value, unit in zip(match.groups(), _DURATION_UNITS)
            if value is not None
        )
    return None


def parse_estimated_printing_time(line: str) -> Optional[int]:
    """; estimated printing time (normal mode) = 1h 2m 3s (PrusaSlicer/OrcaSlicer)"""
    rest = _after_marker(line, ESTIMATED_TIME_MARKER)
    return None if rest is None else parse_duration(rest)


# (필드명, 인식 함수) - 같은 줄에서는 이 순서대로 적용
LINE_RECOGNIZERS = (
    ("flavor", parse_flavor),
    ("estimated_time", parse_time_tag),
    ("filament_used", parse_filament_used),
    ("layer_height", parse_layer_height),
    ("estimated_time", parse_estimated_printing_time),
)


def extract_metadata(lines: Iterable[str]) -> GCodeMetadata:
    """Scan every line once; later matches overwrite earlier ones."""
    found: Dict[str, Any] = {}
    for line in lines:
        for field_name, recognize in LINE_RECOGNIZERS:
            value = recognize(line)
            if value is not None:
                found[field_name] = value

    if found:
        logger.debug("Slicer metadata found: %s", found)
    return GCodeMetadata(**found)


class SlicerDetector:
    """
    슬라이서 자동 감지

    BANNERS: 버전이 들어있는 "generated by" 계열 헤더 (찾으면 바로 확정)
    HINTS: 버전 없는 흔적 (;FLAVOR:Marlin 등). 헤더 범위 안에 배너가 없을 때만 사용
    """

    BANNERS = [
        (SlicerType.ORCASLICER, re.compile(r'generated by OrcaSlicer\s*([\d.]+)?', re.IGNORECASE)),
        (SlicerType.BAMBUSTUDIO, re.compile(r'BambuStudio\s*([\d.]+)?', re.IGNORECASE)),
        (SlicerType.CURA, re.compile(r'Generated with Cura_SteamEngine\s*([\d.]+)?', re.IGNORECASE)),
        (SlicerType.PRUSASLICER, re.compile(r'generated by PrusaSlicer\s*([\d.]+)?', re.IGNORECASE)),
    ]

    HINTS = [
        (SlicerType.ORCASLICER, re.compile(r'; OrcaSlicer', re.IGNORECASE)),
        (SlicerType.BAMBUSTUDIO, re.compile(r'; Bambu Lab', re.IGNORECASE)),
        (SlicerType.CURA, re.compile(r';FLAVOR:Marlin', re.IGNORECASE)),
        (SlicerType.CURA, re.compile(r'Ultimaker Cura', re.IGNORECASE)),
        (SlicerType.PRUSASLICER, re.compile(r'; PrusaSlicer', re.IGNORECASE)),
        (SlicerType.SIMPLIFY3D, re.compile(r'Simplify3D', re.IGNORECASE)),
        (SlicerType.IDEAMAKER, re.compile(r'ideaMaker', re.IGNORECASE)),
    ]

    @classmethod
    def detect(cls, lines: List[str], max_lines: int = 100) -> Tuple[SlicerType, Optional[str]]:
        """
        G-code 파일의 처음 부분을 분석하여 슬라이서 감지
        Returns: (SlicerType, version string or None)
        """
        hinted = SlicerType.UNKNOWN
        for line in lines[:max_lines]:
            for slicer_type, pattern in cls.BANNERS:
                match = pattern.search(line)
                if match:
                    return slicer_type, match.group(1)

            if hinted == SlicerType.UNKNOWN:
                for slicer_type, pattern in cls.HINTS:
                    if pattern.search(line):
                        hinted = slicer_type
                        break

        return hinted, None

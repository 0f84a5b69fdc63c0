import logging
import math
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence
from .models import MoveTarget

logger = logging.getLogger(__name__)

DEFAULT_ENCODINGS = ("utf-8", "cp949", "euc-kr")

_LINE_BREAK = re.compile(r"\r?\n")
_MOVE_COMMAND = re.compile(r"(?:G0|G1)\b")
_AXIS_PATTERNS = {axis: re.compile(axis + r"([-\d.]+)") for axis in ("X", "Y", "Z", "E")}
_FEED_RATE = re.compile(r"F([\d.]+)")


@dataclass
class LoadResult:
    """G-code 파일 로드 결과"""
    text: str
    encoding: str
    is_fallback: bool  # latin-1 fallback으로 디코딩되었는지


def split_lines(text: str) -> List[str]:
    """Split raw G-code on LF or CRLF."""
    return _LINE_BREAK.split(text)


def load_gcode(file_path: str, encodings: Optional[Sequence[str]] = None) -> LoadResult:
    """Read a G-code file, trying each encoding in order.

    Returns:
        LoadResult with decoded text, encoding used, and fallback flag
    """
    # 바이너리로 읽어서 인코딩 시도
    with open(file_path, "rb") as f:
        raw_bytes = f.read()

    for encoding in encodings or DEFAULT_ENCODINGS:
        try:
            text = raw_bytes.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue
        return LoadResult(text=_normalize_newlines(text), encoding=encoding, is_fallback=False)

    # 모든 인코딩 실패 시 latin-1로 강제 디코딩 (항상 성공)
    logger.warning("Falling back to latin-1 for %s", file_path)
    text = raw_bytes.decode("latin-1", errors="replace")
    return LoadResult(text=_normalize_newlines(text), encoding="latin-1 (fallback)", is_fallback=True)


def _normalize_newlines(text: str) -> str:
    # 단독 CR (구형 Mac 줄바꿈)도 LF로
    return text.replace("\r\n", "\n").replace("\r", "\n")


def is_move_command(line: str) -> bool:
    """G0/G1 at the very start of the line (case-sensitive)."""
    return _MOVE_COMMAND.match(line) is not None


def _parse_number(pattern: "re.Pattern[str]", line: str) -> Optional[float]:
    match = pattern.search(line)
    if not match:
        return None
    try:
        value = float(match.group(1))
    except ValueError:
        # "-", "1.2.3" 같은 잘못된 토큰은 없는 값으로 취급
        return None
    # 자릿수가 너무 많아 inf가 되는 토큰도 잘못된 값
    return value if math.isfinite(value) else None


def parse_feed_rate(line: str) -> Optional[float]:
    """F 값 (mm/min). 0 이하나 파싱 실패는 None."""
    value = _parse_number(_FEED_RATE, line)
    if value is None or value <= 0:
        return None
    return value


def parse_move(line: str) -> MoveTarget:
    """Extract X/Y/Z/E targets and feed rate from a move line.

    Axes that are missing or malformed come back as None so the caller keeps
    the current coordinate.
    """
    return MoveTarget(
        x=_parse_number(_AXIS_PATTERNS["X"], line),
        y=_parse_number(_AXIS_PATTERNS["Y"], line),
        z=_parse_number(_AXIS_PATTERNS["Z"], line),
        e=_parse_number(_AXIS_PATTERNS["E"], line),
        feed_rate=parse_feed_rate(line),
    )

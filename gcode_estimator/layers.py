from typing import Iterable
import re


# 레이어 마커 패턴 (둘 다 대소문자 무시)
_LAYER_TAG = re.compile(r';\s*LAYER[:\s]', re.IGNORECASE)   # Cura: ;LAYER:3
_LAYER_WORD = re.compile(r';\s*layer\b', re.IGNORECASE)     # ; layer change, ; layer 3


def is_layer_tag(line: str) -> bool:
    return _LAYER_TAG.search(line) is not None


def is_layer_word(line: str) -> bool:
    return _LAYER_WORD.search(line) is not None


def count_layers(lines: Iterable[str], count_each_pattern: bool = False) -> int:
    """
    레이어 마커 주석 수 (텍스트 카운트, 레이어 번호 중복 제거 없음)

    Args:
        lines: G-code 라인들
        count_each_pattern: True면 패턴별로 카운트 (두 패턴 모두 맞는 라인은 2회)

    Returns:
        마커 수
    """
    total = 0
    for line in lines:
        tag = is_layer_tag(line)
        word = is_layer_word(line)
        if count_each_pattern:
            total += int(tag) + int(word)
        elif tag or word:
            total += 1
    return total

"""
Print Time Estimator - G-code 직접 시뮬레이션

G0/G1 직선 이동만 본다. 가감속/저크는 무시하고
이동 거리 / 피드레이트로 시간을 누적한다.
"""
import logging
import math
from functools import reduce
from typing import Iterable, Iterator, Optional
from .models import MoveTarget, Position, SimulationState
from .parser import is_move_command, parse_move

logger = logging.getLogger(__name__)

DEFAULT_FEED_RATE = 1200.0  # mm/min


def distance(a: Position, b: Position) -> float:
    """XYZ 유클리드 거리 (E 제외)"""
    dx = b.x - a.x
    dy = b.y - a.y
    dz = b.z - a.z
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def initial_state(feed_rate: float = DEFAULT_FEED_RATE) -> SimulationState:
    return SimulationState(position=Position(), feed_rate=feed_rate)


def step(state: SimulationState, move: MoveTarget) -> SimulationState:
    """Apply one linear move to the running state."""
    # F는 이후 라인에도 유지. 0/누락은 파서에서 None → 이전 값 유지
    feed_rate = move.feed_rate if move.feed_rate is not None else state.feed_rate
    target = move.resolve(state.position)
    # 피드레이트는 mm/min → ×60 으로 초 변환
    elapsed = state.elapsed + distance(state.position, target) / feed_rate * 60
    if not math.isfinite(elapsed):
        # 유한한 좌표라도 거리/누적 시간이 float 범위를 넘으면 이 이동은 시간에 반영하지 않음
        logger.debug("Skipping non-finite move contribution to %s", target)
        elapsed = state.elapsed
    return SimulationState(position=target, feed_rate=feed_rate, elapsed=elapsed)


def iter_moves(lines: Iterable[str]) -> Iterator[MoveTarget]:
    for line in lines:
        if is_move_command(line):
            yield parse_move(line)


def simulate(lines: Iterable[str], feed_rate: float = DEFAULT_FEED_RATE) -> SimulationState:
    return reduce(step, iter_moves(lines), initial_state(feed_rate))


def round_seconds(seconds: float) -> int:
    # half-up (0.5 → 1), 파이썬 round()의 banker's rounding 회피
    return max(0, int(math.floor(seconds + 0.5)))


def estimate_print_time(
    lines: Iterable[str],
    declared_time: Optional[int] = None,
    feed_rate: float = DEFAULT_FEED_RATE,
) -> int:
    """
    예상 출력 시간 (초)

    슬라이서가 선언한 시간이 있으면 (0이 아닌 경우) 그대로 반환하고,
    없으면 G0/G1 이동을 시뮬레이션한다.
    """
    if declared_time:
        return declared_time

    if feed_rate <= 0:
        raise ValueError(f"feed_rate must be positive, got {feed_rate}")

    final = simulate(lines, feed_rate)
    logger.debug("Simulated print time: %.3fs", final.elapsed)
    return round_seconds(final.elapsed)


def format_seconds(seconds: int) -> str:
    """초 → HH:MM:SS"""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"

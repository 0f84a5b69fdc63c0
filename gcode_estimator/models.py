from dataclasses import dataclass
from enum import Enum
from typing import Optional
from pydantic import BaseModel


# --- Motion state ---
@dataclass(frozen=True)
class Position:
    """툴헤드/익스트루더 절대 위치 (mm)"""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    e: float = 0.0


@dataclass(frozen=True)
class MoveTarget:
    """G0/G1 한 줄에서 파싱된 목표값 (없는 축은 None = 현재값 유지)"""
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    e: Optional[float] = None
    feed_rate: Optional[float] = None

    def resolve(self, current: Position) -> Position:
        return Position(
            x=current.x if self.x is None else self.x,
            y=current.y if self.y is None else self.y,
            z=current.z if self.z is None else self.z,
            e=current.e if self.e is None else self.e,
        )


@dataclass(frozen=True)
class SimulationState:
    """시뮬레이션 누적 상태"""
    position: Position
    feed_rate: float    # mm/min
    elapsed: float = 0.0  # seconds


# --- Slicer comment metadata ---
class GCodeMetadata(BaseModel):
    flavor: Optional[str] = None
    estimated_time: Optional[int] = None   # seconds
    filament_used: Optional[float] = None  # 주석에 적힌 단위 그대로 (m, mm, g)
    layer_height: Optional[float] = None   # mm

    model_config = {"frozen": True}


class SlicerType(str, Enum):
    """지원되는 슬라이서 타입"""
    UNKNOWN = "unknown"
    ORCASLICER = "orcaslicer"
    BAMBUSTUDIO = "bambustudio"
    CURA = "cura"
    PRUSASLICER = "prusaslicer"
    SIMPLIFY3D = "simplify3d"
    IDEAMAKER = "ideamaker"


class TimeSource(str, Enum):
    METADATA = "metadata"
    SIMULATION = "simulation"


# --- Final Consolidated Result ---
class PrintReport(BaseModel):
    file_name: Optional[str] = None
    total_lines: int
    encoding: Optional[str] = None
    slicer: SlicerType = SlicerType.UNKNOWN
    slicer_version: Optional[str] = None
    flavor: Optional[str] = None
    filament_used: Optional[float] = None
    layer_height: Optional[float] = None
    layer_count: int
    estimated_seconds: int
    formatted_time: str     # HH:MM:SS
    time_source: TimeSource

    model_config = {"use_enum_values": True}

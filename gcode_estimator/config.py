"""
G-code Estimator Configuration
하드코딩 제거를 위한 설정 파일
"""
import os
import dotenv
from pydantic import BaseModel, Field
from typing import List

# Load .env explicitly if needed
dotenv.load_dotenv()


class EstimatorConfig(BaseModel):
    """추정기 설정"""
    default_feed_rate: float = Field(1200.0, gt=0)  # mm/min, F 값이 없을 때 사용
    count_each_layer_pattern: bool = False  # True면 두 레이어 패턴 모두 매칭된 라인을 2회 카운트
    slicer_detect_lines: int = Field(100, ge=1)  # 슬라이서 감지용 헤더 라인 수
    encodings: List[str] = ["utf-8", "cp949", "euc-kr"]  # 시도할 인코딩 (우선순위 순)


def get_default_config() -> EstimatorConfig:
    return EstimatorConfig()


def load_config_from_env() -> EstimatorConfig:
    """환경 변수에서 설정 오버라이드 (값이 잘못되면 ValidationError)"""
    overrides = {}

    feed = os.getenv("GCODE_DEFAULT_FEED_RATE")
    if feed:
        overrides["default_feed_rate"] = feed

    double_count = os.getenv("GCODE_COUNT_EACH_LAYER_PATTERN")
    if double_count:
        overrides["count_each_layer_pattern"] = double_count

    detect_lines = os.getenv("GCODE_SLICER_DETECT_LINES")
    if detect_lines:
        overrides["slicer_detect_lines"] = detect_lines

    return EstimatorConfig(**overrides)

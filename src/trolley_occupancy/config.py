"""
Occupancy Engine Configuration.

점유율 엔진 보정 상수 및 설정.

수동으로 튜닝된 상수(면적 보정 1.8배, 스낵 보정 2.5배, 가중치
0.35/0.30/0.20/0.10/0.05, 서랍 밴드 위치 등)를 한 곳에 모아
알고리즘 제어 흐름을 수정하지 않고 재보정할 수 있도록 한다.

지원 형식:
- 기본값 (원본 보정값)
- 환경변수 (TROLLEY_ 접두사, 중첩 구분자 "__")
- YAML 파일

사용 예시:
    settings = OccupancySettings.from_yaml("occupancy.yaml")
    estimator = OccupancyEstimator(settings.scoring)

    # 환경변수
    TROLLEY_SCORING__FILL_BOOST=2.0
    TROLLEY_DRAWERS__TOP_OFFSET=0.0
"""

from pathlib import Path
from typing import Union
import logging

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

__all__ = [
    "CompositeWeights",
    "VerticalBands",
    "ScoringConfig",
    "DrawerLayout",
    "DetectorConfig",
    "OccupancySettings",
]


class CompositeWeights(BaseModel):
    """최종 점수 가중치 (합계 1.0)."""

    model_config = ConfigDict(frozen=True)

    vertical: float = Field(default=0.35, ge=0)   # 상단 적재 = 가득 참
    fill: float = Field(default=0.30, ge=0)       # 면적 점유
    snack: float = Field(default=0.20, ge=0)      # 스낵/galleta 감지
    fill_line: float = Field(default=0.10, ge=0)  # 채움 라인 위치
    detection: float = Field(default=0.05, ge=0)  # 다수 감지 보너스


class VerticalBands(BaseModel):
    """수직 3분할 경계 및 각 구간 대표 위치 (프레임 높이 비율)."""

    model_config = ConfigDict(frozen=True)

    top_cutoff: float = 0.33
    middle_cutoff: float = 0.66
    top_center: float = 0.17
    middle_center: float = 0.5
    bottom_center: float = 0.83


class ScoringConfig(BaseModel):
    """
    점유율 점수 보정값.

    Attributes:
        fill_boost: 면적 점유율 보정 배수
        snack_boost: 스낵 면적 보정 배수
        snack_saturation: 스낵 보너스 정규화 기준 (%)
        snack_bonus_cap: 스낵 보너스 상한 (정규화 후)
        max_detection_bonus: 감지 개수 보너스 상한
    """

    model_config = ConfigDict(frozen=True)

    fill_boost: float = Field(default=1.8, ge=0)
    snack_boost: float = Field(default=2.5, ge=0)
    snack_saturation: float = Field(default=15.0, gt=0)
    snack_bonus_cap: float = Field(default=1.8, ge=0)
    max_detection_bonus: int = Field(default=10, gt=0)
    weights: CompositeWeights = Field(default_factory=CompositeWeights)
    bands: VerticalBands = Field(default_factory=VerticalBands)


class DrawerLayout(BaseModel):
    """
    서랍 영역 배치.

    행 i의 시작 y = top_offset * H + i * row_height * H.
    기본값(0.2 + 3 * 0.25)은 [0.2H, 0.95H]만 덮고 프레임 전체를 나누지 않음.
    """

    model_config = ConfigDict(frozen=True)

    rows: int = Field(default=3, ge=0)
    columns: int = Field(default=2, ge=1)
    top_offset: float = 0.2
    row_height: float = Field(default=0.25, ge=0)
    cookie_confidence: float = Field(default=0.8, ge=0, le=1)
    full_level_cutoff: float = 0.3
    partial_level_cutoff: float = 0.6
    full_level: float = 100.0
    partial_level: float = 75.0
    low_level: float = 50.0


class DetectorConfig(BaseModel):
    """
    상위 감지기 설정.

    Attributes:
        confidence: 감지기 최소 신뢰도
        observation_confidence: 사각형 관측 최소 신뢰도 (초과만 사용)
        max_observations: 프레임당 최대 관측 수
    """

    model_config = ConfigDict(frozen=True)

    confidence: float = Field(default=0.15, ge=0, le=1)
    observation_confidence: float = Field(default=0.5, ge=0, le=1)
    max_observations: int = Field(default=10, ge=0)


class OccupancySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TROLLEY_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO")

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    drawers: DrawerLayout = Field(default_factory=DrawerLayout)
    detector: DetectorConfig = Field(default_factory=DetectorConfig)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r} (expected one of {', '.join(LOG_LEVELS)})")
        return level

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "OccupancySettings":
        """
        YAML 파일에서 설정 생성.

        Args:
            yaml_path: YAML 파일 경로

        Returns:
            OccupancySettings 인스턴스

        Raises:
            FileNotFoundError: YAML 파일을 찾을 수 없음
            ValueError: 최상위가 매핑이 아님
        """
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}

        # occupancy 키가 있으면 그것을 사용, 아니면 전체 데이터가 설정이라고 가정
        if isinstance(data, dict) and "occupancy" in data:
            data = data["occupancy"]

        if not isinstance(data, dict):
            raise ValueError(f"Invalid YAML format: expected mapping, got {type(data).__name__}")

        logger.info(f"Loaded occupancy settings from {yaml_path}")
        return cls(**data)

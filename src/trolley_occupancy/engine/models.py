"""
Data Models for Trolley Occupancy Engine.

트롤리 점유율 엔진의 핵심 데이터 모델 정의.

핵심 플로우:
1. Detection: 외부 감지기에서 전달된 객체 (라벨 + bounding box)
2. ProductType: 정규화된 상품 종류 (can/bottle_water/juice_box/cookie)
3. VisualOccupancyResult: 프레임 단위 점유율 점수 결과
4. DrawerReport: 서랍 영역별 음료 유무 / 쿠키 추론 결과
5. FrameAnalysis: 한 프레임의 전체 분석 결과 (정규화 + 추론 + 점수)
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional


class ProductType(Enum):
    """
    상품 종류.

    값(value)은 정규화된 Detection 라벨로 그대로 사용됨.
    UNKNOWN은 선언만 되어 있고 현재 분류 로직에서는 반환되지 않음.
    """

    CAN = "can"
    BOTTLE_WATER = "bottle_water"
    JUICE_BOX = "juice_box"
    COOKIE = "cookie"
    UNKNOWN = "unknown"


class OccupancyCategory(Enum):
    """점유율 카테고리 (비어있음 → 가득 참 순서)."""

    EMPTY = "empty"
    SPARSE = "sparse"
    PARTIAL = "partial"
    GOOD = "good"
    NEARLY_FULL = "nearly_full"
    FULL = "full"

    @classmethod
    def from_score(cls, score: float) -> "OccupancyCategory":
        """
        점수(0~10)에서 카테고리 결정.

        각 구간은 하한 포함: 정확히 1.0은 SPARSE, 9.0은 FULL.
        """
        if score < 1:
            return cls.EMPTY
        if score < 3:
            return cls.SPARSE
        if score < 5:
            return cls.PARTIAL
        if score < 7:
            return cls.GOOD
        if score < 9:
            return cls.NEARLY_FULL
        return cls.FULL

    @property
    def indicator_color(self) -> str:
        """AR 표시기 색상 이름."""
        return _INDICATOR_COLORS[self]


_INDICATOR_COLORS = {
    OccupancyCategory.EMPTY: "red",
    OccupancyCategory.SPARSE: "red",
    OccupancyCategory.PARTIAL: "orange",
    OccupancyCategory.GOOD: "yellow",
    OccupancyCategory.NEARLY_FULL: "green",
    OccupancyCategory.FULL: "green",
}


@dataclass(frozen=True)
class BoundingBox:
    """
    Bounding box (픽셀, 좌상단 원점).

    Attributes:
        x: 좌측 x 좌표
        y: 상단 y 좌표
        width: 너비
        height: 높이
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def center_y(self) -> float:
        """수직 중심점."""
        return self.y + self.height / 2

    @property
    def area(self) -> float:
        """면적. 음수 크기는 0으로 취급."""
        return max(self.width, 0.0) * max(self.height, 0.0)

    def overlaps(self, other: "BoundingBox") -> bool:
        """축 정렬 사각형 겹침 여부 (경계 접촉은 겹침 아님)."""
        return (
            self.x < other.x2 and
            self.x2 > other.x and
            self.y < other.y2 and
            self.y2 > other.y
        )

    @classmethod
    def from_xyxy(cls, x1: float, y1: float, x2: float, y2: float) -> "BoundingBox":
        """[x1, y1, x2, y2] 형식에서 생성."""
        return cls(x=x1, y=y1, width=x2 - x1, height=y2 - y1)

    def to_dict(self) -> dict:
        """딕셔너리 변환."""
        return {
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "width": round(self.width, 2),
            "height": round(self.height, 2),
        }


@dataclass(frozen=True)
class FrameInfo:
    """프레임 크기 (픽셀)."""
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class Detection:
    """
    감지 결과.

    외부 감지기가 전달한 단일 라벨 + bounding box.
    box가 프레임 안에 있는지는 검증하지 않음.

    Attributes:
        label: 라벨 텍스트 (감지기 정의 어휘 또는 ProductType 값)
        confidence: 신뢰도 (0.0 ~ 1.0)
        bounding_box: 픽셀 좌표 bounding box
        frame: 프레임 크기
    """
    label: str
    confidence: float
    bounding_box: BoundingBox
    frame: FrameInfo

    def with_label(self, label: str) -> "Detection":
        """라벨만 바꾼 복사본."""
        return replace(self, label=label)

    def to_dict(self) -> dict:
        """딕셔너리 변환."""
        return {
            "label": self.label,
            "confidence": round(self.confidence, 4),
            "bounding_box": self.bounding_box.to_dict(),
            "frame": {"width": self.frame.width, "height": self.frame.height},
        }


@dataclass(frozen=True)
class GeometryFeatures:
    """
    기하 특징.

    Attributes:
        aspect_ratio: width / height
        normalized_height: height / frame_height
        normalized_width: width / frame_width
        area_ratio: box 면적 / 프레임 면적
    """
    aspect_ratio: float
    normalized_height: float
    normalized_width: float
    area_ratio: float


@dataclass(frozen=True)
class VisualOccupancyResult:
    """
    점유율 분석 결과.

    수치 필드는 소수점 둘째 자리로 반올림된 값.
    category는 반올림 전 점수로 결정되므로 반올림된 final_score와
    경계에서 어긋날 수 있음 (예: 0.996 → final_score 1.0, category EMPTY).
    category를 final_score에서 다시 계산하지 말 것.

    Attributes:
        final_score: 최종 점수 (0 ~ 10)
        category: 점유율 카테고리
        fill_percent: 면적 점유율 (0 ~ 100, 보정 포함)
        snack_percent: 스낵 면적 비율 (0 ~ 100, 보정 포함)
        vertical_score: 수직 분포 점수 (0 ~ 10)
        fill_line_score: 채움 라인 점수 (0 ~ 10)
        detection_count: 감지 개수
        top_ratio: 상단 1/3 면적 비율 (0 ~ 1)
        detail: 요약 문장
    """
    final_score: float
    category: OccupancyCategory
    fill_percent: float
    snack_percent: float
    vertical_score: float
    fill_line_score: float
    detection_count: int
    top_ratio: float
    detail: str

    @property
    def is_empty(self) -> bool:
        return self.category is OccupancyCategory.EMPTY

    def to_dict(self) -> dict:
        """딕셔너리 변환."""
        return {
            "final_score": self.final_score,
            "category": self.category.value,
            "fill_percent": self.fill_percent,
            "snack_percent": self.snack_percent,
            "vertical_score": self.vertical_score,
            "fill_line_score": self.fill_line_score,
            "detection_count": self.detection_count,
            "top_ratio": self.top_ratio,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class DrawerRegion:
    """
    서랍 영역.

    Attributes:
        region_id: 영역 ID (예: "drawer_0_left")
        row: 행 번호 (0부터)
        side: 열 이름 ("left" / "right")
        bbox: 영역 box (픽셀)
    """
    region_id: str
    row: int
    side: str
    bbox: BoundingBox


@dataclass(frozen=True)
class DrawerReport:
    """
    서랍 영역별 추론 결과.

    Attributes:
        region: 서랍 영역
        beverage_count: 영역과 겹치는 음료 감지 수
        fill_level: 영역 위치 기반 채움 추정 (100 / 75 / 50)
        cookie: 음료가 없을 때 생성된 쿠키 Detection
    """
    region: DrawerRegion
    beverage_count: int
    fill_level: float
    cookie: Optional[Detection] = None

    @property
    def has_cookies(self) -> bool:
        return self.cookie is not None

    def to_dict(self) -> dict:
        """딕셔너리 변환."""
        return {
            "region_id": self.region.region_id,
            "row": self.region.row,
            "side": self.region.side,
            "bbox": self.region.bbox.to_dict(),
            "beverage_count": self.beverage_count,
            "fill_level": self.fill_level,
            "has_cookies": self.has_cookies,
        }


@dataclass
class FrameAnalysis:
    """
    프레임 분석 결과.

    Attributes:
        normalized: 정규화된 감지 결과
        inferred: 서랍 추론으로 생성된 쿠키 감지
        occupancy: 점유율 결과 (정규화된 감지 기준)
        drawers: 서랍 영역별 보고
    """
    normalized: List[Detection]
    inferred: List[Detection]
    occupancy: VisualOccupancyResult
    drawers: List[DrawerReport] = field(default_factory=list)

    @property
    def all_detections(self) -> List[Detection]:
        """정규화된 감지 + 추론된 쿠키 (이 순서)."""
        return self.normalized + self.inferred

    @property
    def item_count(self) -> int:
        return len(self.normalized) + len(self.inferred)

    def to_dict(self) -> dict:
        """딕셔너리 변환."""
        return {
            "occupancy": self.occupancy.to_dict(),
            "detections": [d.to_dict() for d in self.all_detections],
            "inferred_count": len(self.inferred),
            "item_count": self.item_count,
            "drawers": [d.to_dict() for d in self.drawers],
        }

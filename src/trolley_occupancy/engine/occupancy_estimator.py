"""
Visual Occupancy Estimator.

감지 결과 리스트로 트롤리 점유율 점수(0~10) 추정.

점수 구성 (가중 평균):
1. 수직 분포 (35%): 상단에 적재될수록 가득 찬 상태
2. 면적 점유 (30%): 감지 면적 / 프레임 면적 (1.8배 보정)
3. 스낵 보너스 (20%): cookie/snack/galleta 면적 (2.5배 보정)
4. 채움 라인 (10%): 면적 가중 평균 수직 위치
5. 감지 개수 (5%): 최대 10개

사용 예시:
    estimator = OccupancyEstimator()
    result = estimator.estimate(detections, frame_width=640, frame_height=480)
    print(result.category, result.final_score)
"""

from dataclasses import dataclass
from typing import Optional, Sequence
import logging
import math

from ..config import ScoringConfig
from ..keywords import is_beverage_label, is_snack_label
from .models import Detection, OccupancyCategory, VisualOccupancyResult

logger = logging.getLogger(__name__)

EMPTY_DETAIL = "No detections - empty tray"


@dataclass
class VerticalDistribution:
    """수직 3분할 구간별 면적 합계."""
    top: float = 0.0
    middle: float = 0.0
    bottom: float = 0.0
    snack_area: float = 0.0
    beverage_area: float = 0.0

    @property
    def total(self) -> float:
        return self.top + self.middle + self.bottom


def categorize_score(score: float) -> OccupancyCategory:
    """점수(0~10) → 카테고리."""
    return OccupancyCategory.from_score(score)


def round2(value: float) -> float:
    """소수점 둘째 자리 반올림 (0.5는 0에서 멀어지는 방향)."""
    return math.copysign(math.floor(abs(value) * 100 + 0.5) / 100, value)


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


class OccupancyEstimator:
    """
    점유율 추정기.

    상태를 가지지 않으므로 프레임마다 같은 인스턴스를 재사용해도 안전함.

    Attributes:
        config: 점수 보정값
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def estimate(
        self,
        detections: Sequence[Detection],
        frame_width: float,
        frame_height: float,
    ) -> VisualOccupancyResult:
        """
        점유율 추정.

        Args:
            detections: 감지 결과 (정규화 여부 무관)
            frame_width: 프레임 너비 (픽셀)
            frame_height: 프레임 높이 (픽셀)

        Returns:
            VisualOccupancyResult
        """
        if not detections:
            return self.empty_result()

        cfg = self.config
        count = len(detections)
        dist = self._distribute(detections, frame_height)

        frame_area = frame_width * frame_height

        # 면적 점유율 (보정)
        if frame_area > 0:
            fill_percent = min(100.0, (dist.total / frame_area) * 100 * cfg.fill_boost)
        else:
            fill_percent = 0.0

        # 스낵 비율
        if dist.snack_area > 0 and frame_area > 0:
            snack_percent = min(100.0, (dist.snack_area / frame_area) * 100 * cfg.snack_boost)
        else:
            snack_percent = 0.0

        detection_bonus = min(cfg.max_detection_bonus, count)

        top_ratio = dist.top / dist.total if dist.total > 0 else 0.0
        vertical_score = self._vertical_score(dist, top_ratio)

        bands = cfg.bands
        if dist.total > 0:
            avg_detection_y = (
                dist.top * bands.top_center +
                dist.middle * bands.middle_center +
                dist.bottom * bands.bottom_center
            ) / dist.total
        else:
            avg_detection_y = 0.5
        fill_line_score = _clamp((1 - avg_detection_y) * 10, 0.0, 10.0)

        # 0~10 스케일 구성 요소
        fill_score = min(10.0, fill_percent / 100 * 10)
        snack_bonus = min(cfg.snack_bonus_cap, snack_percent / cfg.snack_saturation) * 10
        detection_score = detection_bonus / cfg.max_detection_bonus * 10

        weights = cfg.weights
        combined = (
            vertical_score * weights.vertical +
            fill_score * weights.fill +
            snack_bonus * weights.snack +
            fill_line_score * weights.fill_line +
            detection_score * weights.detection
        )
        final_score = _clamp(combined, 0.0, 10.0)
        category = categorize_score(final_score)

        logger.debug(
            f"Vertical areas top={dist.top:.1f} middle={dist.middle:.1f} "
            f"bottom={dist.bottom:.1f}, snack={dist.snack_area:.1f}, "
            f"beverage={dist.beverage_area:.1f}"
        )
        logger.debug(
            f"Occupancy {category.value} ({final_score:.2f}/10): fill={fill_percent:.1f}%, "
            f"snack={snack_percent:.1f}%, top_ratio={top_ratio:.2f}"
        )

        detail = (
            f"{count} items detected, {int(snack_percent)}% appear to be snacks/galletas. "
            f"Items packed at top: {int(top_ratio * 100)}%"
        )

        return VisualOccupancyResult(
            final_score=round2(final_score),
            category=category,
            fill_percent=round2(fill_percent),
            snack_percent=round2(snack_percent),
            vertical_score=round2(vertical_score),
            fill_line_score=round2(fill_line_score),
            detection_count=count,
            top_ratio=round2(top_ratio),
            detail=detail,
        )

    @staticmethod
    def empty_result() -> VisualOccupancyResult:
        """감지 없음 결과."""
        return VisualOccupancyResult(
            final_score=0.0,
            category=OccupancyCategory.EMPTY,
            fill_percent=0.0,
            snack_percent=0.0,
            vertical_score=0.0,
            fill_line_score=0.0,
            detection_count=0,
            top_ratio=0.0,
            detail=EMPTY_DETAIL,
        )

    def _distribute(
        self,
        detections: Sequence[Detection],
        frame_height: float,
    ) -> VerticalDistribution:
        """중심 y 기준 상/중/하 구간별 면적 집계."""
        bands = self.config.bands
        top_limit = frame_height * bands.top_cutoff
        middle_limit = frame_height * bands.middle_cutoff

        dist = VerticalDistribution()
        for detection in detections:
            bbox = detection.bounding_box
            area = bbox.area
            center_y = bbox.center_y

            if center_y < top_limit:
                dist.top += area
            elif center_y < middle_limit:
                dist.middle += area
            else:
                dist.bottom += area

            if is_snack_label(detection.label):
                dist.snack_area += area
            if is_beverage_label(detection.label):
                dist.beverage_area += area

        return dist

    @staticmethod
    def _vertical_score(dist: VerticalDistribution, top_ratio: float) -> float:
        """
        수직 분포 점수.

        상단 비율이 높을수록 가득 참, 하단 집중은 가라앉은(듬성한) 상태.
        """
        if top_ratio > 0.5:
            return 9.5
        if top_ratio > 0.35:
            return 8.0
        if dist.bottom > dist.top * 2:
            return 2.0
        if dist.middle > dist.top and dist.middle > dist.bottom:
            return 6.5
        return 5.0

"""
Trolley Occupancy Model.

프레임 단위 분석 파이프라인.

플로우:
1. 원본 감지 → DetectionNormalizer (모호하면 GeometryClassifier)
2. 정규화된 감지 → OccupancyEstimator → 점유율 점수
3. 정규화된 감지 + 프레임 크기 → DrawerCookieInferencer → 합성 쿠키
4. 정규화된 감지 + 합성 쿠키 병합

상태를 가지지 않으므로 여러 스레드에서 프레임마다 호출해도 안전함.

사용 예시:
    model = TrolleyOccupancyModel()
    analysis = model.analyze(raw_detections, frame_width=640, frame_height=480)
    print(analysis.occupancy.category.value, analysis.occupancy.final_score)
    items = analysis.all_detections
"""

from typing import List, Optional, Sequence
import logging

from ..config import OccupancySettings
from ..vision.detection_normalizer import DetectionNormalizer
from ..vision.drawer_inferencer import DrawerCookieInferencer
from ..vision.geometry_classifier import GeometryClassifier
from .models import (
    Detection,
    DrawerReport,
    FrameAnalysis,
    ProductType,
    VisualOccupancyResult,
)
from .occupancy_estimator import OccupancyEstimator

logger = logging.getLogger(__name__)


class TrolleyOccupancyModel:
    """
    트롤리 점유율 모델.

    Attributes:
        settings: 엔진 설정
        classifier: 형태 분류기
        normalizer: 라벨 정규화기
        estimator: 점유율 추정기
        inferencer: 서랍 쿠키 추론기
    """

    def __init__(self, settings: Optional[OccupancySettings] = None):
        """
        모델 초기화.

        Args:
            settings: 엔진 설정. None이면 기본 보정값 사용.
        """
        self.settings = settings or OccupancySettings()
        self.classifier = GeometryClassifier()
        self.normalizer = DetectionNormalizer(self.classifier)
        self.estimator = OccupancyEstimator(self.settings.scoring)
        self.inferencer = DrawerCookieInferencer(self.settings.drawers)

    def classify_detection(self, detection: Detection) -> ProductType:
        """라벨 + 형태 기반 상품 종류."""
        return self.normalizer.classify(detection)

    def normalize_detections(self, raw_detections: Sequence[Detection]) -> List[Detection]:
        """라벨을 ProductType 값으로 정규화."""
        return self.normalizer.normalize(raw_detections)

    def estimate_occupancy(
        self,
        detections: Sequence[Detection],
        frame_width: float,
        frame_height: float,
    ) -> VisualOccupancyResult:
        """점유율 추정."""
        return self.estimator.estimate(detections, frame_width, frame_height)

    def infer_cookies(
        self,
        detections: Sequence[Detection],
        frame_width: float,
        frame_height: float,
    ) -> List[Detection]:
        """음료 없는 서랍의 합성 쿠키 감지."""
        return self.inferencer.infer_cookies(detections, frame_width, frame_height)

    def drawer_report(
        self,
        detections: Sequence[Detection],
        frame_width: float,
        frame_height: float,
    ) -> List[DrawerReport]:
        """서랍 영역별 추론 결과."""
        return self.inferencer.report(detections, frame_width, frame_height)

    def analyze(
        self,
        raw_detections: Sequence[Detection],
        frame_width: float,
        frame_height: float,
        infer_drawers: bool = True,
    ) -> FrameAnalysis:
        """
        프레임 분석.

        점유율은 정규화된 감지만으로 계산하고 (합성 쿠키 제외),
        합성 쿠키는 병합된 감지 목록에만 추가된다.

        Args:
            raw_detections: 외부 감지기 결과
            frame_width: 프레임 너비 (픽셀)
            frame_height: 프레임 높이 (픽셀)
            infer_drawers: 서랍 쿠키 추론 수행 여부

        Returns:
            FrameAnalysis
        """
        normalized = self.normalize_detections(raw_detections)
        occupancy = self.estimate_occupancy(normalized, frame_width, frame_height)

        drawers: List[DrawerReport] = []
        if infer_drawers:
            drawers = self.drawer_report(normalized, frame_width, frame_height)
        inferred = [r.cookie for r in drawers if r.cookie is not None]

        analysis = FrameAnalysis(
            normalized=normalized,
            inferred=inferred,
            occupancy=occupancy,
            drawers=drawers,
        )

        logger.info(
            f"Occupancy: {occupancy.category.value} ({occupancy.final_score}/10), "
            f"fill={occupancy.fill_percent}%, snacks={occupancy.snack_percent}%, "
            f"items={analysis.item_count} ({len(inferred)} inferred)"
        )
        logger.debug(f"Detail: {occupancy.detail}")

        return analysis

"""
Detection Label Normalizer.

감지기 라벨을 ProductType 정규 이름으로 변환.

라벨 키워드 우선순위:
1. cookie / snack / galleta → COOKIE
2. juice / carton / box → JUICE_BOX
3. can / lat / cup → CAN
4. water → BOTTLE_WATER
5. coke / cola → BOTTLE_WATER
6. bottle → 형태 분류 (캔 모양 병일 수 있음)
7. 일치 없음 → 형태 분류

사용 예시:
    normalizer = DetectionNormalizer()
    normalized = normalizer.normalize(raw_detections)
"""

from typing import Iterable, List, Optional, Tuple
import logging

from ..engine.models import Detection, ProductType
from ..keywords import (
    CAN_KEYWORDS,
    COLA_KEYWORDS,
    JUICE_KEYWORDS,
    SNACK_KEYWORDS,
    WATER_KEYWORDS,
    contains_any,
    normalize_label,
)
from .geometry_classifier import GeometryClassifier

logger = logging.getLogger(__name__)

# (키워드, 상품 종류) - 순서가 우선순위
KEYWORD_RULES: Tuple[Tuple[Tuple[str, ...], ProductType], ...] = (
    (SNACK_KEYWORDS, ProductType.COOKIE),
    (JUICE_KEYWORDS, ProductType.JUICE_BOX),
    (CAN_KEYWORDS, ProductType.CAN),
    (WATER_KEYWORDS, ProductType.BOTTLE_WATER),
    (COLA_KEYWORDS, ProductType.BOTTLE_WATER),
)


class DetectionNormalizer:
    """
    라벨 정규화기.

    Attributes:
        classifier: 라벨이 모호할 때 사용할 형태 분류기
    """

    def __init__(self, classifier: Optional[GeometryClassifier] = None):
        self.classifier = classifier or GeometryClassifier()

    def classify(self, detection: Detection) -> ProductType:
        """
        라벨 + 형태로 상품 종류 결정.

        "bottle" 라벨과 미인식 라벨은 모두 형태 분류로 위임.
        """
        label = normalize_label(detection.label)

        for keywords, product_type in KEYWORD_RULES:
            if contains_any(label, keywords):
                return product_type

        return self.classifier.classify(detection)

    def normalize(self, raw_detections: Iterable[Detection]) -> List[Detection]:
        """
        라벨을 ProductType 값으로 교체.

        Args:
            raw_detections: 원본 감지 결과

        Returns:
            정규화된 Detection 리스트 (box, 신뢰도, 프레임은 그대로)
        """
        normalized = [
            detection.with_label(self.classify(detection).value)
            for detection in raw_detections
        ]
        logger.debug(f"Normalized {len(normalized)} detections")
        return normalized

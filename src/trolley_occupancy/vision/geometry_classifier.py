"""
Geometry-Based Beverage Classifier.

라벨이 모호할 때 bounding box 형태로 상품 종류 추정.

판단 순서 (먼저 일치하는 규칙 사용):
1. 낮고 넓은 실루엣 → CAN
2. 가늘고 긴 실루엣 또는 큰 높이 → BOTTLE_WATER
3. 폭이 넓거나 면적이 큰 중간 사각형 → JUICE_BOX
4. 기본값 → BOTTLE_WATER

사용 예시:
    classifier = GeometryClassifier()
    product_type = classifier.classify(detection)
"""

from ..engine.models import Detection, GeometryFeatures, ProductType


class GeometryClassifier:
    """
    기하 특징 기반 분류기.

    모든 비율은 0 나눗셈 시 기본값을 사용하므로 예외가 발생하지 않음.
    """

    # CAN: 낮고 넓음
    CAN_MIN_ASPECT = 0.78
    CAN_MAX_HEIGHT = 0.22
    SHORT_CAN_MAX_HEIGHT = 0.14
    SHORT_CAN_MIN_ASPECT = 0.7

    # BOTTLE_WATER: 가늘고 긺
    BOTTLE_MAX_ASPECT = 0.52
    BOTTLE_MIN_HEIGHT = 0.3

    # JUICE_BOX: 중간 사각형
    JUICE_MIN_WIDTH = 0.18
    JUICE_MIN_AREA = 0.02
    JUICE_MIN_ASPECT = 0.55

    def compute_features(self, detection: Detection) -> GeometryFeatures:
        """
        기하 특징 계산.

        Args:
            detection: 감지 결과

        Returns:
            GeometryFeatures (aspect_ratio, normalized_height/width, area_ratio)
        """
        bbox = detection.bounding_box
        frame = detection.frame

        aspect_ratio = bbox.width / bbox.height if bbox.height > 0 else 1.0
        normalized_height = bbox.height / frame.height if frame.height > 0 else 0.0
        normalized_width = bbox.width / frame.width if frame.width > 0 else 0.0
        if frame.width > 0 and frame.height > 0:
            area_ratio = (bbox.width * bbox.height) / (frame.width * frame.height)
        else:
            area_ratio = 0.0

        return GeometryFeatures(
            aspect_ratio=aspect_ratio,
            normalized_height=normalized_height,
            normalized_width=normalized_width,
            area_ratio=area_ratio,
        )

    def classify(self, detection: Detection) -> ProductType:
        """
        형태 기반 상품 종류 분류.

        Args:
            detection: 감지 결과

        Returns:
            ProductType (UNKNOWN은 반환하지 않음)
        """
        return self.classify_features(self.compute_features(detection))

    def classify_features(self, features: GeometryFeatures) -> ProductType:
        """계산된 특징으로 분류."""
        aspect = features.aspect_ratio
        height = features.normalized_height

        if (aspect >= self.CAN_MIN_ASPECT and height <= self.CAN_MAX_HEIGHT) or \
           (height <= self.SHORT_CAN_MAX_HEIGHT and aspect >= self.SHORT_CAN_MIN_ASPECT):
            return ProductType.CAN

        if aspect <= self.BOTTLE_MAX_ASPECT or height >= self.BOTTLE_MIN_HEIGHT:
            return ProductType.BOTTLE_WATER

        if (features.normalized_width >= self.JUICE_MIN_WIDTH and aspect >= self.JUICE_MIN_ASPECT) or \
           (features.area_ratio >= self.JUICE_MIN_AREA and aspect >= self.JUICE_MIN_ASPECT):
            return ProductType.JUICE_BOX

        # 판단 불가 시 생수로 간주
        return ProductType.BOTTLE_WATER

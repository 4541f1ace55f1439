"""
Geometry Classifier / Detection Normalizer Tests.

테스트 실행:
    pytest src/trolley_occupancy/tests/test_classifier.py -v
"""

import pytest

from trolley_occupancy import (
    DetectionNormalizer,
    GeometryClassifier,
    GeometryFeatures,
    ProductType,
)


@pytest.fixture
def classifier():
    """형태 분류기 fixture."""
    return GeometryClassifier()


@pytest.fixture
def normalizer(classifier):
    """라벨 정규화기 fixture."""
    return DetectionNormalizer(classifier)


class TestGeometryFeatures:
    """기하 특징 계산 테스트."""

    def test_ratios(self, classifier, make_detection):
        """기본 비율 계산."""
        features = classifier.compute_features(make_detection("x", 0, 0, 64, 96))

        assert features.aspect_ratio == pytest.approx(64 / 96)
        assert features.normalized_height == pytest.approx(0.2)
        assert features.normalized_width == pytest.approx(0.1)
        assert features.area_ratio == pytest.approx(0.02)

    def test_zero_height_box(self, classifier, make_detection):
        """높이 0 → aspect_ratio 기본값 1.0."""
        features = classifier.compute_features(make_detection("x", 0, 0, 10, 0))
        assert features.aspect_ratio == 1.0
        assert features.normalized_height == 0.0

    @pytest.mark.parametrize(("frame_width", "frame_height"), [(0, 0), (-640, -480), (640, 0), (0, 480)])
    def test_degenerate_frame(self, classifier, make_detection, frame_width, frame_height):
        """프레임 크기 0/음수 → 정규화 값 0."""
        detection = make_detection(
            "x", 0, 0, 60, 110, frame_width=frame_width, frame_height=frame_height
        )
        features = classifier.compute_features(detection)

        assert features.area_ratio == 0.0
        if frame_width <= 0:
            assert features.normalized_width == 0.0
        if frame_height <= 0:
            assert features.normalized_height == 0.0


class TestGeometryClassifier:
    """형태 분류 테스트 (640x480 프레임)."""

    @pytest.mark.parametrize(
        ("width", "height", "expected"),
        [
            (60, 70, ProductType.CAN),              # 낮고 넓음
            (34.56, 48, ProductType.CAN),           # 아주 낮음 + aspect 0.72
            (40, 100, ProductType.BOTTLE_WATER),    # 가늘고 긺
            (150, 160, ProductType.BOTTLE_WATER),   # 높이 1/3
            (120, 120, ProductType.JUICE_BOX),      # 폭 넓은 사각형
            (80, 130, ProductType.JUICE_BOX),       # 면적 비율
            (60, 110, ProductType.BOTTLE_WATER),    # 어느 규칙에도 해당 없음
        ],
    )
    def test_classify(self, classifier, make_detection, width, height, expected):
        """규칙별 분류."""
        assert classifier.classify(make_detection("x", 0, 0, width, height)) is expected

    def test_rule_boundaries_are_inclusive(self, classifier):
        """경계값 포함."""
        assert classifier.classify_features(GeometryFeatures(0.78, 0.22, 0.0, 0.0)) is ProductType.CAN
        assert classifier.classify_features(GeometryFeatures(0.7, 0.14, 0.0, 0.0)) is ProductType.CAN
        assert classifier.classify_features(GeometryFeatures(0.52, 0.25, 0.0, 0.0)) is ProductType.BOTTLE_WATER
        assert classifier.classify_features(GeometryFeatures(0.6, 0.3, 0.0, 0.0)) is ProductType.BOTTLE_WATER
        assert classifier.classify_features(GeometryFeatures(0.55, 0.25, 0.18, 0.0)) is ProductType.JUICE_BOX
        assert classifier.classify_features(GeometryFeatures(0.55, 0.25, 0.0, 0.02)) is ProductType.JUICE_BOX

    def test_can_rule_wins_over_juice_rule(self, classifier):
        """순서: CAN 규칙이 JUICE_BOX 규칙보다 먼저 적용됨."""
        features = GeometryFeatures(aspect_ratio=0.8, normalized_height=0.2,
                                    normalized_width=0.5, area_ratio=0.5)
        assert classifier.classify_features(features) is ProductType.CAN

    def test_zero_height_box_is_can(self, classifier, make_detection):
        """높이 0 box도 예외 없이 분류."""
        assert classifier.classify(make_detection("x", 0, 0, 10, 0)) is ProductType.CAN

    def test_zero_frame_falls_back_to_bottle(self, classifier, make_detection):
        """프레임 0 → 기본값 BOTTLE_WATER."""
        detection = make_detection("x", 0, 0, 60, 110, frame_width=0, frame_height=0)
        assert classifier.classify(detection) is ProductType.BOTTLE_WATER

    @pytest.mark.parametrize("width", [0, 1, 10, 50, 100, 300, 640, 1000])
    @pytest.mark.parametrize("height", [-5, 0, 1, 10, 50, 100, 300, 480, 1000])
    def test_never_unknown(self, classifier, make_detection, width, height):
        """UNKNOWN은 반환되지 않음."""
        assert classifier.classify(make_detection("x", 0, 0, width, height)) is not ProductType.UNKNOWN


class TestDetectionNormalizer:
    """라벨 정규화 테스트."""

    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("cookie", ProductType.COOKIE),
            ("  SNACK  ", ProductType.COOKIE),
            ("Galleta Maria", ProductType.COOKIE),
            ("Chocolate chip cookie", ProductType.COOKIE),   # "lat" 포함이지만 cookie 우선
            ("Orange juice can", ProductType.JUICE_BOX),     # juice가 can보다 우선
            ("milk carton", ProductType.JUICE_BOX),
            ("cereal box", ProductType.JUICE_BOX),
            ("soda can", ProductType.CAN),
            ("Lata Coca-Cola", ProductType.CAN),             # "lat"가 cola보다 우선
            ("paper cup", ProductType.CAN),
            ("Water bottle", ProductType.BOTTLE_WATER),
            ("coke", ProductType.BOTTLE_WATER),
        ],
    )
    def test_keyword_precedence(self, normalizer, make_detection, label, expected):
        """키워드 우선순위 (형태와 무관)."""
        # 형태만으로는 JUICE_BOX
        detection = make_detection(label, 0, 0, 120, 120)
        assert normalizer.classify(detection) is expected

    def test_coca_cola_ignores_can_geometry(self, normalizer, classifier, make_detection):
        """"Coca-Cola"는 캔 형태여도 BOTTLE_WATER."""
        detection = make_detection("Coca-Cola", 0, 0, 60, 70)

        assert classifier.classify(detection) is ProductType.CAN
        assert normalizer.classify(detection) is ProductType.BOTTLE_WATER

    def test_bottle_label_uses_geometry(self, normalizer, make_detection):
        """"bottle" 라벨은 형태로 판단."""
        assert normalizer.classify(make_detection("bottle", 0, 0, 60, 70)) is ProductType.CAN
        assert normalizer.classify(make_detection("bottle", 0, 0, 40, 100)) is ProductType.BOTTLE_WATER

    def test_unrecognized_label_uses_geometry(self, normalizer, make_detection):
        """미인식 라벨은 형태로 판단."""
        assert normalizer.classify(make_detection("object", 0, 0, 120, 120)) is ProductType.JUICE_BOX
        assert normalizer.classify(make_detection("", 0, 0, 60, 70)) is ProductType.CAN

    def test_normalize_replaces_label_only(self, normalizer, make_detection):
        """라벨만 교체, box/신뢰도/프레임 유지."""
        raw = [
            make_detection("Coca-Cola", 10, 20, 60, 70, confidence=0.42),
            make_detection("galleta", 300, 200, 100, 50, confidence=0.77),
        ]

        normalized = normalizer.normalize(raw)

        assert [d.label for d in normalized] == ["bottle_water", "cookie"]
        for before, after in zip(raw, normalized):
            assert after.bounding_box == before.bounding_box
            assert after.confidence == before.confidence
            assert after.frame == before.frame

    def test_normalize_is_idempotent(self, normalizer, make_detection):
        """정규화 결과를 다시 정규화해도 동일."""
        raw = [
            make_detection("bottle", 0, 0, 40, 100),
            make_detection("object", 0, 0, 120, 120),
            make_detection("tin", 0, 0, 60, 70),
            make_detection("snack", 0, 0, 90, 40),
        ]

        once = normalizer.normalize(raw)
        assert normalizer.normalize(once) == once

    def test_normalize_empty(self, normalizer):
        """빈 입력."""
        assert normalizer.normalize([]) == []

"""
Trolley Occupancy Engine.

기내식 트롤리 점유율 판단 모듈.

외부 감지기의 bounding box로 "트롤리가 얼마나 찼는지" 점수를 계산하고,
음료가 없는 서랍에는 쿠키 감지를 합성한다.

주요 모듈:
- engine: 데이터 모델, 점유율 추정기, 프레임 파이프라인
- vision: 형태 분류, 라벨 정규화, 서랍 쿠키 추론, 감지기 출력 파싱
- config: 보정 상수 및 설정 (환경변수 / YAML)
- interfaces: 요청/응답 모델

사용 예시:
    from trolley_occupancy import TrolleyOccupancyModel, DetectionParser

    model = TrolleyOccupancyModel()
    detections = DetectionParser().parse_detection_list(data, 640, 480)
    analysis = model.analyze(detections, frame_width=640, frame_height=480)

    print(analysis.occupancy.category.value, analysis.occupancy.final_score)
"""

__version__ = "1.0.0"

# engine.models를 vision보다 먼저 로드해야 함
from .engine.models import (
    BoundingBox,
    Detection,
    DrawerRegion,
    DrawerReport,
    FrameAnalysis,
    FrameInfo,
    GeometryFeatures,
    OccupancyCategory,
    ProductType,
    VisualOccupancyResult,
)
from .engine.occupancy_estimator import OccupancyEstimator, categorize_score
from .engine.trolley_model import TrolleyOccupancyModel
from .vision.geometry_classifier import GeometryClassifier
from .vision.detection_normalizer import DetectionNormalizer
from .vision.drawer_inferencer import DrawerCookieInferencer
from .vision.detection_parser import DetectionParser
from .config import (
    CompositeWeights,
    DetectorConfig,
    DrawerLayout,
    OccupancySettings,
    ScoringConfig,
    VerticalBands,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "BoundingBox",
    "Detection",
    "DrawerRegion",
    "DrawerReport",
    "FrameAnalysis",
    "FrameInfo",
    "GeometryFeatures",
    "OccupancyCategory",
    "ProductType",
    "VisualOccupancyResult",
    # Engine
    "OccupancyEstimator",
    "categorize_score",
    "TrolleyOccupancyModel",
    # Vision
    "GeometryClassifier",
    "DetectionNormalizer",
    "DrawerCookieInferencer",
    "DetectionParser",
    # Config
    "CompositeWeights",
    "DetectorConfig",
    "DrawerLayout",
    "OccupancySettings",
    "ScoringConfig",
    "VerticalBands",
]

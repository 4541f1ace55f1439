"""Occupancy Engine Module."""

from .models import (
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
from .occupancy_estimator import OccupancyEstimator, categorize_score
from .trolley_model import TrolleyOccupancyModel

__all__ = [
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
    "OccupancyEstimator",
    "categorize_score",
    "TrolleyOccupancyModel",
]

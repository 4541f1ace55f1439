"""Detection Processing Module."""

from .geometry_classifier import GeometryClassifier
from .detection_normalizer import DetectionNormalizer
from .drawer_inferencer import DrawerCookieInferencer
from .detection_parser import DetectionParser

__all__ = [
    "GeometryClassifier",
    "DetectionNormalizer",
    "DrawerCookieInferencer",
    "DetectionParser",
]

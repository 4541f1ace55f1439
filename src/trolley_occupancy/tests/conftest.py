"""공통 fixture."""

import pytest

from trolley_occupancy import BoundingBox, Detection, FrameInfo

FRAME_WIDTH = 640.0
FRAME_HEIGHT = 480.0


@pytest.fixture
def make_detection():
    """Detection 생성 헬퍼 (기본 640x480 프레임)."""

    def _make(
        label: str,
        x: float,
        y: float,
        width: float,
        height: float,
        confidence: float = 0.9,
        frame_width: float = FRAME_WIDTH,
        frame_height: float = FRAME_HEIGHT,
    ) -> Detection:
        return Detection(
            label=label,
            confidence=confidence,
            bounding_box=BoundingBox(x=x, y=y, width=width, height=height),
            frame=FrameInfo(width=frame_width, height=frame_height),
        )

    return _make

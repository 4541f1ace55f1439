"""
Drawer Cookie Inferencer.

서랍 영역에 음료 감지가 없으면 쿠키가 있다고 추론.

감지기는 쿠키 포장을 잘 인식하지 못하므로, 트롤리 서랍을 고정
영역(3행 x 2열)으로 나누고 음료 라벨 감지와 겹치지 않는 영역마다
합성 쿠키 Detection을 생성한다.

영역 배치 (기본값):
- 행 i: y = 0.2H + i * H/4, 높이 H/4  (i = 0, 1, 2)
- 열: 좌측 [0, W/2], 우측 [W/2, W]

사용 예시:
    inferencer = DrawerCookieInferencer()
    cookies = inferencer.infer_cookies(normalized, frame_width=640, frame_height=480)
    all_items = normalized + cookies
"""

from typing import List, Optional, Sequence
import logging

from ..config import DrawerLayout
from ..engine.models import (
    BoundingBox,
    Detection,
    DrawerRegion,
    DrawerReport,
    FrameInfo,
    ProductType,
)
from ..keywords import is_drawer_beverage_label

logger = logging.getLogger(__name__)

SIDE_NAMES = ("left", "right")


class DrawerCookieInferencer:
    """
    서랍 쿠키 추론기.

    Attributes:
        layout: 서랍 영역 배치 설정
    """

    def __init__(self, layout: Optional[DrawerLayout] = None):
        self.layout = layout or DrawerLayout()

    def drawer_regions(self, frame_width: float, frame_height: float) -> List[DrawerRegion]:
        """
        서랍 영역 계산 (행 우선, 좌 → 우).

        Args:
            frame_width: 프레임 너비
            frame_height: 프레임 높이

        Returns:
            DrawerRegion 리스트 (기본 6개)
        """
        layout = self.layout
        drawer_height = frame_height * layout.row_height
        drawer_width = frame_width / layout.columns

        regions = []
        for row in range(layout.rows):
            y_start = frame_height * layout.top_offset + row * drawer_height
            for col in range(layout.columns):
                side = self._side_name(col)
                regions.append(DrawerRegion(
                    region_id=f"drawer_{row}_{side}",
                    row=row,
                    side=side,
                    bbox=BoundingBox(
                        x=col * drawer_width,
                        y=y_start,
                        width=drawer_width,
                        height=drawer_height,
                    ),
                ))
        return regions

    def beverages_in_drawer(
        self,
        detections: Sequence[Detection],
        drawer: DrawerRegion,
    ) -> List[Detection]:
        """영역과 겹치는 음료 라벨 감지."""
        return [
            d for d in detections
            if is_drawer_beverage_label(d.label) and d.bounding_box.overlaps(drawer.bbox)
        ]

    def fill_level(self, drawer: DrawerRegion, frame_height: float) -> float:
        """
        서랍 위치 기반 채움 추정.

        상단 서랍일수록 높은 값 (100 / 75 / 50).
        """
        layout = self.layout
        drawer_y = drawer.bbox.y
        if drawer_y < frame_height * layout.full_level_cutoff:
            return layout.full_level
        if drawer_y < frame_height * layout.partial_level_cutoff:
            return layout.partial_level
        return layout.low_level

    def report(
        self,
        detections: Sequence[Detection],
        frame_width: float,
        frame_height: float,
    ) -> List[DrawerReport]:
        """
        서랍 영역별 추론 결과.

        Args:
            detections: 감지 결과 (정규화 권장)
            frame_width: 프레임 너비
            frame_height: 프레임 높이

        Returns:
            DrawerReport 리스트 (영역 순서)
        """
        frame = FrameInfo(width=frame_width, height=frame_height)
        reports = []

        for drawer in self.drawer_regions(frame_width, frame_height):
            beverages = self.beverages_in_drawer(detections, drawer)

            # 음료가 없으면 쿠키 서랍
            cookie = None
            if not beverages:
                cookie = Detection(
                    label=ProductType.COOKIE.value,
                    confidence=self.layout.cookie_confidence,
                    bounding_box=drawer.bbox,
                    frame=frame,
                )

            reports.append(DrawerReport(
                region=drawer,
                beverage_count=len(beverages),
                fill_level=self.fill_level(drawer, frame_height),
                cookie=cookie,
            ))

        return reports

    def infer_cookies(
        self,
        detections: Sequence[Detection],
        frame_width: float,
        frame_height: float,
    ) -> List[Detection]:
        """
        음료 없는 서랍마다 쿠키 Detection 생성.

        Returns:
            합성 쿠키 Detection 리스트 (기본 0~6개, 신뢰도 0.8)
        """
        cookies = [
            r.cookie for r in self.report(detections, frame_width, frame_height)
            if r.cookie is not None
        ]
        logger.debug(f"Inferred {len(cookies)} cookie drawers from {len(detections)} detections")
        return cookies

    @staticmethod
    def _side_name(col: int) -> str:
        if col < len(SIDE_NAMES):
            return SIDE_NAMES[col]
        return f"col{col}"

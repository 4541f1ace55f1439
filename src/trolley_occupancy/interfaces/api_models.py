"""
API Models for External Callers.

Pydantic 모델 정의 - 프레임 분석 요청/응답 형식.

Request/Response 형식:
- AnalyzeRequest: 프레임 크기 + 감지 결과
- AnalyzeResponse: 점유율 + 병합된 감지 목록 (camelCase)
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List

from ..engine.models import (
    BoundingBox,
    Detection,
    FrameAnalysis,
    FrameInfo,
    OccupancyCategory,
    VisualOccupancyResult,
)


# ========== Request 모델 ==========

class DetectionInput(BaseModel):
    """감지기 출력 입력 (픽셀, 좌상단 원점)."""
    label: str = Field(..., description="감지기 라벨")
    confidence: float = Field(..., ge=0, le=1, description="Confidence")
    x: float = Field(..., description="좌측 x")
    y: float = Field(..., description="상단 y")
    width: float = Field(..., description="너비")
    height: float = Field(..., description="높이")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "label": "Coca-Cola",
                "confidence": 0.91,
                "x": 120.0,
                "y": 60.0,
                "width": 70.0,
                "height": 80.0,
            }
        }
    )

    def to_detection(self, frame: FrameInfo) -> Detection:
        """Detection 변환."""
        return Detection(
            label=self.label,
            confidence=self.confidence,
            bounding_box=BoundingBox(
                x=self.x,
                y=self.y,
                width=self.width,
                height=self.height,
            ),
            frame=frame,
        )


class AnalyzeRequest(BaseModel):
    """
    프레임 분석 요청.

    감지 목록이 비어 있으면 빈 트레이로 판단.
    """
    frame_width: float = Field(..., description="프레임 너비 (픽셀)")
    frame_height: float = Field(..., description="프레임 높이 (픽셀)")
    detections: List[DetectionInput] = Field(default_factory=list, description="감지 결과 리스트")
    infer_drawers: bool = Field(True, description="서랍 쿠키 추론 사용 여부")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "frame_width": 640,
                "frame_height": 480,
                "detections": [
                    {"label": "bottle", "confidence": 0.88, "x": 40, "y": 100, "width": 45, "height": 150},
                    {"label": "galleta", "confidence": 0.72, "x": 380, "y": 260, "width": 120, "height": 60},
                ],
                "infer_drawers": True,
            }
        }
    )

    def to_detections(self) -> List[Detection]:
        frame = FrameInfo(width=self.frame_width, height=self.frame_height)
        return [d.to_detection(frame) for d in self.detections]


# ========== Response 모델 ==========

class OccupancyOutput(BaseModel):
    """점유율 응답."""
    finalScore: float = Field(..., description="최종 점수 (0-10)")
    category: OccupancyCategory = Field(..., description="점유율 카테고리")
    fillPercent: float = Field(..., description="면적 점유율 (%)")
    snackPercent: float = Field(..., description="스낵 비율 (%)")
    verticalScore: float = Field(..., description="수직 분포 점수 (0-10)")
    fillLineScore: float = Field(..., description="채움 라인 점수 (0-10)")
    detectionCount: int = Field(..., description="감지 개수")
    topRatio: float = Field(..., description="상단 면적 비율 (0-1)")
    indicatorColor: str = Field(..., description="표시기 색상")
    detail: str = Field(..., description="요약")

    @classmethod
    def from_result(cls, result: VisualOccupancyResult) -> "OccupancyOutput":
        return cls(
            finalScore=result.final_score,
            category=result.category,
            fillPercent=result.fill_percent,
            snackPercent=result.snack_percent,
            verticalScore=result.vertical_score,
            fillLineScore=result.fill_line_score,
            detectionCount=result.detection_count,
            topRatio=result.top_ratio,
            indicatorColor=result.category.indicator_color,
            detail=result.detail,
        )


class DetectionOutput(BaseModel):
    """정규화/추론된 감지 응답."""
    label: str = Field(..., description="ProductType 값")
    confidence: float = Field(..., description="신뢰도")
    x: float
    y: float
    width: float
    height: float
    inferred: bool = Field(False, description="서랍 추론으로 생성 여부")

    @classmethod
    def from_detection(cls, detection: Detection, inferred: bool = False) -> "DetectionOutput":
        bbox = detection.bounding_box
        return cls(
            label=detection.label,
            confidence=round(detection.confidence, 4),
            x=bbox.x,
            y=bbox.y,
            width=bbox.width,
            height=bbox.height,
            inferred=inferred,
        )


class AnalyzeResponse(BaseModel):
    """프레임 분석 응답."""
    occupancy: OccupancyOutput = Field(..., description="점유율")
    detections: List[DetectionOutput] = Field(..., description="정규화 + 추론 감지")
    itemCount: int = Field(..., description="총 감지 수")
    inferredCount: int = Field(..., description="추론된 쿠키 수")

    @classmethod
    def from_analysis(cls, analysis: FrameAnalysis) -> "AnalyzeResponse":
        detections = [DetectionOutput.from_detection(d) for d in analysis.normalized]
        detections += [DetectionOutput.from_detection(d, inferred=True) for d in analysis.inferred]
        return cls(
            occupancy=OccupancyOutput.from_result(analysis.occupancy),
            detections=detections,
            itemCount=analysis.item_count,
            inferredCount=len(analysis.inferred),
        )


class ErrorResponse(BaseModel):
    """에러 응답."""
    success: bool = Field(False)
    error: str = Field(..., description="에러 메시지")

"""
Detector Output Parser.

외부 감지기 출력을 Detection 리스트로 변환.

지원 형식:
    {"xyxy": [258.72, 47.65, 315.12, 113.97], "conf": 0.788, "name": "can"}
    {"x": 10, "y": 20, "width": 50, "height": 80, "confidence": 0.9, "label": "water"}
    ultralytics Results 객체 (boxes.xyxy / boxes.conf / boxes.cls + names)
    정규화 사각형 관측 (x, y, width, height ∈ [0, 1])

사용 예시:
    parser = DetectionParser()
    detections = parser.parse_detection_list(data, frame_width=640, frame_height=480)

    # 이미 추론된 결과 파싱
    detections = parser.parse_results(results[0], frame_width=1920, frame_height=1080)
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging

from ..config import DetectorConfig
from ..engine.models import BoundingBox, Detection, FrameInfo

logger = logging.getLogger(__name__)

# 라벨 없는 사각형 관측의 기본 라벨
DEFAULT_OBSERVATION_LABEL = "beverage"


class DetectionParser:
    """
    감지기 출력 파서.

    Attributes:
        config: 감지기 설정 (신뢰도 임계값, 최대 관측 수)
    """

    def __init__(self, config: Optional[DetectorConfig] = None):
        self.config = config or DetectorConfig()

    def parse_detection_list(
        self,
        detection_data: Sequence[Mapping[str, Any]],
        frame_width: float,
        frame_height: float,
    ) -> List[Detection]:
        """
        딕셔너리 리스트에서 Detection 파싱.

        Args:
            detection_data: xyxy 형식 또는 x/y/width/height 형식 딕셔너리
            frame_width: 프레임 너비
            frame_height: 프레임 높이

        Returns:
            Detection 리스트

        Raises:
            KeyError: 필수 키 누락
            ValueError: 숫자 변환 실패 또는 xyxy 길이 오류
        """
        frame = FrameInfo(width=float(frame_width), height=float(frame_height))
        return [self._parse_one(d, frame) for d in detection_data]

    def parse_results(
        self,
        result: Any,
        frame_width: float,
        frame_height: float,
        class_names: Optional[Dict[int, str]] = None,
    ) -> List[Detection]:
        """
        YOLO Results 객체 파싱.

        감지기 신뢰도(config.confidence) 미만 box는 제외.

        Args:
            result: YOLO Results 객체 (results[0])
            frame_width: 프레임 너비
            frame_height: 프레임 높이
            class_names: {cls_id: name} 매핑

        Returns:
            Detection 리스트
        """
        detections: List[Detection] = []

        if not hasattr(result, "boxes") or result.boxes is None:
            return detections

        boxes = result.boxes
        names = class_names or getattr(result, "names", {}) or {}
        frame = FrameInfo(width=float(frame_width), height=float(frame_height))

        for i in range(len(boxes)):
            conf = float(boxes.conf[i])
            if conf < self.config.confidence:
                continue

            xyxy = boxes.xyxy[i].tolist() if hasattr(boxes.xyxy[i], "tolist") else list(boxes.xyxy[i])
            cls_id = int(boxes.cls[i])
            name = names.get(cls_id, f"class_{cls_id}")

            detections.append(Detection(
                label=name,
                confidence=conf,
                bounding_box=BoundingBox.from_xyxy(*(float(v) for v in xyxy[:4])),
                frame=frame,
            ))

        logger.debug(f"Parsed {len(detections)}/{len(boxes)} boxes above conf={self.config.confidence}")
        return detections

    def from_observations(
        self,
        observations: Sequence[Mapping[str, Any]],
        frame_width: float,
        frame_height: float,
    ) -> List[Detection]:
        """
        정규화 사각형 관측을 픽셀 Detection으로 변환.

        1. observation_confidence 초과만 사용
        2. 신뢰도 내림차순 정렬
        3. 상위 max_observations 개
        4. 프레임 크기로 스케일

        Args:
            observations: {"x", "y", "width", "height", "confidence", ("label")}
            frame_width: 프레임 너비
            frame_height: 프레임 높이

        Returns:
            Detection 리스트
        """
        frame = FrameInfo(width=float(frame_width), height=float(frame_height))

        kept = [o for o in observations if float(o["confidence"]) > self.config.observation_confidence]
        kept.sort(key=lambda o: float(o["confidence"]), reverse=True)
        kept = kept[:self.config.max_observations]

        return [
            Detection(
                label=str(o.get("label", DEFAULT_OBSERVATION_LABEL)),
                confidence=float(o["confidence"]),
                bounding_box=BoundingBox(
                    x=float(o["x"]) * frame.width,
                    y=float(o["y"]) * frame.height,
                    width=float(o["width"]) * frame.width,
                    height=float(o["height"]) * frame.height,
                ),
                frame=frame,
            )
            for o in kept
        ]

    @staticmethod
    def _parse_one(data: Mapping[str, Any], frame: FrameInfo) -> Detection:
        if "xyxy" in data:
            xyxy = [float(v) for v in data["xyxy"]]
            if len(xyxy) != 4:
                raise ValueError(f"xyxy must have 4 values, got {len(xyxy)}")
            bbox = BoundingBox.from_xyxy(*xyxy)
        else:
            bbox = BoundingBox(
                x=float(data["x"]),
                y=float(data["y"]),
                width=float(data["width"]),
                height=float(data["height"]),
            )

        label = data["name"] if "name" in data else data["label"]
        confidence = data["conf"] if "conf" in data else data["confidence"]

        return Detection(
            label=str(label),
            confidence=float(confidence),
            bounding_box=bbox,
            frame=frame,
        )

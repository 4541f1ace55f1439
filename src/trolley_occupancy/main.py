"""
Trolley Occupancy - CLI Entry Point.

감지 결과 JSON 파일을 분석하여 점유율 응답 JSON 출력.

사용:
    trolley-occupancy payload.json
    trolley-occupancy payload.json --config occupancy.yaml --log-level DEBUG
    cat payload.json | trolley-occupancy -

입력 형식 (AnalyzeRequest):
    {
        "frame_width": 640,
        "frame_height": 480,
        "detections": [
            {"label": "bottle", "confidence": 0.88, "x": 40, "y": 100, "width": 45, "height": 150}
        ]
    }
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from . import __version__
from .config import LOG_LEVELS, OccupancySettings
from .engine.trolley_model import TrolleyOccupancyModel
from .interfaces.api_models import AnalyzeRequest, AnalyzeResponse, ErrorResponse

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trolley-occupancy",
        description="Trolley occupancy scoring from detector bounding boxes",
    )
    parser.add_argument("payload", help="AnalyzeRequest JSON file ('-' for stdin)")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (overrides settings)",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indent")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_settings(config_path: Optional[str]) -> OccupancySettings:
    """설정 로드 (YAML 우선, 없으면 환경변수/기본값)."""
    if config_path:
        return OccupancySettings.from_yaml(config_path)
    return OccupancySettings()


def read_payload(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def run(payload_text: str, settings: OccupancySettings) -> AnalyzeResponse:
    """
    요청 JSON 분석.

    Args:
        payload_text: AnalyzeRequest JSON 문자열
        settings: 엔진 설정

    Returns:
        AnalyzeResponse

    Raises:
        ValidationError: 요청 형식 오류
    """
    request = AnalyzeRequest.model_validate_json(payload_text)
    logger.info(
        f"Analyze request: {len(request.detections)} detections, "
        f"frame={request.frame_width:g}x{request.frame_height:g}"
    )

    model = TrolleyOccupancyModel(settings)
    analysis = model.analyze(
        request.to_detections(),
        frame_width=request.frame_width,
        frame_height=request.frame_height,
        infer_drawers=request.infer_drawers,
    )
    return AnalyzeResponse.from_analysis(analysis)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI 진입점."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as e:
        # pydantic ValidationError는 ValueError 하위 클래스
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error(f"Failed to load settings: {e}")
        return 1

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format=LOG_FORMAT,
    )

    try:
        response = run(read_payload(args.payload), settings)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read payload: {e}")
        print(ErrorResponse(error="payload_unreadable").model_dump_json(indent=args.indent))
        return 1
    except ValidationError as e:
        logger.error(f"Invalid payload: {e.error_count()} errors")
        print(ErrorResponse(error="invalid_payload").model_dump_json(indent=args.indent))
        return 1

    print(response.model_dump_json(indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Label Keyword Vocabulary.

감지 라벨 매칭에 사용하는 키워드 모음.

라벨은 감지기마다 어휘가 다르므로 (영어/스페인어 혼용),
정확 일치가 아닌 부분 문자열 포함 여부로 판단한다.
"""

from typing import Iterable, Tuple

# DetectionNormalizer 우선순위 순서
SNACK_KEYWORDS: Tuple[str, ...] = ("cookie", "snack", "galleta")
JUICE_KEYWORDS: Tuple[str, ...] = ("juice", "carton", "box")
CAN_KEYWORDS: Tuple[str, ...] = ("can", "lat", "cup")
WATER_KEYWORDS: Tuple[str, ...] = ("water",)
COLA_KEYWORDS: Tuple[str, ...] = ("coke", "cola")

# OccupancyEstimator 음료 면적 집계용 (로그 전용)
OCCUPANCY_BEVERAGE_KEYWORDS: Tuple[str, ...] = ("bottle", "water", "can", "juice")

# DrawerCookieInferencer 서랍 내 음료 판정용
DRAWER_BEVERAGE_KEYWORDS: Tuple[str, ...] = (
    "bottle",
    "can",
    "coke",
    "soda",
    "water",
    "juice",
    "drink",
    "lata",
    "carton",
    "cup",
)


def normalize_label(label: str) -> str:
    """소문자 + 앞뒤 공백 제거."""
    return label.lower().strip()


def contains_any(label: str, keywords: Iterable[str]) -> bool:
    """라벨에 키워드 중 하나라도 포함되어 있는지."""
    return any(keyword in label for keyword in keywords)


def is_snack_label(label: str) -> bool:
    return contains_any(label.lower(), SNACK_KEYWORDS)


def is_beverage_label(label: str) -> bool:
    """점유율 집계 기준 음료 라벨 여부."""
    return contains_any(label.lower(), OCCUPANCY_BEVERAGE_KEYWORDS)


def is_drawer_beverage_label(label: str) -> bool:
    """서랍 추론 기준 음료 라벨 여부."""
    return contains_any(label.lower(), DRAWER_BEVERAGE_KEYWORDS)

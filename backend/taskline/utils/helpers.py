"""날짜/반올림 등 여러 서비스가 공유하는 작은 헬퍼 모음입니다."""

import math
from datetime import date, datetime, timedelta
from typing import Iterable, Optional


def as_date(value) -> Optional[date]:
    """date/datetime/ISO 문자열을 자정 기준 ``date``로 정규화합니다. 해석 불가하면 None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def round_half_up(value: float) -> int:
    # Python round()는 banker's rounding이라 진행률 표시에 쓰지 않는다.
    return int(math.floor(value + 0.5))


def mean_percent(values: Iterable[int]) -> int:
    items = [int(v or 0) for v in values]
    if not items:
        return 0
    return round_half_up(sum(items) / len(items))

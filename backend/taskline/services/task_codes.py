"""태스크 코드(T001, T002, ...) 발급 규칙입니다.

번호는 현재 행 개수가 아니라 지금까지 존재했던 가장 큰 번호를 기준으로 이어집니다.
"""

import re
from typing import Iterable, Optional

from taskline.config import settings

TASK_CODE_RE = re.compile(r"^T(\d+)$", re.IGNORECASE)
UNNUMBERED_CODE_ORDER = 2**53 - 1


def parse_task_code_number(code: Optional[str]) -> Optional[int]:
    match = TASK_CODE_RE.match((code or "").strip())
    if not match:
        return None
    return int(match.group(1))


def format_task_code(number: int) -> str:
    return f"T{number:0{settings.TASK_CODE_WIDTH}d}"


def next_task_code(existing_codes: Iterable[str], floor: int = 0) -> str:
    """다음 태스크 코드를 반환합니다.

    ``floor``는 프로젝트에 기록된 최대 발급 번호로, 가장 큰 번호의 태스크가 삭제된 뒤에도
    같은 번호가 다시 나오지 않게 합니다. 패턴에 맞지 않는 코드는 번호 계산에서 무시합니다.
    """
    codes = [str(code) for code in existing_codes if code]
    taken = {code.strip().upper() for code in codes}
    highest = max(floor or 0, 0)
    for code in codes:
        number = parse_task_code_number(code)
        if number is not None and number > highest:
            highest = number

    candidate_number = highest + 1
    candidate = format_task_code(candidate_number)
    while candidate in taken:
        candidate_number += 1
        candidate = format_task_code(candidate_number)
    return candidate


def task_code_sort_key(code: Optional[str]) -> int:
    number = parse_task_code_number(code)
    return number if number is not None else UNNUMBERED_CODE_ORDER

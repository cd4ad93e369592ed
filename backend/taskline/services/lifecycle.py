"""태스크 상태/진행률 가드레일입니다.

- 완료(Complete)된 태스크는 다른 상태로 되돌릴 수 없다.
- completion_percent는 0~100 정수만 허용한다 (보정하지 않고 거부).
- 상태와 진행률 사이의 파생 규칙은 ``normalize_patch``에서 저장 전에 적용한다.
"""

import logging
from datetime import date
from typing import Optional

from taskline.schemas.task import STATUS_COMPLETE
from taskline.services.dependency_service import parse_dependency_codes
from taskline.utils.errors import StateTransitionError, ValidationError

logger = logging.getLogger(__name__)


def check_completion_percent(value) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0 or value > 100:
        raise ValidationError(f"completion_percent must be an integer between 0 and 100 (got {value}).")


def guard_status_transition(current_status: Optional[str], new_status: Optional[str], task_code: str = "") -> None:
    if current_status != STATUS_COMPLETE or not new_status or new_status == STATUS_COMPLETE:
        return
    logger.warning("[lifecycle] rejected %s: Complete -> %s", task_code or "task", new_status)
    raise StateTransitionError("Completed tasks cannot move back to non-complete status.")


def check_date_range(start_date: Optional[date], due_date: Optional[date], task_code: str = "") -> None:
    if start_date and due_date and due_date < start_date:
        if task_code:
            raise ValidationError(f"Invalid date range for {task_code}: due date cannot be earlier than start date.")
        raise ValidationError("Due date cannot be earlier than start date.")


def check_self_dependency(task_code: Optional[str], dependency: Optional[str]) -> None:
    code = (task_code or "").strip().upper()
    if code and code in parse_dependency_codes(dependency):
        raise ValidationError(f"Task {code} cannot depend on itself.")


def normalize_patch(patch: dict) -> dict:
    """상태/진행률 파생 규칙을 적용한 새 patch를 반환합니다 (입력은 변경하지 않음)."""
    normalized = dict(patch)
    status = normalized.get("status")
    percent = normalized.get("completion_percent")

    if status == STATUS_COMPLETE:
        normalized["completion_percent"] = 100
    elif percent == 100:
        normalized["status"] = STATUS_COMPLETE
    if normalized.get("status") not in (None, STATUS_COMPLETE) and percent is not None and percent >= 100:
        normalized["completion_percent"] = 99
    return normalized

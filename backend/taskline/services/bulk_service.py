"""여러 태스크에 같은 patch를 적용하는 일괄 수정 서비스입니다.

모든 대상 태스크에 대해 가드레일/날짜 검증을 먼저 끝낸 뒤 한 번에 커밋하므로,
검증에 실패한 요청은 어떤 태스크도 변경하지 않습니다.
"""

import logging

from sqlalchemy.orm import Session
from taskline.config import settings
from taskline.schemas.task import STATUS_COMPLETE, BulkTaskPatch, BulkUpdateResult
from taskline.services import lifecycle
from taskline.services.dependency_service import parse_dependency_codes, validate_dependencies
from taskline.services.task_service import get_tasks
from taskline.utils.errors import ValidationError
from taskline.utils.helpers import add_days
from typing import Iterable

logger = logging.getLogger(__name__)

RULE_FIELDS = {"clear_owner", "clear_dates", "date_shift_days", "enforce_dependency_readiness"}


def _shift(value, days: int):
    return add_days(value, days) if value else value


def _blank_to_none(value: str):
    return value.strip() or None


def _check_dependency_readiness(task, project_task_by_code: dict, predicted_status: dict):
    unresolved = []
    for code in parse_dependency_codes(task.dependency):
        dependency_task = project_task_by_code.get(code)
        if dependency_task is None:
            continue
        if predicted_status.get(dependency_task.task_id, dependency_task.status) != STATUS_COMPLETE:
            unresolved.append(code)
    if unresolved:
        raise ValidationError(
            f"Cannot set {task.task_code} to Complete while dependencies are not complete: {', '.join(unresolved)}."
        )


def bulk_update_tasks(db: Session, project_id: int, task_ids: Iterable[int], patch: BulkTaskPatch) -> BulkUpdateResult:
    direct_fields = patch.model_dump(exclude_none=True, exclude=RULE_FIELDS)
    has_rules = patch.clear_owner or patch.clear_dates or patch.date_shift_days != 0
    if not direct_fields and not has_rules:
        raise ValidationError("Patch must include at least one field.")

    selected_ids = set(task_ids)
    if len(selected_ids) > settings.BULK_UPDATE_MAX_TASKS:
        raise ValidationError(f"Bulk update is limited to {settings.BULK_UPDATE_MAX_TASKS} tasks per request.")
    lifecycle.check_completion_percent(patch.completion_percent)

    project_tasks = get_tasks(db, project_id)
    # 다른 프로젝트 소속이거나 존재하지 않는 id는 조용히 제외하고 건수에서도 빠진다.
    targets = [task for task in project_tasks if task.task_id in selected_ids]

    derived = lifecycle.normalize_patch(
        {k: v for k, v in (("status", patch.status), ("completion_percent", patch.completion_percent)) if v is not None}
    )
    predicted_status = {task.task_id: derived.get("status") or task.status for task in targets}
    project_task_by_code = {(task.task_code or "").strip().upper(): task for task in project_tasks}

    planned = []
    for task in targets:
        lifecycle.guard_status_transition(task.status, derived.get("status"), task.task_code)
        if patch.enforce_dependency_readiness and predicted_status[task.task_id] == STATUS_COMPLETE:
            _check_dependency_readiness(task, project_task_by_code, predicted_status)

        if patch.clear_dates:
            start_date, due_date = None, None
        else:
            start_date = patch.start_date if patch.start_date is not None else task.start_date
            due_date = patch.due_date if patch.due_date is not None else task.due_date
            if patch.date_shift_days:
                start_date = _shift(start_date, patch.date_shift_days)
                due_date = _shift(due_date, patch.date_shift_days)
        lifecycle.check_date_range(start_date, due_date, task.task_code)

        changes = dict(derived)
        if patch.priority is not None:
            changes["priority"] = patch.priority
        if patch.actual_budget is not None:
            changes["actual_budget"] = patch.actual_budget
        if patch.phase is not None:
            changes["phase"] = _blank_to_none(patch.phase)
        if patch.clear_owner:
            changes["owner"] = None
        elif patch.owner is not None:
            changes["owner"] = _blank_to_none(patch.owner)
        if patch.clear_dates or patch.start_date is not None or patch.date_shift_days:
            changes["start_date"] = start_date
        if patch.clear_dates or patch.due_date is not None or patch.date_shift_days:
            changes["due_date"] = due_date
        planned.append((task, changes))

    for task, changes in planned:
        for k, v in changes.items():
            setattr(task, k, v)
    db.commit()

    logger.info(
        "[tasks] bulk update project=%s matched=%s requested=%s fields=%s",
        project_id, len(planned), len(selected_ids), sorted(direct_fields),
    )
    return BulkUpdateResult(
        success=True,
        updated_count=len(planned),
        applied_date_shift_days=0 if patch.clear_dates else patch.date_shift_days,
        dependency_warnings=validate_dependencies(get_tasks(db, project_id)),
    )

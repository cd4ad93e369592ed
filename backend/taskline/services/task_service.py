"""Task Service 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

import logging

from sqlalchemy.orm import Session
from taskline.models.project import Project
from taskline.models.task import ProjectTask
from taskline.schemas.task import PhaseGroupOut, ProjectTaskCreate, ProjectTaskUpdate
from taskline.services import lifecycle
from taskline.services.dependency_service import compute_critical_path, validate_dependencies
from taskline.services.phase_service import group_tasks_by_phase
from taskline.services.project_service import get_project
from taskline.services.task_codes import next_task_code, parse_task_code_number, task_code_sort_key
from taskline.utils.errors import NotFoundError, ValidationError
from typing import List

logger = logging.getLogger(__name__)

# None을 명시적으로 보내면 값을 지우는 필드 (상태/우선순위 등은 None이면 무시)
CLEARABLE_FIELDS = {
    "start_date", "due_date", "duration_days", "dependency", "owner", "phase",
    "budget", "actual_budget", "approver", "deliverable_type", "notes",
}


def _sort_tasks(tasks: List[ProjectTask]) -> List[ProjectTask]:
    return sorted(tasks, key=lambda task: (task_code_sort_key(task.task_code), task.task_id))


def _clean_description(value: str | None) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError("Task description is required.")
    return text


def _allocate_task_code(db: Session, project: Project, requested: str | None) -> str:
    existing = [row[0] for row in db.query(ProjectTask.task_code).filter(ProjectTask.project_id == project.project_id).all()]
    code = (requested or "").strip().upper()
    if not code:
        return next_task_code(existing, floor=project.task_code_seq or 0)
    if code in {value.strip().upper() for value in existing}:
        raise ValidationError(f"Task code {code} already exists in this project.")
    return code


def get_tasks(db: Session, project_id: int) -> List[ProjectTask]:
    get_project(db, project_id)
    tasks = db.query(ProjectTask).filter(ProjectTask.project_id == project_id).all()
    return _sort_tasks(tasks)


def get_all_tasks(db: Session) -> List[ProjectTask]:
    return db.query(ProjectTask).order_by(ProjectTask.project_id, ProjectTask.task_id).all()


def get_task(db: Session, task_id: int) -> ProjectTask:
    task = db.query(ProjectTask).filter(ProjectTask.task_id == task_id).first()
    if not task:
        raise NotFoundError(f"Task {task_id} not found.")
    return task


def create_task(db: Session, project_id: int, data: ProjectTaskCreate) -> ProjectTask:
    project = get_project(db, project_id)
    payload = data.model_dump()
    requested_code = payload.pop("task_code", None)
    payload["description"] = _clean_description(payload.get("description"))
    lifecycle.check_date_range(payload.get("start_date"), payload.get("due_date"))
    lifecycle.check_completion_percent(payload.get("completion_percent"))
    # 기본값이 아니라 호출자가 지정한 상태/진행률에만 파생 규칙을 적용한다.
    explicit = {k: payload[k] for k in ("status", "completion_percent") if k in data.model_fields_set}
    payload.update(lifecycle.normalize_patch(explicit))

    code = _allocate_task_code(db, project, requested_code)
    lifecycle.check_self_dependency(code, payload.get("dependency"))

    task = ProjectTask(project_id=project_id, task_code=code, **payload)
    db.add(task)
    number = parse_task_code_number(code)
    if number is not None and number > (project.task_code_seq or 0):
        project.task_code_seq = number
    db.commit()
    db.refresh(task)
    logger.info("[tasks] created %s in project %s (task_id=%s)", code, project_id, task.task_id)
    return task


def update_task(db: Session, task_id: int, data: ProjectTaskUpdate) -> ProjectTask:
    task = get_task(db, task_id)
    updates = data.model_dump(exclude_none=True)
    for name in CLEARABLE_FIELDS & data.model_fields_set:
        updates[name] = getattr(data, name)

    lifecycle.guard_status_transition(task.status, updates.get("status"), task.task_code)
    lifecycle.check_completion_percent(updates.get("completion_percent"))
    if "description" in updates:
        updates["description"] = _clean_description(updates["description"])
    lifecycle.check_date_range(updates.get("start_date"), updates.get("due_date"), task.task_code)
    if "dependency" in updates:
        lifecycle.check_self_dependency(task.task_code, updates["dependency"])
    updates = lifecycle.normalize_patch(updates)

    for k, v in updates.items():
        setattr(task, k, v)
    db.commit()
    db.refresh(task)
    logger.info("[tasks] updated %s (task_id=%s) fields=%s", task.task_code, task_id, sorted(updates))
    return task


def delete_task(db: Session, task_id: int):
    task = get_task(db, task_id)
    code, project_id = task.task_code, task.project_id
    db.delete(task)
    db.commit()
    logger.info("[tasks] deleted %s from project %s", code, project_id)


def get_dependency_issues(db: Session, project_id: int):
    return validate_dependencies(get_tasks(db, project_id))


def get_critical_path(db: Session, project_id: int) -> dict:
    summary = compute_critical_path(get_tasks(db, project_id))
    return {"project_id": project_id, **summary}


def get_phase_groups(db: Session, project_id: int) -> List[PhaseGroupOut]:
    groups = group_tasks_by_phase(get_tasks(db, project_id))
    return [PhaseGroupOut.model_validate(group, from_attributes=True) for group in groups]

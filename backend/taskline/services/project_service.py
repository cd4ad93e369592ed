"""Project Service 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

import logging

from sqlalchemy.orm import Session
from taskline.models.project import Project
from taskline.schemas.project import ProjectCreate, ProjectUpdate
from taskline.utils.errors import NotFoundError, ValidationError
from typing import List

logger = logging.getLogger(__name__)


def _validate_project_dates(start_date, target_completion_date):
    if start_date and target_completion_date and target_completion_date < start_date:
        raise ValidationError("Target completion date cannot be earlier than start date.")


def _clean_name(value: str | None) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationError("Project name is required.")
    return name


def get_projects(db: Session) -> List[Project]:
    return db.query(Project).order_by(Project.created_at.desc(), Project.project_id.desc()).all()


def get_project(db: Session, project_id: int) -> Project:
    project = db.query(Project).filter(Project.project_id == project_id).first()
    if not project:
        raise NotFoundError(f"Project {project_id} not found.")
    return project


def create_project(db: Session, data: ProjectCreate) -> Project:
    payload = data.model_dump()
    payload["name"] = _clean_name(payload.get("name"))
    _validate_project_dates(payload.get("start_date"), payload.get("target_completion_date"))
    project = Project(**payload)
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("[projects] created project %s (%s)", project.project_id, project.name)
    return project


def update_project(db: Session, project_id: int, data: ProjectUpdate) -> Project:
    project = get_project(db, project_id)
    updates = data.model_dump(exclude_unset=True)
    if "name" in updates:
        updates["name"] = _clean_name(updates["name"])
    if "status" in updates and updates["status"] is None:
        updates.pop("status")
    _validate_project_dates(
        updates.get("start_date", project.start_date),
        updates.get("target_completion_date", project.target_completion_date),
    )

    for k, v in updates.items():
        setattr(project, k, v)
    db.commit()
    db.refresh(project)
    logger.info("[projects] updated project %s fields=%s", project_id, sorted(updates))
    return project


def delete_project(db: Session, project_id: int):
    project = get_project(db, project_id)
    db.delete(project)
    db.commit()
    logger.info("[projects] deleted project %s", project_id)

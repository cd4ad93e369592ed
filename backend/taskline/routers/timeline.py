"""Gantt 타임라인 API 라우터입니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskline.database import get_db
from taskline.schemas.timeline import TimelineOut
from taskline.services import project_service, task_service
from taskline.services.dependency_service import compute_critical_path
from taskline.services.timeline_service import build_timeline

router = APIRouter(prefix="/api/timeline", tags=["timeline"])


@router.get("", response_model=TimelineOut)
def get_timeline(project: str = "all", db: Session = Depends(get_db)):
    projects = project_service.get_projects(db)
    tasks = task_service.get_all_tasks(db)

    critical_task_ids = set()
    if project != "all" and project.strip().isdigit():
        project_id = int(project)
        summary = compute_critical_path([task for task in tasks if task.project_id == project_id])
        critical_task_ids = set(summary["task_ids"])

    return build_timeline(projects, tasks, scope=project, critical_task_ids=critical_task_ids)

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from taskline.database import get_db
from taskline.schemas.task import (
    BulkUpdateRequest,
    BulkUpdateResult,
    CriticalPathOut,
    DependencyIssue,
    PhaseGroupOut,
    ProjectTaskCreate,
    ProjectTaskOut,
    ProjectTaskUpdate,
)
from taskline.services import bulk_service, task_service

router = APIRouter(tags=["tasks"])


@router.get("/api/tasks", response_model=List[ProjectTaskOut])
def list_all_tasks(db: Session = Depends(get_db)):
    return task_service.get_all_tasks(db)


@router.get("/api/projects/{project_id}/tasks", response_model=List[ProjectTaskOut])
def list_tasks(project_id: int, db: Session = Depends(get_db)):
    return task_service.get_tasks(db, project_id)


@router.post("/api/projects/{project_id}/tasks", response_model=ProjectTaskOut)
def create_task(project_id: int, data: ProjectTaskCreate, db: Session = Depends(get_db)):
    return task_service.create_task(db, project_id, data)


@router.post("/api/projects/{project_id}/tasks/bulk-update", response_model=BulkUpdateResult)
def bulk_update_tasks(project_id: int, data: BulkUpdateRequest, db: Session = Depends(get_db)):
    return bulk_service.bulk_update_tasks(db, project_id, data.task_ids, data.patch)


@router.get("/api/projects/{project_id}/dependencies/validate", response_model=List[DependencyIssue])
def validate_dependencies(project_id: int, db: Session = Depends(get_db)):
    return task_service.get_dependency_issues(db, project_id)


@router.get("/api/projects/{project_id}/critical-path", response_model=CriticalPathOut)
def get_critical_path(project_id: int, db: Session = Depends(get_db)):
    return task_service.get_critical_path(db, project_id)


@router.get("/api/projects/{project_id}/phases", response_model=List[PhaseGroupOut])
def list_phases(project_id: int, db: Session = Depends(get_db)):
    return task_service.get_phase_groups(db, project_id)


@router.get("/api/tasks/{task_id}", response_model=ProjectTaskOut)
def get_task(task_id: int, db: Session = Depends(get_db)):
    return task_service.get_task(db, task_id)


@router.put("/api/tasks/{task_id}", response_model=ProjectTaskOut)
def update_task(task_id: int, data: ProjectTaskUpdate, db: Session = Depends(get_db)):
    return task_service.update_task(db, task_id, data)


@router.delete("/api/tasks/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db)):
    task_service.delete_task(db, task_id)
    return {"success": True}

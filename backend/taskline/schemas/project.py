"""Project 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import date, datetime

ProjectStatus = Literal["Planning", "Active", "On Hold", "Closeout", "Complete"]


class ProjectBase(BaseModel):
    name: str
    description: Optional[str] = None
    project_manager: Optional[str] = None
    status: ProjectStatus = "Planning"
    start_date: Optional[date] = None
    target_completion_date: Optional[date] = None
    budget: Optional[int] = Field(default=None, ge=0)
    actual_budget: Optional[int] = Field(default=None, ge=0)


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    project_manager: Optional[str] = None
    status: Optional[ProjectStatus] = None
    start_date: Optional[date] = None
    target_completion_date: Optional[date] = None
    budget: Optional[int] = Field(default=None, ge=0)
    actual_budget: Optional[int] = Field(default=None, ge=0)


class ProjectOut(ProjectBase):
    project_id: int
    task_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}

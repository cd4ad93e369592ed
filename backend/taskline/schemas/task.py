"""Task 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import date, datetime

TaskStatus = Literal["Not Started", "In Progress", "Complete", "On Hold"]
TaskPriority = Literal["High", "Medium", "Low"]
YesNo = Literal["Yes", "No"]

STATUS_COMPLETE = "Complete"


class ProjectTaskBase(BaseModel):
    description: str
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    duration_days: Optional[int] = Field(default=None, ge=0)
    dependency: Optional[str] = None
    owner: Optional[str] = None
    status: TaskStatus = "Not Started"
    priority: TaskPriority = "Medium"
    phase: Optional[str] = None
    budget: Optional[int] = Field(default=None, ge=0)
    actual_budget: Optional[int] = Field(default=None, ge=0)
    approval_required: YesNo = "No"
    approver: Optional[str] = None
    deliverable_type: Optional[str] = None
    completion_percent: int = 0
    notes: Optional[str] = None


class ProjectTaskCreate(ProjectTaskBase):
    # 템플릿/가져오기에서 코드를 고정할 때만 지정한다. 비어 있으면 자동 발급.
    task_code: Optional[str] = None


class ProjectTaskUpdate(BaseModel):
    description: Optional[str] = None
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    duration_days: Optional[int] = Field(default=None, ge=0)
    dependency: Optional[str] = None
    owner: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    phase: Optional[str] = None
    budget: Optional[int] = Field(default=None, ge=0)
    actual_budget: Optional[int] = Field(default=None, ge=0)
    approval_required: Optional[YesNo] = None
    approver: Optional[str] = None
    deliverable_type: Optional[str] = None
    completion_percent: Optional[int] = None
    notes: Optional[str] = None


class ProjectTaskOut(ProjectTaskBase):
    task_id: int
    project_id: int
    task_code: str
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}


class BulkTaskPatch(BaseModel):
    owner: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    phase: Optional[str] = None
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    completion_percent: Optional[int] = None
    actual_budget: Optional[int] = Field(default=None, ge=0)
    clear_owner: bool = False
    clear_dates: bool = False
    date_shift_days: int = Field(default=0, ge=-3650, le=3650)
    enforce_dependency_readiness: bool = False


class BulkUpdateRequest(BaseModel):
    task_ids: List[int] = Field(min_length=1)
    patch: BulkTaskPatch


class DependencyIssue(BaseModel):
    type: Literal["missing_dependency", "date_conflict", "cycle"]
    task_code: str
    dependency_code: Optional[str] = None
    detail: str


class BulkUpdateResult(BaseModel):
    success: bool = True
    updated_count: int
    applied_date_shift_days: int = 0
    dependency_warnings: List[DependencyIssue] = Field(default_factory=list)


class CriticalPathOut(BaseModel):
    project_id: int
    task_ids: List[int] = Field(default_factory=list)
    task_codes: List[str] = Field(default_factory=list)
    total_duration_days: int = 0
    blocked_by_cycle: bool = False


class PhaseGroupOut(BaseModel):
    name: str
    order: int
    progress: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    tasks: List[ProjectTaskOut] = Field(default_factory=list)

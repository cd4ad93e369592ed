"""Gantt/타임라인 투영 결과를 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional
from datetime import date


class TimelineRow(BaseModel):
    id: str
    name: str
    type: Literal["project", "phase", "task"]
    start: date
    end: date
    progress: int = 0
    parent: Optional[str] = None
    dependencies: List[str] = Field(default_factory=list)
    hide_children: Optional[bool] = None
    styles: Optional[Dict[str, str]] = None


class DrilldownTarget(BaseModel):
    project_id: int
    task_id: Optional[int] = None
    phase: Optional[str] = None


class TimelineOut(BaseModel):
    rows: List[TimelineRow] = Field(default_factory=list)
    drilldown_index: Dict[str, DrilldownTarget] = Field(default_factory=dict)
    inferred_task_count: int = 0
    viewport_date: date

"""Task 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from taskline.database import Base


class ProjectTask(Base):
    __tablename__ = "project_tasks"

    task_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id", ondelete="CASCADE"), nullable=False)
    task_code = Column(String(16), nullable=False)  # T001, T002, ...
    description = Column(Text, nullable=False)
    start_date = Column(Date)
    due_date = Column(Date)
    duration_days = Column(Integer)
    dependency = Column(Text)  # comma-separated task codes
    owner = Column(String(100))
    status = Column(String(20), nullable=False, default="Not Started")  # Not Started/In Progress/Complete/On Hold
    priority = Column(String(10), nullable=False, default="Medium")     # High/Medium/Low
    phase = Column(String(200))
    budget = Column(Integer)         # cents
    actual_budget = Column(Integer)  # cents
    approval_required = Column(String(3), nullable=False, default="No")  # Yes/No
    approver = Column(String(100))
    deliverable_type = Column(String(100))
    completion_percent = Column(Integer, nullable=False, default=0)
    notes = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    project = relationship("Project", back_populates="tasks")

    __table_args__ = (
        UniqueConstraint("project_id", "task_code", name="uq_task_project_code"),
        Index("idx_task_project", "project_id"),
        Index("idx_task_due_date", "due_date"),
    )

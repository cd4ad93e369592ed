"""Project 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from taskline.database import Base


class Project(Base):
    __tablename__ = "projects"

    project_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    project_manager = Column(String(100))
    status = Column(String(20), nullable=False, default="Planning")  # Planning/Active/On Hold/Closeout/Complete
    start_date = Column(Date)
    target_completion_date = Column(Date)
    budget = Column(Integer)         # cents
    actual_budget = Column(Integer)  # cents
    # 지금까지 발급된 가장 큰 태스크 코드 번호. 삭제 후에도 번호를 재사용하지 않기 위해 보관한다.
    task_code_seq = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    tasks = relationship(
        "ProjectTask",
        back_populates="project",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_project_status", "status"),
    )

    @property
    def task_count(self):
        return len(self.tasks)

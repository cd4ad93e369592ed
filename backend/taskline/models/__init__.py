"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from taskline.models.project import Project
from taskline.models.task import ProjectTask

__all__ = [
    "Project",
    "ProjectTask",
]

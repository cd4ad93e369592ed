"""서비스 레이어 패키지 초기화 모듈입니다."""

from taskline.services import (
    task_codes,
    dependency_service,
    lifecycle,
    phase_service,
    timeline_service,
    project_service,
    task_service,
    bulk_service,
)

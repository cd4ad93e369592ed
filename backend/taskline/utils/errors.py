"""서비스 레이어에서 사용하는 도메인 예외입니다.

모두 FastAPI ``HTTPException`` 하위 클래스이므로 라우터에서 별도 변환 없이
``{"detail": "..."}`` 응답으로 직렬화됩니다.
"""

from fastapi import HTTPException


class ValidationError(HTTPException):
    """사용자가 고칠 수 있는 입력 오류 (빈 설명, 날짜 역전, 범위 초과 등)."""

    def __init__(self, detail: str):
        super().__init__(status_code=400, detail=detail)


class StateTransitionError(HTTPException):
    """허용되지 않는 상태 전이 (완료된 태스크의 역행)."""

    def __init__(self, detail: str):
        super().__init__(status_code=409, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=404, detail=detail)

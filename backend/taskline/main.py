"""FastAPI 애플리케이션 진입점. 로깅, 미들웨어, API 라우터를 등록합니다."""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from taskline.config import settings
from taskline.database import Base, engine
import taskline.models  # noqa: F401 - 모델 import로 metadata 등록
from taskline.routers import projects, tasks, timeline

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="TaskLine 프로젝트 계획 API",
    description="태스크 코드 발급, 의존성 검증, 일괄 수정, Phase/Gantt 타임라인 투영",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projects.router)
app.include_router(tasks.router)
app.include_router(timeline.router)


@app.on_event("startup")
def ensure_schema():
    # 누락된 테이블을 자동 생성합니다.
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "TaskLine"}

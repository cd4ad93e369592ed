import pytest
from types import SimpleNamespace
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from taskline.database import Base, enable_sqlite_foreign_keys, get_db
from taskline.main import app

TEST_DB_URL = "sqlite:///./test_taskline.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
enable_sqlite_foreign_keys(engine)
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_project(client):
    resp = client.post(
        "/api/projects",
        json={"name": "Office Relocation", "status": "Active", "start_date": "2026-01-05"},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def add_task(client):
    def _add(project_id: int, **fields):
        payload = {"description": "Task"}
        payload.update(fields)
        resp = client.post(f"/api/projects/{project_id}/tasks", json=payload)
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _add


@pytest.fixture
def make_task():
    """DB 없이 순수 함수 테스트에 쓰는 태스크 레코드 팩토리."""
    counter = {"next": 1}

    def _make(**fields):
        task_id = fields.pop("task_id", counter["next"])
        counter["next"] = max(counter["next"], task_id) + 1
        values = {
            "task_id": task_id,
            "project_id": 1,
            "task_code": f"T{task_id:03d}",
            "description": f"Task {task_id}",
            "start_date": None,
            "due_date": None,
            "duration_days": None,
            "dependency": None,
            "phase": None,
            "status": "Not Started",
            "completion_percent": 0,
        }
        values.update(fields)
        return SimpleNamespace(**values)

    return _make


@pytest.fixture
def make_project():
    def _make(project_id: int = 1, name: str = "Project", start_date=None, target_completion_date=None):
        return SimpleNamespace(
            project_id=project_id,
            name=name,
            start_date=start_date,
            target_completion_date=target_completion_date,
        )

    return _make

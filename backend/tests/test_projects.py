"""Test Projects 동작과 회귀 시나리오를 검증하는 자동화 테스트입니다."""

from taskline.models.project import Project
from taskline.models.task import ProjectTask


def test_create_project(client):
    resp = client.post(
        "/api/projects",
        json={"name": "Data Center Move", "budget": 1500000, "start_date": "2026-01-01", "target_completion_date": "2026-06-30"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Data Center Move"
    assert data["status"] == "Planning"
    assert data["budget"] == 1500000
    assert data["task_count"] == 0


def test_create_project_rejects_reversed_dates(client):
    resp = client.post(
        "/api/projects",
        json={"name": "Bad Dates", "start_date": "2026-06-30", "target_completion_date": "2026-01-01"},
    )
    assert resp.status_code == 400
    assert "Target completion date" in resp.json()["detail"]


def test_create_project_rejects_unknown_status(client):
    resp = client.post("/api/projects", json={"name": "Odd", "status": "Paused"})
    assert resp.status_code == 422


def test_create_project_rejects_blank_name(client):
    assert client.post("/api/projects", json={"name": "  "}).status_code == 400


def test_update_project_partial_patch(client, seed_project):
    pid = seed_project["project_id"]
    resp = client.put(f"/api/projects/{pid}", json={"status": "Closeout"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "Closeout"
    assert resp.json()["name"] == seed_project["name"]
    assert resp.json()["start_date"] == "2026-01-05"


def test_update_project_checks_merged_dates(client, seed_project):
    pid = seed_project["project_id"]
    resp = client.put(f"/api/projects/{pid}", json={"target_completion_date": "2025-12-31"})
    assert resp.status_code == 400


def test_get_missing_project_is_404(client):
    resp = client.get("/api/projects/12345")
    assert resp.status_code == 404
    assert "12345" in resp.json()["detail"]


def test_list_projects(client, seed_project):
    client.post("/api/projects", json={"name": "Second"})
    resp = client.get("/api/projects")
    assert resp.status_code == 200
    assert {p["name"] for p in resp.json()} == {"Office Relocation", "Second"}


def test_delete_project_cascades_tasks(client, db, seed_project, add_task):
    pid = seed_project["project_id"]
    add_task(pid)
    add_task(pid)

    resp = client.delete(f"/api/projects/{pid}")
    assert resp.status_code == 200
    assert db.query(Project).filter(Project.project_id == pid).first() is None
    assert db.query(ProjectTask).filter(ProjectTask.project_id == pid).count() == 0


def test_list_tasks_ordered_by_code_number(client, seed_project, add_task):
    pid = seed_project["project_id"]
    add_task(pid, task_code="T010")
    add_task(pid, task_code="T002")
    add_task(pid, task_code="KICKOFF")
    resp = client.get(f"/api/projects/{pid}/tasks")
    assert [t["task_code"] for t in resp.json()] == ["T002", "T010", "KICKOFF"]


def test_list_tasks_for_missing_project_is_404(client):
    assert client.get("/api/projects/77/tasks").status_code == 404


def test_health(client):
    assert client.get("/api/health").json()["status"] == "ok"

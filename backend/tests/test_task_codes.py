"""태스크 코드 발급 규칙(최대 번호 기준, 삭제 후 재사용 금지)을 검증하는 테스트입니다."""

from taskline.models.project import Project
from taskline.services.task_codes import next_task_code, parse_task_code_number


def test_next_task_code_starts_at_t001():
    assert next_task_code([]) == "T001"


def test_next_task_code_uses_max_not_count():
    assert next_task_code(["T001", "T007"]) == "T008"


def test_next_task_code_ignores_non_matching_codes():
    assert next_task_code(["SETUP", "T2", "t010", "X99"]) == "T011"


def test_next_task_code_respects_floor():
    assert next_task_code(["T001"], floor=5) == "T006"


def test_next_task_code_grows_past_padding():
    assert next_task_code(["T999"]) == "T1000"


def test_parse_task_code_number():
    assert parse_task_code_number(" t042 ") == 42
    assert parse_task_code_number("T-1") is None
    assert parse_task_code_number(None) is None


def test_codes_are_not_reused_after_delete(client, seed_project, add_task):
    pid = seed_project["project_id"]
    first = add_task(pid, description="First task")
    second = add_task(pid, description="Second task")
    assert first["task_code"] == "T001"
    assert second["task_code"] == "T002"

    assert client.delete(f"/api/tasks/{first['task_id']}").status_code == 200
    third = add_task(pid, description="Third task")
    assert third["task_code"] == "T003"


def test_deleting_highest_code_does_not_free_it(client, db, seed_project, add_task):
    pid = seed_project["project_id"]
    add_task(pid)
    top = add_task(pid)
    assert top["task_code"] == "T002"

    client.delete(f"/api/tasks/{top['task_id']}")
    again = add_task(pid)
    assert again["task_code"] == "T003"
    assert db.query(Project).filter(Project.project_id == pid).first().task_code_seq == 3


def test_codes_are_unique_per_project_not_globally(client, add_task):
    a = client.post("/api/projects", json={"name": "A"}).json()
    b = client.post("/api/projects", json={"name": "B"}).json()
    assert add_task(a["project_id"])["task_code"] == "T001"
    assert add_task(b["project_id"])["task_code"] == "T001"


def test_explicit_code_is_kept_and_advances_sequence(client, seed_project, add_task):
    pid = seed_project["project_id"]
    pinned = add_task(pid, task_code="t100")
    assert pinned["task_code"] == "T100"
    assert add_task(pid)["task_code"] == "T101"


def test_duplicate_explicit_code_rejected(client, seed_project, add_task):
    pid = seed_project["project_id"]
    add_task(pid, task_code="T005")
    resp = client.post(f"/api/projects/{pid}/tasks", json={"description": "Dup", "task_code": "t005"})
    assert resp.status_code == 400
    assert "already exists" in resp.json()["detail"]

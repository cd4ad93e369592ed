"""Phase 정렬/그룹 집계 테스트입니다."""

from datetime import date

from taskline.services.phase_service import (
    UNORDERED_PHASE,
    group_tasks_by_phase,
    parse_phase_order,
    phase_color,
    PHASE_COLORS,
)


def test_parse_phase_order():
    assert parse_phase_order("Phase 2: Execution") == 2
    assert parse_phase_order("phase  12 - Closeout") == 12
    assert parse_phase_order("Planning") == UNORDERED_PHASE
    assert parse_phase_order("Pre-Phase 1") == UNORDERED_PHASE


def test_groups_sorted_by_phase_number_then_name(make_task):
    tasks = [
        make_task(phase="Phase 2: X"),
        make_task(phase="Random"),
        make_task(phase="Phase 1: Y"),
    ]
    assert [g.name for g in group_tasks_by_phase(tasks)] == ["Phase 1: Y", "Phase 2: X", "Random"]


def test_unparseable_names_sort_alphabetically_after_numbered(make_task):
    tasks = [make_task(phase="Zeta"), make_task(phase="alpha"), make_task(phase="Phase 10: Z")]
    assert [g.name for g in group_tasks_by_phase(tasks)] == ["Phase 10: Z", "alpha", "Zeta"]


def test_blank_phase_is_uncategorized(make_task):
    groups = group_tasks_by_phase([make_task(phase=None), make_task(phase="   ")])
    assert len(groups) == 1
    assert groups[0].name == "Uncategorized"
    assert len(groups[0].tasks) == 2


def test_group_aggregates(make_task):
    tasks = [
        make_task(phase="Phase 1: Plan", completion_percent=50, start_date=date(2026, 1, 3), due_date=date(2026, 1, 9)),
        make_task(phase="Phase 1: Plan", completion_percent=25, start_date=date(2026, 1, 1)),
        make_task(phase=" Phase 1: Plan ", completion_percent=0, due_date=date(2026, 1, 20)),
    ]
    (group,) = group_tasks_by_phase(tasks)
    assert group.order == 1
    assert group.progress == 25
    assert group.start_date == date(2026, 1, 1)
    assert group.end_date == date(2026, 1, 20)


def test_progress_rounds_half_up(make_task):
    tasks = [make_task(phase="P", completion_percent=0), make_task(phase="P", completion_percent=5)]
    assert group_tasks_by_phase(tasks)[0].progress == 3


def test_group_without_dates_has_no_span(make_task):
    (group,) = group_tasks_by_phase([make_task(phase="Phase 3: Test")])
    assert group.start_date is None
    assert group.end_date is None


def test_phase_color_cycles():
    assert phase_color(0) == PHASE_COLORS[0]
    assert phase_color(len(PHASE_COLORS) + 1) == PHASE_COLORS[1]


def test_phases_endpoint(client, seed_project, add_task):
    pid = seed_project["project_id"]
    add_task(pid, phase="Phase 2: Build", completion_percent=40)
    add_task(pid, phase="Phase 1: Plan", status="Complete")
    add_task(pid)

    resp = client.get(f"/api/projects/{pid}/phases")
    assert resp.status_code == 200
    body = resp.json()
    assert [g["name"] for g in body] == ["Phase 1: Plan", "Phase 2: Build", "Uncategorized"]
    assert body[0]["progress"] == 100
    assert [t["task_code"] for t in body[1]["tasks"]] == ["T001"]

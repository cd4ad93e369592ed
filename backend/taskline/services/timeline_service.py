"""Gantt 타임라인 투영 서비스입니다.

저장된 프로젝트/태스크 레코드에서 project -> phase -> task 계층 행을 매번 새로 계산합니다.
결과는 저장하지 않습니다.

태스크 구간 [start, end) 결정 우선순위:

1. start_date, due_date 모두 있음: 그대로 사용 (due <= start면 start + 1일). 추정 아님.
2. start_date만 있음: end = start + duration_days.
3. due_date만 있음: start = due - duration_days.
4. 둘 다 없음: 이전 태스크 종료 + 1일부터 이어지는 커서에서 시작.

2~4번은 ``inferred_task_count``에 1씩 더해집니다.
"""

from datetime import date
from typing import Iterable, Optional, Sequence, Set, Tuple, Union

from taskline.config import settings
from taskline.schemas.timeline import DrilldownTarget, TimelineOut, TimelineRow
from taskline.services.dependency_service import parse_dependency_codes
from taskline.services.phase_service import group_by_phase, phase_color
from taskline.services.task_codes import task_code_sort_key
from taskline.utils.errors import ValidationError
from taskline.utils.helpers import add_days, as_date, mean_percent

CRITICAL_STYLE = {
    "background_color": "#dc2626",
    "background_selected_color": "#b91c1c",
    "progress_color": "#fca5a5",
    "progress_selected_color": "#f87171",
}


def normalize_range(start: Optional[date], end: Optional[date], fallback_start: date) -> Tuple[date, date]:
    start = start or fallback_start
    end = end or add_days(start, 1)
    if end <= start:
        end = add_days(start, 1)
    return start, end


def effective_duration_days(task) -> int:
    duration = task.duration_days
    if isinstance(duration, int) and not isinstance(duration, bool) and duration > 0:
        return duration
    return 1


def resolve_task_span(task, cursor: date) -> Tuple[date, date, bool]:
    """태스크 하나의 구간과 추정 여부를 반환합니다. ``cursor``는 롤링 시작일입니다."""
    explicit_start = as_date(task.start_date)
    explicit_end = as_date(task.due_date)
    duration = effective_duration_days(task)

    if explicit_start and explicit_end:
        start, end = normalize_range(explicit_start, explicit_end, cursor)
        return start, end, False
    if explicit_start:
        return explicit_start, add_days(explicit_start, duration), True
    if explicit_end:
        start, end = normalize_range(add_days(explicit_end, -duration), explicit_end, cursor)
        return start, end, True
    start = cursor
    return start, add_days(start, duration), True


def _select_projects(projects: Iterable, scope: Union[str, int, None]) -> list:
    if scope is None or scope == "all":
        return list(projects)
    try:
        project_id = int(scope)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid timeline scope '{scope}'. Use 'all' or a project id.")
    return [project for project in projects if project.project_id == project_id]


def _sorted_project_tasks(tasks: Iterable, project_id: int) -> list:
    return sorted(
        (task for task in tasks if task.project_id == project_id),
        key=lambda task: (task_code_sort_key(task.task_code), task.task_id),
    )


def _phase_style(index: int) -> dict:
    color = phase_color(index)
    return {
        "background_color": color["bar"],
        "background_selected_color": color["bar_selected"],
        "progress_color": color["bar_selected"],
        "progress_selected_color": color["bar_selected"],
        "row_color": color["bg"],
    }


def build_timeline(
    projects: Sequence,
    tasks: Sequence,
    scope: Union[str, int, None] = "all",
    critical_task_ids: Optional[Set[int]] = None,
    today: Optional[date] = None,
) -> TimelineOut:
    today = today or date.today()
    critical_task_ids = critical_task_ids or set()
    rows = []
    drilldown_index = {}
    inferred_task_count = 0

    for project in _select_projects(projects, scope):
        project_row_id = f"project-{project.project_id}"
        project_tasks = _sorted_project_tasks(tasks, project.project_id)

        row_id_by_code = {}
        for task in project_tasks:
            code = (task.task_code or "").strip().upper()
            if code:
                row_id_by_code[code] = f"task-{task.task_id}"

        explicit_starts = [d for d in (as_date(task.start_date) for task in project_tasks) if d]
        fallback_start = as_date(project.start_date) or (min(explicit_starts) if explicit_starts else today)

        cursor = fallback_start
        task_rows = {}
        for task in project_tasks:
            start, end, inferred = resolve_task_span(task, cursor)
            if inferred:
                inferred_task_count += 1
            cursor = add_days(end, 1)

            dependencies = [
                row_id_by_code[code]
                for code in parse_dependency_codes(task.dependency)
                if code in row_id_by_code
            ]
            row_id = f"task-{task.task_id}"
            task_rows[task.task_id] = TimelineRow(
                id=row_id,
                name=task.description,
                type="task",
                start=start,
                end=end,
                progress=task.completion_percent or 0,
                dependencies=dependencies,
                styles=dict(CRITICAL_STYLE) if task.task_id in critical_task_ids else None,
            )
            drilldown_index[row_id] = DrilldownTarget(project_id=project.project_id, task_id=task.task_id)

        if task_rows:
            project_start = min(row.start for row in task_rows.values())
            project_end = max(row.end for row in task_rows.values())
        else:
            project_start = as_date(project.start_date)
            project_end = as_date(project.target_completion_date)
        project_start, project_end = normalize_range(project_start, project_end, fallback_start)

        rows.append(
            TimelineRow(
                id=project_row_id,
                name=project.name,
                type="project",
                start=project_start,
                end=project_end,
                progress=mean_percent(row.progress for row in task_rows.values()),
                hide_children=False,
            )
        )
        drilldown_index[project_row_id] = DrilldownTarget(project_id=project.project_id)

        groups = group_by_phase(
            project_tasks,
            lambda task: task.phase,
            lambda task: task.completion_percent or 0,
            lambda task: as_date(task.start_date),
            lambda task: as_date(task.due_date),
        )
        for index, group in enumerate(groups):
            phase_row_id = f"phase-{project.project_id}-{index}"
            phase_start, phase_end = normalize_range(group.start_date, group.end_date, project_start)
            rows.append(
                TimelineRow(
                    id=phase_row_id,
                    name=group.name,
                    type="phase",
                    start=phase_start,
                    end=phase_end,
                    progress=group.progress,
                    parent=project_row_id,
                    hide_children=False,
                    styles=_phase_style(index),
                )
            )
            drilldown_index[phase_row_id] = DrilldownTarget(project_id=project.project_id, phase=group.name)
            for task in group.tasks:
                row = task_rows[task.task_id]
                row.parent = phase_row_id
                rows.append(row)

    viewport_date = add_days(today, -settings.TIMELINE_VIEWPORT_LEAD_DAYS) if rows else today
    return TimelineOut(
        rows=rows,
        drilldown_index=drilldown_index,
        inferred_task_count=inferred_task_count,
        viewport_date=viewport_date,
    )

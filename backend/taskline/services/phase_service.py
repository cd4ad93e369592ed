"""Phase 그룹핑/집계 유틸리티입니다. 그룹형 태스크 목록과 타임라인이 공통으로 사용합니다."""

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from taskline.utils.helpers import mean_percent

T = TypeVar("T")

UNCATEGORIZED_PHASE = "Uncategorized"
UNORDERED_PHASE = 2**53 - 1

PHASE_PREFIX_RE = re.compile(r"^Phase\s+(\d+)", re.IGNORECASE)

PHASE_COLORS = [
    {"bg": "#dbeafe", "bar": "#3b82f6", "bar_selected": "#2563eb"},  # blue
    {"bg": "#dcfce7", "bar": "#22c55e", "bar_selected": "#16a34a"},  # green
    {"bg": "#fef3c7", "bar": "#f59e0b", "bar_selected": "#d97706"},  # amber
    {"bg": "#fce7f3", "bar": "#ec4899", "bar_selected": "#db2777"},  # pink
    {"bg": "#e0e7ff", "bar": "#6366f1", "bar_selected": "#4f46e5"},  # indigo
    {"bg": "#f3e8ff", "bar": "#a855f7", "bar_selected": "#9333ea"},  # purple
    {"bg": "#ccfbf1", "bar": "#14b8a6", "bar_selected": "#0d9488"},  # teal
    {"bg": "#ffedd5", "bar": "#f97316", "bar_selected": "#ea580c"},  # orange
]


@dataclass
class PhaseGroup(Generic[T]):
    name: str
    order: int
    tasks: List[T] = field(default_factory=list)
    progress: int = 0
    start_date: Optional[date] = None
    end_date: Optional[date] = None


def parse_phase_order(name: Optional[str]) -> int:
    """ "Phase 2: Execution" -> 2, "Planning" -> UNORDERED_PHASE """
    match = PHASE_PREFIX_RE.match(name or "")
    return int(match.group(1)) if match else UNORDERED_PHASE


def phase_name(value: Optional[str]) -> str:
    return (value or "").strip() or UNCATEGORIZED_PHASE


def group_by_phase(
    items: Iterable[T],
    get_phase: Callable[[T], Optional[str]],
    get_completion: Callable[[T], int],
    get_start: Callable[[T], Optional[date]],
    get_end: Callable[[T], Optional[date]],
) -> List[PhaseGroup[T]]:
    buckets: Dict[str, List[T]] = {}
    for item in items:
        buckets.setdefault(phase_name(get_phase(item)), []).append(item)

    groups = []
    for name, members in buckets.items():
        starts = [d for d in (get_start(item) for item in members) if d is not None]
        ends = [d for d in (get_end(item) for item in members) if d is not None]
        groups.append(
            PhaseGroup(
                name=name,
                order=parse_phase_order(name),
                tasks=members,
                progress=mean_percent(get_completion(item) for item in members),
                start_date=min(starts) if starts else None,
                end_date=max(ends) if ends else None,
            )
        )

    groups.sort(key=lambda group: (group.order, group.name.casefold(), group.name))
    return groups


def phase_color(index: int) -> dict:
    return PHASE_COLORS[index % len(PHASE_COLORS)]


def group_tasks_by_phase(tasks: Iterable) -> List[PhaseGroup]:
    return group_by_phase(
        tasks,
        lambda task: task.phase,
        lambda task: task.completion_percent or 0,
        lambda task: task.start_date,
        lambda task: task.due_date,
    )

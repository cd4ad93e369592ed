"""태스크 의존성 그래프 검증과 크리티컬 패스 계산입니다.

의존성은 쓰기 시점에 강제하지 않습니다. 누락/날짜 충돌/순환은 예외가 아니라
``DependencyIssue`` 목록으로 보고되어 사용자가 정리할 수 있게 합니다.
"""

from typing import Dict, List, Optional, Sequence

from taskline.schemas.task import DependencyIssue


def parse_dependency_codes(value: Optional[str]) -> List[str]:
    codes: List[str] = []
    for token in (value or "").split(","):
        code = token.strip().upper()
        if code and code not in codes:
            codes.append(code)
    return codes


def _code(task) -> str:
    return (task.task_code or "").strip().upper()


def _unique_issues(issues: List[DependencyIssue]) -> List[DependencyIssue]:
    seen = set()
    unique = []
    for issue in issues:
        key = (issue.type, issue.task_code, issue.dependency_code, issue.detail)
        if key in seen:
            continue
        seen.add(key)
        unique.append(issue)
    return unique


def _dependency_map(task_by_code: Dict[str, object]) -> Dict[str, List[str]]:
    return {
        code: [dep for dep in parse_dependency_codes(task.dependency) if dep in task_by_code]
        for code, task in task_by_code.items()
    }


def _detect_cycles(task_by_code: Dict[str, object]) -> List[DependencyIssue]:
    # 긴 의존성 체인에서도 재귀 한도에 걸리지 않도록 명시적 스택으로 DFS 한다.
    dependency_map = _dependency_map(task_by_code)
    state: Dict[str, str] = {}
    issues: List[DependencyIssue] = []

    for root in task_by_code:
        if root in state:
            continue
        state[root] = "visiting"
        path = [root]
        stack = [iter(dependency_map[root])]
        while stack:
            dependency_code = next(stack[-1], None)
            if dependency_code is None:
                stack.pop()
                state[path.pop()] = "done"
                continue
            dep_state = state.get(dependency_code)
            if dep_state == "visiting":
                cycle_path = path[path.index(dependency_code):] + [dependency_code]
                issues.append(
                    DependencyIssue(
                        type="cycle",
                        task_code=dependency_code,
                        detail=f"Dependency cycle detected: {' -> '.join(cycle_path)}",
                    )
                )
            elif dep_state is None:
                state[dependency_code] = "visiting"
                path.append(dependency_code)
                stack.append(iter(dependency_map[dependency_code]))
    return issues


def validate_dependencies(tasks: Sequence) -> List[DependencyIssue]:
    """한 프로젝트의 태스크 목록에서 의존성 이슈를 수집합니다 (읽기 전용)."""
    task_by_code = {_code(task): task for task in tasks if _code(task)}
    issues: List[DependencyIssue] = []

    for task in tasks:
        for dependency_code in parse_dependency_codes(task.dependency):
            dependency_task = task_by_code.get(dependency_code)
            if dependency_task is None:
                issues.append(
                    DependencyIssue(
                        type="missing_dependency",
                        task_code=task.task_code,
                        dependency_code=dependency_code,
                        detail=f"Task {task.task_code} references missing dependency {dependency_code}.",
                    )
                )
                continue
            if (
                dependency_task.due_date
                and task.start_date
                and dependency_task.due_date > task.start_date
            ):
                issues.append(
                    DependencyIssue(
                        type="date_conflict",
                        task_code=task.task_code,
                        dependency_code=dependency_code,
                        detail=(
                            f"Task {task.task_code} starts {task.start_date.isoformat()} "
                            f"before dependency {dependency_code} is due {dependency_task.due_date.isoformat()}."
                        ),
                    )
                )

    return _unique_issues(issues + _detect_cycles(task_by_code))


def estimate_duration_days(task) -> int:
    if task.duration_days and task.duration_days > 0:
        return task.duration_days
    if task.start_date and task.due_date:
        return max(1, (task.due_date - task.start_date).days)
    return 1


def compute_critical_path(tasks: Sequence) -> dict:
    """의존성 체인 중 추정 기간 합이 가장 긴 경로를 찾습니다.

    반환값의 ``task_codes``는 선행 태스크부터 순서대로 나열됩니다. 순환이 있으면
    ``blocked_by_cycle``을 True로 표시하고 가능한 범위의 경로를 돌려줍니다.
    """
    if not tasks:
        return {"task_ids": [], "task_codes": [], "total_duration_days": 0, "blocked_by_cycle": False}

    task_by_code = {_code(task): task for task in tasks if _code(task)}
    dependency_map = _dependency_map(task_by_code)
    memo: Dict[str, tuple] = {}
    blocked_by_cycle = False

    def longest_ending_at(root: str) -> tuple:
        nonlocal blocked_by_cycle
        if root in memo:
            return memo[root]

        # code -> 지금까지 본 선행 체인 중 가장 긴 (기간, 경로)
        best_before = {root: (0, [])}
        stack = [(root, iter(dependency_map[root]))]

        def offer(code: str, candidate: tuple) -> None:
            if candidate[0] > best_before[code][0]:
                best_before[code] = candidate

        while stack:
            code, dependencies = stack[-1]
            dependency_code = next(dependencies, None)
            if dependency_code is None:
                stack.pop()
                duration, path = best_before.pop(code)
                memo[code] = (estimate_duration_days(task_by_code[code]) + duration, path + [code])
                if stack:
                    offer(stack[-1][0], memo[code])
                continue
            if dependency_code in memo:
                offer(code, memo[dependency_code])
            elif dependency_code in best_before:
                blocked_by_cycle = True
                memo[dependency_code] = (estimate_duration_days(task_by_code[dependency_code]), [dependency_code])
                offer(code, memo[dependency_code])
            else:
                best_before[dependency_code] = (0, [])
                stack.append((dependency_code, iter(dependency_map[dependency_code])))
        return memo[root]

    best_duration, best_path = 0, []
    for code in task_by_code:
        duration, path = longest_ending_at(code)
        if duration > best_duration:
            best_duration, best_path = duration, path

    return {
        "task_ids": [task_by_code[code].task_id for code in best_path],
        "task_codes": [task_by_code[code].task_code for code in best_path],
        "total_duration_days": best_duration,
        "blocked_by_cycle": blocked_by_cycle,
    }

from taskboard.domain.task import Task
from taskboard.domain.enums import ALL, Category, Priority
from taskboard.services.query import is_due_today, is_overdue
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Sequence
import math

ROLLING_WINDOW_DAYS = 7


@dataclass(frozen=True)
class ChartBar:
    """Słupek wykresu: `ratio` to liczność względem największej w grupie (0..1)."""
    label: str
    count: int
    ratio: float


@dataclass(frozen=True)
class TaskStatistics:
    total: int
    completed: int
    pending: int
    due_today: int
    overdue: int
    upcoming: int
    completion_rate: int
    weekly_average: float
    category_counts: dict[str, int]
    category_chart: list[ChartBar]
    priority_chart: list[ChartBar]


def completion_rate(completed: int, total: int) -> int:
    """Procent ukończonych, zaokrąglony połówkowo w górę; 0 dla pustej kolekcji."""
    if total == 0:
        return 0
    return math.floor(completed / total * 100 + 0.5)


def weekly_average(tasks: Sequence[Task], now: datetime) -> float:
    """Średnia dzienna ukończonych zadań z ostatnich 7 dni, jedno miejsce po przecinku."""
    since = now - timedelta(days=ROLLING_WINDOW_DAYS)
    recent = sum(1 for t in tasks if t.completed and t.completed_at is not None and t.completed_at > since)
    return round(recent / ROLLING_WINDOW_DAYS, 1)


def build_chart(counts: dict[str, int]) -> list[ChartBar]:
    """Normalizuje liczności względem maksimum w grupie (mianownik co najmniej 1)."""
    denominator = max([*counts.values(), 1])
    return [ChartBar(label, count, count / denominator) for label, count in counts.items()]


def _category_labels(tasks: Sequence[Task]) -> list[str]:
    labels = [c.value for c in Category]
    for task in tasks:
        if str(task.category) not in labels:
            labels.append(str(task.category))
    return labels


def compute_statistics(tasks: Sequence[Task], now: datetime, today: date) -> TaskStatistics:
    """
    Agregaty nad CAŁĄ kolekcją (nie nad widokiem po filtrach).

    :param now: Bieżący czas UTC (okno 7 dni).
    :param today: Dzisiejsza data (przeterminowane / na dziś).
    """
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    open_tasks = [t for t in tasks if not t.completed]
    overdue = sum(1 for t in open_tasks if is_overdue(t, today))
    upcoming = sum(1 for t in open_tasks if t.due_date is not None and not is_overdue(t, today))

    per_category = {label: 0 for label in _category_labels(tasks)}
    for t in tasks:
        per_category[str(t.category)] += 1
    per_priority = {p.value: 0 for p in Priority}
    for t in tasks:
        if str(t.priority) in per_priority:
            per_priority[str(t.priority)] += 1

    category_counts = {ALL: total}
    category_counts.update({c.value: per_category[c.value] for c in Category})

    return TaskStatistics(
        total=total,
        completed=completed,
        pending=total - completed,
        due_today=sum(1 for t in tasks if is_due_today(t, today)),
        overdue=overdue,
        upcoming=upcoming,
        completion_rate=completion_rate(completed, total),
        weekly_average=weekly_average(tasks, now),
        category_counts=category_counts,
        category_chart=build_chart(per_category),
        priority_chart=build_chart(per_priority),
    )

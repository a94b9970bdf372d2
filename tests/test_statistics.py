from taskboard.services.statistics import compute_statistics, completion_rate, build_chart, ChartBar
from datetime import date, datetime, timedelta, timezone
import pytest

NOW = datetime(2025, 1, 10, 12, 0, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def test_empty_collection():
    stats = compute_statistics([], NOW, TODAY)

    assert stats.total == 0
    assert stats.completed == 0
    assert stats.pending == 0
    assert stats.completion_rate == 0
    assert stats.weekly_average == 0.0
    assert all(bar.ratio == 0 for bar in stats.category_chart)
    assert all(bar.ratio == 0 for bar in stats.priority_chart)


def test_completion_rate_quarter(make_task):
    tasks = [make_task("a", completed=True), make_task("b"), make_task("c"), make_task("d")]
    assert compute_statistics(tasks, NOW, TODAY).completion_rate == 25


@pytest.mark.parametrize("completed, total, expected", [(1, 8, 13), (1, 3, 33), (2, 3, 67), (0, 5, 0), (5, 5, 100)])
def test_completion_rate_rounds_half_up(completed, total, expected):
    assert completion_rate(completed, total) == expected


def test_counts_overdue_upcoming_and_today(make_task):
    tasks = [
        make_task("overdue", due_date=TODAY - timedelta(days=1)),
        make_task("overdue-but-done", due_date=TODAY - timedelta(days=3), completed=True),
        make_task("today", due_date=TODAY),
        make_task("later", due_date=TODAY + timedelta(days=5)),
        make_task("undated"),
    ]
    stats = compute_statistics(tasks, NOW, TODAY)

    assert stats.total == 5
    assert stats.completed == 1
    assert stats.pending == 4
    assert stats.overdue == 1
    assert stats.upcoming == 2
    assert stats.due_today == 1


def test_weekly_average_counts_recent_completions(make_task):
    recent = NOW - timedelta(days=2)
    old = NOW - timedelta(days=8)
    tasks = [
        make_task("a", completed=True, completed_at=recent),
        make_task("b", completed=True, completed_at=recent),
        make_task("c", completed=True, completed_at=recent),
        make_task("d", completed=True, completed_at=old),
        make_task("e"),
    ]
    # 3 / 7 = 0.43 -> 0.4
    assert compute_statistics(tasks, NOW, TODAY).weekly_average == 0.4


def test_category_and_priority_charts(make_task):
    tasks = [
        make_task("a", category="work", priority="high"),
        make_task("b", category="work", priority="high"),
        make_task("c", category="health", priority="low"),
        make_task("d", category="garden", priority="someday"),
    ]
    stats = compute_statistics(tasks, NOW, TODAY)

    chart = {bar.label: bar for bar in stats.category_chart}
    assert [bar.label for bar in stats.category_chart] == ["work", "personal", "shopping", "health", "learning", "garden"]
    assert chart["work"] == ChartBar("work", 2, 1.0)
    assert chart["health"].ratio == 0.5
    assert chart["garden"].count == 1
    assert chart["personal"].count == 0

    priorities = {bar.label: bar for bar in stats.priority_chart}
    assert list(priorities) == ["high", "medium", "low"]
    assert priorities["high"].ratio == 1.0
    assert priorities["low"].ratio == 0.5
    assert priorities["medium"].count == 0

    assert stats.category_counts == {
        "all": 4, "work": 2, "personal": 0, "shopping": 0, "health": 1, "learning": 0,
    }


def test_build_chart_uses_minimum_denominator_one():
    assert build_chart({"x": 0, "y": 0}) == [ChartBar("x", 0, 0.0), ChartBar("y", 0, 0.0)]

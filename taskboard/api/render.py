from taskboard.domain.task import Task
from taskboard.domain.enums import Category, Theme
from taskboard.services.query import is_due_today, is_overdue
from taskboard.services.statistics import ChartBar, TaskStatistics
from taskboard.services.task_service import TaskView
from taskboard.api.colors import TaskColor, category_color, priority_color
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from datetime import date, datetime, timedelta


### COMMENTS
# ==========================================================
# Renderowanie (api/render.py) - tabele i panele Rich.
# ==========================================================
# Zero logiki biznesowej: dostaje TaskView / Task / TaskStatistics i je rysuje.

CATEGORY_TITLES = {
    "all": "All Tasks",
    **{c.value: f"{c.value.capitalize()} Tasks" for c in Category},
}

BAR_WIDTH = 24


def short_id(task_id: str, n: int = 8) -> str:
    """Zwraca skróconą wersję ID do wyświetlenia (pierwsze 8 znaków)."""
    return task_id[:n]


def format_date(value: date | datetime | None, today: date) -> str:
    """'Today' / 'Tomorrow' / 'Mon, Oct 20'; brak daty -> 'No due date'."""
    if value is None:
        return "No due date"
    if isinstance(value, datetime):
        value = value.astimezone().date()
    if value == today:
        return "Today"
    if value == today + timedelta(days=1):
        return "Tomorrow"
    return value.strftime("%a, %b %d")


def format_due(task: Task, today: date) -> str:
    if task.due_date is None:
        return ""
    text = format_date(task.due_date, today)
    if is_overdue(task, today):
        return f"{TaskColor.RED}{text} (Overdue){TaskColor.RESET}"
    if is_due_today(task, today):
        return f"{TaskColor.ORANGE}{text}{TaskColor.RESET}"
    return text


def color_priority(priority: str) -> str:
    return f"[{priority_color(priority)}]{escape(str(priority))}[/]"


def color_status(task: Task) -> str:
    if task.completed:
        return f"{TaskColor.GREEN}Done{TaskColor.RESET}"
    return f"{TaskColor.DIM}Pending{TaskColor.RESET}"


def category_title(category: str) -> str:
    return CATEGORY_TITLES.get(category, f"{category} Tasks")


def render_list(console: Console, view: TaskView, today: date) -> None:
    """Renderuje tabelę: Sel, ID, Title, Priority, Category, Due, Created, Status + stopka ze statystykami."""
    state = view.state
    header_style = "bold magenta" if state.theme is Theme.DARK else "bold"

    table = Table(
        title=f"{category_title(state.category)} • sort: {state.sort_order}",
        show_lines=True,
        header_style=header_style,
    )
    table.add_column("", no_wrap=True)
    table.add_column("ID", no_wrap=True, style="cyan")
    table.add_column("Title")
    table.add_column("Priority", no_wrap=True)
    table.add_column("Category", no_wrap=True)
    table.add_column("Due", no_wrap=True)
    table.add_column("Created", no_wrap=True, style="dim")
    table.add_column("Status", no_wrap=True)

    for t in view.tasks:
        title = f"[strike]{escape(t.title)}[/strike]" if t.completed else escape(t.title)
        if t.description:
            title += f"\n[dim]{escape(t.description)}[/dim]"
        table.add_row(
            "☑" if t.task_id in state.selected else "",
            short_id(t.task_id),
            title,
            color_priority(t.priority),
            f"[{category_color(t.category)}]{escape(t.category)}[/]",
            format_due(t, today),
            format_date(t.created_at, today),
            color_status(t),
        )

    if view.tasks:
        console.print(table)
    else:
        hint = "Try a different search term" if state.search else "Add a new task to get started!"
        console.print(Panel.fit(f"No tasks found\n[dim]{hint}[/]", border_style="dim"))

    s = view.statistics
    console.print(
        f"[dim]Pokazano {len(view.tasks)} • Razem: {s.total} • Ukończone: {s.completed} • "
        f"Oczekujące: {s.pending} • Na dziś: {s.due_today} • Zaznaczone: {len(state.selected)}[/dim]"
    )


def render_task(console: Console, task: Task, today: date) -> None:
    """Panel ze szczegółami zadania."""
    lines = [
        f"ID: {task.task_id}",
        f"Title: {escape(task.title)}",
        f"Description: {escape(task.description) or '[dim]brak[/]'}",
        f"Category: {escape(task.category)}",
        f"Priority: {color_priority(task.priority)}",
        f"Due: {format_due(task, today) or '[dim]No due date[/]'}",
        f"Created: {task.created_at.isoformat()}",
        f"Status: {color_status(task)}",
    ]
    if task.completed_at:
        lines.append(f"Completed: {task.completed_at.isoformat()}")
    console.print(Panel.fit("\n".join(lines), title="Szczegóły zadania", border_style="cyan"))


def _chart(title: str, bars: list[ChartBar], color_for) -> Table:
    table = Table(title=title, show_header=False, box=None)
    table.add_column("label", no_wrap=True)
    table.add_column("bar", no_wrap=True)
    table.add_column("count", justify="right")
    for bar in bars:
        filled = round(bar.ratio * BAR_WIDTH)
        table.add_row(
            escape(bar.label.capitalize()),
            f"[{color_for(bar.label)}]{'█' * filled}[/]{'·' * (BAR_WIDTH - filled)}",
            str(bar.count),
        )
    return table


def render_stats(console: Console, stats: TaskStatistics) -> None:
    """Panel ze statystykami i wykresy kategorii / priorytetów."""
    console.print(Panel.fit(
        f"Completion rate: [bold]{stats.completion_rate}%[/]\n"
        f"Avg. completed per day (7 days): [bold]{stats.weekly_average:.1f}[/]\n"
        f"Total: {stats.total} • Completed: {stats.completed} • Pending: {stats.pending}\n"
        f"Overdue: {TaskColor.RED}{stats.overdue}{TaskColor.RESET} • Upcoming: {stats.upcoming} • "
        f"Due today: {stats.due_today}",
        title="Statystyki",
        border_style="cyan",
    ))
    console.print(_chart("Tasks by Category", stats.category_chart, category_color))
    console.print(_chart("Tasks by Priority", stats.priority_chart, priority_color))

from dataclasses import dataclass, field
from taskboard.domain.task import Task, TaskId
from taskboard.domain.enums import ALL, SortOrder, StatusFilter, Theme


@dataclass
class AppState:
    """Stan aplikacji należący do jednego TaskService.

    `tasks` - kolekcja, najnowsze na początku; `selected` - zaznaczenie (nie jest zapisywane).
    """
    tasks: list[Task] = field(default_factory=list)
    category: str = ALL
    status: StatusFilter = StatusFilter.ALL
    priority: str = ALL
    search: str = ""
    sort_order: SortOrder = SortOrder.NEWEST
    selected: set[TaskId] = field(default_factory=set)
    theme: Theme = Theme.LIGHT

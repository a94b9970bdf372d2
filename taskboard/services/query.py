from taskboard.domain.task import Task
from taskboard.domain.enums import ALL, SortOrder, StatusFilter, priority_weight
from taskboard.domain.errors import TaskValidationError
from datetime import date
from typing import Callable, Iterable


### COMMENTS
# ==========================================================
# Silnik zapytań (services/query.py) - czyste funkcje nad kolekcją.
# ==========================================================
# - Filtry: kategoria, status, priorytet, tekst; łączone przez AND.
# - Filtrowanie nie zmienia kolekcji ani kolejności - zwraca nową listę.
# - Sortowanie zwraca nową listę (sort stabilny), wejście bez zmian.
# - Porównania dat tylko po dacie kalendarzowej (bez godziny).

TaskPredicate = Callable[[Task], bool]


def is_due_today(task: Task, today: date) -> bool:
    return task.due_date is not None and task.due_date == today


def is_overdue(task: Task, today: date) -> bool:
    """Termin przed dzisiejszą datą. Stan ukończenia NIE jest tu brany pod uwagę."""
    return task.due_date is not None and task.due_date < today


def matches_category(category: str) -> TaskPredicate:
    if str(category) == ALL:
        return lambda task: True
    return lambda task: str(task.category) == str(category)


def matches_status(status: StatusFilter | str, today: date) -> TaskPredicate:
    try:
        status = StatusFilter(status)
    except ValueError:
        raise TaskValidationError("status", f"Nieznany filtr statusu: {status}")

    match status:
        case StatusFilter.PENDING:
            return lambda task: not task.completed
        case StatusFilter.COMPLETED:
            return lambda task: task.completed
        case StatusFilter.TODAY:
            return lambda task: is_due_today(task, today)
        case _:
            return lambda task: True


def matches_priority(priority: str) -> TaskPredicate:
    if str(priority) == ALL:
        return lambda task: True
    return lambda task: str(task.priority) == str(priority)


def matches_search(search: str | None) -> TaskPredicate:
    """Podciąg bez rozróżniania wielkości liter w tytule LUB opisie; pusty tekst pasuje do wszystkiego."""
    needle = (search or "").casefold()
    if not needle:
        return lambda task: True
    return lambda task: needle in task.title.casefold() or needle in (task.description or "").casefold()


def build_predicate(
    category: str = ALL,
    status: StatusFilter | str = StatusFilter.ALL,
    priority: str = ALL,
    search: str | None = "",
    *,
    today: date,
) -> TaskPredicate:
    predicates = [
        matches_category(category),
        matches_status(status, today),
        matches_priority(priority),
        matches_search(search),
    ]
    return lambda task: all(p(task) for p in predicates)


def query_tasks(
    tasks: Iterable[Task],
    category: str = ALL,
    status: StatusFilter | str = StatusFilter.ALL,
    priority: str = ALL,
    search: str | None = "",
    *,
    today: date,
) -> list[Task]:
    """
    Zwraca zadania spełniające wszystkie filtry, w oryginalnej kolejności.

    :param category: "all" albo dokładna kategoria.
    :param status: all / pending / completed / today.
    :param priority: "all" albo dokładny priorytet.
    :param search: Tekst szukany w tytule lub opisie.
    :param today: Dzisiejsza data (dla filtra "today").
    :raises TaskValidationError: Nieznany filtr statusu.
    :return: Nowa lista (podzbiór wejścia).
    """
    predicate = build_predicate(category, status, priority, search, today=today)
    return [task for task in tasks if predicate(task)]


def sort_tasks(tasks: Iterable[Task], order: SortOrder | str = SortOrder.NEWEST) -> list[Task]:
    """
    Zwraca nową, posortowaną listę.

    - newest / oldest: po `created_at` malejąco / rosnąco,
    - priority: waga high=3, medium=2, low=1, nieznany=0, malejąco,
    - dueDate: rosnąco po terminie; zadania bez terminu na końcu.

    :raises TaskValidationError: Nieznany tryb sortowania.
    """
    try:
        order = SortOrder(order)
    except ValueError:
        raise TaskValidationError("sort", f"Nieznany tryb sortowania: {order}")

    items = list(tasks)
    match order:
        case SortOrder.NEWEST:
            items.sort(key=lambda t: t.created_at, reverse=True)
        case SortOrder.OLDEST:
            items.sort(key=lambda t: t.created_at)
        case SortOrder.PRIORITY:
            items.sort(key=lambda t: priority_weight(t.priority), reverse=True)
        case SortOrder.DUE_DATE:
            items.sort(key=lambda t: (t.due_date is None, t.due_date or date.min))
    return items

from taskboard.ports.storage import TaskStorage, ThemeStorage
from taskboard.ports.id_provider import IdProvider
from taskboard.ports.clock import Clock
from taskboard.ports.confirmer import Confirmer
from taskboard.domain.task import Task, TaskId
from taskboard.domain.errors import TaskValidationError, TaskNotFoundError
from taskboard.domain.enums import Category, Priority, SortOrder, StatusFilter, Theme
from taskboard.services.query import query_tasks, sort_tasks
from taskboard.services.statistics import TaskStatistics, compute_statistics
from taskboard.services.state import AppState
from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, Optional
import logging

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# Warstwa serwisowa (services/task_service.py) - przypadki użycia.
# ==========================================================
# Rola:
# - Właściciel stanu aplikacji (AppState): kolekcja, filtry, sortowanie, zaznaczenie, motyw.
# - Operacje mutujące: add / toggle / rename / delete / delete_many / clear_completed.
# - Każda mutacja kończy się zapisem CAŁEGO snapshotu przez port TaskStorage.
#
# Zasady:
# - Walidacja (pusty tytuł) -> TaskValidationError, stan bez zmian.
# - Nieistniejące ID w mutacji -> cichy no-op (bez zapisu).
# - Operacje destrukcyjne pytają Confirmer; odmowa = brak zmian.
# - Błędy storage (StorageError) nie są tu łapane - propagują do UI.


@dataclass(frozen=True)
class TaskView:
    """Wynik jednego cyklu renderowania: przefiltrowane i posortowane zadania + agregaty."""
    tasks: list[Task]
    statistics: TaskStatistics
    state: AppState


class TaskService:
    """
    Serwis przypadków użycia dla listy zadań.

    :param storage: Implementacja portu TaskStorage (snapshot "tasks").
    :param theme_storage: Implementacja portu ThemeStorage (wpis "theme").
    :param id_provider: Generator ID zadań.
    :param clock: Źródło czasu.
    :param confirmer: Potwierdzenie operacji destrukcyjnych.
    """
    def __init__(
        self,
        storage: TaskStorage,
        theme_storage: ThemeStorage,
        id_provider: IdProvider,
        clock: Clock,
        confirmer: Confirmer,
    ) -> None:
        self.storage = storage
        self.theme_storage = theme_storage
        self.id_provider = id_provider
        self.clock = clock
        self.confirmer = confirmer
        self.state = AppState()

    def load(self) -> AppState:
        """Wczytuje snapshot i motyw (raz, na starcie). Brak danych -> pusta kolekcja, jasny motyw."""
        self.state.tasks = list(self.storage.load() or [])
        self.state.selected.clear()
        self.state.theme = self.theme_storage.load_theme() or Theme.LIGHT
        logger.debug("Stan wczytany: %d zadań, motyw=%s", len(self.state.tasks), self.state.theme)
        return self.state

    def _persist(self) -> None:
        self.storage.save(self.state.tasks)

    def _find(self, task_id: TaskId) -> Optional[int]:
        for index, task in enumerate(self.state.tasks):
            if task.task_id == task_id:
                return index
        return None

    # ----- odczyt -----

    def get_task(self, task_id: TaskId) -> Task:
        """
            Zwraca zadanie o wskazanym identyfikatorze.

            :raises TaskNotFoundError: Gdy nie znaleziono zadania.
        """
        index = self._find(task_id)
        if index is None:
            raise TaskNotFoundError(task_id)
        return self.state.tasks[index]

    def find_by_prefix(self, prefix: str) -> Task:
        """Zadanie po pełnym ID albo jednoznacznym prefiksie (jak skrócone ID w tabeli)."""
        matches = [t for t in self.state.tasks if t.task_id == prefix]
        if not matches and prefix:
            matches = [t for t in self.state.tasks if t.task_id.startswith(prefix)]
        if len(matches) != 1:
            raise TaskNotFoundError(prefix)
        return matches[0]

    def visible_tasks(self) -> list[Task]:
        """Kolekcja po filtrach i sortowaniu z bieżącego stanu."""
        s = self.state
        filtered = query_tasks(s.tasks, s.category, s.status, s.priority, s.search, today=self.clock.today())
        return sort_tasks(filtered, s.sort_order)

    def statistics(self) -> TaskStatistics:
        return compute_statistics(self.state.tasks, self.clock.now(), self.clock.today())

    def view(self) -> TaskView:
        return TaskView(tasks=self.visible_tasks(), statistics=self.statistics(), state=self.state)

    # ----- mutacje -----

    def add_task(
        self,
        title: str,
        description: str | None = "",
        category: str = Category.PERSONAL.value,
        priority: str = Priority.MEDIUM.value,
        due_date: date | None = None,
    ) -> Task:
        """
            Tworzy nowe zadanie na początku kolekcji i zapisuje snapshot.

            - Walidacja: `title` po obcięciu białych znaków nie może być pusty.
            - `task_id` z IdProvider, `created_at` z Clock.

            :raises TaskValidationError: Gdy `title` jest pusty.
            :return: Utworzony obiekt `Task`.
        """
        title = (title or "").strip()
        if not title:
            logger.info("Odrzucono dodanie zadania: pusty tytuł")
            raise TaskValidationError("title", "Tytul nie moze byc pusty")

        task = Task(
            task_id=TaskId(self.id_provider.new_id()),
            title=title,
            description=(description or "").strip(),
            category=str(category),
            priority=str(priority),
            due_date=due_date,
            created_at=self.clock.now(),
        )
        self.state.tasks.insert(0, task)
        logger.info("Dodano zadanie %s (%s)", task.task_id, task.title)
        self._persist()
        return task

    def toggle_completion(self, task_id: TaskId) -> Optional[Task]:
        """
            Przełącza `completed`; ustawia `completed_at` na teraz albo czyści.

            Brak zadania -> None, bez zapisu. Dwukrotne wywołanie przywraca stan wyjściowy.
        """
        index = self._find(task_id)
        if index is None:
            return None
        task = self.state.tasks[index]
        completed = not task.completed
        toggled = replace(task, completed=completed, completed_at=self.clock.now() if completed else None)
        self.state.tasks[index] = toggled
        logger.info("Zadanie %s: completed=%s", task_id, completed)
        self._persist()
        return toggled

    def rename_task(self, task_id: TaskId, new_title: str) -> Optional[Task]:
        """
            Zmienia tytuł zadania.

            - Brak zadania albo tytuł bez zmian -> None, bez zapisu.
            :raises TaskValidationError: Gdy nowy tytuł jest pusty.
        """
        index = self._find(task_id)
        if index is None:
            return None
        new_title = (new_title or "").strip()
        if not new_title:
            logger.info("Odrzucono zmianę nazwy %s: pusty tytuł", task_id)
            raise TaskValidationError("title", "Tytul nie moze byc pusty")
        task = self.state.tasks[index]
        if new_title == task.title:
            return None
        renamed = replace(task, title=new_title)
        self.state.tasks[index] = renamed
        logger.info("Zmieniono nazwę %s: %r -> %r", task_id, task.title, new_title)
        self._persist()
        return renamed

    def delete_task(self, task_id: TaskId) -> bool:
        """Usuwa jedno zadanie po potwierdzeniu. Zwraca True, jeśli usunięto."""
        if self._find(task_id) is None:
            return False
        if not self.confirmer.confirm("Are you sure you want to delete this task?"):
            return False
        self.state.tasks = [t for t in self.state.tasks if t.task_id != task_id]
        self.state.selected.discard(task_id)
        logger.info("Usunięto zadanie %s", task_id)
        self._persist()
        return True

    def delete_many(self, task_ids: Iterable[TaskId]) -> int:
        """Usuwa wiele zadań po jednym potwierdzeniu. Zwraca liczbę usuniętych."""
        ids = set(task_ids)
        existing = [t for t in self.state.tasks if t.task_id in ids]
        if not existing:
            return 0
        if not self.confirmer.confirm(f"Delete {len(existing)} selected task(s)?"):
            return 0
        self.state.tasks = [t for t in self.state.tasks if t.task_id not in ids]
        self.state.selected -= ids
        logger.info("Usunięto %d zadań", len(existing))
        self._persist()
        return len(existing)

    def clear_completed(self) -> int:
        """Usuwa wszystkie ukończone zadania i czyści zaznaczenie. Zwraca liczbę usuniętych."""
        if not self.confirmer.confirm("Clear all completed tasks?"):
            return 0
        before = len(self.state.tasks)
        self.state.tasks = [t for t in self.state.tasks if not t.completed]
        self.state.selected.clear()
        removed = before - len(self.state.tasks)
        logger.info("Wyczyszczono %d ukończonych zadań", removed)
        self._persist()
        return removed

    # ----- zaznaczenie -----

    def toggle_selection(self, task_id: TaskId) -> bool:
        """Przełącza zaznaczenie; zwraca True, jeśli zadanie jest teraz zaznaczone."""
        if task_id in self.state.selected:
            self.state.selected.discard(task_id)
            return False
        if self._find(task_id) is None:
            return False
        self.state.selected.add(task_id)
        return True

    def select_all_visible(self) -> set[TaskId]:
        """
            Zaznacza wszystkie widoczne zadania; gdy są już dokładnie zaznaczone - odznacza.

            Porównanie przez równość zbiorów (nie tylko ich rozmiary).
        """
        visible = {t.task_id for t in self.visible_tasks()}
        if self.state.selected == visible:
            self.state.selected = set()
        else:
            self.state.selected = visible
        return set(self.state.selected)

    def delete_selected(self) -> int:
        if not self.state.selected:
            return 0
        return self.delete_many(set(self.state.selected))

    # ----- widok -----

    def set_filters(
        self,
        category: str | None = None,
        status: StatusFilter | str | None = None,
        priority: str | None = None,
        search: str | None = None,
    ) -> None:
        """Ustawia filtry; `None` zostawia bieżącą wartość."""
        if status is not None:
            try:
                self.state.status = StatusFilter(status)
            except ValueError:
                raise TaskValidationError("status", f"Nieznany filtr statusu: {status}")
        if category is not None:
            self.state.category = str(category)
        if priority is not None:
            self.state.priority = str(priority)
        if search is not None:
            self.state.search = search

    def set_sort_order(self, order: SortOrder | str) -> SortOrder:
        try:
            self.state.sort_order = SortOrder(order)
        except ValueError:
            raise TaskValidationError("sort", f"Nieznany tryb sortowania: {order}")
        return self.state.sort_order

    def cycle_sort_order(self) -> SortOrder:
        self.state.sort_order = self.state.sort_order.next()
        return self.state.sort_order

    def toggle_theme(self) -> Theme:
        self.state.theme = self.state.theme.toggled()
        self.theme_storage.save_theme(self.state.theme)
        return self.state.theme

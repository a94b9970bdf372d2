from taskboard.domain.task import Task
from taskboard.domain.enums import Theme
from typing import Iterable, Optional, Sequence

### COMMENTS
# ==========================================================
# Adapter pamięciowy storage (adapters/memory/storage.py).
# ==========================================================
# - Implementuje oba porty: TaskStorage i ThemeStorage.
# - Służy do testów i trybu `--backend memory` (brak trwałości między uruchomieniami).
# - Snapshot przechowywany jako krotka - zapis kopiuje, odczyt zwraca nową listę,
#   więc mutacje kolekcji w serwisie nie przeciekają do "storage".


class InMemoryStorage:
    """
        Inicjalizuje storage z opcjonalną kolekcją startowych zadań.
        :param initial: Iterable z obiektami Task; `None` = brak wpisu "tasks".
        :param theme: Opcjonalny zapisany motyw.
    """
    def __init__(self, initial: Iterable[Task] | None = None, theme: Theme | None = None) -> None:
        self._tasks: tuple[Task, ...] | None = tuple(initial) if initial is not None else None
        self._theme = theme
        self.saves = 0  # licznik zapisów snapshotu (przydatny w testach)

    def load(self) -> Optional[list[Task]]:
        if self._tasks is None:
            return None
        return list(self._tasks)

    def save(self, tasks: Sequence[Task]) -> None:
        self._tasks = tuple(tasks)
        self.saves += 1

    def load_theme(self) -> Optional[Theme]:
        return self._theme

    def save_theme(self, theme: Theme) -> None:
        self._theme = theme

from typing import Protocol, Optional, Sequence
from taskboard.domain.task import Task
from taskboard.domain.enums import Theme


### COMMENTS
# ==========================================================
# Kontrakt trwałości (ports/storage.py).
# ==========================================================
# Storage to prosty magazyn klucz-wartość z dwiema przestrzeniami nazw:
# - "tasks": pełny snapshot kolekcji zadań (zawsze cały, nigdy częściowo),
# - "theme": pojedyncza wartość {light, dark}.
# Adaptery (pamięć, pliki JSON, SQLite) mapują błędy techniczne na StorageError.
# Storage nie zawiera logiki biznesowej ani nie sortuje - kolejność snapshotu
# (najnowsze na początku) jest zachowywana 1:1.

TASKS_NAMESPACE = "tasks"
THEME_NAMESPACE = "theme"


class TaskStorage(Protocol):
    """Port odczytu/zapisu snapshotu kolekcji zadań."""

    def load(self) -> Optional[list[Task]]:
        """Wczytuje cały snapshot.

        Zwraca:
            Optional[list[Task]]: Zadania w zapisanej kolejności albo `None`,
            gdy w storage nie ma jeszcze wpisu "tasks".

        Wyjątki domenowe:
            StorageError: Storage niedostępny.
            TaskValidationError / TaskAlreadyExistsError: Uszkodzony snapshot.
        """

    def save(self, tasks: Sequence[Task]) -> None:
        """Zapisuje cały snapshot (nadpisuje poprzedni).

        Wyjątki domenowe:
            StorageError: Storage niedostępny. Brak ponowień ani kolejkowania.
        """


class ThemeStorage(Protocol):
    """Port odczytu/zapisu preferencji motywu."""

    def load_theme(self) -> Optional[Theme]:
        """Zwraca zapisany motyw albo `None`, gdy brak wpisu lub wartość jest nieznana."""

    def save_theme(self, theme: Theme) -> None:
        """Zapisuje motyw."""

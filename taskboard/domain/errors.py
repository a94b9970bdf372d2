

### COMMENTS
# ============================================
# Konwencja użycia błędów domenowych w projekcie
# ============================================
# - Adaptery storage:
#     * wykrywają zduplikowane ID i uszkodzone rekordy w snapshocie
#     * mapują błędy techniczne (OSError, SQLAlchemyError) na StorageError
#
# - Serwis:
#     * waliduje dane użytkownika i rzuca TaskValidationError
#     * mutacja na nieistniejącym ID to cichy no-op (nie błąd)
#     * TaskNotFoundError tylko przy jawnym pobraniu (get_task)
#
# - UI (CLI):
#     * łapie DomainError (lub konkretne klasy) i wyświetla przyjazny komunikat


class DomainError(Exception):
    """Bazowa klasa dla błędów domenowych.
    Umożliwia odróżnienie błędów domeny (logika aplikacji) od błędów technicznych.
    Nie powinna być rzucana bezpośrednio, używaj klas pochodnych.
    """

class TaskAlreadyExistsError(DomainError):
    """Rzucany, gdy wczytany snapshot zawiera dwa rekordy o tym samym `task_id`."""
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(self.__str__())
    def __str__(self):
        return f"Zadanie o ID {self.task_id} juz istnieje."

class TaskValidationError(DomainError):
    """Rzucany, gdy dane wejściowe nie spełniają reguł biznesowych dla zadania.
    Przykłady:
    - tytuł jest pusty (po obcięciu białych znaków),
    - nieznany filtr statusu albo tryb sortowania,
    - rekord w snapshocie nie daje się zdekodować.
    Zawiera nazwę pola (`field`) oraz komunikat (`message`) dla UI.
    """
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return f"Błąd walidacji pola '{self.field}': {self.message}"


class TaskNotFoundError(DomainError):
    """Rzucany przez `TaskService.get_task`, gdy żądane zadanie nie istnieje."""
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(self.__str__())
    def __str__(self):
        return f"Zadanie o ID {self.task_id} nie istnieje."


class StorageError(DomainError):
    """Storage niedostępny (I/O, baza). Nie jest obsługiwany w serwisie, propaguje do wywołującego."""

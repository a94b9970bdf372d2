from typing import Protocol

class Confirmer(Protocol):
    """Potwierdzenie użytkownika przed operacją destrukcyjną.
    Synchroniczne; `False` przerywa operację bez zmiany stanu."""
    def confirm(self, prompt: str) -> bool:
        pass

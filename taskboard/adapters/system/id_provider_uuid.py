from taskboard.ports.id_provider import IdProvider
from uuid import uuid4

class UuidIdProvider(IdProvider):
    """Nieprzezroczyste, unikalne ID zadań (UUID4 jako string)."""

    def new_id(self) -> str:
        return str(uuid4())

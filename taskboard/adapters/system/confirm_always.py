from taskboard.ports.confirmer import Confirmer

class AlwaysConfirm(Confirmer):
    """Potwierdza wszystko (tryb `--yes` i skrypty)."""

    def confirm(self, prompt: str) -> bool:
        return True

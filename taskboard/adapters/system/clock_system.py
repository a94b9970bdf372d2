from taskboard.ports.clock import Clock
from datetime import date, datetime, timezone

class SystemClock(Clock):
    """Adapter systemowy korzystający z zegara maszyny."""

    def now(self) -> datetime:
        """Zwraca aktualny czas w strefie UTC (aware)."""
        return datetime.now(timezone.utc)

    def today(self) -> date:
        """Dzisiejsza data w lokalnej strefie użytkownika."""
        return datetime.now().astimezone().date()

from typing import Protocol
from datetime import date, datetime

class Clock(Protocol):
    """Abstrakcja źródła czasu."""
    def now(self) -> datetime:
        """Bieżący czas w strefie UTC (aware)."""

    def today(self) -> date:
        """Dzisiejsza data kalendarzowa użytkownika (bez godziny)."""

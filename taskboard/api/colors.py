from enum import Enum

class TaskColor(Enum):
    RED = "[red]"
    ORANGE = "[#f39c12]"
    GREEN = "[green]"
    DIM = "[dim]"
    RESET = "[/]"

    def __str__(self):
        return self.value


PRIORITY_COLORS = {
    "high": "#e74c3c",
    "medium": "#f39c12",
    "low": "#2ecc71",
}

CATEGORY_COLORS = {
    "work": "#3498db",
    "personal": "#2ecc71",
    "shopping": "#9b59b6",
    "health": "#e74c3c",
    "learning": "#f39c12",
}

DEFAULT_COLOR = "#95a5a6"


def priority_color(priority: str) -> str:
    return PRIORITY_COLORS.get(str(priority), DEFAULT_COLOR)


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(str(category), DEFAULT_COLOR)

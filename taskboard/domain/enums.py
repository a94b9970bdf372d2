from enum import Enum

ALL = "all"


class Category(str, Enum):
    WORK = "work"
    PERSONAL = "personal"
    SHOPPING = "shopping"
    HEALTH = "health"
    LEARNING = "learning"

    def __str__(self):
        return self.value


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    def __str__(self):
        return self.value

    @property
    def weight(self) -> int:
        return PRIORITY_WEIGHTS[self.value]


PRIORITY_WEIGHTS = {"high": 3, "medium": 2, "low": 1}


def priority_weight(priority: str) -> int:
    """Waga priorytetu do sortowania; nieznany priorytet = 0."""
    return PRIORITY_WEIGHTS.get(str(priority), 0)


class StatusFilter(str, Enum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"
    TODAY = "today"

    def __str__(self):
        return self.value


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRIORITY = "priority"
    DUE_DATE = "dueDate"

    def __str__(self):
        return self.value

    def next(self) -> "SortOrder":
        """Kolejny tryb sortowania (newest -> oldest -> priority -> dueDate -> newest)."""
        orders = list(SortOrder)
        return orders[(orders.index(self) + 1) % len(orders)]


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def __str__(self):
        return self.value

    def toggled(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK

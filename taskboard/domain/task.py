from typing import NewType
from datetime import date, datetime
from dataclasses import dataclass

from taskboard.domain.enums import Category, Priority

TaskId = NewType("TaskId", str)

@dataclass(frozen=True)
class Task():
    """
    Model domenowy pojedynczego zadania; niemutowalny; zmiana = nowa instancja
    (`dataclasses.replace`). Czas (UTC) i ID dostarcza serwis przez porty Clock/IdProvider.

    `category` i `priority` to zwykłe stringi: znane wartości są w enumach
    `Category`/`Priority`, ale dowolny string jest akceptowany.
    Niezmiennik: `completed_at is not None` <=> `completed`.
    """
    task_id: TaskId
    title: str
    created_at: datetime
    description: str = ""
    category: str = Category.PERSONAL.value
    priority: str = Priority.MEDIUM.value
    due_date: date | None = None
    completed: bool = False
    completed_at: datetime | None = None



### COMMENTS
# ======================================
# Kolejność pól
# ======================================
# Najpierw pola obowiązkowe (task_id, title, created_at), potem opcjonalne z domyślną.
# created_at nie ma wartości domyślnej - byłaby liczona przy imporcie, a nie przy tworzeniu.
#
# due_date to data kalendarzowa (bez godziny), created_at/completed_at to znaczniki czasu UTC.

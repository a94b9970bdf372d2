from taskboard.domain.task import Task, TaskId
from taskboard.domain.errors import TaskAlreadyExistsError, TaskValidationError
from taskboard.domain.enums import Category, Priority, Theme
from datetime import date, datetime, timezone
from typing import Iterable, Optional
import json


### COMMENTS
# ==========================================================
# Format snapshotu (adapters/snapshot.py), wspólny dla adapterów JSON i SQL.
# ==========================================================
# - Snapshot to tablica JSON rekordów o stałych nazwach pól:
#   id, title, description, category, priority, dueDate, completed, createdAt, completedAt
# - Znaczniki czasu: ISO8601 UTC z sufiksem 'Z'; dueDate: 'YYYY-MM-DD' albo null.
# - Nieznane wartości category/priority są zachowywane (dowolny string).
# - Kolejność rekordów = kolejność kolekcji (najnowsze pierwsze).


def _encode_dt(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")

def _parse_utc_z(s: str) -> datetime:
    """Parsuje datę ISO8601; 'Z' i offsety normalizowane do UTC (aware)."""
    if not isinstance(s, str):
        raise ValueError(f"expected ISO8601 string, got {s!r}")
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def _parse_due(raw) -> Optional[date]:
    if raw in (None, ""):
        return None
    # tolerujemy pełny timestamp, liczy się tylko data
    return date.fromisoformat(str(raw)[:10])


def encode_task(task: Task) -> dict:
    return {
        "id": str(task.task_id),
        "title": task.title,
        "description": task.description,
        "category": str(task.category),  # enum -> str
        "priority": str(task.priority),
        "dueDate": task.due_date.isoformat() if task.due_date else None,
        "completed": task.completed,
        "createdAt": _encode_dt(task.created_at),
        "completedAt": _encode_dt(task.completed_at) if task.completed_at else None,
    }

def _text(row: dict, key: str, default: str) -> str:
    value = row.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {value!r}")
    return value or default

def decode_task(row: dict) -> Task:
    title = row["title"]
    if not isinstance(title, str) or not title.strip():
        raise ValueError(f"'title' must be a non-empty string, got {title!r}")
    completed = row.get("completed", False)
    if not isinstance(completed, bool):
        raise ValueError(f"'completed' must be a boolean, got {completed!r}")
    raw_completed_at = row.get("completedAt")
    completed_at = _parse_utc_z(raw_completed_at) if completed and raw_completed_at else None
    if completed and completed_at is None:
        # ukończone bez znacznika - przyjmujemy czas utworzenia, żeby zachować niezmiennik
        completed_at = _parse_utc_z(row["createdAt"])

    return Task(
        task_id=TaskId(str(row["id"])),
        title=title,
        description=_text(row, "description", ""),
        category=_text(row, "category", Category.PERSONAL.value),
        priority=_text(row, "priority", Priority.MEDIUM.value),
        due_date=_parse_due(row.get("dueDate")),
        completed=completed,
        created_at=_parse_utc_z(row["createdAt"]),
        completed_at=completed_at,
    )


def encode_snapshot(tasks: Iterable[Task]) -> str:
    return json.dumps([encode_task(t) for t in tasks], ensure_ascii=False)

def decode_snapshot(text: str, source: str = "tasks") -> list[Task]:
    """Dekoduje snapshot; rzuca błędy domenowe przy uszkodzonych danych.

    :param text: Tekst JSON (tablica rekordów).
    :param source: Nazwa źródła do komunikatów błędów.
    :raises TaskValidationError: Niepoprawny JSON albo rekord.
    :raises TaskAlreadyExistsError: Duplikat `id` w snapshocie.
    """
    try:
        records = json.loads(text)
    except json.JSONDecodeError as e:
        raise TaskValidationError("snapshot", f"{source}: invalid JSON: {e}")
    if not isinstance(records, list):
        raise TaskValidationError("snapshot", f"{source}: expected a JSON array")

    tasks: list[Task] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        try:
            task = decode_task(record)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise TaskValidationError("record", f"{source}[{index}]: {e}")
        if task.task_id in seen:
            raise TaskAlreadyExistsError(task.task_id)
        seen.add(task.task_id)
        tasks.append(task)
    return tasks


def encode_theme(theme: Theme) -> str:
    return json.dumps(str(theme))

def decode_theme(text: str) -> Optional[Theme]:
    try:
        return Theme(json.loads(text))
    except (json.JSONDecodeError, ValueError):
        # localStorage trzymał gołą wartość, nie JSON
        try:
            return Theme(text.strip())
        except ValueError:
            return None

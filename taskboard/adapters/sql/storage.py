from __future__ import annotations
from typing import Optional, Sequence
import logging
import sqlalchemy as db
from sqlalchemy.exc import SQLAlchemyError
from pathlib import Path
from taskboard.ports.storage import TaskStorage, ThemeStorage, TASKS_NAMESPACE, THEME_NAMESPACE
from taskboard.domain.task import Task
from taskboard.domain.enums import Theme
from taskboard.domain.errors import StorageError
from taskboard.adapters.snapshot import encode_snapshot, decode_snapshot, encode_theme, decode_theme

logger = logging.getLogger(__name__)


class SqlStorage(TaskStorage, ThemeStorage):
    """Storage klucz-wartość w bazie SQL (domyślnie SQLite).

    Tabela `storage(namespace PK, value TEXT)`; wartość to ten sam tekst JSON,
    który zapisuje adapter plikowy.
    """

    def __init__(self, url: str | Path) -> None:
        """
        url: np. 'sqlite:///data/taskboard.db' lub Path do pliku (zostanie zrobiony URL)
        """
        if isinstance(url, Path):
            try:
                url.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError(str(e))
            db_url = f"sqlite:///{url}"
        else:
            db_url = url

        self.engine = db.create_engine(db_url, future=True)
        self.meta = db.MetaData()

        self.storage = db.Table(
            "storage",
            self.meta,
            db.Column("namespace", db.String, primary_key=True),
            db.Column("value", db.Text, nullable=False),
        )

        # utwórz tabelę jeśli nie istnieje
        try:
            self.meta.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(str(e))

    def _get(self, namespace: str) -> Optional[str]:
        stmt = db.select(self.storage.c.value).where(self.storage.c.namespace == namespace)
        try:
            with self.engine.connect() as conn:
                return conn.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Odczyt '%s' nie powiódł się: %s", namespace, e)
            raise StorageError(str(e))

    def _put(self, namespace: str, value: str) -> None:
        update = (
            db.update(self.storage)
            .where(self.storage.c.namespace == namespace)
            .values(value=value)
        )
        try:
            with self.engine.begin() as conn:
                result = conn.execute(update)
                if result.rowcount == 0:
                    conn.execute(db.insert(self.storage).values(namespace=namespace, value=value))
        except SQLAlchemyError as e:
            logger.error("Zapis '%s' nie powiódł się: %s", namespace, e)
            raise StorageError(str(e))

    def load(self) -> Optional[list[Task]]:
        text = self._get(TASKS_NAMESPACE)
        if text is None:
            return None
        tasks = decode_snapshot(text, source=f"{self.engine.url.database}:{TASKS_NAMESPACE}")
        logger.debug("Wczytano %d zadań z %s", len(tasks), self.engine.url)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        self._put(TASKS_NAMESPACE, encode_snapshot(tasks))
        logger.debug("Zapisano %d zadań do %s", len(tasks), self.engine.url)

    def load_theme(self) -> Optional[Theme]:
        text = self._get(THEME_NAMESPACE)
        if text is None:
            return None
        return decode_theme(text)

    def save_theme(self, theme: Theme) -> None:
        self._put(THEME_NAMESPACE, encode_theme(theme))

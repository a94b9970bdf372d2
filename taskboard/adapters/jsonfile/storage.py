from taskboard.ports.storage import TaskStorage, ThemeStorage, TASKS_NAMESPACE, THEME_NAMESPACE
from taskboard.domain.task import Task
from taskboard.domain.errors import StorageError
from taskboard.domain.enums import Theme
from taskboard.adapters.snapshot import encode_snapshot, decode_snapshot, encode_theme, decode_theme
from pathlib import Path
from typing import Optional, Sequence
import logging
import os

logger = logging.getLogger(__name__)


class JsonFileStorage(TaskStorage, ThemeStorage):
    """Storage plikowy: jeden dokument JSON na przestrzeń nazw
    (`<dir>/tasks.json`, `<dir>/theme.json`). Zapis atomowy (plik .swap + os.replace)."""

    def __init__(self, directory: Path) -> None:
        """Tworzy katalog danych, jeśli nie istnieje."""
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(str(e))

    def _path(self, namespace: str) -> Path:
        return self.directory / f"{namespace}.json"

    def _read(self, namespace: str) -> Optional[str]:
        path = self._path(namespace)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Nie można odczytać %s: %s", path, e)
            raise StorageError(str(e))

    def _atomic_write(self, namespace: str, text: str) -> None:
        path = self._path(namespace)
        tmp = path.with_suffix(path.suffix + ".swap")
        try:
            with tmp.open("w", encoding="utf-8", newline="\n") as f:
                f.write(text)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            logger.error("Nie można zapisać %s: %s", path, e)
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                logger.debug("Nie usunięto pliku tymczasowego %s", tmp)
            raise StorageError(str(e))

    def load(self) -> Optional[list[Task]]:
        """Wczytuje snapshot; brak pliku -> None."""
        text = self._read(TASKS_NAMESPACE)
        if text is None or not text.strip():
            return None
        tasks = decode_snapshot(text, source=self._path(TASKS_NAMESPACE).name)
        logger.debug("Wczytano %d zadań z %s", len(tasks), self.directory)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        """Zapisuje cały snapshot atomowo."""
        self._atomic_write(TASKS_NAMESPACE, encode_snapshot(tasks))
        logger.debug("Zapisano %d zadań do %s", len(tasks), self.directory)

    def load_theme(self) -> Optional[Theme]:
        text = self._read(THEME_NAMESPACE)
        if text is None:
            return None
        return decode_theme(text)

    def save_theme(self, theme: Theme) -> None:
        self._atomic_write(THEME_NAMESPACE, encode_theme(theme))

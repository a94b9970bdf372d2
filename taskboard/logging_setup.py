from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str | int = logging.WARNING, log_file: Path | None = None) -> None:
    """
    Konfiguruje logowanie:
    - RichHandler na stderr (poziom `level`),
    - opcjonalnie pełny log do pliku (DEBUG).

    Wywołać RAZ, na starcie CLI.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if log_file else level)

    # bez duplikatów przy ponownym wywołaniu (np. testy CLI)
    for h in list(root.handlers):
        root.removeHandler(h)

    console = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    console.setLevel(level)
    root.addHandler(console)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root.addHandler(fh)

    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)

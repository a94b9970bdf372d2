from taskboard.domain.errors import TaskNotFoundError, TaskValidationError, StorageError, DomainError
from taskboard.domain.enums import ALL, Category, Priority, SortOrder, StatusFilter
from taskboard.services.task_service import TaskService
from taskboard.adapters.memory.storage import InMemoryStorage
from taskboard.adapters.jsonfile.storage import JsonFileStorage
from taskboard.adapters.sql.storage import SqlStorage
from taskboard.adapters.system.clock_system import SystemClock
from taskboard.adapters.system.id_provider_uuid import UuidIdProvider
from taskboard.adapters.system.confirm_always import AlwaysConfirm
from taskboard.api.render import render_list, render_stats, render_task, short_id
from taskboard.api.shell import TaskShell
from taskboard.config import BACKENDS, Settings
from taskboard.logging_setup import setup_logging
from typer import Argument, Exit, Option, Typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# CLI (Typer + Rich) - warstwa prezentacji dla listy zadań.
# ==========================================================
# Rola:
# - Mapuje komendy na metody TaskService (add/list/done/rename/rm/...).
# - Wyświetla wyniki (tabele, panele, wykresy) i pyta o potwierdzenie.
# - Łapie DomainError i drukuje przyjazne komunikaty (kod wyjścia 1).
#
# Zasady:
# - Zero logiki biznesowej - deleguj do TaskService.
# - Jednorazowy bootstrap zależności (storage + service) w callbacku.
# - Jedna komenda = jedna operacja + jeden render.


app = Typer(help="Taskboard - lista zadań w terminalu")
console = Console()

service: TaskService | None = None  # ustawimy w callbacku


class RichConfirmer:
    """Potwierdzenie przez rich.prompt.Confirm (domyślnie: nie)."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def confirm(self, prompt: str) -> bool:
        return Confirm.ask(prompt, console=self.console, default=False)


def build_service(settings: Settings, assume_yes: bool = False) -> TaskService:
    """Tworzy serwis na bazie wybranego adaptera.
    - memory -> InMemory (bez trwałości)
    - json -> katalog z plikami tasks.json / theme.json
    - sql -> SQLite (taskboard.db w katalogu danych)
    """
    if settings.backend == "memory":
        storage = InMemoryStorage()
    elif settings.backend == "sql":
        storage = SqlStorage(settings.sql_path)
    else:
        storage = JsonFileStorage(settings.data_dir)
    confirmer = AlwaysConfirm() if assume_yes else RichConfirmer(console)
    return TaskService(storage, storage, UuidIdProvider(), SystemClock(), confirmer)


def error_panel(e: DomainError, title: str = "Błąd domenowy", hint: str | None = None) -> None:
    body = f"❌ {escape(str(e))}"
    if hint:
        body += f"\n[dim]{hint}[/]"
    console.print(Panel.fit(body, title=title, border_style="red"))


def handle_domain_error(e: DomainError) -> None:
    """Mapuje DomainError na panel i kod wyjścia."""
    if isinstance(e, TaskValidationError):
        error_panel(e, "Błąd walidacji", "Podpowiedź: użyj np.: taskboard add 'Tytuł' -d 'Opis'")
    elif isinstance(e, TaskNotFoundError):
        error_panel(e, "Nie znaleziono", "Użyj 'taskboard list', żeby znaleźć poprawne ID")
    elif isinstance(e, StorageError):
        logger.error("Storage niedostępny: %s", e)
        error_panel(e, "Błąd zapisu/odczytu")
    else:
        error_panel(e)
    raise Exit(code=1)


def current() -> TaskService:
    if service is None:
        raise RuntimeError("Serwis nie został zainicjalizowany")
    return service


@app.callback()
def main(
    data_dir: Optional[Path] = Option(None, "--data-dir", "-D", help="Katalog danych (nadpisuje TASKBOARD_DATA_DIR)"),
    backend: Optional[str] = Option(None, "--backend", "-b", help=f"Storage: {', '.join(BACKENDS)}"),
    yes: bool = Option(False, "--yes", "-y", help="Nie pytaj o potwierdzenie operacji destrukcyjnych"),
    verbose: bool = Option(False, "--verbose", "-v", help="Logi na poziomie INFO"),
) -> None:
    """Bootstrap zależności na starcie procesu CLI."""
    global service
    settings = Settings.from_env().override(data_dir=data_dir, backend=backend)
    if settings.backend not in BACKENDS:
        console.print(f"[red]❌ Nieznany backend: {escape(settings.backend)}[/]")
        raise Exit(code=2)
    setup_logging("INFO" if verbose else settings.log_level, settings.log_file)

    try:
        service = build_service(settings, assume_yes=yes)
        service.load()
    except DomainError as e:
        handle_domain_error(e)


ID_HELP = "Pełne ID albo jednoznaczny prefiks; nieznane ID kończy się kodem 1"


def resolve_id(task_id: str):
    """Pełne ID albo jednoznaczny prefiks (jak skrócone ID z tabeli)."""
    return current().find_by_prefix(task_id).task_id


@app.command("add")
def add(
    title: str,
    desc: str = Option("", "--desc", "-d"),
    category: str = Option(Category.PERSONAL.value, "--category", "-c"),
    priority: Priority = Option(Priority.MEDIUM, "--priority", "-p"),
    due: Optional[datetime] = Option(None, "--due", formats=["%Y-%m-%d"], help="Termin YYYY-MM-DD"),
) -> None:
    """
    Dodaje nowe zadanie (na początek listy).

    - Sukces: Panel „✅ Dodano zadanie”, pokaż skrócone ID.
    - Błąd walidacji (pusty tytuł): czerwony Panel, kod 1.
    """
    try:
        task = current().add_task(
            title,
            description=desc,
            category=category,
            priority=priority.value,
            due_date=due.date() if due else None,
        )
    except DomainError as e:
        handle_domain_error(e)
        return
    console.print(Panel.fit(
        f"✅ Dodano zadanie\n"
        f"[cyan]ID:[/cyan] {short_id(task.task_id)}\n"
        f"[dim]Title:[/dim] {escape(task.title)}"
        + (f"\n[dim]Description:[/dim] {escape(task.description)}" if task.description else ""),
        title="Sukces",
        border_style="green",
    ))


@app.command("list")
def list_cmd(
    category: str = Option(ALL, "--category", "-c"),
    status: StatusFilter = Option(StatusFilter.ALL, "--status", "-s"),
    priority: str = Option(ALL, "--priority", "-p"),
    search: str = Option("", "--search", "-q"),
    sort: SortOrder = Option(SortOrder.NEWEST, "--sort", "-o"),
) -> None:
    """Listuje zadania po filtrach (AND) i w wybranej kolejności."""
    svc = current()
    try:
        svc.set_filters(category=category, status=status, priority=priority, search=search)
        svc.set_sort_order(sort)
        render_list(console, svc.view(), svc.clock.today())
    except DomainError as e:
        handle_domain_error(e)


@app.command("done")
def done(task_id: str = Argument(..., help=ID_HELP)) -> None:
    """Przełącza stan ukończenia zadania (ukończone <-> oczekujące)."""
    try:
        task = current().toggle_completion(resolve_id(task_id))
    except DomainError as e:
        handle_domain_error(e)
        return
    if task is None:
        return
    state = "ukończone" if task.completed else "oczekujące"
    console.print(Panel.fit(
        f"✅ Sukces! ID: {short_id(task.task_id)}\n[dim]Title:[/dim] {escape(task.title)}\nStatus: {state}",
        title="Sukces",
        border_style="green",
    ))


@app.command("rename")
def rename(task_id: str = Argument(..., help=ID_HELP), title: str = Argument(...)) -> None:
    """Zmienia tytuł zadania (bez zmian, gdy tytuł jest taki sam)."""
    try:
        task = current().rename_task(resolve_id(task_id), title)
    except DomainError as e:
        handle_domain_error(e)
        return
    if task is None:
        console.print("[dim]Bez zmian[/]")
        return
    console.print(Panel.fit(
        f"✏️ Zmieniono tytuł\nID: {short_id(task.task_id)}\n[dim]Title:[/dim] {escape(task.title)}",
        title="Sukces",
        border_style="green",
    ))


@app.command("rm")
def rm(task_id: str = Argument(..., help=ID_HELP)) -> None:
    """Usuwa zadanie (po potwierdzeniu)."""
    try:
        removed = current().delete_task(resolve_id(task_id))
    except DomainError as e:
        handle_domain_error(e)
        return
    if not removed:
        console.print("[dim]Anulowano[/]")
        return
    console.print(Panel.fit(
        f"🟡 Zadanie usunięte\nID: {short_id(task_id)}",
        title="Usunięto",
        border_style="yellow",
    ))


@app.command("rm-many")
def rm_many(task_ids: list[str] = Argument(..., help="ID (lub prefiksy) zadań")) -> None:
    """Usuwa wiele zadań po jednym potwierdzeniu."""
    try:
        removed = current().delete_many([resolve_id(t) for t in task_ids])
    except DomainError as e:
        handle_domain_error(e)
        return
    console.print(Panel.fit(f"🟡 Usunięto {removed} zadań", title="Usunięto", border_style="yellow"))


@app.command("clear-completed")
def clear_completed() -> None:
    """Usuwa wszystkie ukończone zadania (po potwierdzeniu)."""
    try:
        removed = current().clear_completed()
    except DomainError as e:
        handle_domain_error(e)
        return
    console.print(Panel.fit(f"🟡 Usunięto {removed} ukończonych zadań", title="Usunięto", border_style="yellow"))


@app.command("show")
def show(task_id: str = Argument(..., help=ID_HELP)) -> None:
    """Pokazuje szczegóły pojedynczego zadania."""
    svc = current()
    try:
        task = svc.get_task(resolve_id(task_id))
    except DomainError as e:
        handle_domain_error(e)
        return
    render_task(console, task, svc.clock.today())


@app.command("stats")
def stats() -> None:
    """Statystyki całej kolekcji i wykresy kategorii / priorytetów."""
    render_stats(console, current().statistics())


@app.command("theme")
def theme(toggle: bool = Option(False, "--toggle", "-t", help="Przełącz jasny/ciemny")) -> None:
    """Pokazuje (lub przełącza) zapisany motyw."""
    svc = current()
    if toggle:
        try:
            svc.toggle_theme()
        except DomainError as e:
            handle_domain_error(e)
    console.print(f"Motyw: [bold]{svc.state.theme}[/]")


@app.command("shell")
def shell() -> None:
    """Tryb interaktywny: zaznaczanie, filtry i sortowanie w jednej sesji."""
    TaskShell(current(), console).run()


@app.command("demo")
def demo() -> None:
    """
    Pokazowy przebieg w jednym procesie (InMemory, bez pytań o potwierdzenie).
    """
    svc = TaskService(InMemoryStorage(), InMemoryStorage(), UuidIdProvider(), SystemClock(), AlwaysConfirm())
    console.print(Panel.fit("🚀 Start demonstracji", border_style="cyan"))

    today = svc.clock.today()
    svc.add_task("Buy milk", description="2% lactose-free", category="shopping", priority="low", due_date=today)
    call = svc.add_task("Call mom", description="Sunday afternoon", category="personal", priority="high")
    book = svc.add_task("Read a book", description="DDD chapter 3", category="learning")
    svc.add_task("Finish report", category="work", priority="high", due_date=today)

    console.print("\n📋 Lista po utworzeniu:")
    render_list(console, svc.view(), today)

    svc.toggle_completion(call.task_id)
    svc.delete_task(book.task_id)
    svc.set_sort_order(SortOrder.PRIORITY)
    console.print("\n📋 Lista po zmianach (sort: priority):")
    render_list(console, svc.view(), today)
    render_stats(console, svc.statistics())

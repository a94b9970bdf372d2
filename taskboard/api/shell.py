from taskboard.domain.errors import DomainError, TaskNotFoundError
from taskboard.domain.task import TaskId
from taskboard.services.task_service import TaskService
from taskboard.api.render import render_list, render_stats, render_task, short_id
from rich.console import Console
from rich.markup import escape
from collections.abc import Callable
import logging
import shlex

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# Tryb interaktywny (api/shell.py) - jawny dispatch komend.
# ==========================================================
# - Każda linia = jedna komenda = jedno wywołanie serwisu + jeden render.
# - Zaznaczenie (selection set) żyje tylko w czasie sesji.
# - DomainError z komendy jest pokazywany i sesja trwa dalej.

ShellHandler = Callable[["TaskShell", list[str]], None]


class TaskShell:
    """Interaktywna pętla nad jednym TaskService."""

    def __init__(self, service: TaskService, console: Console) -> None:
        self.service = service
        self.console = console
        self._handlers: dict[str, ShellHandler] = {}
        self._help: dict[str, str] = {}
        self._register_defaults()

    def register(self, name: str, handler: ShellHandler, help_text: str, aliases: list[str] | None = None) -> None:
        self._handlers[name] = handler
        self._help[name] = help_text
        for alias in aliases or []:
            self._handlers[alias] = handler

    def render(self) -> None:
        render_list(self.console, self.service.view(), self.service.clock.today())

    def handle(self, line: str) -> bool:
        """Obsługuje jedną linię. Zwraca False, gdy sesja ma się zakończyć."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]❌ {escape(str(e))}[/]")
            return True
        if not parts:
            return True

        name, args = parts[0].lower(), parts[1:]
        if name in ("quit", "exit", "q"):
            return False

        handler = self._handlers.get(name)
        if handler is None:
            self.console.print(f"[red]Nieznana komenda: {escape(name)}[/] [dim](użyj 'help')[/]")
            return True

        try:
            handler(self, args)
        except DomainError as e:
            logger.info("Komenda %s odrzucona: %s", name, e)
            self.console.print(f"[red]❌ {escape(str(e))}[/]")
        return True

    def run(self) -> None:
        self.render()
        while True:
            try:
                line = self.console.input("[bold cyan]taskboard>[/] ")
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break
            if not self.handle(line):
                break

    def resolve(self, args: list[str]) -> TaskId:
        if not args:
            raise TaskNotFoundError("")
        return self.service.find_by_prefix(args[0]).task_id

    def _register_defaults(self) -> None:
        self.register("help", cmd_help, "lista komend", aliases=["?"])
        self.register("list", cmd_list, "pokaż zadania", aliases=["ls"])
        self.register("add", cmd_add, "add <tytuł> [opis] - dodaj zadanie")
        self.register("done", cmd_done, "done <id> - przełącz ukończenie")
        self.register("rename", cmd_rename, "rename <id> <tytuł> - zmień tytuł")
        self.register("rm", cmd_rm, "rm <id> - usuń zadanie")
        self.register("select", cmd_select, "select <id> - przełącz zaznaczenie")
        self.register("select-all", cmd_select_all, "zaznacz/odznacz wszystkie widoczne")
        self.register("rm-selected", cmd_rm_selected, "usuń zaznaczone")
        self.register("clear-completed", cmd_clear_completed, "usuń ukończone")
        self.register("category", cmd_category, "category <nazwa|all> - filtr kategorii")
        self.register("status", cmd_status, "status <all|pending|completed|today> - filtr statusu")
        self.register("priority", cmd_priority, "priority <high|medium|low|all> - filtr priorytetu")
        self.register("search", cmd_search, "search [tekst] - szukaj w tytule i opisie")
        self.register("sort", cmd_sort, "sort [newest|oldest|priority|dueDate] - bez argumentu: następny tryb")
        self.register("show", cmd_show, "show <id> - szczegóły zadania")
        self.register("stats", cmd_stats, "statystyki")
        self.register("theme", cmd_theme, "przełącz motyw")

    def build_help(self) -> str:
        lines = ["Dostępne komendy:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        lines.append("  quit - wyjście")
        return "\n".join(lines)


def cmd_help(shell: TaskShell, args: list[str]) -> None:
    shell.console.print(escape(shell.build_help()))


def cmd_list(shell: TaskShell, args: list[str]) -> None:
    shell.render()


def cmd_add(shell: TaskShell, args: list[str]) -> None:
    title = args[0] if args else ""
    description = " ".join(args[1:])
    task = shell.service.add_task(title, description=description)
    shell.console.print(f"✅ Dodano zadanie [cyan]{short_id(task.task_id)}[/]")
    shell.render()


def cmd_done(shell: TaskShell, args: list[str]) -> None:
    shell.service.toggle_completion(shell.resolve(args))
    shell.render()


def cmd_rename(shell: TaskShell, args: list[str]) -> None:
    shell.service.rename_task(shell.resolve(args), " ".join(args[1:]))
    shell.render()


def cmd_rm(shell: TaskShell, args: list[str]) -> None:
    shell.service.delete_task(shell.resolve(args))
    shell.render()


def cmd_select(shell: TaskShell, args: list[str]) -> None:
    shell.service.toggle_selection(shell.resolve(args))
    shell.render()


def cmd_select_all(shell: TaskShell, args: list[str]) -> None:
    shell.service.select_all_visible()
    shell.render()


def cmd_rm_selected(shell: TaskShell, args: list[str]) -> None:
    removed = shell.service.delete_selected()
    shell.console.print(f"🟡 Usunięto {removed} zadań")
    shell.render()


def cmd_clear_completed(shell: TaskShell, args: list[str]) -> None:
    removed = shell.service.clear_completed()
    shell.console.print(f"🟡 Usunięto {removed} ukończonych zadań")
    shell.render()


def cmd_category(shell: TaskShell, args: list[str]) -> None:
    shell.service.set_filters(category=args[0] if args else "all")
    shell.render()


def cmd_status(shell: TaskShell, args: list[str]) -> None:
    shell.service.set_filters(status=args[0] if args else "all")
    shell.render()


def cmd_priority(shell: TaskShell, args: list[str]) -> None:
    shell.service.set_filters(priority=args[0] if args else "all")
    shell.render()


def cmd_search(shell: TaskShell, args: list[str]) -> None:
    shell.service.set_filters(search=" ".join(args))
    shell.render()


def cmd_sort(shell: TaskShell, args: list[str]) -> None:
    if args:
        shell.service.set_sort_order(args[0])
    else:
        shell.service.cycle_sort_order()
    shell.render()


def cmd_show(shell: TaskShell, args: list[str]) -> None:
    task = shell.service.get_task(shell.resolve(args))
    render_task(shell.console, task, shell.service.clock.today())


def cmd_stats(shell: TaskShell, args: list[str]) -> None:
    render_stats(shell.console, shell.service.statistics())


def cmd_theme(shell: TaskShell, args: list[str]) -> None:
    theme = shell.service.toggle_theme()
    shell.console.print(f"Motyw: [bold]{theme}[/]")
    shell.render()

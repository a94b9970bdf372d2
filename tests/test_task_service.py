from taskboard.adapters.memory.storage import InMemoryStorage
from taskboard.adapters.system.id_provider_uuid import UuidIdProvider
from taskboard.services.task_service import TaskService
from taskboard.domain.task import TaskId
from taskboard.domain.enums import SortOrder, StatusFilter, Theme
from taskboard.domain.errors import TaskNotFoundError, TaskValidationError
from fakes import FakeClock, FakeConfirmer, FakeIdProvider
from datetime import datetime, timedelta, timezone
import uuid
import pytest


def test_create_task(service, storage):
    # Act
    task = service.add_task("Kup mleko", description="2%", category="shopping", priority="low")

    # Assert
    assert service.state.tasks == [task]
    assert task.title == "Kup mleko"
    assert task.completed is False
    assert task.completed_at is None
    assert storage.load() == [task]
    assert storage.saves == 1


def test_create_strips_title_and_description(service):
    task = service.add_task("  Kup mleko  ", description="  opis ")
    assert task.title == "Kup mleko"
    assert task.description == "opis"


def test_new_tasks_are_prepended(service):
    a = service.add_task("A")
    b = service.add_task("B")
    assert [t.task_id for t in service.state.tasks] == [b.task_id, a.task_id]


@pytest.mark.parametrize("title", ["", "   ", None])
def test_add_rejects_empty_title(service, storage, title):
    service.add_task("A")

    with pytest.raises(TaskValidationError) as err:
        service.add_task(title)

    assert err.value.field == "title"
    assert len(service.state.tasks) == 1
    assert storage.saves == 1


def test_load_absent_snapshot_gives_empty_collection(service):
    assert service.state.tasks == []
    assert service.state.theme is Theme.LIGHT


def test_load_existing_snapshot_keeps_order(clock, confirmer, make_task):
    tasks = [make_task("b", "B", minutes=5), make_task("a", "A")]
    storage = InMemoryStorage(tasks, theme=Theme.DARK)
    svc = TaskService(storage, storage, FakeIdProvider(), clock, confirmer)

    svc.load()

    assert svc.state.tasks == tasks
    assert svc.state.theme is Theme.DARK


def test_get_returns_existing_task(service):
    t1 = service.add_task("A")
    got = service.get_task(t1.task_id)
    assert got == t1


def test_get_raises_on_missing(service):
    with pytest.raises(TaskNotFoundError):
        service.get_task(TaskId("non-existent-id"))


def test_find_by_prefix(service):
    service.add_task("A")
    b = service.add_task("B")
    assert service.find_by_prefix("id-2") == b
    with pytest.raises(TaskNotFoundError):
        service.find_by_prefix("id-")  # niejednoznaczny prefiks


def test_toggle_completion_sets_and_clears_completed_at(service, clock):
    t = service.add_task("A")
    clock.advance(hours=1)

    done = service.toggle_completion(t.task_id)
    assert done.completed is True
    assert done.completed_at == clock.fixed

    undone = service.toggle_completion(t.task_id)
    assert undone.completed is False
    assert undone.completed_at is None


def test_toggle_twice_restores_original_state(service):
    t = service.add_task("A")
    service.toggle_completion(t.task_id)
    service.toggle_completion(t.task_id)
    assert service.get_task(t.task_id) == t


def test_toggle_missing_id_is_noop(service, storage):
    a = service.add_task("A")
    b = service.add_task("B")
    before = list(service.state.tasks)

    assert service.toggle_completion(TaskId("nope")) is None

    assert service.state.tasks == before
    assert [t.task_id for t in service.state.tasks] == [b.task_id, a.task_id]
    assert storage.saves == 2


def test_created_at_is_preserved_when_status_changes(service, clock):
    t = service.add_task("A")
    created = t.created_at
    clock.advance(days=1)

    t1 = service.toggle_completion(t.task_id)
    t2 = service.rename_task(t.task_id, "B")

    assert t1.created_at == created
    assert t2.created_at == created


def test_create_uses_clock_time(storage, confirmer):
    clock = FakeClock(datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    svc = TaskService(storage, storage, FakeIdProvider(), clock, confirmer)

    t = svc.add_task("A")
    assert t.created_at == clock.fixed


def test_create_sets_valid_uuid_v4_and_is_unique(storage, clock, confirmer):
    # do testu UUID korzystamy z prawdziwego providera:
    svc = TaskService(storage, storage, UuidIdProvider(), clock, confirmer)

    t1 = svc.add_task("A")
    t2 = svc.add_task("B")

    assert uuid.UUID(str(t1.task_id)).version == 4
    assert uuid.UUID(str(t2.task_id)).version == 4
    assert t1.task_id != t2.task_id


def test_rename(service, storage):
    t = service.add_task("A")
    renamed = service.rename_task(t.task_id, "  B ")
    assert renamed.title == "B"
    assert service.get_task(t.task_id).title == "B"
    assert storage.saves == 2


def test_rename_same_title_or_missing_id_is_noop(service, storage):
    t = service.add_task("A")
    assert service.rename_task(t.task_id, " A ") is None
    assert service.rename_task(TaskId("nope"), "B") is None
    assert storage.saves == 1


def test_rename_rejects_empty_title(service):
    t = service.add_task("A")
    with pytest.raises(TaskValidationError):
        service.rename_task(t.task_id, "   ")
    assert service.get_task(t.task_id).title == "A"


def test_delete_task_asks_and_prunes_selection(service, confirmer, storage):
    a = service.add_task("A")
    b = service.add_task("B")
    service.toggle_selection(a.task_id)
    service.toggle_selection(b.task_id)

    assert service.delete_task(a.task_id) is True

    assert confirmer.prompts == ["Are you sure you want to delete this task?"]
    assert service.state.tasks == [b]
    assert service.state.selected == {b.task_id}
    assert storage.load() == [b]


def test_declined_delete_leaves_state_unchanged(service, confirmer, storage):
    a = service.add_task("A")
    service.toggle_selection(a.task_id)
    confirmer.answer = False

    assert service.delete_task(a.task_id) is False
    assert service.delete_many([a.task_id]) == 0
    assert service.clear_completed() == 0

    assert service.state.tasks == [a]
    assert service.state.selected == {a.task_id}
    assert storage.saves == 1


def test_delete_many(service, confirmer):
    a = service.add_task("A")
    b = service.add_task("B")
    c = service.add_task("C")
    service.toggle_selection(a.task_id)
    service.toggle_selection(c.task_id)

    removed = service.delete_many([a.task_id, b.task_id, TaskId("nope")])

    assert removed == 2
    assert confirmer.prompts == ["Delete 2 selected task(s)?"]
    assert service.state.tasks == [c]
    assert service.state.selected == {c.task_id}


def test_delete_many_without_matches_does_not_ask(service, confirmer, storage):
    service.add_task("A")
    assert service.delete_many([TaskId("nope")]) == 0
    assert confirmer.prompts == []
    assert storage.saves == 1


def test_clear_completed_on_all_completed(service, storage):
    a = service.add_task("A")
    b = service.add_task("B")
    service.toggle_completion(a.task_id)
    service.toggle_completion(b.task_id)
    service.toggle_selection(a.task_id)

    removed = service.clear_completed()

    assert removed == 2
    assert service.state.tasks == []
    assert service.state.selected == set()
    assert storage.load() == []


def test_clear_completed_keeps_pending_and_clears_selection(service):
    a = service.add_task("A")
    b = service.add_task("B")
    service.toggle_completion(a.task_id)
    service.toggle_selection(b.task_id)

    assert service.clear_completed() == 1
    assert [t.task_id for t in service.state.tasks] == [b.task_id]
    assert service.state.selected == set()


def test_select_all_visible_toggles_by_set_equality(service):
    a = service.add_task("A", category="work")
    b = service.add_task("B", category="work")
    c = service.add_task("C", category="personal")
    service.set_filters(category="work")

    # tyle samo zaznaczonych, ale inne ID - to nie jest "wszystkie zaznaczone"
    service.toggle_selection(c.task_id)
    service.toggle_selection(a.task_id)
    assert service.select_all_visible() == {a.task_id, b.task_id}

    assert service.select_all_visible() == set()


def test_delete_selected(service, confirmer):
    a = service.add_task("A")
    b = service.add_task("B")
    service.toggle_selection(a.task_id)

    assert service.delete_selected() == 1
    assert service.state.tasks == [b]
    assert service.state.selected == set()


def test_toggle_selection_ignores_unknown_id(service):
    assert service.toggle_selection(TaskId("nope")) is False
    assert service.state.selected == set()


def test_view_applies_filters_and_sort(service):
    low = service.add_task("A", priority="low")
    high = service.add_task("B", priority="high")
    service.add_task("C", priority="medium", category="work")

    service.set_filters(category="personal", status=StatusFilter.PENDING)
    service.set_sort_order(SortOrder.PRIORITY)
    view = service.view()

    assert view.tasks == [high, low]
    assert view.statistics.total == 3
    assert view.state is service.state


def test_set_filters_rejects_unknown_status(service):
    with pytest.raises(TaskValidationError):
        service.set_filters(status="someday")
    with pytest.raises(TaskValidationError):
        service.set_sort_order("alphabetical")


def test_cycle_sort_order(service):
    assert service.cycle_sort_order() is SortOrder.OLDEST
    assert service.cycle_sort_order() is SortOrder.PRIORITY
    assert service.cycle_sort_order() is SortOrder.DUE_DATE
    assert service.cycle_sort_order() is SortOrder.NEWEST


def test_toggle_theme_persists(service, storage):
    assert service.toggle_theme() is Theme.DARK
    assert storage.load_theme() is Theme.DARK
    assert service.toggle_theme() is Theme.LIGHT


def test_due_today_filter_uses_clock(service, clock):
    today = service.add_task("A", due_date=clock.today())
    service.add_task("B", due_date=clock.today() + timedelta(days=1))
    service.add_task("C")

    service.set_filters(status="today")
    assert service.visible_tasks() == [today]


def test_storage_failure_propagates(clock, confirmer):
    from taskboard.domain.errors import StorageError

    class BrokenStorage(InMemoryStorage):
        def save(self, tasks):
            raise StorageError("disk full")

    storage = BrokenStorage()
    svc = TaskService(storage, storage, FakeIdProvider(), clock, confirmer)
    svc.load()

    with pytest.raises(StorageError):
        svc.add_task("A")
    # zmiana w pamięci zostaje, utracony jest tylko zapis
    assert len(svc.state.tasks) == 1

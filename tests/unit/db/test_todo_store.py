"""Contract tests for the todo stores.

Every test runs against both the SQLModel repository (on in-memory
SQLite) and the in-memory store.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from app.core.exceptions import EmptyTodoError, NotFoundError, RowsUnaffectedError, StoreError, ValidationError
from app.db.repositories.memory import InMemoryTodoStore
from app.db.repositories.todo import TodoRepository
from app.db.repositories.user import UserRepository

OWNER = 1
OTHER = 2

UTC = timezone.utc


@pytest.fixture(params=["sql", "memory"])
def store(request):
    if request.param == "memory":
        return InMemoryTodoStore()
    session = request.getfixturevalue("session")
    users = UserRepository(session)
    users.create("owner@example.com", "hash")
    users.create("other@example.com", "hash")
    return TodoRepository(session)


# ======================================================================
# create
# ======================================================================


class TestCreate:
    def test_assigns_id_and_timestamps(self, store):
        todo = store.create(OWNER, title="buy milk")
        assert todo.id is not None
        assert todo.user_id == OWNER
        assert todo.title == "buy milk"
        assert todo.note is None
        assert todo.created_at is not None
        assert todo.modified_at == todo.created_at
        assert todo.is_done is False
        assert todo.completed_at is None

    def test_note_only(self, store):
        todo = store.create(OWNER, note="call the bank")
        assert todo.title is None
        assert todo.note == "call the bank"

    def test_due_at(self, store):
        due = datetime(2030, 1, 1, 9, 0, tzinfo=UTC)
        assert store.create(OWNER, title="x", due_at=due).due_at == due

    def test_due_at_offset_comes_back_as_utc(self, store):
        due = datetime(2030, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=2)))
        stored = store.create(OWNER, title="x", due_at=due).due_at
        assert stored == datetime(2030, 1, 1, 7, 0, tzinfo=UTC)
        assert stored.utcoffset() == timedelta(0)

    def test_naive_due_at_is_read_as_utc(self, store):
        stored = store.create(OWNER, title="x", due_at=datetime(2030, 1, 1, 9, 0)).due_at
        assert stored == datetime(2030, 1, 1, 9, 0, tzinfo=UTC)

    def test_timestamps_are_aware_utc(self, store):
        todo = store.get_by_id(store.create(OWNER, title="x").id, OWNER)
        assert todo.created_at.utcoffset() == timedelta(0)
        assert todo.modified_at.utcoffset() == timedelta(0)

    @pytest.mark.parametrize("title, note", [(None, None), ("", ""), ("", None), (None, "")])
    def test_empty_todo_rejected(self, store, title, note):
        with pytest.raises(EmptyTodoError):
            store.create(OWNER, title=title, note=note)

    def test_empty_todo_is_a_validation_error(self, store):
        with pytest.raises(ValidationError):
            store.create(OWNER)

    def test_ids_increase(self, store):
        first = store.create(OWNER, title="a")
        second = store.create(OTHER, title="b")
        assert second.id > first.id


# ======================================================================
# list_by_owner
# ======================================================================


class TestListByOwner:
    def test_only_owner_rows_in_id_order(self, store):
        mine = [store.create(OWNER, title=f"mine {i}").id for i in range(3)]
        store.create(OTHER, title="theirs")
        assert [t.id for t in store.list_by_owner(OWNER)] == mine

    def test_page_size_caps_results(self, store):
        for i in range(5):
            store.create(OWNER, title=str(i))
        assert len(store.list_by_owner(OWNER, page_size=2)) == 2

    def test_default_page_size_is_ten(self, store):
        for i in range(12):
            store.create(OWNER, title=str(i))
        assert len(store.list_by_owner(OWNER)) == 10

    def test_empty_when_nothing_left(self, store):
        todo = store.create(OWNER, title="only")
        assert store.list_by_owner(OWNER, cursor_id=todo.id) == []
        assert store.list_by_owner(OTHER) == []

    def test_cursor_walk_never_repeats_and_terminates(self, store):
        created = {store.create(OWNER, title=str(i)).id for i in range(7)}
        seen = []
        cursor = 0
        for _ in range(10):
            page = store.list_by_owner(OWNER, cursor_id=cursor, page_size=3)
            if not page:
                break
            seen.extend(t.id for t in page)
            cursor = page[-1].id
        else:
            pytest.fail("pagination did not terminate")
        assert len(seen) == len(set(seen))
        assert set(seen) == created

    def test_insert_behind_cursor_does_not_shift_pages(self, store):
        first = store.create(OWNER, title="1")
        store.create(OWNER, title="2")
        page = store.list_by_owner(OWNER, cursor_id=first.id, page_size=1)
        store.create(OTHER, title="noise")
        assert store.list_by_owner(OWNER, cursor_id=first.id, page_size=1)[0].id == page[0].id


# ======================================================================
# get / update / complete / delete
# ======================================================================


class TestGetByID:
    def test_owner_can_read(self, store):
        todo = store.create(OWNER, title="buy milk")
        assert store.get_by_id(todo.id, OWNER).title == "buy milk"

    def test_other_user_gets_not_found(self, store):
        todo = store.create(OWNER, title="buy milk")
        with pytest.raises(NotFoundError):
            store.get_by_id(todo.id, OTHER)

    def test_missing_id(self, store):
        with pytest.raises(NotFoundError):
            store.get_by_id(999, OWNER)


class TestUpdate:
    def test_updates_only_supplied_fields(self, store):
        todo = store.create(OWNER, title="old", note="keep me")
        updated = store.update(todo.id, OWNER, title="new")
        assert updated.title == "new"
        assert updated.note == "keep me"

    def test_bumps_modified_at(self, store):
        todo = store.create(OWNER, title="old")
        updated = store.update(todo.id, OWNER, note="n")
        assert updated.modified_at >= todo.modified_at
        assert updated.created_at == todo.created_at

    def test_blank_clears_field(self, store):
        todo = store.create(OWNER, title="t", note="n")
        assert store.update(todo.id, OWNER, note="").note is None

    def test_due_at(self, store):
        todo = store.create(OWNER, title="t")
        due = datetime(2031, 5, 4, 12, 0, tzinfo=UTC)
        assert store.update(todo.id, OWNER, due_at=due).due_at == due

    def test_blanking_only_title_is_rejected(self, store):
        todo = store.create(OWNER, title="t")
        with pytest.raises(EmptyTodoError):
            store.update(todo.id, OWNER, title="")
        assert store.get_by_id(todo.id, OWNER).title == "t"

    def test_blanking_only_note_is_rejected(self, store):
        todo = store.create(OWNER, note="n")
        with pytest.raises(EmptyTodoError):
            store.update(todo.id, OWNER, note="", due_at=datetime(2030, 1, 1, tzinfo=UTC))
        unchanged = store.get_by_id(todo.id, OWNER)
        assert unchanged.note == "n"
        assert unchanged.due_at is None

    def test_blanking_both_is_rejected(self, store):
        todo = store.create(OWNER, title="t", note="n")
        with pytest.raises(EmptyTodoError):
            store.update(todo.id, OWNER, title="", note="")
        unchanged = store.get_by_id(todo.id, OWNER)
        assert (unchanged.title, unchanged.note) == ("t", "n")

    def test_swapping_title_for_note_is_allowed(self, store):
        todo = store.create(OWNER, title="t")
        updated = store.update(todo.id, OWNER, title="", note="n")
        assert updated.title is None
        assert updated.note == "n"

    def test_blanking_on_missing_todo_is_not_found(self, store):
        with pytest.raises(NotFoundError):
            store.update(999, OWNER, title="")
        with pytest.raises(NotFoundError):
            store.update(999, OWNER, title="", note="")

    def test_other_user_gets_not_found_and_row_untouched(self, store):
        todo = store.create(OWNER, title="mine")
        with pytest.raises(NotFoundError):
            store.update(todo.id, OTHER, title="stolen")
        assert store.get_by_id(todo.id, OWNER).title == "mine"

    def test_missing_id(self, store):
        with pytest.raises(NotFoundError):
            store.update(999, OWNER, title="x")


class TestMarkComplete:
    def test_sets_flag_and_time(self, store):
        todo = store.create(OWNER, title="t")
        when = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)
        done = store.mark_complete(todo.id, OWNER, when)
        assert done.is_done is True
        assert done.completed_at == when

    def test_twice_keeps_latest_time(self, store):
        todo = store.create(OWNER, title="t")
        first = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)
        store.mark_complete(todo.id, OWNER, first)
        done = store.mark_complete(todo.id, OWNER, first + timedelta(hours=1))
        assert done.is_done is True
        assert done.completed_at == first + timedelta(hours=1)

    def test_other_user_gets_not_found(self, store):
        todo = store.create(OWNER, title="t")
        with pytest.raises(NotFoundError):
            store.mark_complete(todo.id, OTHER, datetime(2030, 1, 1, tzinfo=UTC))
        assert store.get_by_id(todo.id, OWNER).is_done is False


class TestDelete:
    def test_removes_row(self, store):
        todo = store.create(OWNER, title="t")
        assert store.delete(todo.id, OWNER) == todo.id
        with pytest.raises(NotFoundError):
            store.get_by_id(todo.id, OWNER)

    def test_twice_is_not_found(self, store):
        todo = store.create(OWNER, title="t")
        store.delete(todo.id, OWNER)
        with pytest.raises(NotFoundError):
            store.delete(todo.id, OWNER)

    def test_other_user_gets_not_found_and_row_survives(self, store):
        todo = store.create(OWNER, title="t")
        with pytest.raises(NotFoundError):
            store.delete(todo.id, OTHER)
        assert store.get_by_id(todo.id, OWNER).id == todo.id


# ======================================================================
# Affected-row checks (SQL repository only)
# ======================================================================


class TestRowsAffected:
    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.mark.parametrize("operation", [
        lambda repo: repo.update(1, OWNER, title="x"),
        lambda repo: repo.mark_complete(1, OWNER, datetime(2030, 1, 1, tzinfo=UTC)),
        lambda repo: repo.delete(1, OWNER),
    ])
    def test_more_than_one_row_is_an_integrity_error(self, session, operation):
        session.exec.return_value.rowcount = 2
        with pytest.raises(RowsUnaffectedError) as excinfo:
            operation(TodoRepository(session))
        assert excinfo.value.actual == 2
        session.rollback.assert_called_once()
        session.commit.assert_not_called()

    def test_rows_unaffected_is_a_store_error(self):
        assert issubclass(RowsUnaffectedError, StoreError)

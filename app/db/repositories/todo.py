"""
Todo repository.

Handles database operations for Todo model. Every query is scoped by
both the todo id and the owning user id, and every single-row write
checks how many rows it actually touched.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.core.clock import utcnow
from app.core.exceptions import EmptyTodoError, NotFoundError, RowsUnaffectedError, StoreError
from app.db.repositories.base import DEFAULT_PAGE_SIZE, blank_to_none
from app.models.todo import Todo

logger = logging.getLogger(__name__)


class TodoRepository:
    """Repository for Todo database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, owner_id: int, title: Optional[str] = None, note: Optional[str] = None,
               due_at: Optional[datetime] = None) -> Todo:
        title, note = blank_to_none(title), blank_to_none(note)
        if title is None and note is None:
            raise EmptyTodoError()

        now = utcnow()
        todo = Todo(user_id=owner_id, title=title, note=note, due_at=due_at, created_at=now, modified_at=now)
        self.session.add(todo)
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError("Unable to save todo") from e
        self.session.refresh(todo)
        return todo

    def list_by_owner(self, owner_id: int, cursor_id: int = 0, page_size: int = DEFAULT_PAGE_SIZE) -> list[Todo]:
        """Get the page of a user's todos that follows ``cursor_id``."""
        statement = (
            select(Todo)
            .where(Todo.user_id == owner_id, Todo.id > cursor_id)
            .order_by(Todo.id)
            .limit(page_size)
        )
        try:
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise StoreError("Unable to fetch todos") from e

    def get_by_id(self, todo_id: int, owner_id: int) -> Todo:
        statement = select(Todo).where(Todo.id == todo_id, Todo.user_id == owner_id)
        try:
            todo = self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise StoreError("Unable to fetch todo") from e
        if todo is None:
            raise NotFoundError(f"Todo {todo_id} not found")
        return todo

    def update(self, todo_id: int, owner_id: int, title: Optional[str] = None, note: Optional[str] = None,
               due_at: Optional[datetime] = None) -> Todo:
        """
        Write the supplied fields and bump ``modified_at``.

        Raises EmptyTodoError when the write would leave neither a title
        nor a note. When one text field is blanked and the other is not
        supplied, the row only matches while that other field is set.
        """
        values: dict[str, Any] = {"modified_at": utcnow()}
        if title is not None:
            values["title"] = blank_to_none(title)
        if note is not None:
            values["note"] = blank_to_none(note)
        if due_at is not None:
            values["due_at"] = due_at

        statement = update(Todo).where(Todo.id == todo_id, Todo.user_id == owner_id)
        guard = None
        if "title" in values and values["title"] is None:
            guard = "note"
        if "note" in values and values["note"] is None:
            if guard is not None:
                self.get_by_id(todo_id, owner_id)
                raise EmptyTodoError()
            guard = "title"
        if guard is not None and guard not in values:
            statement = statement.where(getattr(Todo, guard).is_not(None))
        else:
            guard = None

        try:
            self._write_one(statement.values(**values), todo_id)
        except NotFoundError:
            if guard is None:
                raise
            # Still raises NotFoundError if the todo is really gone
            self.get_by_id(todo_id, owner_id)
            raise EmptyTodoError() from None
        return self.get_by_id(todo_id, owner_id)

    def mark_complete(self, todo_id: int, owner_id: int, completed_at: datetime) -> Todo:
        statement = (
            update(Todo)
            .where(Todo.id == todo_id, Todo.user_id == owner_id)
            .values(completed_at=completed_at, is_done=True)
        )
        self._write_one(statement, todo_id)
        return self.get_by_id(todo_id, owner_id)

    def delete(self, todo_id: int, owner_id: int) -> int:
        statement = delete(Todo).where(Todo.id == todo_id, Todo.user_id == owner_id)
        self._write_one(statement, todo_id)
        return todo_id

    def _write_one(self, statement, todo_id: int) -> None:
        """Execute an owner-scoped write and commit only if exactly one row changed."""
        statement = statement.execution_options(synchronize_session=False)
        try:
            count = self.session.exec(statement).rowcount
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError("Unable to write todo") from e

        if count != 1:
            self.session.rollback()
            if count == 0:
                raise NotFoundError(f"Todo {todo_id} not found")
            logger.error("Write on todo %s changed %d rows", todo_id, count)
            raise RowsUnaffectedError(1, count)

        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError("Unable to write todo") from e

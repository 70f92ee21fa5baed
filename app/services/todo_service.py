"""
Todo service.

Maps todo store outcomes to HTTP outcomes. Ownership is never checked
here: every store call is scoped by the caller's user id, and a todo
owned by someone else is indistinguishable from a missing one.
"""

import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status

from app.core.clock import utcnow
from app.core.exceptions import EmptyTodoError, NotFoundError, StoreError
from app.db.repositories.base import DEFAULT_PAGE_SIZE, TodoStore
from app.models.todo import Todo
from app.schemas.todo import TodoCreate, TodoResponse, TodoUpdate

logger = logging.getLogger(__name__)


class TodoService:
    """Service for todo business logic."""

    def __init__(self, store: TodoStore, page_size: int = DEFAULT_PAGE_SIZE):
        self.store = store
        self.page_size = page_size

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(self, user_id: int, data: TodoCreate) -> TodoResponse:
        try:
            todo = self.store.create(user_id, title=data.title, note=data.note, due_at=data.due_at)
        except EmptyTodoError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        except StoreError:
            logger.exception("Unable to save todo for user %s", user_id)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to save todo")
        return self._to_response(todo)

    def list_page(self, user_id: int, previous_id: int = 0) -> list[TodoResponse]:
        """Get the page of todos after ``previous_id``. An empty page is a 404."""
        try:
            todos = self.store.list_by_owner(user_id, cursor_id=previous_id, page_size=self.page_size)
        except StoreError:
            logger.exception("Unable to fetch todos for user %s", user_id)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching todos")
        if not todos:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No todo items")
        return [self._to_response(t) for t in todos]

    def get(self, user_id: int, todo_id: int) -> TodoResponse:
        return self._call(lambda: self.store.get_by_id(todo_id, user_id), "Unable to fetch todo")

    def update(self, user_id: int, todo_id: int, data: TodoUpdate) -> TodoResponse:
        return self._call(
            lambda: self.store.update(todo_id, user_id, title=data.title, note=data.note, due_at=data.due_at),
            "Unable to update todo",
        )

    def complete(self, user_id: int, todo_id: int,
                 completed_at: Optional[datetime.datetime] = None) -> TodoResponse:
        completed_at = completed_at or utcnow()
        return self._call(lambda: self.store.mark_complete(todo_id, user_id, completed_at),
                          "Unable to complete todo")

    def delete(self, user_id: int, todo_id: int) -> int:
        try:
            return self.store.delete(todo_id, user_id)
        except NotFoundError:
            raise self._not_found()
        except StoreError:
            logger.exception("Unable to delete todo %s", todo_id)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to delete todo")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _call(self, operation, failure_detail: str) -> TodoResponse:
        """Run a single-todo store operation and map its errors."""
        try:
            todo = operation()
        except NotFoundError:
            raise self._not_found()
        except EmptyTodoError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        except StoreError:
            logger.exception(failure_detail)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_detail)
        return self._to_response(todo)

    @staticmethod
    def _not_found() -> HTTPException:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unable to find todo")

    @staticmethod
    def _to_response(todo: Todo) -> TodoResponse:
        return TodoResponse.model_validate(todo)

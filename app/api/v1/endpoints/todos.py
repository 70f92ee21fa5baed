"""
Todo endpoints.

CRUD for the authenticated user's todos. The router is mounted behind
the ``authorize`` dependency, so every handler can rely on
``require_user_id``.
"""

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.dependencies import get_todo_service, require_user_id
from app.schemas.response import Envelope
from app.schemas.todo import TodoCreate, TodoEnvelope, TodoListEnvelope, TodoUpdate
from app.services.todo_service import TodoService

router = APIRouter()


@router.get("/", summary="List todos after a cursor.", response_model=TodoListEnvelope,
            response_model_exclude_none=True, )
def list_todos(prev: int = Query(0, ge=0, description="Id of the last todo already seen"),
               user_id: int = Depends(require_user_id), service: TodoService = Depends(get_todo_service), ):
    """Next page of todos in ascending id order. Responds 404 once no todos remain."""
    return TodoListEnvelope(status=status.HTTP_200_OK, data=service.list_page(user_id, prev))


@router.post("/", summary="Create a todo.", response_model=TodoEnvelope, response_model_exclude_none=True,
             status_code=status.HTTP_201_CREATED, )
def create_todo(data: TodoCreate, user_id: int = Depends(require_user_id),
                service: TodoService = Depends(get_todo_service), ):
    todo = service.create(user_id, data)
    return TodoEnvelope(status=status.HTTP_201_CREATED, message="Todo item created successfully!",
                        resource_id=todo.id, data=todo)


@router.get("/{todo_id}", summary="Get a todo.", response_model=TodoEnvelope, response_model_exclude_none=True, )
def get_todo(todo_id: int = Path(..., ge=1), user_id: int = Depends(require_user_id),
             service: TodoService = Depends(get_todo_service), ):
    return TodoEnvelope(status=status.HTTP_200_OK, data=service.get(user_id, todo_id))


@router.put("/{todo_id}", summary="Update a todo.", response_model=TodoEnvelope, response_model_exclude_none=True, )
def update_todo(data: TodoUpdate, todo_id: int = Path(..., ge=1), user_id: int = Depends(require_user_id),
                service: TodoService = Depends(get_todo_service), ):
    """
    Write the supplied fields. A body with only ``dueAt`` is a valid update.

    Responds 400 when nothing is supplied, or when the change would leave
    the todo with neither a title nor a note.
    """
    todo = service.update(user_id, todo_id, data)
    return TodoEnvelope(status=status.HTTP_200_OK, message="Todo updated successfully!", resource_id=todo.id,
                        data=todo)


@router.get("/{todo_id}/completed", summary="Mark a todo as completed.", response_model=TodoEnvelope,
            response_model_exclude_none=True, )
def complete_todo(todo_id: int = Path(..., ge=1), user_id: int = Depends(require_user_id),
                  service: TodoService = Depends(get_todo_service), ):
    todo = service.complete(user_id, todo_id)
    return TodoEnvelope(status=status.HTTP_200_OK, message="Todo marked as completed!", resource_id=todo.id,
                        data=todo)


@router.delete("/{todo_id}", summary="Delete a todo.", response_model=Envelope, response_model_exclude_none=True, )
def delete_todo(todo_id: int = Path(..., ge=1), user_id: int = Depends(require_user_id),
                service: TodoService = Depends(get_todo_service), ):
    deleted_id = service.delete(user_id, todo_id)
    return Envelope(status=status.HTTP_200_OK, message="Todo deleted successfully!", resource_id=deleted_id)

"""
Shared API dependencies.

Reusable FastAPI dependencies for authorization, stores and services.
Everything is read from ``app.state``, which ``create_app`` populates.
"""

import logging
from typing import Generator, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlmodel import Session

from app.core.config import Settings
from app.core.security import TokenError, TokenService
from app.db.repositories.base import CredentialStore, TodoStore
from app.db.repositories.todo import TodoRepository
from app.db.repositories.user import UserRepository
from app.services.todo_service import TodoService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# ----------------------------------------------------------------------
# Authorization
# ----------------------------------------------------------------------


def authorize(request: Request, tokens: TokenService = Depends(get_token_service)) -> int:
    """
    Verify the caller's session token and attach their id to the request.

    The ``token`` cookie wins over the ``Authorization: Bearer`` header.

    Raises:
        HTTPException 401: No token supplied, or the token fails verification
        HTTPException 400: Authorization header is not ``Bearer <token>``
    """
    token = request.cookies.get(TOKEN_COOKIE)
    if not token:
        authorization = request.headers.get("Authorization")
        if not authorization:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                                detail="Authorized routes require cookie token or Authorization header",
                                headers={"WWW-Authenticate": "Bearer"}, )
        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail="Authorization header should be in the format `Bearer $TOKEN`", )
        token = parts[1]

    try:
        user_id = tokens.verify(token)
    except TokenError as e:
        logger.debug("Rejected token: %s: %s", type(e).__name__, e)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token",
                            headers={"WWW-Authenticate": "Bearer"}, )

    request.state.user_id = user_id
    return user_id


def get_request_user_id(request: Request) -> Optional[int]:
    """The id attached by ``authorize``, or None if the request was never authorized."""
    user_id = getattr(request.state, "user_id", None)
    return user_id if isinstance(user_id, int) else None


def require_user_id(request: Request) -> int:
    """Authenticated user id for handlers behind ``authorize``."""
    user_id = get_request_user_id(request)
    if user_id is None:
        logger.error("No authenticated user on %s %s", request.method, request.url.path)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to identify user")
    return user_id


# ----------------------------------------------------------------------
# Stores and services
# ----------------------------------------------------------------------


def get_credential_store(request: Request) -> Generator[CredentialStore, None, None]:
    """The in-memory store when configured, otherwise a repository on a per-request session."""
    store = request.app.state.credential_store
    if store is not None:
        yield store
        return
    with Session(request.app.state.engine) as session:
        yield UserRepository(session)


def get_todo_store(request: Request) -> Generator[TodoStore, None, None]:
    store = request.app.state.todo_store
    if store is not None:
        yield store
        return
    with Session(request.app.state.engine) as session:
        yield TodoRepository(session)


def get_user_service(store: CredentialStore = Depends(get_credential_store),
                     tokens: TokenService = Depends(get_token_service),
                     settings: Settings = Depends(get_app_settings), ) -> UserService:
    return UserService(store, tokens, bcrypt_rounds=settings.BCRYPT_ROUNDS)


def get_todo_service(store: TodoStore = Depends(get_todo_store),
                     settings: Settings = Depends(get_app_settings), ) -> TodoService:
    return TodoService(store, page_size=settings.TODO_PAGE_SIZE)

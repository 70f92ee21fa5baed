"""
User service.

Business logic for registration and authentication.
"""

import logging

from fastapi import HTTPException, status
from jose import JWTError

from app.core.exceptions import ConflictError, NotFoundError, StoreError
from app.core.security import TokenService, get_password_hash, verify_password
from app.db.repositories.base import CredentialStore
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin

logger = logging.getLogger(__name__)


class UserService:
    """Service for user-related business logic."""

    def __init__(self, store: CredentialStore, tokens: TokenService, bcrypt_rounds: int = 12):
        """
        Initialize service with its collaborators.

        Args:
            store: Credential store
            tokens: Token service used to issue session tokens
            bcrypt_rounds: bcrypt cost factor for new password hashes
        """
        self.store = store
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, user_data: UserCreate) -> tuple[User, str]:
        """
        Register a new user and issue a session token.

        Args:
            user_data: User registration data

        Returns:
            Created user and its token

        Raises:
            HTTPException 409: If email already exists
            HTTPException 500: If hashing, storage or token issuing fails
        """
        try:
            hashed_password = get_password_hash(user_data.password, rounds=self.bcrypt_rounds)
        except ValueError:
            logger.exception("Unable to hash password")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to register user")

        try:
            user = self.store.create(user_data.email, hashed_password, first_name=user_data.first_name,
                                     last_name=user_data.last_name)
        except ConflictError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already used")
        except StoreError:
            logger.exception("Unable to register user")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to register user")

        return user, self._issue_token(user, "Unable to register user")

    def authenticate(self, login_data: UserLogin) -> tuple[User, str]:
        """
        Authenticate user and issue a session token.

        Args:
            login_data: User login credentials

        Returns:
            Authenticated user and its token

        Raises:
            HTTPException 401: If the email is unknown or the password is wrong
        """
        try:
            user = self.store.get_by_email(login_data.email)
        except NotFoundError:
            user = None
        except StoreError:
            logger.exception("Unable to look up user")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to login")

        if not user or not verify_password(login_data.password, user.hashed_password):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unable to login",
                                headers={"WWW-Authenticate": "Bearer"}, )

        return user, self._issue_token(user, "Unable to login")

    def _issue_token(self, user: User, failure_detail: str) -> str:
        try:
            return self.tokens.issue(user.id)
        except JWTError:
            logger.exception("Unable to issue token for user %s", user.id)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_detail)

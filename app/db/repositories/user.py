"""
User repository.

Handles database operations for User model.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from app.core.exceptions import ConflictError, NotFoundError, StoreError
from app.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def create(self, email: str, hashed_password: str, first_name: Optional[str] = None,
               last_name: Optional[str] = None) -> User:
        """
        Create a new user in the database.

        Args:
            email: Unique email address
            hashed_password: bcrypt hash of the password
            first_name: Optional first name
            last_name: Optional last name

        Returns:
            Created user with generated id

        Raises:
            ConflictError: If the email is already registered
            StoreError: If the insert fails for any other reason
        """
        if self.exists_by_email(email):
            raise ConflictError(f"Email already used: {email}")

        user = User(email=email, hashed_password=hashed_password, first_name=first_name, last_name=last_name)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            self.session.rollback()
            raise ConflictError(f"Email already used: {email}") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError("Unable to save user") from e
        self.session.refresh(user)
        logger.info("Created user %s", user.id)
        return user

    def get_by_id(self, user_id: int) -> User:
        """
        Get user by ID.

        Raises:
            NotFoundError: If no user has this id
        """
        user = self._run(lambda: self.session.get(User, user_id))
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def get_by_email(self, email: str) -> User:
        """
        Get user by email address.

        Raises:
            NotFoundError: If no user has this email
        """
        user = self._find_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def exists_by_email(self, email: str) -> bool:
        """
        Check if a user with the given email exists.

        Args:
            email: Email to check

        Returns:
            True if user exists, False otherwise
        """
        return self._find_by_email(email) is not None

    def _find_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        return self._run(lambda: self.session.exec(statement).first())

    def _run(self, query):
        try:
            return query()
        except SQLAlchemyError as e:
            raise StoreError("Unable to read users") from e

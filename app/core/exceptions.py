"""
Domain exceptions raised by the stores.

Services translate them into HTTP errors; anything that escapes is
rendered as a generic 500 by the application exception handler.
"""


class TodoAppError(Exception):
    """Base class for all domain errors."""


class StoreError(TodoAppError):
    """The relational store failed to complete an operation."""


class RowsUnaffectedError(StoreError):
    """A single-row write touched an unexpected number of rows."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} row(s) to change, {actual} changed")
        self.expected = expected
        self.actual = actual


class NotFoundError(TodoAppError):
    """The resource does not exist or is not owned by the caller."""


class ConflictError(TodoAppError):
    """The resource already exists."""


class ValidationError(TodoAppError):
    """Input rejected by a store invariant."""


class EmptyTodoError(ValidationError):
    def __init__(self):
        super().__init__("Todo must have non empty title or note")

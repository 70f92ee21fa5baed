"""
Column types shared by the table models.
"""

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator

from app.core.clock import as_utc


class UTCTimestamp(TypeDecorator):
    """
    Timezone-aware timestamp column.

    Values are converted to UTC before binding and come back as aware UTC
    datetimes on every dialect, including SQLite which stores no offset.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return as_utc(value)

    def process_result_value(self, value, dialect):
        return as_utc(value)

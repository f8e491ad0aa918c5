from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator

from app.core.utils import to_utc

class UTCDateTime(TypeDecorator):
    """
    TIMESTAMPTZ column that always hands back aware UTC datetimes.

    PostgreSQL keeps the offset itself. SQLite stores the text without one,
    so values are converted to UTC on the way in and tagged as UTC on the
    way out.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return to_utc(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        return to_utc(value)

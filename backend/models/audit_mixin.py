from sqlalchemy import Column, DateTime, String
from datetime import datetime
import pytz

LOCAL_TIMEZONE = pytz.timezone('Africa/Cairo')


def local_now():
    return datetime.now(LOCAL_TIMEZONE)


class TimestampMixin:
    """Mixin that provides created/updated timestamps and user info.

    Every table in the ledger carries it. Financial rows are never soft-deleted:
    journal entries are immutable once posted and corrections are new entries.
    """
    # DateTime(timezone=True) ensures the timezone info is persisted in the database.
    created_at = Column(DateTime(timezone=True), default=local_now)
    updated_at = Column(DateTime(timezone=True), onupdate=local_now)
    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)

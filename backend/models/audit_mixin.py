from sqlalchemy import Column, DateTime

from utils.date_utils import now


class TimestampMixin:
    """Mixin that provides created/updated timestamps.

    DateTime(timezone=True) ensures the timezone info is persisted in the database.
    """
    created_at = Column(DateTime(timezone=True), default=now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now, onupdate=now, nullable=False)

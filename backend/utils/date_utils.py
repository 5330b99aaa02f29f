from datetime import date, datetime
import pytz

from config import APP_TIMEZONE


def now() -> datetime:
    return datetime.now(pytz.timezone(APP_TIMEZONE))


def today() -> date:
    """Current calendar date in the configured timezone."""
    return now().date()

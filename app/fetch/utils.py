import re
from datetime import date, datetime
from typing import Union
from zoneinfo import ZoneInfo
from app.core.config import settings
from app.core.errors import ConfigurationError
from app.schemas import Location

NO_WEEKDAYS = ["MANDAG", "TIRSDAG", "ONSDAG", "TORSDAG", "FREDAG", "LØRDAG", "SØNDAG"]

def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)

def now_local() -> datetime:
    """Current time in the restaurant's timezone"""
    return datetime.now(local_tz())

def to_local(moment: datetime) -> datetime:
    """Attach the local zone to naive datetimes, convert aware ones"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=local_tz())
    return moment.astimezone(local_tz())

def day_label(day: date) -> str:
    """Upper-case Norwegian weekday name, weekend included"""
    return NO_WEEKDAYS[day.weekday()]

def resolve_location(key: Union[str, Location]) -> Location:
    """
    Map a location key to a Location.
    Keys are case-sensitive: 'FB38' and 'N58' only.
    """
    if isinstance(key, Location):
        return key
    try:
        return Location(key)
    except ValueError:
        raise ConfigurationError(f"Unknown location: {key!r}") from None

def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace (nbsp included) into single spaces"""
    return re.sub(r"\s+", " ", text).strip()

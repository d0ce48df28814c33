"""
File cache for raw menu HTML, one JSON file per location.
"""
import logging
import time
from typing import Callable, Optional, Union
from pydantic import ValidationError
from app.core.events import EventBus, TIMELINES_CHANGED
from app.core.store import SharedStore
from app.fetch.utils import resolve_location
from app.schemas import CacheEntry, CacheFile, Location

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 2 * 60 * 60
CACHE_FILE_SUFFIX = "_LunchMenuCache.json"


class MenuCache:
    """Raw HTML cache, partitioned per location"""

    def __init__(
        self,
        store: SharedStore,
        events: Optional[EventBus] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.events = events
        self.clock = clock

    @staticmethod
    def file_name(location: Union[str, Location]) -> str:
        return f"{resolve_location(location).value}{CACHE_FILE_SUFFIX}"

    def save(self, location: Union[str, Location], html: str) -> bool:
        """Persist HTML for a location and notify observers. Blank HTML is ignored."""
        name = self.file_name(location)

        if not html or not html.strip():
            logger.warning("Refusing to cache empty HTML for %s", name)
            return False

        payload = CacheFile(data=html, timestamp=self.clock()).model_dump_json()
        try:
            self.store.write_atomic(name, payload)
        except OSError as e:
            logger.error("Failed to save cache %s: %s", name, e)
            return False

        logger.info("Saved cache %s (%d characters)", name, len(html))
        if self.events is not None:
            self.events.publish(TIMELINES_CHANGED, {"location": resolve_location(location).value})
        return True

    def load(self, location: Union[str, Location]) -> Optional[CacheEntry]:
        """Cached HTML with its expiry flag, or None on a miss or an unreadable file"""
        name = self.file_name(location)

        try:
            raw = self.store.read_text(name)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read cache %s: %s", name, e)
            return None
        if raw is None:
            return None

        try:
            cached = CacheFile.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Malformed cache %s, treating as miss: %s", name, e.errors()[0]["msg"])
            return None

        age = self.clock() - cached.timestamp
        return CacheEntry(
            data=cached.data,
            timestamp=cached.timestamp,
            is_expired=age > CACHE_TTL_SECONDS,
        )

    def clear_all(self) -> int:
        """Delete every cache file. Failures are logged and skipped."""
        removed = 0
        try:
            files = self.store.glob(f"*{CACHE_FILE_SUFFIX}")
        except OSError as e:
            logger.error("Failed to list caches: %s", e)
            return 0

        for path in files:
            try:
                path.unlink()
                removed += 1
                logger.info("Cleared cache: %s", path.name)
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.error("Failed to clear cache %s: %s", path.name, e)

        if removed and self.events is not None:
            self.events.publish(TIMELINES_CHANGED, {"location": None})
        return removed

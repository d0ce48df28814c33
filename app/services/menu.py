import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union
from app.cache.store import MenuCache
from app.core.config import Settings, settings as default_settings
from app.core.errors import ConfigurationError, ParseError
from app.fetch import scraper
from app.fetch.utils import local_tz, resolve_location, to_local
from app.parsers.factory import get_parser
from app.schemas import DailyMenu, Location, WeekDay, WeeklyMenu

logger = logging.getLogger(__name__)

@dataclass
class MenuResult:
    location: Location
    menu: WeeklyMenu
    cached: bool
    fetched_at: Optional[datetime] = None

class MenuService:
    """Cache-or-network menu loading for one process"""

    def __init__(self, cache: MenuCache, settings: Settings = default_settings):
        self.cache = cache
        self.settings = settings

    async def fetch_menu(self, location_key: Union[str, Location]) -> WeeklyMenu:
        return (await self.get_menu(location_key)).menu

    async def get_menu(self, location_key: Union[str, Location]) -> MenuResult:
        """
        Main pipeline for a menu request.

        1. Resolve location, parser and URL (ConfigurationError before any I/O)
        2. Fresh cache entry -> parse it, no network
        3. Otherwise fetch, save to cache, parse
        """
        location = resolve_location(location_key)
        parser = get_parser(location)
        url = self.settings.url_for(location.value)
        if not url:
            raise ConfigurationError(f"No source URL configured for {location.value}")

        cached = self.cache.load(location)
        if cached is not None and not cached.is_expired:
            logger.info("CACHE HIT for %s", location.value)
            menu = await self._parse(parser, cached.data, location)
            return MenuResult(location, menu, cached=True, fetched_at=datetime.fromtimestamp(cached.timestamp, local_tz()))

        logger.info("CACHE %s for %s, fetching %s",
                    "EXPIRED" if cached is not None else "MISS", location.value, url)
        html = await scraper.fetch_html(url)
        fetched_at = datetime.now(local_tz())
        # kept even when parsing below fails
        self.cache.save(location, html)

        menu = await self._parse(parser, html, location)
        return MenuResult(location, menu, cached=False, fetched_at=fetched_at)

    @staticmethod
    async def _parse(parser, html: str, location: Location) -> WeeklyMenu:
        try:
            menu = await asyncio.to_thread(parser.parse, html)
        except ParseError:
            logger.error("Failed to parse menu for %s", location.value)
            raise
        logger.info("Parsed %d days for %s", len(menu), location.value)
        return menu

    @staticmethod
    def today_menu(menu: WeeklyMenu, reference: datetime) -> Optional[DailyMenu]:
        """Menu for the reference date's weekday; None on weekends or missing days"""
        day = WeekDay.from_date(to_local(reference).date())
        if day is None:
            return None
        return menu.get(day.value)

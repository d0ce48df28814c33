"""
Widget timelines: dated entries for the days of a week plus the moment the widget should reload.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, List, Optional, Tuple, Union
from app.core.config import Settings, settings as default_settings
from app.core.errors import FetchError, ParseError
from app.core.events import EventBus, TIMELINES_CHANGED
from app.fetch.utils import day_label, now_local, resolve_location, to_local
from app.schemas import DailyMenu, Location, Timeline, TimelineEntry, TimelineKind, WeekDay, WeeklyMenu

logger = logging.getLogger(__name__)


def _start_of_day(day: date, tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tzinfo)


def generate_entries(menu: WeeklyMenu, reference: datetime) -> List[TimelineEntry]:
    """Monday..Friday of the week containing reference, sentinel menu for missing days"""
    ref = to_local(reference)
    monday = ref.date() - timedelta(days=ref.weekday())

    entries = []
    for offset, weekday in enumerate(WeekDay.ordered()):
        entries.append(TimelineEntry(
            date=_start_of_day(monday + timedelta(days=offset), ref.tzinfo),
            day=weekday.value,
            menu=menu.get(weekday.value) or DailyMenu.no_menu(),
        ))
    return entries


def next_refresh(
    reference: datetime,
    weekday: int = default_settings.REFRESH_WEEKDAY,
    hour: int = default_settings.REFRESH_HOUR,
) -> datetime:
    """
    Next occurrence of weekday at hour:00 local time strictly after reference.
    Falls back to reference + 24h when the calendar cannot represent it.
    """
    ref = to_local(reference)
    try:
        days_ahead = (weekday - ref.weekday()) % 7
        candidate = datetime.combine(ref.date() + timedelta(days=days_ahead), time(hour), tzinfo=ref.tzinfo)
        if candidate <= ref:
            candidate += timedelta(days=7)
        return candidate
    except (OverflowError, ValueError) as e:
        logger.warning("Could not compute next refresh after %s: %s", ref, e)
        return ref + timedelta(hours=24)


def current_entry(
    menu: WeeklyMenu,
    reference: datetime,
    cutover_hour: int = default_settings.CUTOVER_HOUR,
) -> TimelineEntry:
    """
    Today's entry before the cutover hour, tomorrow's from then on.
    Weekend days get the sentinel menu.
    """
    ref = to_local(reference)
    target = ref.date()
    if ref.hour >= cutover_hour:
        target += timedelta(days=1)

    daily = None
    if WeekDay.from_date(target) is not None:
        daily = menu.get(day_label(target))

    return TimelineEntry(
        date=_start_of_day(target, ref.tzinfo),
        day=day_label(target),
        menu=daily or DailyMenu.no_menu(),
    )


def next_cutover(reference: datetime, cutover_hour: int = default_settings.CUTOVER_HOUR) -> datetime:
    ref = to_local(reference)
    try:
        candidate = datetime.combine(ref.date(), time(cutover_hour), tzinfo=ref.tzinfo)
        if candidate <= ref:
            candidate += timedelta(days=1)
        return candidate
    except (OverflowError, ValueError) as e:
        logger.warning("Could not compute next cutover after %s: %s", ref, e)
        return ref + timedelta(hours=24)


def build_week_timeline(menu: WeeklyMenu, reference: datetime, settings: Settings = default_settings) -> Timeline:
    return Timeline(
        entries=generate_entries(menu, reference),
        refresh_after=next_refresh(reference, settings.REFRESH_WEEKDAY, settings.REFRESH_HOUR),
    )


def build_today_timeline(menu: WeeklyMenu, reference: datetime, settings: Settings = default_settings) -> Timeline:
    return Timeline(
        entries=[current_entry(menu, reference, settings.CUTOVER_HOUR)],
        refresh_after=next_cutover(reference, settings.CUTOVER_HOUR),
    )


class TimelineProvider:
    """
    Widget-facing timelines built on top of MenuService.

    Keeps one snapshot per (location, kind) until its refresh_after has passed
    or a cache write publishes TIMELINES_CHANGED.
    """

    def __init__(
        self,
        menu_service,
        events: Optional[EventBus] = None,
        settings: Settings = default_settings,
        clock: Callable[[], datetime] = now_local,
    ):
        self.menu_service = menu_service
        self.settings = settings
        self.clock = clock
        self._snapshots: Dict[Tuple[str, TimelineKind], Timeline] = {}
        if events is not None:
            events.subscribe(TIMELINES_CHANGED, self._on_timelines_changed)

    def _on_timelines_changed(self, event_name: str, payload):
        self.invalidate((payload or {}).get("location"))

    def invalidate(self, location: Optional[str] = None):
        """Drop snapshots for one location, or all of them"""
        for key in list(self._snapshots):
            if location is None or key[0] == location:
                del self._snapshots[key]

    def _build(self, kind: TimelineKind, menu: WeeklyMenu, reference: datetime) -> Timeline:
        if kind == TimelineKind.TODAY:
            return build_today_timeline(menu, reference, self.settings)
        return build_week_timeline(menu, reference, self.settings)

    async def timeline(
        self,
        location_key: Union[str, Location],
        kind: TimelineKind = TimelineKind.WEEK,
        reference: Optional[datetime] = None,
    ) -> Timeline:
        location = resolve_location(location_key)
        kind = TimelineKind(kind)
        reference = to_local(reference or self.clock())

        key = (location.value, kind)
        snapshot = self._snapshots.get(key)
        if snapshot is not None and reference < snapshot.refresh_after:
            return snapshot

        try:
            menu = await self.menu_service.fetch_menu(location)
        except (FetchError, ParseError) as e:
            logger.warning("No menu for %s timeline, using placeholders: %s", location.value, e)
            return self._build(kind, {}, reference)

        timeline = self._build(kind, menu, reference)
        self._snapshots[key] = timeline
        return timeline

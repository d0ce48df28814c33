from dataclasses import dataclass
from typing import Optional
from app.cache.store import MenuCache
from app.core.config import Settings, settings as default_settings
from app.core.events import EventBus, TIMELINES_CHANGED, log_listener
from app.core.store import SharedStore
from app.services.menu import MenuService
from app.services.preferences import PreferencesStore
from app.services.timeline import TimelineProvider

@dataclass
class Services:
    """Everything a process needs, constructed once and passed around"""
    settings: Settings
    events: EventBus
    store: SharedStore
    cache: MenuCache
    preferences: PreferencesStore
    menus: MenuService
    timelines: TimelineProvider

def build_services(settings: Settings = default_settings, shared_dir: Optional[str] = None) -> Services:
    events = EventBus()
    events.subscribe(TIMELINES_CHANGED, log_listener)

    store = SharedStore(shared_dir or settings.SHARED_DIR)
    cache = MenuCache(store, events)
    menus = MenuService(cache, settings)

    return Services(
        settings=settings,
        events=events,
        store=store,
        cache=cache,
        preferences=PreferencesStore(store),
        menus=menus,
        timelines=TimelineProvider(menus, events, settings),
    )

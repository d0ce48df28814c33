import logging
from pydantic import ValidationError
from app.core.store import SharedStore
from app.schemas import Preferences

logger = logging.getLogger(__name__)

PREFERENCES_FILE = "preferences.json"

class PreferencesStore:
    """User preferences shared by the app and the widget"""

    def __init__(self, store: SharedStore):
        self.store = store

    def load(self) -> Preferences:
        """Stored preferences, defaults when missing or unreadable"""
        try:
            raw = self.store.read_text(PREFERENCES_FILE)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read preferences: %s", e)
            return Preferences()
        if raw is None:
            return Preferences()

        try:
            return Preferences.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Malformed preferences, using defaults: %s", e.errors()[0]["msg"])
            return Preferences()

    def save(self, preferences: Preferences) -> Preferences:
        self.store.write_atomic(PREFERENCES_FILE, preferences.model_dump_json(indent=2))
        logger.info("Saved preferences (location %s)", preferences.selected_location.value)
        return preferences

    def update(self, **changes) -> Preferences:
        current = self.load()
        updated = Preferences.model_validate({**current.model_dump(), **changes})
        return self.save(updated)

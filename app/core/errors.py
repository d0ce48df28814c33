from typing import Optional

class LunchMenuError(Exception):
    """Base class for every failure surfaced by the menu pipeline"""

class ConfigurationError(LunchMenuError):
    """Unknown location key or unusable storage location"""

class FetchError(LunchMenuError):
    """Network or transport failure while downloading a menu page"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url

class ParseError(LunchMenuError):
    """HTML could not be parsed at all (an empty menu is not an error)"""

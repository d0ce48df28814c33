"""
Base parser class for weekly menu extraction.
"""
from abc import ABC, abstractmethod
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from app.core.errors import ParseError
from app.schemas import WeeklyMenu


class BaseParser(ABC):
    """Base class for the per-source menu parsers"""

    def parse(self, html: str) -> WeeklyMenu:
        """
        Parse a menu page into a weekday -> DailyMenu mapping.

        Args:
            html: Raw page HTML

        Returns:
            WeeklyMenu, empty when the page holds no day data

        Raises:
            ParseError: the input is not parseable HTML
        """
        return self.extract(self.load(html))

    @staticmethod
    def load(html: str) -> BeautifulSoup:
        if not isinstance(html, str):
            raise ParseError(f"Expected HTML text, got {type(html).__name__}")
        try:
            return BeautifulSoup(html, "html.parser")
        except (ParserRejectedMarkup, AssertionError) as e:
            raise ParseError(f"Failed to parse HTML: {e}") from e

    @abstractmethod
    def extract(self, soup: BeautifulSoup) -> WeeklyMenu:
        """Pull the day entries out of a parsed document"""
        pass

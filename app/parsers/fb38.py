"""
FB38 parser: one content block per day, categories only marked by their labels in the text.
"""
import re
from typing import Optional
from bs4 import BeautifulSoup
from app.fetch.utils import normalize_whitespace
from app.parsers.base import BaseParser
from app.schemas import DailyMenu, WeekDay, WeeklyMenu

BLOCK_SELECTOR = "div.sqs-html-content"
DAY_KEYS = {day.value for day in WeekDay}

HOT_FOOD = "VARMMAT"
SOUP = "DAGENS SUPPE"
SALAD = "DAGENS SALAT"

# one level only, the class stops at the first closing parenthesis
_ASIDE = re.compile(r"\s*\([^)]*\)")


def extract_category(text: str, category: str, next_category: Optional[str]) -> str:
    """
    Text between a category label and the next label (or end of text), cleaned up.
    Returns "" when the label is missing.
    """
    start = text.find(category)
    if start == -1:
        return ""
    start += len(category)

    end = len(text)
    if next_category is not None:
        next_start = text.find(next_category, start)
        if next_start != -1:
            end = next_start

    content = _ASIDE.sub("\n", text[start:end])
    content = content.replace("(-)", "\n").replace("\n ", "\n")
    return content.strip()


class FB38Parser(BaseParser):

    def extract(self, soup: BeautifulSoup) -> WeeklyMenu:
        menu: WeeklyMenu = {}

        for block in soup.select(BLOCK_SELECTOR):
            heading = block.find("h2")
            if heading is None:
                continue
            day = normalize_whitespace(heading.get_text(" ")).upper()
            # welcome banners, notices and other headings are not days
            if day not in DAY_KEYS:
                continue

            full_text = normalize_whitespace(block.get_text(" "))
            menu[day] = DailyMenu(
                main_dish=extract_category(full_text, HOT_FOOD, SOUP),
                soup=extract_category(full_text, SOUP, SALAD),
                salad=extract_category(full_text, SALAD, None),
            )

        return menu

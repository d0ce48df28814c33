"""
N58 parser: a table with a header row, then one row per weekday.
"""
from bs4 import BeautifulSoup
from bs4.element import Tag
from app.fetch.utils import normalize_whitespace
from app.parsers.base import BaseParser
from app.schemas import DailyMenu, WeeklyMenu

DAY_SELECTOR = "a.dag"
MAIN_DISH_SELECTOR = "a.hovedrett"
SOUP_SELECTOR = "a.suppe"


def _select_text(row: Tag, selector: str) -> str:
    return normalize_whitespace(" ".join(el.get_text(" ") for el in row.select(selector)))


class N58Parser(BaseParser):

    def extract(self, soup: BeautifulSoup) -> WeeklyMenu:
        menu: WeeklyMenu = {}

        for row in soup.select("table tr")[1:]:
            day = _select_text(row, DAY_SELECTOR)
            if not day:
                continue

            # no salad on this site
            menu[day.upper()] = DailyMenu(
                main_dish=_select_text(row, MAIN_DISH_SELECTOR),
                soup=_select_text(row, SOUP_SELECTOR),
                salad="",
            )

        return menu

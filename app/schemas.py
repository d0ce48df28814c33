import math
from datetime import date as date_type, datetime
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictStr, computed_field, field_validator

NO_MENU_TEXT = "Ingen meny tilgjengelig"

class Location(str, Enum):
    FB38 = "FB38"
    N58 = "N58"

class WeekDay(str, Enum):
    MANDAG = "MANDAG"
    TIRSDAG = "TIRSDAG"
    ONSDAG = "ONSDAG"
    TORSDAG = "TORSDAG"
    FREDAG = "FREDAG"

    @classmethod
    def ordered(cls) -> List["WeekDay"]:
        return [cls.MANDAG, cls.TIRSDAG, cls.ONSDAG, cls.TORSDAG, cls.FREDAG]

    @classmethod
    def from_date(cls, day: date_type) -> Optional["WeekDay"]:
        """Weekday for a date, None on Saturday and Sunday"""
        idx = day.weekday()
        return cls.ordered()[idx] if idx < 5 else None

class DailyMenu(BaseModel):
    main_dish: str = Field(default="", description="Hot food, one dish per line")
    soup: str = ""
    salad: str = Field(default="", description="Empty for sources without a salad")

    @field_validator("main_dish", "soup", "salad", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @computed_field
    @property
    def dish_list(self) -> List[str]:
        return [dish.strip() for dish in self.main_dish.split("\n") if dish.strip()]

    @classmethod
    def no_menu(cls) -> "DailyMenu":
        return cls(main_dish=NO_MENU_TEXT)

WeeklyMenu = Dict[str, DailyMenu]

class CacheFile(BaseModel):
    """On-disk layout of <LOCATION>_LunchMenuCache.json"""
    model_config = ConfigDict(extra="forbid")

    data: StrictStr
    timestamp: float = Field(description="Unix epoch seconds")

    @field_validator("timestamp", mode="before")
    @classmethod
    def number_only(cls, v):
        # no bools, no numeric strings
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("timestamp must be a number")
        if not math.isfinite(v):
            raise ValueError("timestamp must be finite")
        return v

class CacheEntry(BaseModel):
    data: str
    timestamp: float
    is_expired: bool

class TimelineKind(str, Enum):
    WEEK = "week"
    TODAY = "today"

class TimelineEntry(BaseModel):
    date: datetime
    day: str
    menu: DailyMenu

class Timeline(BaseModel):
    entries: List[TimelineEntry]
    refresh_after: datetime

class Preferences(BaseModel):
    selected_location: Location = Location.N58
    show_whole_menu: bool = True
    show_main_dish: bool = True
    show_soup: bool = True
    show_salad: bool = True
    show_menu_picker_on_main_view: bool = False
    show_location_picker_on_main_view: bool = False
    show_payment_link: bool = False

class PreferencesUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    selected_location: Optional[Location] = None
    show_whole_menu: Optional[bool] = None
    show_main_dish: Optional[bool] = None
    show_soup: Optional[bool] = None
    show_salad: Optional[bool] = None
    show_menu_picker_on_main_view: Optional[bool] = None
    show_location_picker_on_main_view: Optional[bool] = None
    show_payment_link: Optional[bool] = None

class DayMenu(BaseModel):
    day: WeekDay
    menu: Optional[DailyMenu] = None

class MenuResponse(BaseModel):
    location: Location
    cached: bool
    fetched_at: Optional[datetime] = None
    days: List[DayMenu]
    today: Optional[DailyMenu] = None
    pay_url: Optional[str] = None

class PaymentLink(BaseModel):
    location: Location
    url: str

"""calconv public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    default_context,
    set_default_context,
    get_calendar,
    to_jdn,
    from_jdn,
    days_in_month,
    year_layout,
    chinese_intercalary_month,
    parse_datetime,
    parse_jd,
    split_time,
    set_month_name,
    set_weekday_name,
    install_chinese_calendar_table,
    load_chinese_calendar_table,
    find_nearest_lunar_phase,
)
from .core.context import CalendarContext
from .core.errors import CalconvError, CalendarUnavailableError, UnsupportedCalendarError
from .core.types import (
    CalendarKind,
    CivilDate,
    FrenchLeapRule,
    ParseStatus,
    PersianRule,
    SplitTime,
    TimeFormat,
    YearLayout,
)
from .engines.chinese import ChineseCalendarTable

__all__ = [
    "default_context",
    "set_default_context",
    "get_calendar",
    "to_jdn",
    "from_jdn",
    "days_in_month",
    "year_layout",
    "chinese_intercalary_month",
    "parse_datetime",
    "parse_jd",
    "split_time",
    "set_month_name",
    "set_weekday_name",
    "install_chinese_calendar_table",
    "load_chinese_calendar_table",
    "find_nearest_lunar_phase",
    "CalendarContext",
    "CalconvError",
    "CalendarUnavailableError",
    "UnsupportedCalendarError",
    "CalendarKind",
    "CivilDate",
    "FrenchLeapRule",
    "ParseStatus",
    "PersianRule",
    "SplitTime",
    "TimeFormat",
    "YearLayout",
    "ChineseCalendarTable",
]

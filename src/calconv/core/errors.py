class CalconvError(Exception):
    """Base error."""

class UnsupportedCalendarError(CalconvError, ValueError):
    """Raised for a calendar code or name that is not a CalendarKind."""

class CalendarUnavailableError(CalconvError):
    """Raised when a calendar cannot answer a query with the data it has."""

class ChineseCalendarUnavailableError(CalendarUnavailableError):
    """Raised when a Chinese-calendar query is made before a table is installed."""

class ChineseYearOutOfRangeError(CalendarUnavailableError):
    """Raised for a Chinese year that the installed table does not cover."""

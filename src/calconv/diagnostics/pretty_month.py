from __future__ import annotations

import argparse

import calconv
from calconv.core.time import t2k_to_jdn
from calconv.core.types import CalendarKind
from calconv.engines.calendar import Calendar
from calconv.engines.names import month_label


def dow_header() -> str:
    return "Mo     Tu     We     Th     Fr     Sa     Su"


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def month_weeks(cal: Calendar, greg: Calendar, month: int, year: int) -> list[list[tuple[str, str]]]:
    """Week rows for one month: day number on top, Gregorian MM-DD below."""
    n = cal.days_in_month(month, year)
    first = cal.to_jdn(1, month, year)

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    pad = first % 7  # JDN 0 was a Monday
    for _ in range(pad):
        wk.append(cell("", ""))
    for i in range(n):
        g = greg.from_jdn(first + i)
        wk.append(cell(f"{i + 1:2d}", f"{g.month:02d}-{g.day:02d}"))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks


def print_month(cal: Calendar, greg: Calendar, month: int, year: int) -> None:
    n = cal.days_in_month(month, year)
    if n == 0:
        print(f"{cal.kind.name.lower()} {year} has no month {month}\n")
        return
    first = cal.to_jdn(1, month, year)
    g0 = greg.from_jdn(first)
    g1 = greg.from_jdn(first + n - 1)
    title = (f"{cal.kind.name.lower()}  {month_label(cal, month, year)} {year}"
             f"   ({g0.year}-{g0.month:02d}-{g0.day:02d} .. {g1.year}-{g1.month:02d}-{g1.day:02d})")
    print_grid(title, month_weeks(cal, greg, month, year))


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a month of any calendar as a week grid with paired Gregorian dates."
    )
    p.add_argument("-c", "--calendar", default="hebrew", help="Calendar name or code (default: hebrew)")
    p.add_argument("year", type=int, nargs="?", help="Year in that calendar")
    p.add_argument("month", type=int, nargs="?", help="Month slot 1..13 (omit for the whole year)")
    p.add_argument("--chinese-table", default=None, help="Binary Chinese calendar table")
    args = p.parse_args(argv)

    ctx = calconv.CalendarContext()
    if args.chinese_table:
        calconv.load_chinese_calendar_table(args.chinese_table, context=ctx)

    cal = ctx.calendar(args.calendar)
    greg = ctx.calendar(CalendarKind.GREGORIAN)

    if args.year is None:
        # sensible default demo: the month holding today
        d = cal.from_jdn(t2k_to_jdn(ctx.now_t2k()))
        print_month(cal, greg, d.month, d.year)
        return 0

    months = [args.month] if args.month else range(1, 14)
    for m in months:
        if args.month or cal.days_in_month(m, args.year):
            print_month(cal, greg, m, args.year)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

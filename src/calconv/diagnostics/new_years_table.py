from __future__ import annotations

import argparse
from typing import List, Tuple

import calconv
from calconv.core.types import CalendarKind
from calconv.engines.calendar import Calendar


DEFAULT_CALENDARS: List[Tuple[str, CalendarKind]] = [
    ("Hebrew", CalendarKind.HEBREW),
    ("Islamic", CalendarKind.ISLAMIC),
    ("French", CalendarKind.FRENCH_REVOLUTIONARY),
    ("Persian", CalendarKind.PERSIAN),
    ("ModPersian", CalendarKind.MODERN_PERSIAN),
    ("Julian", CalendarKind.JULIAN),
]


def parse_calendars(arg: str) -> List[Tuple[str, CalendarKind]]:
    """
    Parse calendar list from CLI.
    Example:
      --calendars "Hebrew=hebrew,Hijri=islamic"
    If you pass just calendars, names will be capitalized calendar names:
      --calendars "hebrew,persian"
    """
    items = [x.strip() for x in arg.split(",") if x.strip()]
    out: List[Tuple[str, CalendarKind]] = []
    for it in items:
        if "=" in it:
            name, cal = it.split("=", 1)
            out.append((name.strip(), CalendarKind.coerce(cal.strip())))
        else:
            out.append((it.capitalize(), CalendarKind.coerce(it)))
    return out


def new_years_in(cal: Calendar, greg: Calendar, gyear: int) -> List[Tuple[int, int]]:
    """(calendar year, JDN) of every New Year falling in Gregorian year `gyear`."""
    jan1 = greg.to_jdn(1, 1, gyear)
    next_jan1 = greg.to_jdn(1, 1, gyear + 1)

    year = cal.from_jdn(jan1).year
    out: List[Tuple[int, int]] = []
    while True:
        jdn = cal.new_year_jdn(year)
        if jdn >= next_jan1:
            return out
        if jdn >= jan1:
            out.append((year, jdn))
        year += 1


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print the Gregorian dates of New Year across calendars."
    )
    p.add_argument("--from-year", type=int, default=2000)
    p.add_argument("--to-year", type=int, default=2030)
    p.add_argument(
        "--calendars",
        type=str,
        default="",
        help='Comma list like "Hebrew=hebrew,Hijri=islamic" (default: all arithmetic calendars).',
    )
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="mmdd",
        help="Display format in table columns (default: mmdd).",
    )
    p.add_argument("--chinese-table", default=None, help="Binary Chinese calendar table (adds a Chinese column)")
    args = p.parse_args(argv)

    ctx = calconv.CalendarContext()
    calendars = parse_calendars(args.calendars) if args.calendars else list(DEFAULT_CALENDARS)
    if args.chinese_table:
        calconv.load_chinese_calendar_table(args.chinese_table, context=ctx)
        if not args.calendars:
            calendars.append(("Chinese", CalendarKind.CHINESE))

    greg = ctx.calendar(CalendarKind.GREGORIAN)

    def fmt(jdn: int) -> str:
        d = greg.from_jdn(jdn)
        return f"{d.month:02d}-{d.day:02d}" if args.dates == "mmdd" else f"{d.year:04d}-{d.month:02d}-{d.day:02d}"

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    # table header
    headers = ["Year"] + [name for name, _ in calendars]
    colw = [5] + [max(6 if args.dates == "mmdd" else 10, len(h)) for h in headers[1:]]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    for Y in range(Y0, Y1 + 1):
        row = [str(Y).ljust(colw[0])]
        for (_, kind), w in zip(calendars, colw[1:]):
            # Islamic years are short: some Gregorian years hold two New Years.
            hits = new_years_in(ctx.calendar(kind), greg, Y)
            row.append(",".join(fmt(jdn) for _, jdn in hits).ljust(w) if hits else "-".ljust(w))
        print("  ".join(row))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

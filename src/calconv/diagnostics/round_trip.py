from __future__ import annotations

import argparse
import random
from typing import List

import calconv
from calconv.core.types import CalendarKind
from calconv.engines.calendar import Calendar

DEFAULT_CALENDARS = "gregorian,julian,hebrew,islamic,french_revolutionary,persian,julian_gregorian,modern_persian"


def parse_calendars(s: str) -> List[CalendarKind]:
    # "hebrew,islamic" -> [CalendarKind.HEBREW, ...]
    return [CalendarKind.coerce(x) for x in s.split(",") if x.strip()]


def roundtrip_test(
    cal: Calendar,
    N: int,
    start_jdn: int,
    end_jdn: int,
    seed: int,
    *,
    max_failures: int,
) -> int:
    """
    JDN -> civil date -> JDN on N random days, plus the layout invariants of
    every year touched: months sum to the year length and consecutive years
    abut.
    """
    random.seed(seed)
    failures = 0

    for _ in range(N):
        jdn = random.randint(start_jdn, end_jdn)
        d = cal.from_jdn(jdn)
        back = cal.to_jdn(d.day, d.month, d.year)
        ok = back == jdn and 1 <= d.day <= cal.days_in_month(d.month, d.year)

        layout = cal.year_layout(d.year)
        nxt = cal.year_layout(d.year + 1)
        if cal.kind != CalendarKind.JULIAN_GREGORIAN or d.year != 1582:
            ok = ok and layout.next_year_start_jdn == nxt.year_start_jdn

        if not ok:
            failures += 1
            print("\nFAIL")
            print("calendar:", cal.kind.name)
            print("jdn:", jdn)
            print("date:", d)
            print("back:", back)
            print("layout:", layout)
            print("next layout:", nxt)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: JDN -> civil date -> JDN.")
    p.add_argument("--calendars", type=str, default=DEFAULT_CALENDARS,
                   help="Comma-separated calendar list (names or codes).")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--start-jdn", type=int, default=1000000, help="First JDN sampled.")
    p.add_argument("--end-jdn", type=int, default=3000000, help="Last JDN sampled.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    p.add_argument("--chinese-table", default=None,
                   help="Binary Chinese calendar table; adds the Chinese calendar over its year range.")
    args = p.parse_args(argv)

    if args.end_jdn < args.start_jdn:
        raise SystemExit("--end-jdn must be >= --start-jdn")

    ctx = calconv.CalendarContext()
    kinds = parse_calendars(args.calendars)
    ranges = {k: (args.start_jdn, args.end_jdn) for k in kinds}

    if args.chinese_table:
        table = calconv.load_chinese_calendar_table(args.chinese_table, context=ctx)
        first, last = table.year_range
        cal = ctx.calendar(CalendarKind.CHINESE)
        ranges[CalendarKind.CHINESE] = (cal.new_year_jdn(first), cal.new_year_jdn(last) - 1)

    total_fail = 0
    for kind, (lo, hi) in ranges.items():
        print(f"Testing {kind.name.lower()} ...")
        f = roundtrip_test(ctx.calendar(kind), N=args.N, start_jdn=lo, end_jdn=hi, seed=args.seed,
                           max_failures=args.max_failures)
        total_fail += f

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

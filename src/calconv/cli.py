from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import sys

from calconv.core.types import CalendarKind, TimeFormat

_FORMATS = {
    "dmy": TimeFormat.DMY,
    "ymd": TimeFormat.YMD,
    "ydm": TimeFormat.YDM,
    "mdy": TimeFormat.MDY,
}

_WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

_COMMANDS = ("jd", "parse", "month", "new-years", "diag")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _format_flags(fmt: str, calendar: str, two_digit_year: bool) -> int:
    flags = _FORMATS[fmt] | int(CalendarKind.coerce(calendar))
    if two_digit_year:
        flags |= TimeFormat.TWO_DIGIT_YEAR
    return flags


def _add_parse_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("text", nargs="*", help='Date/time text, e.g. "2024 mar 20 12:30" (default: now)')
    p.add_argument("--format", choices=sorted(_FORMATS), default="ymd", help="Field order (default: ymd)")
    p.add_argument("-c", "--calendar", default="gregorian", help="Calendar the text is written in (name or code)")
    p.add_argument("--no-two-digit-year", action="store_true", help="Read two-digit years literally")
    p.add_argument("--chinese-table", default=None, help="Path to a binary Chinese calendar table")


def _context(args: argparse.Namespace):
    import calconv

    ctx = calconv.default_context()
    if args.chinese_table:
        calconv.load_chinese_calendar_table(args.chinese_table, context=ctx)
    return ctx


def _parse_args_text(args: argparse.Namespace, extra: list[str], ctx) -> tuple[float, int]:
    import calconv

    # Signed offsets like "-3d" are not options; argparse hands them back as extras.
    text = " ".join(list(args.text) + extra)
    flags = _format_flags(args.format, args.calendar, not args.no_two_digit_year)
    base = ctx.now_t2k()
    if not text:
        return base, calconv.ParseStatus.LOCAL
    return calconv.parse_datetime(base, text, flags, context=ctx)


def cmd_jd(argv: list[str]) -> int:
    import calconv
    from calconv.core.errors import CalendarUnavailableError
    from calconv.core.time import t2k_to_jd, t2k_to_jdn
    from calconv.engines.names import format_date

    p = argparse.ArgumentParser(prog="calconv jd", description="Parse a date/time and show it in every calendar")
    _add_parse_options(p)
    args, extra = p.parse_known_args(argv)

    ctx = _context(args)
    t2k, status = _parse_args_text(args, extra, ctx)
    if not status.ok:
        print(f"Could not parse {' '.join(args.text + extra)!r}: {status.name}", file=sys.stderr)
        return 2

    jdn = t2k_to_jdn(t2k)
    greg = ctx.calendar(CalendarKind.GREGORIAN)
    d = greg.from_jdn(jdn)
    st = greg.split_time(t2k)
    print(f"JD {t2k_to_jd(t2k):.5f}{'  (UT)' if status == calconv.ParseStatus.UTC else ''}")
    print(f"  {_WEEKDAYS[(jdn + 1) % 7]}, day {jdn - greg.new_year_jdn(d.year) + 1} of the year,"
          f" {st.hour:02d}:{st.minute:02d}:{st.second:04.1f}")
    print()
    for kind in CalendarKind:
        cal = ctx.calendar(kind)
        label = kind.name.replace("_", " ").title()
        try:
            cd = cal.from_jdn(jdn)
        except CalendarUnavailableError as e:
            print(f"  {label:<22}({e})")
            continue
        print(f"  {label:<22}{format_date(cal, cd.day, cd.month, cd.year)}")
    return 0


def cmd_parse(argv: list[str]) -> int:
    from calconv.core.time import t2k_to_jd

    p = argparse.ArgumentParser(prog="calconv parse", description="Parse a date/time; print the JD and status")
    _add_parse_options(p)
    args, extra = p.parse_known_args(argv)

    ctx = _context(args)
    t2k, status = _parse_args_text(args, extra, ctx)
    print(f"{t2k_to_jd(t2k):.6f}  {status.name} ({int(status)})")
    return 0 if status.ok else 2


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    verbose = "--verbose" in argv
    if verbose:
        argv = [a for a in argv if a != "--verbose"]
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # `calconv 2024 mar 20` works like `calconv jd 2024 mar 20`.
    if argv and argv[0] not in _COMMANDS and argv[0] not in ("-h", "--help"):
        return cmd_jd(argv)

    p = argparse.ArgumentParser(prog="calconv", description="Calendar conversion and date parsing toolkit.")
    p.add_argument("--verbose", action="store_true", help="Log debug messages to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("jd", help="Parse a date/time and show it in every calendar", add_help=False)
    sub.add_parser("parse", help="Parse a date/time; print JD and status", add_help=False)
    sub.add_parser("month", help="Print a month grid for any calendar (diagnostics)", add_help=False)
    sub.add_parser("new-years", help="Print New Year table across calendars (diagnostics)", add_help=False)

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "year-lengths"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.cmd == "jd":
        return cmd_jd(rest)

    if args.cmd == "parse":
        return cmd_parse(rest)

    if args.cmd == "month":
        return _run_module_main("calconv.diagnostics.pretty_month", rest)

    if args.cmd == "new-years":
        return _run_module_main("calconv.diagnostics.new_years_table", rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "calconv.diagnostics.round_trip",
            "year-lengths": "calconv.diagnostics.year_lengths",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())

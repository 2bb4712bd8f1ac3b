#!/usr/bin/env python3
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import calconv
from calconv.core.types import CalendarKind


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "calconv[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "calconv[diagnostics]"') from e


@dataclass(frozen=True)
class Style:
    label: str
    color: str
    marker: str
    size: float = 10.0


STYLES: Dict[CalendarKind, Style] = {
    CalendarKind.HEBREW: Style("Hebrew", "tab:blue", "o"),
    CalendarKind.ISLAMIC: Style("Islamic", "tab:green", "s", size=8),
    CalendarKind.FRENCH_REVOLUTIONARY: Style("French Rev.", "tab:red", "_", size=18),
    CalendarKind.PERSIAN: Style("Persian", "tab:purple", "|", size=18),
    CalendarKind.MODERN_PERSIAN: Style("Modern Persian", "0.45", "x", size=12),
    CalendarKind.CHINESE: Style("Chinese", "tab:orange", "o", size=14),
}


def build_series(np, cal, start_year: int, end_year: int) -> Tuple["np.ndarray", "np.ndarray"]:
    years = np.arange(start_year, end_year + 1, dtype=int)
    lengths = np.array([cal.days_in_year(int(Y)) for Y in years], dtype=int)
    return years, lengths


def summarize(np, years, lengths) -> str:
    values, counts = np.unique(lengths, return_counts=True)
    hist = ", ".join(f"{int(v)}x{int(c)}" for v, c in zip(values, counts))
    return f"{int(years[0])}..{int(years[-1])}: mean {float(lengths.mean()):.6f} d  [{hist}]"


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Year lengths per calendar: summary table and scatter plot.")
    p.add_argument("--calendars", default="hebrew,islamic,french_revolutionary,persian,modern_persian",
                   help="Comma-separated calendar list.")
    p.add_argument("--from-year", type=int, default=None, help="First year (default: a few centuries around now)")
    p.add_argument("--span", type=int, default=600, help="Number of years (default: 600)")
    p.add_argument("--chinese-table", default=None, help="Binary Chinese calendar table")
    p.add_argument("--outbase", default="year_lengths", help="Output base name (writes .png)")
    p.add_argument("--no-plot", action="store_true", help="Only print the summary table")
    args = p.parse_args(argv)

    np = _need_numpy()

    ctx = calconv.CalendarContext()
    kinds = [CalendarKind.coerce(x) for x in args.calendars.split(",") if x.strip()]
    table = None
    if args.chinese_table:
        table = calconv.load_chinese_calendar_table(args.chinese_table, context=ctx)
        if CalendarKind.CHINESE not in kinds:
            kinds.append(CalendarKind.CHINESE)

    greg = ctx.calendar(CalendarKind.GREGORIAN)
    anchor = greg.to_jdn(1, 1, 1800)

    series = {}
    for kind in kinds:
        cal = ctx.calendar(kind)
        if kind == CalendarKind.CHINESE:
            if table is None:
                raise SystemExit("the Chinese calendar needs --chinese-table")
            first, last = table.year_range
            y0, y1 = first, last - 1
        else:
            y0 = args.from_year if args.from_year is not None else cal.from_jdn(anchor).year
            y1 = y0 + args.span - 1
        years, lengths = build_series(np, cal, y0, y1)
        series[kind] = (years, lengths)
        print(f"{STYLES.get(kind, Style(kind.name, 'k', '.')).label:<16}{summarize(np, years, lengths)}")

    if args.no_plot:
        return 0

    plt = _need_matplotlib()

    plt.rcParams.update({
        "font.size": 10,
        "axes.labelsize": 11,
        "axes.titlesize": 12,
        "legend.fontsize": 10,
        "axes.linewidth": 0.8,
    })

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)

    ax.set_xlabel("Years from first plotted year")
    ax.set_ylabel("Year length (days)")
    ax.set_title("Year lengths by calendar")

    for kind, (years, lengths) in series.items():
        st = STYLES.get(kind, Style(kind.name.title(), "k", "."))
        ax.scatter(years - years[0], lengths, s=st.size, marker=st.marker, c=st.color, alpha=0.5, label=st.label)

    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False)

    outbase = args.outbase
    fig.savefig(outbase + ".png", dpi=200)
    print(f"Saved: {outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

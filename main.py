"""Entry point: print a month grid with its modifiers, optionally as PNG."""

from __future__ import annotations

import argparse
import calendar as _cal
import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from calendar_logic import week_grid, weekday, weekday_labels
from modifiers import Before, OnDay, modifiers_for_day, modifiers_with_selection
from settings import first_day_of_week, load_settings, save_settings

logger = logging.getLogger(__name__)


def parse_month(value: str) -> date:
    """Parse ``YYYY-MM`` into the first day of that month."""
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}") from None


def parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from None


def parse_weekday(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        n = -1
    if not 0 <= n <= 6:
        raise argparse.ArgumentTypeError(f"expected 0 (Sunday) .. 6 (Saturday), got {value!r}")
    return n


def format_grid(
    anchor: date,
    grid: list[list[date]],
    modifiers: Mapping[str, Any] | None = None,
    class_names: Mapping[str, str] | None = None,
) -> str:
    """Render *grid* as text; ``*`` marks selected days and ``x`` disabled ones."""
    class_names = class_names or {}
    selected = class_names.get("selected", "selected")
    disabled = class_names.get("disabled", "disabled")

    first = weekday(grid[0][0]) if grid else 0
    lines = [f"{_cal.month_name[anchor.month]} {anchor.year}".center(28).rstrip(),
             "".join(f"{abbr[:2]:>3} " for abbr in weekday_labels(first)).rstrip()]
    for week in grid:
        cells = []
        for day in week:
            names = modifiers_for_day(day, modifiers)
            mark = "*" if selected in names else "x" if disabled in names else " "
            cells.append(f"{day.day:>3}{mark}")
        lines.append("".join(cells).rstrip())
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show a month grid with day modifiers.")
    parser.add_argument("month", nargs="?", type=parse_month,
                        help="month to show as YYYY-MM (default: current month)")
    parser.add_argument("--first-day", type=parse_weekday,
                        help="first day of the week, 0 = Sunday")
    parser.add_argument("--fixed-weeks", action="store_true", default=None,
                        help="always show 6 weeks")
    parser.add_argument("--select", type=parse_day, action="append", default=[],
                        metavar="YYYY-MM-DD", help="mark a day as selected (repeatable)")
    parser.add_argument("--disable-before", type=parse_day, metavar="YYYY-MM-DD",
                        help="disable every day before this one")
    parser.add_argument("--png", metavar="PATH", help="also write a PNG preview")
    parser.add_argument("--settings", metavar="PATH", help="settings file to use")
    parser.add_argument("--save-settings", action="store_true",
                        help="store --first-day/--fixed-weeks in the settings file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None, today: date | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings(args.settings)
    if args.first_day is not None:
        settings["first_day_of_week"] = args.first_day
    if args.fixed_weeks is not None:
        settings["fixed_weeks"] = args.fixed_weeks
    if args.save_settings:
        save_settings(settings, args.settings)

    today = today or date.today()
    anchor = args.month or today.replace(day=1)
    grid = week_grid(anchor, first_day_of_week(settings), settings["fixed_weeks"])

    modifiers = modifiers_with_selection(
        {"today": OnDay(today)},
        selected=args.select,
        disabled=Before(args.disable_before) if args.disable_before else None,
        class_names=settings["class_names"],
    )
    print(format_grid(anchor, grid, modifiers, settings["class_names"]))

    if args.png:
        from render import render_month

        render_month(anchor, grid, modifiers, settings["modifier_colors"]).save(args.png)
        logger.debug("Wrote preview to %s", args.png)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Render a month's week grid into a PIL Image (in-memory preview)."""

from __future__ import annotations

import calendar as _cal
from collections.abc import Mapping
from datetime import date
from typing import Any

from PIL import Image, ImageDraw, ImageFont

from calendar_logic import weekday, weekday_labels
from modifiers import modifiers_for_day

# Colours
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
FG = "black"
OUTSIDE_FG = "#AAAAAA"
WEEKEND_FG = "#CC0000"


def cell_color(names: list[str], colors: Mapping[str, str]) -> str | None:
    """Colour of the first modifier in *names* that has one."""
    for name in names:
        if name in colors:
            return colors[name]
    return None


def _centered_text(draw: ImageDraw.ImageDraw, box: tuple[int, int, int, int],
                   text: str, fill: str, font) -> None:
    # Centre the visible pixels, compensating for font metric offsets
    bbox = draw.textbbox((0, 0), text, font=font)
    x = box[0] + (box[2] - box[0] - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = box[1] + (box[3] - box[1] - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill=fill, font=font)


def render_month(
    anchor: date,
    grid: list[list[date]],
    modifiers: Mapping[str, Any] | None = None,
    colors: Mapping[str, str] | None = None,
    cell: int = 32,
) -> Image.Image:
    """Return an RGB image: month header, weekday row, then one row per week.

    A day's background is the colour of its first matching modifier found in
    *colors*. Days outside the anchor's month use a muted foreground.
    """
    colors = colors or {}
    width = 7 * cell
    height = (2 + len(grid)) * cell
    img = Image.new("RGB", (width, height), GRID_BG)
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    draw.rectangle((0, 0, width - 1, cell - 1), fill=HEADER_BG)
    _centered_text(draw, (0, 0, width, cell),
                   f"{_cal.month_name[anchor.month]} {anchor.year}", FG, font)

    first = weekday(grid[0][0]) if grid else 0
    for col, abbr in enumerate(weekday_labels(first)):
        box = (col * cell, cell, (col + 1) * cell, 2 * cell)
        _centered_text(draw, box, abbr, FG, font)

    for r, week in enumerate(grid):
        top = (r + 2) * cell
        for c, day in enumerate(week):
            box = (c * cell, top, (c + 1) * cell, top + cell)
            bg = cell_color(modifiers_for_day(day, modifiers), colors)
            if bg:
                draw.rectangle((box[0], box[1], box[2] - 1, box[3] - 1), fill=bg)
            if day.month != anchor.month:
                fg = OUTSIDE_FG
            elif weekday(day) in (0, 6) and not bg:
                fg = WEEKEND_FG
            else:
                fg = FG
            _centered_text(draw, box, str(day.day), fg, font)

    return img

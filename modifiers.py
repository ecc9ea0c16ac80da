"""Day modifiers: named rules deciding which labels apply to a calendar day.

A modifier map is a plain dict of ``name -> rule``. Rules are one of the
variants below, or a loose shape that :func:`as_rule` coerces:

* a ``date``                                  -> :class:`OnDay`
* a list/tuple of the other shapes            -> :class:`AnyOf`
* ``{"from": date, "to": date}``              -> :class:`Between`
* ``{"after": date}``                         -> :class:`After`
* ``{"before": date}``                        -> :class:`Before`
* a callable taking a date                    -> :class:`Matching`

Anything else (including falsy values) is ignored and never matches.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from calendar_logic import as_date


class Rule:
    """Base class of the rule variants."""

    __slots__ = ()


@dataclass(frozen=True)
class OnDay(Rule):
    day: date


@dataclass(frozen=True)
class Between(Rule):
    """Every day from *start* to *end*, both inclusive. A reversed range matches nothing."""

    start: date
    end: date


@dataclass(frozen=True)
class After(Rule):
    """Every day strictly later than *day*."""

    day: date


@dataclass(frozen=True)
class Before(Rule):
    """Every day strictly earlier than *day*."""

    day: date


@dataclass(frozen=True)
class Matching(Rule):
    predicate: Callable[[date], Any]


@dataclass(frozen=True)
class AnyOf(Rule):
    """Matches when any of *rules* matches. Nesting is one level deep."""

    rules: tuple[Rule, ...]


# ------------------------------------------------------------------
# Day comparisons
# ------------------------------------------------------------------
def is_same_day(d1: date, d2: date) -> bool:
    return as_date(d1) == as_date(d2)


def is_day_after(d1: date, d2: date) -> bool:
    """True if *d1* is strictly later than *d2* (time-of-day ignored)."""
    return as_date(d1) > as_date(d2)


def is_day_before(d1: date, d2: date) -> bool:
    """True if *d1* is strictly earlier than *d2* (time-of-day ignored)."""
    return as_date(d1) < as_date(d2)


def is_range_of_dates(value: Any) -> bool:
    """True for a mapping carrying truthy ``from`` and ``to`` entries."""
    return isinstance(value, Mapping) and bool(value.get("from") and value.get("to"))


def is_day_in_range(d: date, rng: Between | Mapping) -> bool:
    if isinstance(rng, Between):
        start, end = rng.start, rng.end
    else:
        start, end = rng["from"], rng["to"]
    return as_date(start) <= as_date(d) <= as_date(end)


# ------------------------------------------------------------------
# Coercion of loose rule shapes
# ------------------------------------------------------------------
def _as_simple_rule(value: Any) -> Rule | None:
    """Coerce one non-sequence shape, or return None when it is not a rule."""
    if not value:
        return None
    if isinstance(value, Rule):
        return None if isinstance(value, AnyOf) else value
    if isinstance(value, date):
        return OnDay(as_date(value))
    if isinstance(value, Mapping):
        if is_range_of_dates(value):
            start, end = value["from"], value["to"]
            if isinstance(start, date) and isinstance(end, date):
                return Between(as_date(start), as_date(end))
            return None
        after = value.get("after")
        if after:
            return After(as_date(after)) if isinstance(after, date) else None
        before = value.get("before")
        if before:
            return Before(as_date(before)) if isinstance(before, date) else None
        return None
    if callable(value):
        return Matching(value)
    return None


def as_rule(value: Any) -> Rule | None:
    """Turn a loose modifier value into a rule variant (None = never matches).

    Shapes are tried in order: date, sequence, range, after, before,
    callable. Inside a sequence, falsy and unrecognised entries are dropped
    and nested sequences are not followed.
    """
    if isinstance(value, AnyOf):
        return value
    if isinstance(value, (list, tuple)):
        rules = (_as_simple_rule(v) for v in value)
        return AnyOf(tuple(r for r in rules if r is not None))
    return _as_simple_rule(value)


# ------------------------------------------------------------------
# Resolution
# ------------------------------------------------------------------
def matches(day: date, rule: Rule) -> bool:
    """Evaluate a single rule variant against *day*."""
    match rule:
        case OnDay(on):
            return as_date(day) == as_date(on)
        case AnyOf(rules):
            return any(matches(day, r) for r in rules if not isinstance(r, AnyOf))
        case Between():
            return is_day_in_range(day, rule)
        case After(bound):
            return is_day_after(day, bound)
        case Before(bound):
            return is_day_before(day, bound)
        case Matching(predicate):
            return bool(predicate(day))
    return False


def modifiers_for_day(day: date, modifiers: Mapping[str, Any] | None = None) -> list[str]:
    """Return the names in *modifiers* whose rule matches *day*, in key order."""
    if not modifiers:
        return []
    day = as_date(day)
    result: list[str] = []
    for name, value in modifiers.items():
        rule = as_rule(value)
        if rule is not None and matches(day, rule):
            result.append(name)
    return result


def modifiers_with_selection(
    modifiers: Mapping[str, Any] | None = None,
    selected: Any = None,
    disabled: Any = None,
    class_names: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Copy *modifiers* and add the selected/disabled days under their class names.

    *class_names* maps ``"selected"`` and ``"disabled"`` to the modifier keys
    to use; missing entries keep those literal names. Falsy *selected* or
    *disabled* values are left out.
    """
    names = {"selected": "selected", "disabled": "disabled"}
    if class_names:
        names.update(class_names)
    result = dict(modifiers or {})
    if selected:
        result[names["selected"]] = selected
    if disabled:
        result[names["disabled"]] = disabled
    return result

"""
Normalizer and Expander

Picks the single best-fitting unit for a quantity (normalize) or splits it
into whole amounts of several units, largest first, the way a duration is
written as minutes and seconds (expand).
"""

import logging
from collections.abc import Iterable
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .definitions import Dimension, UnitRule

logger = logging.getLogger(__name__)

DEFAULT_NORMALIZE_PRECISION = 10

Predicate = Callable[['Quantity'], Optional[bool]]


def _matches(rule: UnitRule, filter_options: Dict[str, Any]) -> bool:
    for key, wanted in filter_options.items():
        value = rule.tag(key)
        if value == wanted:
            continue
        if value is None and wanted is False:
            continue
        return False
    return True


def candidate_rules(dimension: Optional[Dimension],
                    filter_options: Optional[Dict[str, Any]] = None) -> List[Tuple[str, UnitRule]]:
    """
    Units eligible for normalize/expand, largest unit first

    Only rules with a factor take part. The dimension's candidate filter
    applies first, then ``filter_options``: every requested tag must equal
    the rule's tag, an absent tag matching a requested ``False``.
    """
    if dimension is None:
        return []

    candidates = [(name, rule) for name, rule in dimension.rules.items() if rule.has_factor]
    if dimension.candidate_filter is not None:
        candidates = [(name, rule) for name, rule in candidates
                      if dimension.candidate_filter(name, rule)]
    if filter_options:
        candidates = [(name, rule) for name, rule in candidates if _matches(rule, filter_options)]

    return sorted(candidates, key=lambda item: item[1].factor)


def expand(quantity: 'Quantity', filter_options: Optional[Dict[str, Any]] = None,
           predicate: Optional[Predicate] = None) -> List['Quantity']:
    """
    Decompose a quantity into whole amounts of decreasing units

    Each candidate unit receives the truncated remainder; a metric unit with
    a positive amount is emitted with its fractional part and ends the walk.
    A leftover smaller than one of the smallest candidate is dropped.

    Args:
        quantity: Quantity to decompose
        filter_options: Required tag values of candidate units
        predicate: Called with the remainder converted to each candidate;
            a falsy answer skips that unit

    Returns:
        Quantities largest unit first, ``[quantity]`` if nothing can decompose it

    Example:
        >>> WEIGHT.of(24, 'ounce').expand(metric=False)
        [(1 pound), (8 ounces)]
    """
    candidates = candidate_rules(quantity.dimension, filter_options)
    if not candidates or quantity.amount is None:
        return [quantity]

    negative = quantity.amount < 0
    remainder = abs(quantity)
    parts = []

    for name, _rule in candidates:
        remainder = remainder.convert_to(name)
        if predicate is not None and not predicate(remainder):
            continue
        whole = remainder.truncate()
        if remainder.is_metric and whole > 0:
            parts.append(remainder)
            break
        if whole > 0:
            parts.append(quantity.dimension.of(whole, name))
        remainder = remainder % 1

    logger.debug(f"Expanded {quantity!r} into {len(parts)} parts")
    if negative:
        return [-part for part in parts]
    return parts


def normalize(quantity: 'Quantity', filter_options: Optional[Dict[str, Any]] = None,
              predicate: Optional[Predicate] = None,
              precision: int = DEFAULT_NORMALIZE_PRECISION) -> 'Quantity':
    """
    Convert a quantity to the largest unit holding it as a whole number

    The predicate may return True to accept a candidate outright or False
    to skip it; any other answer falls back to the whole-number test.

    Args:
        quantity: Quantity to normalize
        filter_options: Required tag values of candidate units
        predicate: Called with the quantity converted to each candidate
        precision: Decimal digits kept when testing the fractional part

    Returns:
        The converted quantity, or ``quantity`` itself if no unit fits

    Example:
        >>> WEIGHT.of(0.021, 'kilogram').normalize()
        (21 grams)
    """
    if quantity.amount is None:
        return quantity

    for name, _rule in candidate_rules(quantity.dimension, filter_options):
        candidate = quantity.convert_to(name)
        if predicate is not None:
            verdict = predicate(candidate)
            if verdict is True:
                return candidate
            if verdict is False:
                continue
        if candidate.amount >= 1 and round(candidate.amount % 1, precision) == 0:
            return candidate

    return quantity


def normalize_each(values: Union['Quantity', int, float, Iterable], filter_options=None,
                   predicate: Optional[Predicate] = None,
                   precision: int = DEFAULT_NORMALIZE_PRECISION):
    """
    Normalize a quantity, a bare number or an iterable of either

    Bare numbers become untyped quantities, which normalize to themselves.
    """
    from ..quantity import Quantity

    if isinstance(values, Quantity):
        return normalize(values, filter_options, predicate, precision)
    if isinstance(values, (str, bytes)):
        raise TypeError(f"Cannot normalize {values!r}")
    if isinstance(values, Iterable):
        return [normalize_each(value, filter_options, predicate, precision) for value in values]
    return normalize(Quantity(values), filter_options, predicate, precision)

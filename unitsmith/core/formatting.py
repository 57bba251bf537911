"""
Display helpers for quantities

Turns the exact amount of a quantity into a display number and renders
amount and unit as text. Quantities are duck-typed here (``amount``,
``unit``, ``dimension``, ``is_metric``, ``rule``) so the registry can use
``pluralize`` without importing the quantity module.
"""

import re
from fractions import Fraction
from math import floor
from typing import Optional, Union

from ..config.units_config import UnitsConfiguration

_DEFAULT_CONFIG = UnitsConfiguration()

_ES_ENDING = re.compile(r'(s|x|z|ch|sh)$')
_THOUSANDS = re.compile(r'(\d)(?=(\d{3})+(?!\d))')


def pluralize(word: str, plural: Optional[str] = None) -> str:
    """Plural form of a unit name, the explicit override winning"""
    if plural:
        return plural
    ending = 'es' if _ES_ENDING.search(word) else 's'
    return word + ending


def coerced_amount(quantity, config: Optional[UnitsConfiguration] = None) -> Union[None, int, float, Fraction]:
    """
    Display number of a quantity's amount

    Metric units become floats, other units keep their exact fraction
    unless its denominator is too large to read, integral values become ints.
    """
    config = config or _DEFAULT_CONFIG
    amount = quantity.amount
    if amount is None:
        return None

    coerced = float(amount) if quantity.is_metric else amount
    if isinstance(coerced, Fraction):
        if coerced.denominator > config.max_display_denominator:
            coerced = float(coerced)
        elif coerced.denominator == 1:
            coerced = int(coerced)
    if isinstance(coerced, float) and coerced.is_integer():
        coerced = int(coerced)
    return coerced


def humanized_amount(quantity, config: Optional[UnitsConfiguration] = None) -> Optional[str]:
    """Amount as text: mixed fractions and thousands separators"""
    config = config or _DEFAULT_CONFIG
    amount = coerced_amount(quantity, config)
    if amount is None:
        return None

    if isinstance(amount, Fraction) and amount.numerator > amount.denominator:
        whole = floor(amount)
        text = f"{whole} {amount - whole}"
    else:
        text = f"{amount}"

    parts = text.split('.')
    parts[0] = _THOUSANDS.sub(rf'\1{config.thousands_separator}', parts[0])
    text = '.'.join(parts)

    if quantity.dimension is not None:
        text += quantity.dimension.amount_suffix
    return text


def needs_plural(quantity, config: Optional[UnitsConfiguration] = None) -> bool:
    amount = coerced_amount(quantity, config)
    if amount is None:
        return True
    if isinstance(amount, Fraction):
        return abs(amount) <= 0 or abs(amount) > 1
    return abs(amount) != 1


def humanized_unit(quantity, config: Optional[UnitsConfiguration] = None) -> Optional[str]:
    """Unit name as text, pluralized and capitalized per its dimension"""
    if quantity.unit is None:
        return None

    dimension = quantity.dimension
    humanized = quantity.unit.replace('_', ' ')
    if dimension.pluralize and needs_plural(quantity, config):
        humanized = pluralize(humanized, quantity.rule.plural)
    if dimension.capitalize:
        humanized = humanized[:1].upper() + humanized[1:]
    return humanized


def format_quantity(quantity, config: Optional[UnitsConfiguration] = None) -> str:
    """Render a quantity, e.g. ``1,500 grams`` or ``32° Fahrenheit``"""
    parts = [humanized_amount(quantity, config), humanized_unit(quantity, config)]
    return ' '.join(part for part in parts if part is not None)

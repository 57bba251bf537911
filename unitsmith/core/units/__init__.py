"""
Units Module for unitsmith

Rule registry, conversion engine and normalizer, plus convenience
functions converting plain numbers through the default registry.
"""

from typing import Optional

from .converter import UnitConverter, convert_amount, follow_conversions
from .definitions import (
    METRIC_PREFIXES,
    Dimension,
    DimensionRegistry,
    UnitRule,
    as_rational
)
from .normalizer import candidate_rules, expand, normalize, normalize_each

_default_converter: Optional[UnitConverter] = None


def get_default_converter() -> UnitConverter:
    """Converter over the default registry, created on first use"""
    global _default_converter

    if _default_converter is None:
        from ...dimensions import default_registry
        _default_converter = UnitConverter(default_registry)

    return _default_converter


# Convenience functions using default converter
def convert_value(value, from_unit, to_unit):
    """Convert value between units using default converter"""
    return get_default_converter().convert(value, from_unit, to_unit)


def convert_to_base(value, from_unit):
    """Convert value to its dimension's base unit using default converter"""
    return get_default_converter().convert_to_base(value, from_unit)


def get_conversion_factor(from_unit, to_unit):
    """Get conversion factor between units using default converter"""
    return get_default_converter().get_conversion_factor(from_unit, to_unit)


__all__ = [
    'UnitConverter',
    'convert_amount',
    'follow_conversions',
    'METRIC_PREFIXES',
    'Dimension',
    'DimensionRegistry',
    'UnitRule',
    'as_rational',
    'candidate_rules',
    'expand',
    'normalize',
    'normalize_each',
    'get_default_converter',
    'convert_value',
    'convert_to_base',
    'get_conversion_factor'
]

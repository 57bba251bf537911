"""
Unit Conversion Engine

Exact conversion of amounts between units of one dimension, either by
scaling with unit factors or by walking the graph of conversion functions,
plus a float/array converter with factor caching for bulk numeric data.
"""

import logging
from fractions import Fraction
from typing import Any, Dict, FrozenSet, Optional, Union

import numpy as np

from ..exceptions import NoConversionPath, UnknownUnit
from .definitions import Dimension, DimensionRegistry, as_rational

logger = logging.getLogger(__name__)


def follow_conversions(dimension: Dimension, amount: Fraction, unit: str, target: str,
                       _visited: FrozenSet[str] = frozenset()) -> Optional[Fraction]:
    """
    Walk conversion functions from ``unit`` towards ``target``

    The direct edge is tried first, then every outgoing edge depth-first.
    A unit on the current path is never re-entered. An intermediate unit
    with a factor finishes the path by factor scaling when the target also
    has a factor.

    Returns:
        Converted amount, or None when no path exists
    """
    rule = dimension.rule(unit)
    target_rule = dimension.rule(target)

    if rule.has_factor:
        if target_rule.has_factor:
            return amount / rule.factor * target_rule.factor
        return None

    if target in rule.conversions:
        return as_rational(rule.conversions[target](amount))

    visited = _visited | {unit}
    for next_unit, function in rule.conversions.items():
        if next_unit in visited:
            continue
        converted = follow_conversions(dimension, as_rational(function(amount)), next_unit,
                                       target, visited)
        if converted is not None:
            logger.debug(f"Converted {dimension.name}:{unit} to {target} through {next_unit}")
            return converted

    return None


def convert_amount(dimension: Dimension, amount: Fraction, unit: str, target: str) -> Fraction:
    """
    Convert an exact amount between two canonical units of a dimension

    Args:
        dimension: Dimension owning both units
        amount: Amount in ``unit``
        unit: Source unit
        target: Target unit

    Returns:
        Amount in ``target``

    Raises:
        UnknownUnit: If either unit is not registered
        NoConversionPath: If no factor basis or function chain links the units
    """
    if unit == target:
        return amount

    target_rule = dimension.rule(target)
    source_rule = dimension.rule(unit)

    if source_rule.conversions:
        converted = follow_conversions(dimension, amount, unit, target)
        if converted is None:
            raise NoConversionPath(f"Can't convert {dimension.name}:{unit} to {target}", unit, target)
        return converted

    if not target_rule.has_factor:
        raise NoConversionPath(f"Can't convert {dimension.name}:{unit} to {target}", unit, target)

    return amount / source_rule.factor * target_rule.factor


class UnitConverter:
    """
    Float and array converter over a dimension registry

    Factor-to-factor conversions are cached per unit pair and applied with a
    single multiplication, so numpy arrays are converted in one vectorized
    step. Function-based units are converted element by element.
    """

    def __init__(self, registry: DimensionRegistry, enable_caching: bool = True,
                 cache_size: int = 256):
        """
        Initialize unit converter

        Args:
            registry: Registry used to look up unit names and aliases
            enable_caching: Enable conversion factor caching
            cache_size: Maximum number of cached conversion factors
        """
        self.registry = registry
        self.enable_caching = enable_caching
        self.cache_size = cache_size

        self._conversion_cache: Dict[str, Fraction] = {}

        self._stats = {
            'conversions': 0,
            'cache_hits': 0,
            'cache_misses': 0,
            'errors': 0
        }

    def _locate(self, from_unit: str, to_unit: str):
        dimension, source = self.registry.lookup(from_unit)
        target = dimension.resolve(to_unit)
        return dimension, source, target

    def convert(self, value: Union[float, np.ndarray], from_unit: str,
                to_unit: str) -> Union[float, np.ndarray]:
        """
        Convert value(s) between units of one dimension

        Args:
            value: Value or array of values
            from_unit: Source unit name or alias
            to_unit: Target unit name or alias

        Returns:
            Converted value(s) as float or float array

        Raises:
            UnknownUnit: If a unit is not found
            NoConversionPath: If the units are not connected
        """
        try:
            dimension, source, target = self._locate(from_unit, to_unit)

            if dimension.rule(source).has_factor and dimension.rule(target).has_factor:
                factor = float(self.get_conversion_factor(from_unit, to_unit))
                result = np.asarray(value, dtype=float) * factor
            else:
                convert_one = np.vectorize(
                    lambda v: float(convert_amount(dimension, as_rational(v), source, target)),
                    otypes=[float])
                result = convert_one(np.asarray(value, dtype=float))
        except (UnknownUnit, NoConversionPath):
            self._stats['errors'] += 1
            raise

        self._stats['conversions'] += 1
        if isinstance(value, np.ndarray):
            return result
        return float(result)

    def convert_to_base(self, value: Union[float, np.ndarray],
                        from_unit: str) -> Union[float, np.ndarray]:
        """Convert value(s) to the base unit of the unit's dimension"""
        dimension, _ = self.registry.lookup(from_unit)
        if dimension.base_unit is None:
            raise NoConversionPath(f"Dimension {dimension.name} has no base unit", from_unit)
        return self.convert(value, from_unit, dimension.base_unit)

    def get_conversion_factor(self, from_unit: str, to_unit: str) -> Fraction:
        """
        Get exact multiplication factor between two factor units

        Raises:
            NoConversionPath: If either unit is function-based
        """
        dimension, source, target = self._locate(from_unit, to_unit)
        cache_key = f"{dimension.name}:{source}→{target}"

        if self.enable_caching and cache_key in self._conversion_cache:
            self._stats['cache_hits'] += 1
            return self._conversion_cache[cache_key]

        self._stats['cache_misses'] += 1

        source_rule = dimension.rule(source)
        target_rule = dimension.rule(target)
        if not (source_rule.has_factor and target_rule.has_factor):
            raise NoConversionPath(f"No constant factor between {source} and {target}",
                                   source, target)
        factor = target_rule.factor / source_rule.factor

        if self.enable_caching:
            if len(self._conversion_cache) >= self.cache_size:
                # Simple cache eviction - remove oldest 25%
                items_to_remove = max(1, self.cache_size // 4)
                for _ in range(items_to_remove):
                    self._conversion_cache.pop(next(iter(self._conversion_cache)))

            self._conversion_cache[cache_key] = factor

        return factor

    def validate_unit(self, unit: str) -> bool:
        """Check if unit is known to any registered dimension"""
        try:
            self.registry.lookup(unit)
            return True
        except UnknownUnit:
            return False

    def get_statistics(self) -> Dict[str, Any]:
        """Get converter statistics"""
        stats = self._stats.copy()
        stats['cache_size'] = len(self._conversion_cache)
        return stats

    def clear_cache(self):
        """Clear conversion factor cache"""
        self._conversion_cache.clear()

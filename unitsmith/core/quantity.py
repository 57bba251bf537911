"""
Quantity value type

An exact amount tagged with a unit of a dimension. Conversions and
arithmetic return new quantities; only ``convert_in_place`` and
``normalize_in_place`` change an existing one.
"""

import math
from fractions import Fraction
from numbers import Number
from typing import Any, Dict, List, Optional, Union

from .exceptions import CrossDimensionError, InvalidUnitForBase, NoConversionPath, UnknownUnit
from .formatting import coerced_amount, format_quantity
from .units.converter import convert_amount
from .units.definitions import Dimension, UnitRule, as_rational
from .units.normalizer import DEFAULT_NORMALIZE_PRECISION, Predicate, expand, normalize


class Quantity:
    """
    Amount of a unit within a dimension

    Without a dimension the quantity is an untyped scalar with no unit.
    With a dimension and no unit, the dimension's base unit is assumed.

    Example:
        >>> Quantity(1, 'pound', WEIGHT).convert_to('ounce')
        (16 ounces)
    """

    __slots__ = ('_amount', '_unit', '_dimension')

    def __init__(self, amount, unit: Optional[str] = None, dimension: Optional[Dimension] = None):
        """
        Args:
            amount: Number (kept as an exact Fraction) or None
            unit: Unit name or alias within ``dimension``
            dimension: Dimension of the quantity, None for an untyped scalar

        Raises:
            UnknownUnit: If the unit is not in the dimension
            InvalidUnitForBase: If no unit is given and the dimension has no base unit
        """
        if dimension is None:
            if unit is not None:
                raise UnknownUnit("Untyped quantities have no unit", unit)
        elif unit is None:
            if dimension.base_unit is None:
                raise InvalidUnitForBase(f"Unit can't be omitted for {dimension.name}",
                                         dimension.name)
            unit = dimension.base_unit
        else:
            unit = dimension.resolve(unit)

        self._amount = as_rational(amount) if amount is not None else None
        self._unit = unit
        self._dimension = dimension

    @classmethod
    def _make(cls, amount: Optional[Fraction], unit: Optional[str],
              dimension: Optional[Dimension]) -> 'Quantity':
        quantity = cls.__new__(cls)
        quantity._amount = amount
        quantity._unit = unit
        quantity._dimension = dimension
        return quantity

    # ---------------------------------------------------------------
    # Attributes
    # ---------------------------------------------------------------

    @property
    def amount(self) -> Optional[Fraction]:
        return self._amount

    @property
    def unit(self) -> Optional[str]:
        return self._unit

    @property
    def dimension(self) -> Optional[Dimension]:
        return self._dimension

    @property
    def rule(self) -> Optional[UnitRule]:
        if self._dimension is None or self._unit is None:
            return None
        return self._dimension.rule(self._unit)

    @property
    def factor(self) -> Optional[Fraction]:
        rule = self.rule
        return rule.factor if rule is not None else None

    @property
    def is_metric(self) -> bool:
        """Whether the unit was defined or derived as metric"""
        rule = self.rule
        return rule is not None and rule.metric

    @property
    def normalized_amount(self) -> Optional[Fraction]:
        """Amount in the dimension's base unit, raw amount without a factor"""
        factor = self.factor
        if factor is None or self._amount is None:
            return self._amount
        return self._amount / factor

    @property
    def coerced_amount(self):
        return coerced_amount(self)

    def _dimension_name(self) -> str:
        return self._dimension.name if self._dimension is not None else 'scalar'

    def copy(self) -> 'Quantity':
        return Quantity._make(self._amount, self._unit, self._dimension)

    # ---------------------------------------------------------------
    # Conversion
    # ---------------------------------------------------------------

    def convert_to(self, target: Union[str, 'Quantity']) -> 'Quantity':
        """
        Convert to another unit of the same dimension

        Args:
            target: Unit name or alias, or a quantity whose unit is used

        Returns:
            New quantity in the target unit

        Raises:
            CrossDimensionError: If target is a quantity of another dimension
            UnknownUnit: If the target unit is not in the dimension
            NoConversionPath: If the units are not connected
        """
        if isinstance(target, Quantity):
            self._check_dimension(target)
            target = target.unit

        if self._dimension is None:
            raise UnknownUnit("Untyped quantities have no unit", target)

        target = self._dimension.resolve(target)
        if target == self._unit:
            return self.copy()

        amount = self._amount
        if amount is not None:
            amount = convert_amount(self._dimension, amount, self._unit, target)
        return Quantity._make(amount, target, self._dimension)

    def convert_in_place(self, target: Union[str, 'Quantity']) -> 'Quantity':
        """Convert and overwrite this quantity's amount and unit"""
        converted = self.convert_to(target)
        self._amount, self._unit = converted.amount, converted.unit
        return self

    def expand(self, filter_options: Optional[Dict[str, Any]] = None,
               predicate: Optional[Predicate] = None, **tags) -> List['Quantity']:
        """Decompose into whole amounts of decreasing units, see ``normalizer.expand``"""
        return expand(self, _merge_filters(filter_options, tags), predicate)

    def normalize(self, filter_options: Optional[Dict[str, Any]] = None,
                  predicate: Optional[Predicate] = None,
                  precision: int = DEFAULT_NORMALIZE_PRECISION, **tags) -> 'Quantity':
        """Convert to the best-fitting single unit, see ``normalizer.normalize``"""
        return normalize(self, _merge_filters(filter_options, tags), predicate, precision)

    def normalize_in_place(self, filter_options: Optional[Dict[str, Any]] = None,
                           predicate: Optional[Predicate] = None,
                           precision: int = DEFAULT_NORMALIZE_PRECISION, **tags) -> 'Quantity':
        """Normalize and overwrite this quantity unless already normalized"""
        normalized = self.normalize(filter_options, predicate, precision, **tags)
        if normalized.unit != self._unit or normalized.amount != self._amount:
            self._amount, self._unit = normalized.amount, normalized.unit
        return self

    # ---------------------------------------------------------------
    # Comparison
    # ---------------------------------------------------------------

    def _coerce(self, other) -> 'Quantity':
        if isinstance(other, Quantity):
            return other
        if isinstance(other, Number) and self._dimension is None:
            return Quantity(other)
        raise CrossDimensionError(f"Can't combine {self._dimension_name()} with {type(other).__name__}",
                                  self._dimension_name(), type(other).__name__)

    def _check_dimension(self, other: 'Quantity'):
        if other.dimension is not self._dimension:
            raise CrossDimensionError(
                f"Can't combine {self._dimension_name()} with {other._dimension_name()}",
                self._dimension_name(), other._dimension_name())

    def _comparable_amounts(self, other: 'Quantity'):
        self._check_dimension(other)
        if (self._unit is None or other.unit is None
                or (self.rule.has_factor and other.rule.has_factor)):
            return self.normalized_amount, other.normalized_amount
        return self._amount, other.convert_to(self._unit).amount

    def compare(self, other) -> int:
        """
        Three-way comparison within one dimension

        Returns:
            -1, 0 or 1

        Raises:
            CrossDimensionError: If the dimensions differ
        """
        mine, theirs = self._comparable_amounts(self._coerce(other))
        return (mine > theirs) - (mine < theirs)

    def equals(self, other) -> bool:
        """
        Equality within one dimension

        Raises:
            CrossDimensionError: If the dimensions differ
        """
        mine, theirs = self._comparable_amounts(self._coerce(other))
        return mine == theirs

    def __eq__(self, other):
        if isinstance(other, Quantity):
            if other.dimension is not self._dimension:
                return False
            try:
                return self.equals(other)
            except NoConversionPath:
                return False
        if isinstance(other, Number) and self._dimension is None:
            return self._amount == other
        return NotImplemented

    __hash__ = None

    def __lt__(self, other):
        return self.compare(other) < 0

    def __le__(self, other):
        return self.compare(other) <= 0

    def __gt__(self, other):
        return self.compare(other) > 0

    def __ge__(self, other):
        return self.compare(other) >= 0

    # ---------------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------------

    def _same_unit_amount(self, other) -> Fraction:
        other = self._coerce(other)
        self._check_dimension(other)
        if self._dimension is None:
            return other.amount
        return other.convert_to(self._unit).amount

    def __add__(self, other):
        return Quantity._make(self._amount + self._same_unit_amount(other), self._unit, self._dimension)

    def __radd__(self, other):
        # start value of sum()
        if isinstance(other, Number) and not isinstance(other, bool) and other == 0:
            return self.copy()
        return self.__add__(other)

    def __sub__(self, other):
        return Quantity._make(self._amount - self._same_unit_amount(other), self._unit, self._dimension)

    def __mul__(self, other):
        if not isinstance(other, Number):
            return NotImplemented
        return Quantity._make(self._amount * as_rational(other), self._unit, self._dimension)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not isinstance(other, Number):
            return NotImplemented
        return Quantity._make(self._amount / as_rational(other), self._unit, self._dimension)

    def __mod__(self, other):
        if not isinstance(other, Number):
            return NotImplemented
        return Quantity._make(self._amount % as_rational(other), self._unit, self._dimension)

    def __pow__(self, other):
        if not isinstance(other, int):
            return NotImplemented
        return Quantity._make(self._amount ** other, self._unit, self._dimension)

    def __neg__(self):
        return Quantity._make(-self._amount, self._unit, self._dimension)

    def __abs__(self):
        return Quantity._make(abs(self._amount), self._unit, self._dimension)

    def truncate(self) -> int:
        """Amount truncated towards zero"""
        return math.trunc(self._amount)

    def __int__(self):
        return self.truncate()

    def __float__(self):
        return float(self._amount)

    def __round__(self, ndigits: Optional[int] = None):
        return round(self._amount, ndigits)

    # ---------------------------------------------------------------
    # Display
    # ---------------------------------------------------------------

    def __str__(self):
        return format_quantity(self)

    def __repr__(self):
        return f"({format_quantity(self)})"


def _merge_filters(filter_options: Optional[Dict[str, Any]], tags: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(filter_options or {})
    merged.update(tags)
    return merged

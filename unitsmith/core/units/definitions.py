"""
Unit Definitions for unitsmith

Rule registry for dimensions of convertible units: the metric prefix table,
immutable unit rules, the Dimension that owns the rules of one category of
units, and the DimensionRegistry holding every dimension of a process.
"""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from fractions import Fraction
from numbers import Integral, Rational, Real
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple, Union

from ..exceptions import UnitDefinitionError, UnknownUnit
from ..formatting import pluralize

logger = logging.getLogger(__name__)

ConversionFunction = Callable[[Fraction], Any]
CandidateFilter = Callable[[str, 'UnitRule'], bool]

# Maps metric prefixes to scale
METRIC_PREFIXES: Mapping[str, Fraction] = MappingProxyType({
    'yotta': Fraction(10 ** 24),
    'zetta': Fraction(10 ** 21),
    'exa': Fraction(10 ** 18),
    'peta': Fraction(10 ** 15),
    'tera': Fraction(10 ** 12),
    'giga': Fraction(10 ** 9),
    'mega': Fraction(10 ** 6),
    'kilo': Fraction(10 ** 3),
    'hecto': Fraction(100),
    'deca': Fraction(10),
    'deci': Fraction(1, 10),
    'centi': Fraction(1, 100),
    'milli': Fraction(1, 10 ** 3),
    'micro': Fraction(1, 10 ** 6),
    'nano': Fraction(1, 10 ** 9),
    'pico': Fraction(1, 10 ** 12),
    'femto': Fraction(1, 10 ** 15),
    'atto': Fraction(1, 10 ** 18),
    'zepto': Fraction(1, 10 ** 21),
    'yocto': Fraction(1, 10 ** 24),
})


def as_rational(value: Union[int, float, str, Decimal, Fraction]) -> Fraction:
    """
    Convert a number to an exact Fraction

    Floats go through their shortest repr, so 0.021 becomes 21/1000 rather
    than its binary expansion.

    Raises:
        TypeError: If value is not numeric
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Cannot use {value!r} as an amount")
    if isinstance(value, Integral):
        return Fraction(int(value))
    if isinstance(value, Rational):
        return Fraction(value.numerator, value.denominator)
    if isinstance(value, (Decimal, str)):
        return Fraction(value)
    if isinstance(value, Real):
        return Fraction(repr(float(value)))
    raise TypeError(f"Cannot use {value!r} as an amount")


@dataclass(frozen=True)
class UnitRule:
    """
    Conversion rule of a single unit

    Exactly one of ``factor`` (units per one base unit) or ``conversions``
    (other unit -> function) is populated.
    """
    name: str
    factor: Optional[Fraction] = None
    conversions: Mapping[str, ConversionFunction] = field(default_factory=dict)
    metric: bool = False
    plural: Optional[str] = None
    aliases: Tuple[str, ...] = ()
    tags: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.factor is None and not self.conversions:
            raise UnitDefinitionError("Rule needs a factor or conversion functions", self.name)
        if self.factor is not None and self.conversions:
            raise UnitDefinitionError("Rule cannot have both a factor and conversion functions",
                                      self.name)
        if self.factor is not None and self.factor <= 0:
            raise UnitDefinitionError(f"Factor must be positive, got {self.factor}", self.name)

        object.__setattr__(self, 'conversions', MappingProxyType(dict(self.conversions)))
        object.__setattr__(self, 'tags', MappingProxyType(dict(self.tags)))
        object.__setattr__(self, 'aliases', tuple(self.aliases))

    @property
    def has_factor(self) -> bool:
        return self.factor is not None

    def tag(self, key: str) -> Any:
        """Attribute value used when filtering candidates, None when absent"""
        if key == 'metric':
            return self.metric
        if key == 'plural':
            return self.plural
        return self.tags.get(key)


class Dimension:
    """
    A named category of mutually convertible units

    Units are registered with ``define_base`` and ``define_unit`` while the
    dimension is being set up. ``freeze`` makes the rule table read-only.

    Example:

        weight = Dimension('weight')
        weight.define_base('kilogram')
        weight.define_unit('gram', 1000, metric=True)
        weight.define_unit('pound', Fraction(10000, 22046), 'kilogram')
        weight.of(1, 'pound').convert_to('gram')
    """

    def __init__(self, name: str, pluralize: bool = True, amount_suffix: str = "",
                 capitalize: bool = False, candidate_filter: Optional[CandidateFilter] = None):
        self.name = name
        self.base_unit: Optional[str] = None
        self.pluralize = pluralize
        self.amount_suffix = amount_suffix
        self.capitalize = capitalize
        self.candidate_filter = candidate_filter

        self._rules: Dict[str, UnitRule] = {}
        self._aliases: Dict[str, str] = {}
        self._frozen = False

    def __repr__(self):
        return f"Dimension({self.name!r}, units={len(self._rules)})"

    # ---------------------------------------------------------------
    # Definition API
    # ---------------------------------------------------------------

    def define_base(self, name: str, **options) -> UnitRule:
        """
        Define the base unit of the dimension

        Args:
            name: Unit name
            **options: As for ``define_unit``

        Returns:
            The registered rule
        """
        self._check_mutable(name)
        self.base_unit = name
        return self.define_unit(name, 1, **options)

    def define_unit(self, name: str, conversion: Union[Fraction, int, float, str, ConversionFunction],
                    relative_to: Optional[str] = None, metric: bool = False,
                    plural: Optional[str] = None, aliases: Tuple[str, ...] = (),
                    **tags) -> UnitRule:
        """
        Define a unit of the dimension

        A numeric ``conversion`` with ``relative_to`` means one ``name`` equals
        ``conversion`` of ``relative_to``. Without ``relative_to`` it is the
        factor itself (units per base unit). A callable converts an amount of
        ``name`` into ``relative_to`` (default: the base unit).

        Args:
            name: Unit name
            conversion: Factor or conversion function
            relative_to: Unit the conversion is expressed against
            metric: Generate the 20 metric-prefixed units
            plural: Explicit plural display form
            aliases: Extra names accepted for this unit
            **tags: Free-form attributes used by expand/normalize filters

        Returns:
            The registered rule

        Raises:
            UnknownUnit: If relative_to is not registered
            UnitDefinitionError: If the rule is invalid or the dimension is frozen
        """
        self._check_mutable(name)

        if callable(conversion):
            target = relative_to or self.base_unit
            if target is None:
                raise UnitDefinitionError("Conversion function needs a target unit", name, self.name)
            if metric:
                raise UnitDefinitionError("Metric units need a factor", name, self.name)
            existing = self._rules.get(name)
            conversions = dict(existing.conversions) if existing is not None else {}
            conversions[target] = conversion
            rule = UnitRule(name, conversions=conversions, metric=metric, plural=plural,
                            aliases=aliases, tags=tags)
        elif relative_to is not None:
            if relative_to not in self._rules:
                raise UnknownUnit(f"Cannot define {name} relative to unknown unit", relative_to,
                                  self.name)
            other_factor = self._rules[relative_to].factor
            if other_factor is None:
                raise UnitDefinitionError(f"Unit {relative_to} has no factor to scale from",
                                          name, self.name)
            rule = UnitRule(name, factor=other_factor / as_rational(conversion), metric=metric,
                            plural=plural, aliases=aliases, tags=tags)
        else:
            rule = UnitRule(name, factor=as_rational(conversion), metric=metric, plural=plural,
                            aliases=aliases, tags=tags)

        self._store(rule)
        logger.debug(f"Defined {self.name}:{name} (factor={rule.factor}, "
                     f"conversions={sorted(rule.conversions)})")

        if metric:
            self._expand_metric(rule)

        return rule

    def _expand_metric(self, rule: UnitRule):
        """Define a prefixed unit for every metric prefix"""
        for prefix, scale in METRIC_PREFIXES.items():
            self._store(UnitRule(f"{prefix}{rule.name}", factor=rule.factor / scale, metric=True))

        logger.debug(f"Expanded {len(METRIC_PREFIXES)} metric prefixes for {self.name}:{rule.name}")

    def _store(self, rule: UnitRule):
        existing = self._rules.get(rule.name)
        if existing is not None:
            kept = tuple(a for a in existing.aliases if a not in rule.aliases)
            rule = replace(rule, aliases=rule.aliases + kept)
            logger.debug(f"Redefining {self.name}:{rule.name}")

        for alias in rule.aliases:
            if alias in self._rules and alias != rule.name:
                raise UnitDefinitionError(f"Alias {alias!r} is already a unit", rule.name, self.name)

        self._rules[rule.name] = rule
        self._build_aliases(rule)

    def _build_aliases(self, rule: UnitRule):
        canonical = rule.name
        self._aliases[canonical] = canonical

        generated = {canonical.replace('_', ' '), pluralize(canonical, rule.plural),
                     pluralize(canonical.replace('_', ' '), rule.plural)}
        for alias in generated:
            # canonical names of other units win over generated forms
            if alias not in self._rules:
                self._aliases[alias] = canonical

        for alias in rule.aliases:
            self._aliases[alias] = canonical

    def add_aliases(self, name: str, *aliases: str):
        """Accept extra names for an already registered unit"""
        self._check_mutable(name)
        rule = self.rule(name)
        self._store(replace(rule, aliases=rule.aliases + tuple(a for a in aliases
                                                                 if a not in rule.aliases)))

    def freeze(self):
        """Make the rule table read-only"""
        self._frozen = True
        logger.debug(f"Froze dimension {self.name} with {len(self._rules)} units")

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self, name: str):
        if self._frozen:
            raise UnitDefinitionError("Dimension is frozen", name, self.name)

    # ---------------------------------------------------------------
    # Lookup API
    # ---------------------------------------------------------------

    @property
    def rules(self) -> Mapping[str, UnitRule]:
        return MappingProxyType(self._rules)

    def rule(self, name: str) -> UnitRule:
        """
        Get the rule of a canonical unit name

        Raises:
            UnknownUnit: If the unit is not registered
        """
        rule = self._rules.get(name)
        if rule is None:
            raise UnknownUnit(f"No such unit {self.name}:{name}", name, self.name)
        return rule

    def has_unit(self, name: str) -> bool:
        """Check whether a unit name or alias is known"""
        return name in self._aliases

    def resolve(self, name: str) -> str:
        """
        Resolve a unit name or alias to its canonical name

        Raises:
            UnknownUnit: If neither a unit nor an alias
        """
        canonical = self._aliases.get(name)
        if canonical is None:
            raise UnknownUnit(f"No such unit {self.name}:{name}", name, self.name)
        return canonical

    def unit_names(self) -> List[str]:
        """Canonical unit names, sorted"""
        return sorted(self._rules)

    def aliases_for(self, name: str) -> Set[str]:
        """Every accepted name of a canonical unit, itself included"""
        canonical = self.resolve(name)
        return {alias for alias, owner in self._aliases.items() if owner == canonical}

    def of(self, amount, unit: Optional[str] = None) -> 'Quantity':
        """Build a quantity of this dimension"""
        from ..quantity import Quantity
        return Quantity(amount, unit, self)


class DimensionRegistry:
    """Registry owning every dimension of a process, by name"""

    def __init__(self):
        self._dimensions: Dict[str, Dimension] = {}
        self._frozen = False

    def register(self, dimension: Dimension) -> Dimension:
        """
        Register a dimension

        Raises:
            UnitDefinitionError: If the name is taken or the registry is frozen
        """
        if self._frozen:
            raise UnitDefinitionError("Registry is frozen", dimension=dimension.name)
        if dimension.name in self._dimensions:
            raise UnitDefinitionError(f"Dimension '{dimension.name}' already registered",
                                      dimension=dimension.name)
        self._dimensions[dimension.name] = dimension
        return dimension

    def get(self, name: str) -> Dimension:
        try:
            return self._dimensions[name]
        except KeyError:
            raise UnknownUnit(f"No such dimension {name}", dimension=name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._dimensions

    def __iter__(self):
        return iter(self._dimensions.values())

    @property
    def names(self) -> List[str]:
        return list(self._dimensions)

    def lookup(self, unit_name: str) -> Tuple[Dimension, str]:
        """
        Find the dimension knowing a unit name or alias

        Returns:
            (dimension, canonical unit name) of the first match

        Raises:
            UnknownUnit: If no dimension knows the name
        """
        for dimension in self._dimensions.values():
            if dimension.has_unit(unit_name):
                return dimension, dimension.resolve(unit_name)
        raise UnknownUnit(f"No such unit {unit_name}", unit_name)

    def quantity(self, amount, unit_name: str) -> 'Quantity':
        """Build a quantity from any registered unit name or alias"""
        dimension, unit = self.lookup(unit_name)
        return dimension.of(amount, unit)

    def freeze(self):
        """Freeze the registry and every registered dimension"""
        for dimension in self._dimensions.values():
            dimension.freeze()
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

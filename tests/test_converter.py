from fractions import Fraction

import numpy as np
import pytest

from unitsmith.core.exceptions import (
    CrossDimensionError,
    InvalidUnitForBase,
    NoConversionPath,
    UnknownUnit,
)
from unitsmith.core.units import convert_value
from unitsmith.core.units.converter import UnitConverter, convert_amount
from unitsmith.core.units.definitions import METRIC_PREFIXES, Dimension
from unitsmith.dimensions import TEMPERATURE, TIME, VOLUME, WEIGHT, default_registry


class TestExactConversion:

    def test_pound_to_ounces_is_exact(self):
        assert WEIGHT.of(1, 'pound').convert_to('ounce').amount == 16

    def test_aliases_accepted_on_both_sides(self):
        converted = WEIGHT.of(1, 'lb').convert_to('oz')
        assert converted.unit == 'ounce'
        assert converted.amount == 16

    def test_customary_volume_chain(self):
        assert VOLUME.of(Fraction(1, 3), 'cup').convert_to('teaspoon').amount == 16
        assert VOLUME.of(1, 'gallon').convert_to('fluid_ounce').amount == 128

    @pytest.mark.parametrize('unit,target', [
        ('pound', 'gram'),
        ('ounce', 'kilogram'),
        ('stone', 'milligram'),
        ('cup', 'milliliter'),
        ('gallon', 'teaspoon'),
        ('week', 'millisecond'),
    ])
    def test_round_trip_restores_amount(self, unit, target):
        quantity = default_registry.quantity(Fraction(7, 3), unit)
        assert quantity.convert_to(target).convert_to(unit).amount == Fraction(7, 3)

    @pytest.mark.parametrize('dimension', [WEIGHT, TIME, VOLUME])
    def test_every_unit_round_trips_through_base(self, dimension):
        for unit in dimension.unit_names():
            quantity = dimension.of(5, unit)
            back = quantity.convert_to(dimension.base_unit).convert_to(unit)
            assert back.amount == 5, unit

    def test_metric_prefixes_scale_by_powers_of_ten(self):
        for prefix, scale in METRIC_PREFIXES.items():
            assert WEIGHT.of(1, f"{prefix}gram").convert_to('gram').amount == scale

    def test_same_unit_returns_new_equal_quantity(self):
        quantity = WEIGHT.of(3, 'pound')
        converted = quantity.convert_to('pounds')
        assert converted is not quantity
        assert converted.amount == 3

    def test_target_may_be_a_quantity(self):
        assert WEIGHT.of(2, 'pound').convert_to(WEIGHT.of(0, 'ounce')).amount == 32

    def test_missing_amount_stays_missing(self):
        assert WEIGHT.of(None, 'pound').convert_to('ounce').amount is None

    def test_convert_amount_on_canonical_names(self):
        assert convert_amount(TIME, Fraction(2), 'hour', 'minute') == 120


class TestTemperature:

    def test_freezing_point(self):
        assert TEMPERATURE.of(0, 'celsius').convert_to('fahrenheit').amount == 32

    def test_boiling_point(self):
        assert TEMPERATURE.of(212, 'F').convert_to('C').amount == 100

    def test_round_trip_is_exact(self):
        there = TEMPERATURE.of(37, 'celsius').convert_to('fahrenheit')
        assert there.convert_to('celsius').amount == 37

    def test_fahrenheit_to_kelvin_goes_through_celsius(self):
        assert TEMPERATURE.of(32, 'fahrenheit').convert_to('kelvin').amount == Fraction('273.15')

    def test_kelvin_to_fahrenheit(self):
        assert TEMPERATURE.of(0, 'kelvin').convert_to('fahrenheit').amount == Fraction('-459.67')

    def test_unit_required(self):
        with pytest.raises(InvalidUnitForBase):
            TEMPERATURE.of(5)


class TestConversionErrors:

    @pytest.mark.parametrize('quantity', [
        WEIGHT.of(1), TIME.of(1), VOLUME.of(1), TEMPERATURE.of(1, 'celsius'),
    ])
    def test_unknown_target_unit(self, quantity):
        with pytest.raises(UnknownUnit):
            quantity.convert_to('bogus')

    def test_unit_of_another_dimension_is_unknown(self):
        with pytest.raises(UnknownUnit):
            WEIGHT.of(1).convert_to('celsius')

    def test_quantity_target_of_another_dimension(self):
        with pytest.raises(CrossDimensionError):
            WEIGHT.of(1).convert_to(TEMPERATURE.of(1, 'celsius'))

    def test_failed_in_place_conversion_leaves_quantity_untouched(self):
        quantity = WEIGHT.of(1, 'pound')
        with pytest.raises(UnknownUnit):
            quantity.convert_in_place('bogus')
        assert quantity.unit == 'pound'
        assert quantity.amount == 1


class TestFunctionGraph:

    @pytest.fixture()
    def ticks(self) -> Dimension:
        dimension = Dimension('ticks')
        dimension.define_base('second')
        dimension.define_unit('minute', 60, 'second')
        dimension.define_unit('tick', lambda t: t * 2)
        return dimension

    def test_intermediate_factor_unit_finishes_path(self, ticks):
        assert ticks.of(120, 'tick').convert_to('minute').amount == 4

    def test_factor_unit_cannot_reach_function_unit(self, ticks):
        with pytest.raises(NoConversionPath):
            ticks.of(1, 'second').convert_to('tick')

    def test_cycles_terminate_without_path(self):
        cycle = Dimension('cycle')
        cycle.define_unit('a', lambda t: t, 'b')
        cycle.define_unit('b', lambda t: t, 'a')
        cycle.define_unit('c', lambda t: t, 'a')

        with pytest.raises(NoConversionPath):
            cycle.of(1, 'a').convert_to('c')


class TestInPlace:

    def test_convert_in_place(self):
        quantity = WEIGHT.of(24, 'ounce')
        assert quantity.convert_in_place('pound') is quantity
        assert quantity.unit == 'pound'
        assert quantity.amount == Fraction(3, 2)


class TestUnitConverter:

    @pytest.fixture()
    def converter(self) -> UnitConverter:
        return UnitConverter(default_registry)

    def test_scalar_returns_float(self, converter):
        result = converter.convert(1.0, 'pound', 'ounce')
        assert isinstance(result, float)
        assert result == pytest.approx(16.0)

    def test_array_in_array_out(self, converter):
        result = converter.convert(np.array([1.0, 2.0]), 'kg', 'g')
        assert isinstance(result, np.ndarray)
        assert np.allclose(result, [1000.0, 2000.0])

    def test_function_units_are_vectorized(self, converter):
        result = converter.convert(np.array([0.0, 100.0]), 'celsius', 'fahrenheit')
        assert np.allclose(result, [32.0, 212.0])

    def test_exact_factor(self, converter):
        assert converter.get_conversion_factor('pound', 'ounce') == 16
        assert converter.get_conversion_factor('ounce', 'pound') == Fraction(1, 16)

    def test_factor_cache_statistics(self, converter):
        converter.get_conversion_factor('hour', 'minute')
        converter.get_conversion_factor('hours', 'min')

        stats = converter.get_statistics()
        assert stats['cache_misses'] == 1
        assert stats['cache_hits'] == 1
        assert stats['cache_size'] == 1

        converter.clear_cache()
        assert converter.get_statistics()['cache_size'] == 0

    def test_cache_is_bounded(self):
        converter = UnitConverter(default_registry, cache_size=4)
        for unit in ('gram', 'milligram', 'pound', 'ounce', 'stone', 'ton'):
            converter.get_conversion_factor('kilogram', unit)
        assert converter.get_statistics()['cache_size'] <= 4

    def test_no_factor_between_function_units(self, converter):
        with pytest.raises(NoConversionPath):
            converter.get_conversion_factor('celsius', 'fahrenheit')

    def test_unknown_units_are_counted(self, converter):
        with pytest.raises(UnknownUnit):
            converter.convert(1.0, 'bogus', 'gram')
        assert converter.get_statistics()['errors'] == 1

    def test_validate_unit(self, converter):
        assert converter.validate_unit('lbs')
        assert not converter.validate_unit('parsec')

    def test_convert_to_base(self, converter):
        assert converter.convert_to_base(1.0, 'g') == pytest.approx(0.001)
        with pytest.raises(NoConversionPath):
            converter.convert_to_base(1.0, 'celsius')

    def test_module_level_helper(self):
        assert convert_value(2.0, 'hours', 'minutes') == pytest.approx(120.0)

from fractions import Fraction

import pytest

from unitsmith.config.units_config import UnitsConfiguration
from unitsmith.core.formatting import coerced_amount, format_quantity, pluralize
from unitsmith.core.quantity import Quantity
from unitsmith.dimensions import TEMPERATURE, VOLUME, WEIGHT


@pytest.mark.parametrize('word,plural', [
    ('cup', 'cups'),
    ('inch', 'inches'),
    ('glass', 'glasses'),
    ('box', 'boxes'),
    ('fluid ounce', 'fluid ounces'),
])
def test_pluralize(word, plural):
    assert pluralize(word) == plural


def test_pluralize_override():
    assert pluralize('stone', 'stone') == 'stone'


@pytest.mark.parametrize('quantity,text', [
    (WEIGHT.of(16, 'ounce'), '16 ounces'),
    (WEIGHT.of(1, 'ounce'), '1 ounce'),
    (WEIGHT.of(Fraction(1, 2), 'pound'), '1/2 pound'),
    (WEIGHT.of(Fraction(3, 2), 'pound'), '1 1/2 pounds'),
    (WEIGHT.of(Fraction(1, 1000), 'pound'), '0.001 pounds'),
    (WEIGHT.of(1500, 'gram'), '1,500 grams'),
    (WEIGHT.of(Fraction(3, 2), 'kilogram'), '1.5 kilograms'),
    (WEIGHT.of(3, 'stone'), '3 stone'),
    (WEIGHT.of(1234567, 'ounce'), '1,234,567 ounces'),
    (VOLUME.of(2, 'fluid_ounce'), '2 fluid ounces'),
    (TEMPERATURE.of(32, 'fahrenheit'), '32° Fahrenheit'),
    (TEMPERATURE.of(1, 'celsius'), '1° Celsius'),
    (TEMPERATURE.of(-40, 'celsius'), '-40° Celsius'),
    (Quantity(5), '5'),
])
def test_format_quantity(quantity, text):
    assert format_quantity(quantity) == text


def test_configured_separator():
    config = UnitsConfiguration(thousands_separator='_')
    assert format_quantity(WEIGHT.of(1234567, 'ounce'), config) == '1_234_567 ounces'


def test_configured_denominator_limit():
    config = UnitsConfiguration(max_display_denominator=2)
    assert format_quantity(WEIGHT.of(Fraction(1, 4), 'pound'), config) == '0.25 pounds'


def test_coerced_amount():
    assert coerced_amount(WEIGHT.of(2, 'pound')) == 2
    assert isinstance(coerced_amount(WEIGHT.of(2, 'pound')), int)
    assert coerced_amount(WEIGHT.of(2.5, 'gram')) == 2.5
    assert coerced_amount(WEIGHT.of(Fraction(1, 3), 'pound')) == Fraction(1, 3)
    assert WEIGHT.of(None, 'pound').coerced_amount is None

from fractions import Fraction

import pytest

from unitsmith.core.quantity import Quantity
from unitsmith.core.units.definitions import Dimension
from unitsmith.core.units.normalizer import candidate_rules, normalize_each
from unitsmith.dimensions import TEMPERATURE, TIME, VOLUME, WEIGHT


def _summary(parts):
    return [(part.amount, part.unit) for part in parts]


class TestCandidates:

    def test_largest_unit_first(self):
        names = [name for name, _rule in candidate_rules(TIME)]
        assert names == ['week', 'day', 'hour', 'minute', 'second']

    def test_function_units_never_take_part(self):
        assert candidate_rules(TEMPERATURE) == []

        mixed = Dimension('mixed')
        mixed.define_base('second')
        mixed.define_unit('tick', lambda t: t * 2)
        assert [name for name, _rule in candidate_rules(mixed)] == ['second']

    def test_untyped_has_no_candidates(self):
        assert candidate_rules(None) == []

    def test_filter_requires_every_tag(self):
        names = [name for name, _rule in candidate_rules(VOLUME, {'system': 'us', 'metric': False})]
        assert names == ['gallon', 'quart', 'pint', 'cup', 'fluid_ounce', 'tablespoon', 'teaspoon']

    def test_absent_tag_matches_false(self):
        names = {name for name, _rule in candidate_rules(VOLUME, {'system': False})}
        assert 'liter' in names
        assert 'cup' not in names


class TestExpand:

    def test_pounds_and_ounces(self):
        parts = WEIGHT.of(24, 'ounce').expand(metric=False)
        assert _summary(parts) == [(1, 'pound'), (8, 'ounce')]

    def test_minutes_and_seconds(self):
        parts = TIME.of(1000).expand()
        assert _summary(parts) == [(16, 'minute'), (40, 'second')]

    def test_metric_unit_keeps_fraction_and_stops(self):
        parts = WEIGHT.of(1500, 'gram').expand()
        assert _summary(parts) == [(Fraction(3, 2), 'kilogram')]

    def test_filter_dict_and_keyword_tags_combine(self):
        parts = VOLUME.of(19, 'teaspoon').expand({'system': 'us'}, metric=False)
        assert _summary(parts) == [(3, 'fluid_ounce'), (1, 'teaspoon')]

    def test_metric_only_volume(self):
        parts = VOLUME.of(1500, 'milliliter').expand(system=False)
        assert _summary(parts) == [(Fraction(3, 2), 'liter')]

    def test_whole_amount_of_one_unit(self):
        assert _summary(VOLUME.of(1, 'gallon').expand(system='us')) == [(1, 'gallon')]

    def test_predicate_skips_units(self):
        parts = TIME.of(3700).expand(predicate=lambda q: q.unit != 'hour')
        assert _summary(parts) == [(61, 'minute'), (40, 'second')]

    def test_negative_amounts_keep_sign_on_every_part(self):
        parts = TIME.of(-90).expand()
        assert _summary(parts) == [(-1, 'minute'), (-30, 'second')]

    def test_zero_expands_to_nothing(self):
        assert TIME.of(0).expand() == []

    def test_without_candidates_returns_quantity(self):
        temperature = TEMPERATURE.of(20, 'celsius')
        assert temperature.expand()[0] is temperature

        scalar = Quantity(5)
        assert scalar.expand()[0] is scalar

    @pytest.mark.parametrize('seconds', [1, 59, 61, 3600, 3661, 90061, 1000000])
    def test_parts_add_up_when_smallest_unit_is_metric(self, seconds):
        parts = TIME.of(seconds).expand()
        assert sum(part.convert_to('second').amount for part in parts) == seconds

    def test_leftover_below_smallest_unit_is_dropped(self):
        original = Fraction(33, 2)
        parts = WEIGHT.of(original, 'ounce').expand(metric=False)
        assert _summary(parts) == [(1, 'pound')]

        total = sum(part.convert_to('ounce').amount for part in parts)
        assert 0 <= original - total < 1


class TestNormalize:

    def test_smallest_whole_metric_unit(self):
        normalized = WEIGHT.of(0.021, 'kilogram').normalize()
        assert (normalized.amount, normalized.unit) == (21, 'gram')

    def test_predicate_accepts_fractional_amounts(self):
        normalized = WEIGHT.of(0.021, 'kilogram').normalize(
            predicate=lambda q: q.is_metric and q.amount >= 1)
        assert (normalized.amount, normalized.unit) == (Fraction(21, 10), 'decagram')

    def test_predicate_none_falls_back_to_whole_number_test(self):
        normalized = TIME.of(7200).normalize(predicate=lambda q: None)
        assert normalized.unit == 'hour'

    @pytest.mark.parametrize('seconds,unit,amount', [
        (120, 'minute', 2),
        (90, 'second', 90),
        (7200, 'hour', 2),
        (1209600, 'week', 2),
    ])
    def test_time(self, seconds, unit, amount):
        normalized = TIME.of(seconds).normalize()
        assert (normalized.amount, normalized.unit) == (amount, unit)

    def test_filtered_volume(self):
        normalized = VOLUME.of(48, 'teaspoon').normalize(system='us')
        assert (normalized.amount, normalized.unit) == (1, 'cup')

    def test_returns_quantity_itself_when_nothing_fits(self):
        quantity = WEIGHT.of(Fraction(1, 3), 'milligram')
        assert quantity.normalize() is quantity

        temperature = TEMPERATURE.of(20, 'celsius')
        assert temperature.normalize() is temperature

    def test_precision_controls_whole_number_test(self):
        quantity = TIME.of(Fraction(60 * 10 ** 12 + 1, 10 ** 12))
        assert quantity.normalize().unit == 'minute'
        assert quantity.normalize(precision=20) is quantity

    @pytest.mark.parametrize('quantity', [
        WEIGHT.of(0.021, 'kilogram'), TIME.of(3600), VOLUME.of(96, 'tablespoon'),
    ])
    def test_idempotent(self, quantity):
        once = quantity.normalize()
        twice = once.normalize()
        assert (twice.amount, twice.unit) == (once.amount, once.unit)

    def test_in_place(self):
        quantity = TIME.of(120)
        assert quantity.normalize_in_place() is quantity
        assert (quantity.amount, quantity.unit) == (2, 'minute')

        already = TIME.of(90)
        already.normalize_in_place()
        assert already.unit == 'second'


class TestNormalizeEach:

    def test_list_of_quantities(self):
        normalized = normalize_each([TIME.of(120), TIME.of(7200)])
        assert [q.unit for q in normalized] == ['minute', 'hour']

    def test_nested_iterables(self):
        normalized = normalize_each([[TIME.of(120)], (TIME.of(60),)])
        assert normalized[0][0].unit == 'minute'
        assert normalized[1][0].unit == 'minute'

    def test_bare_number_becomes_untyped_quantity(self):
        normalized = normalize_each(5)
        assert normalized.amount == 5
        assert normalized.unit is None

    def test_strings_are_rejected(self):
        with pytest.raises(TypeError):
            normalize_each('120 seconds')


def test_keyword_tags_narrow_dict_filter():
    non_metric = {name for name, _rule in candidate_rules(VOLUME, {'metric': False})}
    assert 'liter' not in non_metric

    parts = VOLUME.of(1500, 'milliliter').expand({'metric': True}, system=False)
    assert _summary(parts) == [(Fraction(3, 2), 'liter')]

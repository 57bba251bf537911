"""Weight units: metric grams plus avoirdupois pounds and ounces"""

from fractions import Fraction

from ..core.units.definitions import Dimension


def build_weight() -> Dimension:
    weight = Dimension('weight')

    weight.define_base('kilogram', aliases=('kg', 'kgs'))
    # kilo- expansion of gram re-derives kilogram with factor 1
    weight.define_unit('gram', 1000, metric=True, aliases=('g', 'gs'))
    weight.add_aliases('milligram', 'mg', 'mgs')

    weight.define_unit('pound', Fraction(10000, 22046), 'kilogram', aliases=('lb', 'lbs'))
    weight.define_unit('ounce', Fraction(1, 16), 'pound', aliases=('oz', 'ozs'))
    weight.define_unit('stone', 14, 'pound', plural='stone', aliases=('st',))
    weight.define_unit('ton', 2000, 'pound')

    return weight

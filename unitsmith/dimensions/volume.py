"""Volume units: metric liters and US customary kitchen measures"""

from fractions import Fraction

from ..core.units.definitions import Dimension

US_TEASPOON_LITERS = Fraction('0.00492892159375')


def build_volume() -> Dimension:
    volume = Dimension('volume')

    volume.define_base('liter', metric=True, aliases=('litre', 'litres', 'l', 'L'))
    volume.add_aliases('milliliter', 'millilitre', 'millilitres', 'ml', 'mL')
    volume.add_aliases('centiliter', 'centilitre', 'centilitres', 'cl', 'cL')

    volume.define_unit('teaspoon', US_TEASPOON_LITERS, 'liter', system='us',
                       aliases=('t', 'tsp'))
    volume.define_unit('tablespoon', 3, 'teaspoon', system='us', aliases=('T', 'tbs', 'tbsp'))
    volume.define_unit('fluid_ounce', 2, 'tablespoon', system='us', aliases=('fl_oz', 'oz_fl'))
    volume.define_unit('cup', 8, 'fluid_ounce', system='us', aliases=('c', 'cu'))
    volume.define_unit('pint', 2, 'cup', system='us', aliases=('pt',))
    volume.define_unit('quart', 2, 'pint', system='us', aliases=('qt',))
    volume.define_unit('gallon', 4, 'quart', system='us', aliases=('gal',))

    return volume

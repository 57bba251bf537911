"""
Temperature scales

The scales are not multiples of each other, so every unit converts through
explicit functions and the dimension has no base unit.
"""

from fractions import Fraction

from ..core.units.definitions import Dimension

ABSOLUTE_ZERO_CELSIUS = Fraction('273.15')


def build_temperature() -> Dimension:
    temperature = Dimension('temperature', pluralize=False, amount_suffix='°', capitalize=True)

    temperature.define_unit('celsius', lambda t: Fraction(9, 5) * t + 32, 'fahrenheit',
                            aliases=('C', 'Celsius'))
    temperature.define_unit('fahrenheit', lambda t: Fraction(5, 9) * (t - 32), 'celsius',
                            aliases=('F', 'Fahrenheit'))
    temperature.define_unit('kelvin', lambda t: t - ABSOLUTE_ZERO_CELSIUS, 'celsius',
                            aliases=('K', 'Kelvin'))
    temperature.define_unit('celsius', lambda t: t + ABSOLUTE_ZERO_CELSIUS, 'kelvin')

    return temperature

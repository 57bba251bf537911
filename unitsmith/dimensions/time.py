"""Time units from metric seconds up to weeks"""

from ..core.units.definitions import Dimension, UnitRule


def _calendar_units(name: str, rule: UnitRule) -> bool:
    # prefixed seconds would swallow minutes and hours during decomposition
    return not rule.metric or name == 'second'


def build_time() -> Dimension:
    time = Dimension('time', candidate_filter=_calendar_units)

    time.define_base('second', metric=True, aliases=('s', 'sec', 'secs'))
    time.add_aliases('millisecond', 'ms')

    time.define_unit('minute', 60, 'second', aliases=('min', 'mins'))
    time.define_unit('hour', 60, 'minute', aliases=('h', 'hr', 'hrs'))
    time.define_unit('day', 24, 'hour', aliases=('d',))
    time.define_unit('week', 7, 'day', aliases=('wk',))

    return time

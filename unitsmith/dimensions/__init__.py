"""
Shipped dimensions and the default registry

The default registry is populated once at import and frozen. Build a
``DimensionRegistry`` with ``register_default_dimensions`` to extend the
shipped dimensions before freezing it yourself.
"""

from ..core.units.definitions import DimensionRegistry
from .temperature import build_temperature
from .time import build_time
from .volume import build_volume
from .weight import build_weight


def register_default_dimensions(registry: DimensionRegistry) -> DimensionRegistry:
    """Add weight, time, temperature and volume to a registry"""
    for build in (build_weight, build_time, build_temperature, build_volume):
        registry.register(build())
    return registry


default_registry = register_default_dimensions(DimensionRegistry())
default_registry.freeze()

WEIGHT = default_registry.get('weight')
TIME = default_registry.get('time')
TEMPERATURE = default_registry.get('temperature')
VOLUME = default_registry.get('volume')

__all__ = [
    'register_default_dimensions',
    'default_registry',
    'WEIGHT',
    'TIME',
    'TEMPERATURE',
    'VOLUME',
]

"""
unitsmith

Units-of-measure toolkit: exact conversion between units of a dimension,
metric prefix expansion, and decomposition of quantities into
human-friendly units.
"""

__version__ = "0.1.0"

# Core imports for public API
from .core.exceptions import (
    UnitsError,
    UnknownUnit,
    NoConversionPath,
    CrossDimensionError,
    InvalidUnitForBase,
    UnitDefinitionError,
    ConfigurationError
)
from .core.quantity import Quantity
from .core.units import Dimension, DimensionRegistry, UnitRule, UnitConverter, METRIC_PREFIXES
from .core.formatting import format_quantity
from .config.units_config import UnitsConfiguration

# Shipped dimensions
from .dimensions import WEIGHT, TIME, TEMPERATURE, VOLUME, default_registry, register_default_dimensions

# Infrastructure
from .infrastructure.logging.units_logger import get_logger, setup_logging


def quantity(amount, unit_name: str) -> Quantity:
    """Build a quantity from any unit name or alias of the default registry"""
    return default_registry.quantity(amount, unit_name)


__all__ = [
    # Errors
    'UnitsError', 'UnknownUnit', 'NoConversionPath', 'CrossDimensionError',
    'InvalidUnitForBase', 'UnitDefinitionError', 'ConfigurationError',

    # Core classes
    'Quantity', 'Dimension', 'DimensionRegistry', 'UnitRule', 'UnitConverter',
    'METRIC_PREFIXES', 'UnitsConfiguration', 'format_quantity',

    # Dimensions
    'WEIGHT', 'TIME', 'TEMPERATURE', 'VOLUME', 'default_registry',
    'register_default_dimensions', 'quantity',

    # Infrastructure
    'get_logger', 'setup_logging',

    # Version info
    '__version__'
]

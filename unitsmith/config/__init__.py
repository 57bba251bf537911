"""Configuration for unitsmith"""

from .units_config import LOG_LEVELS, UnitsConfiguration

__all__ = ['LOG_LEVELS', 'UnitsConfiguration']

"""
Infrastructure Module for unitsmith

Infrastructure services shared by the engine and the command line.
"""

from .logging.units_logger import UnitsLogger, get_logger, setup_logging

__all__ = [
    'UnitsLogger',
    'setup_logging',
    'get_logger'
]

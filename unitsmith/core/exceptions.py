"""
Custom Exceptions for unitsmith

Exception hierarchy for unit definition, conversion and decomposition
failures. Every error carries a details dict that is rendered into the
message, so callers can log the exception text directly.
"""

from typing import Any, Dict, List


class UnitsError(Exception):
    """Base exception for all unitsmith errors"""

    def __init__(self, message: str, details: dict = None):
        self.details = details or {}
        super().__init__(message)

    def __str__(self):
        base_msg = super().__str__()
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{base_msg} (Details: {detail_str})"
        return base_msg


class UnknownUnit(UnitsError):
    """Raised when a unit is not registered in a dimension"""

    def __init__(self, message: str, unit: str = None, dimension: str = None):
        details = {}
        if unit is not None:
            details['unit'] = unit
        if dimension:
            details['dimension'] = dimension
        self.unit = unit
        self.dimension = dimension
        super().__init__(message, details)


class NoConversionPath(UnitsError):
    """Raised when no factor basis or chain of conversion functions links two units"""

    def __init__(self, message: str, from_unit: str = None, to_unit: str = None):
        details = {}
        if from_unit:
            details['from_unit'] = from_unit
        if to_unit:
            details['to_unit'] = to_unit
        self.from_unit = from_unit
        self.to_unit = to_unit
        super().__init__(message, details)


class CrossDimensionError(UnitsError):
    """Raised when quantities of different dimensions are compared, combined or converted"""

    def __init__(self, message: str, left: str = None, right: str = None):
        details = {}
        if left:
            details['left'] = left
        if right:
            details['right'] = right
        super().__init__(message, details)


class InvalidUnitForBase(UnitsError):
    """Raised when a quantity is built without a unit on a dimension that requires one"""

    def __init__(self, message: str, dimension: str = None):
        details = {}
        if dimension:
            details['dimension'] = dimension
        super().__init__(message, details)


class UnitDefinitionError(UnitsError):
    """Raised when a unit rule is malformed or a frozen dimension is modified"""

    def __init__(self, message: str, unit: str = None, dimension: str = None):
        details = {}
        if unit:
            details['unit'] = unit
        if dimension:
            details['dimension'] = dimension
        super().__init__(message, details)


class ConfigurationError(UnitsError):
    """Raised when configuration is invalid"""

    def __init__(self, message: str, config_section: str = None, parameter: str = None):
        details = {}
        if config_section:
            details['section'] = config_section
        if parameter:
            details['parameter'] = parameter
        super().__init__(message, details)


# ===================================================================
# EXCEPTION UTILITIES
# ===================================================================

def create_error_summary(errors: List[Exception]) -> Dict[str, Any]:
    """
    Create summary of errors for reporting

    Args:
        errors: List of exceptions

    Returns:
        Dictionary with error summary
    """
    error_counts = {}
    error_details = []

    for error in errors:
        error_type = type(error).__name__
        error_counts[error_type] = error_counts.get(error_type, 0) + 1

        error_info = {
            'type': error_type,
            'message': str(error),
        }

        if hasattr(error, 'details'):
            error_info['details'] = error.details

        error_details.append(error_info)

    return {
        'total_errors': len(errors),
        'error_counts': error_counts,
        'error_details': error_details
    }

"""unitsmith configuration"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..core.exceptions import ConfigurationError

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class UnitsConfiguration:
    """
    Settings for normalization, display and logging

    Loaded from a JSON file or built in code, then checked with ``validate``.
    """
    normalize_precision: int = 10             # Decimal digits when testing for whole amounts
    thousands_separator: str = ","            # Inserted into the integer part of amounts
    max_display_denominator: int = 100        # Larger denominators display as floats

    log_file: Optional[str] = None            # None logs to stderr
    log_level: str = "WARNING"

    def validate(self) -> bool:
        """
        Validate configuration

        Returns:
            True if valid

        Raises:
            ConfigurationError: If a setting is invalid
        """
        if not isinstance(self.normalize_precision, int) or self.normalize_precision < 0:
            raise ConfigurationError(
                f"normalize_precision must be a non-negative integer, got {self.normalize_precision}",
                'normalize', 'normalize_precision')

        if not isinstance(self.max_display_denominator, int) or self.max_display_denominator <= 0:
            raise ConfigurationError(
                f"max_display_denominator must be a positive integer, got {self.max_display_denominator}",
                'display', 'max_display_denominator')

        if not isinstance(self.thousands_separator, str):
            raise ConfigurationError("thousands_separator must be a string",
                                     'display', 'thousands_separator')

        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"log_level must be one of {LOG_LEVELS}, got '{self.log_level}'",
                                     'logging', 'log_level')

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UnitsConfiguration':
        """Create from dictionary, rejecting unknown keys"""
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}",
                                     parameter=unknown[0])
        config = cls(**data)
        config.validate()
        return config

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'UnitsConfiguration':
        """Load configuration from a JSON file"""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {path}") from None
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e}") from None

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration in {path} must be a JSON object")
        return cls.from_dict(data)

    def save(self, path: Union[str, Path]):
        """Write configuration as JSON"""
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding='utf-8')

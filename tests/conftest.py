"""Pytest configuration.

Makes `import unitsmith` work when the tests run from a checkout without an
editable install, and provides fresh (unfrozen) dimensions for tests that
define units.
"""

import logging
import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from unitsmith.core.units.definitions import DimensionRegistry  # noqa: E402
from unitsmith.dimensions import register_default_dimensions  # noqa: E402


@pytest.fixture()
def registry() -> DimensionRegistry:
    return register_default_dimensions(DimensionRegistry())


@pytest.fixture()
def reset_package_logger():
    yield
    package_logger = logging.getLogger('unitsmith')
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)

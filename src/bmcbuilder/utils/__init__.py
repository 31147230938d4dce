"""
BMC Builder Utils Module

- logger: Logging setup and configuration
- paths: Path helpers shared by the launchers

Usage:
    from bmcbuilder.utils import setup_logger, is_within
"""

from .logger import setup_logger, parse_module_levels
from .paths import is_within

__all__ = [
    'setup_logger',
    'parse_module_levels',
    'is_within',
]

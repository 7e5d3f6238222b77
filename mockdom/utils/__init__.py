"""
Utility modules for mockdom.
"""

from mockdom.utils.config import Config
from mockdom.utils.logging import setup_logging, setup_logging_from_config, log_exception

__all__ = [
    'Config',
    'setup_logging',
    'setup_logging_from_config',
    'log_exception',
]

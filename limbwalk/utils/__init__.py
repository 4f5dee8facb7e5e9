"""
Utilities module
Configuration and logging
"""

from .config import Config
from .logger import setup_logger

__all__ = ['Config', 'setup_logger']

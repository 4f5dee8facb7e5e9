"""
Control module
Body controller stand-in for demos and tests
"""

from .body_driver import BodyDriver

__all__ = ['BodyDriver']

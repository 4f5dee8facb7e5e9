"""
Limbs module
Appendage drivers: IK legs and fixed rotors
"""

from .base import Appendage, SkipReason, Transform, VisualConfig
from .leg_driver import LegDriver, LegPose
from .rotor_driver import RotorDriver

__all__ = [
    'Appendage', 'SkipReason', 'Transform', 'VisualConfig',
    'LegDriver', 'LegPose', 'RotorDriver',
]

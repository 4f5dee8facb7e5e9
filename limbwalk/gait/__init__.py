"""
Gait module
Limb placement, swing scheduling and stability groups
"""

from .gait_controller import GaitController, GaitSettings
from .limb_state import LimbConfiguration, LimbSnapshot, LimbState
from .stability_groups import assign_stability_groups

__all__ = [
    'GaitController', 'GaitSettings',
    'LimbConfiguration', 'LimbSnapshot', 'LimbState',
    'assign_stability_groups',
]

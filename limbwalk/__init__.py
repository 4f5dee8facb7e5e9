"""limbwalk - procedural limb IK, gait and camera follow for multi-limbed creatures."""

from .creature import Creature, CreatureFrame, Simulation, build_creature
from .gait import GaitController, GaitSettings, LimbConfiguration, LimbState
from .geometry import BodyFrame, world_anchor
from .kinematics import InverseKinematics, clamp_to_reach, solve_two_bone_ik
from .tracking import CameraFollow, yaw_toward

__version__ = "0.1.0"

__all__ = [
    'Creature', 'CreatureFrame', 'Simulation', 'build_creature',
    'GaitController', 'GaitSettings', 'LimbConfiguration', 'LimbState',
    'BodyFrame', 'world_anchor',
    'InverseKinematics', 'clamp_to_reach', 'solve_two_bone_ik',
    'CameraFollow', 'yaw_toward',
]

"""
Kinematics module
Two-bone inverse kinematics
"""

from .inverse_kinematics import InverseKinematics, clamp_to_reach, solve_two_bone_ik

__all__ = ['InverseKinematics', 'clamp_to_reach', 'solve_two_bone_ik']

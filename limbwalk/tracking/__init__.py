"""
Tracking module
Camera follow, aim yaw and PID control
"""

from .camera_follow import CameraFollow, yaw_toward
from .pid_controller import PIDController

__all__ = ['CameraFollow', 'PIDController', 'yaw_toward']

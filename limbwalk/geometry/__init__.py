"""
Geometry module
Vector/quaternion primitives and the body frame
"""

from .frames import BodyFrame, world_anchor, yaw_quaternion

__all__ = ['BodyFrame', 'world_anchor', 'yaw_quaternion']

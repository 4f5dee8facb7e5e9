"""
Body Frame
Root transform of the creature and body-to-world anchor conversion

Convention: +Y is up, +Z is body forward, +X is body right.
"""

from dataclasses import dataclass, field
from typing import Sequence
import math
import numpy as np

from .vectors import (
    WORLD_FORWARD,
    WORLD_RIGHT,
    WORLD_UP,
    quat_from_axis_angle,
    quat_identity,
    quat_normalize,
    quat_rotate_vector,
    vec3,
)


def yaw_quaternion(yaw: float) -> np.ndarray:
    """Rotation of `yaw` radians about world up."""
    return quat_from_axis_angle(np.array(WORLD_UP), yaw)


@dataclass
class BodyFrame:
    """Position + orientation of the creature root."""
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = field(default_factory=quat_identity)  # [w, x, y, z]

    def __post_init__(self):
        self.position = vec3(self.position)
        self.orientation = quat_normalize(np.asarray(self.orientation, dtype=np.float64))

    @classmethod
    def from_yaw(cls, position: Sequence[float], yaw: float = 0.0) -> "BodyFrame":
        return cls(position=vec3(position), orientation=yaw_quaternion(yaw))

    def to_world(self, local_vector: Sequence[float]) -> np.ndarray:
        """Rotate a body-frame direction into world space (no translation)."""
        return quat_rotate_vector(self.orientation, vec3(local_vector))

    def up(self) -> np.ndarray:
        return self.to_world(WORLD_UP)

    def forward(self) -> np.ndarray:
        return self.to_world(WORLD_FORWARD)

    def right(self) -> np.ndarray:
        return self.to_world(WORLD_RIGHT)

    def yaw(self) -> float:
        """Heading of the body forward axis around world up."""
        fwd = self.forward()
        return math.atan2(fwd[0], fwd[2])

    def copy(self) -> "BodyFrame":
        return BodyFrame(self.position.copy(), self.orientation.copy())


def world_anchor(frame: BodyFrame, origin_offset: Sequence[float]) -> np.ndarray:
    """
    World position of a point fixed to the body.

    Args:
        frame: Current body frame
        origin_offset: Point in body coordinates (e.g. a shoulder mount)

    Returns:
        World-space position
    """
    return frame.position + frame.to_world(origin_offset)

"""
Body Driver
Kinematic stand-in for the host's body controller

Walks the root toward an aim target at a fixed speed, turns the heading
toward it at a bounded rate and holds a ride height above the terrain with
a PID loop. Produces the (frame, aim target, is_moving) inputs the gait
controller expects.
"""

from typing import Optional, Sequence, Tuple
import logging
import math
import numpy as np

from ..geometry.frames import BodyFrame
from ..geometry.vectors import horizontal, vec3
from ..terrain.ground import GroundQuery
from ..tracking.camera_follow import yaw_toward
from ..tracking.pid_controller import PIDController

logger = logging.getLogger(__name__)

# Remaining distance below which the body counts as arrived
_ARRIVE_TOLERANCE = 1e-6


def wrap_angle(angle: float) -> float:
    """Wrap to [-pi, pi)."""
    return (angle + math.pi) % (2.0 * math.pi) - math.pi


class BodyDriver:
    """
    Simple root mover

    Features:
    - Constant-speed travel toward an aim target
    - Rate-limited yaw toward the target
    - PID ride height over terrain
    """

    STATE_IDLE = "idle"
    STATE_MOVING = "moving"

    def __init__(
        self,
        ground: GroundQuery,
        start: Sequence[float] = (0.0, 0.0, 0.0),
        speed: float = 2.0,
        turn_rate: float = 3.0,
        ride_height: float = 1.0,
        arrive_radius: float = 0.3,
        height_pid: Optional[PIDController] = None
    ):
        """
        Initialize body driver.

        Args:
            ground: Terrain query
            start: Initial root x/z (y is replaced by ride height)
            speed: Travel speed (units/second)
            turn_rate: Maximum yaw rate (radians/second)
            ride_height: Root height above the terrain
            arrive_radius: Horizontal distance at which the body stops
            height_pid: PID for the vertical axis (defaults if None)
        """
        self.ground = ground
        self.speed = speed
        self.turn_rate = turn_rate
        self.ride_height = ride_height
        self.arrive_radius = arrive_radius
        self.height_pid = height_pid or PIDController()

        position = vec3(start)
        height, _ = ground.height_and_normal_at(position[0], position[2])
        position[1] = height + ride_height
        self.frame = BodyFrame.from_yaw(position, 0.0)
        self.state = self.STATE_IDLE

    @property
    def is_moving(self) -> bool:
        return self.state == self.STATE_MOVING

    def update(self, aim_target: Sequence[float], dt: float) -> Tuple[BodyFrame, bool]:
        """
        Move the root one tick toward the aim target.

        Args:
            aim_target: Point to walk to
            dt: Tick duration in seconds

        Returns:
            (copy of the new body frame, is_moving intent)
        """
        aim = vec3(aim_target)
        position = self.frame.position.copy()

        delta = horizontal(aim - position)
        dist = float(np.linalg.norm(delta))
        remaining = dist - self.arrive_radius
        self._set_state(self.STATE_MOVING if remaining > _ARRIVE_TOLERANCE else self.STATE_IDLE)

        yaw = self.frame.yaw()
        desired = yaw_toward(position, aim, yaw)
        max_turn = self.turn_rate * dt
        yaw = yaw + max(-max_turn, min(max_turn, wrap_angle(desired - yaw)))

        if self.is_moving:
            step = min(self.speed * dt, remaining)
            position += delta / dist * step

        ground_height, _ = self.ground.height_and_normal_at(position[0], position[2])
        error = ground_height + self.ride_height - position[1]
        position[1] += self.height_pid.update(error, dt) * dt

        self.frame = BodyFrame.from_yaw(position, yaw)
        return self.frame.copy(), self.is_moving

    def _set_state(self, new_state: str) -> None:
        if new_state != self.state:
            self.state = new_state
            logger.debug(f"Body driver state changed to: {new_state}")

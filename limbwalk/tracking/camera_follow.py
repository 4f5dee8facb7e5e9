"""
Camera Follow
Keeps an orbit camera centered on the creature root

In locked mode the camera keeps whatever offset the user last chose
(camera position minus follow target) and re-centers on the root every
tick. In free mode the camera is left alone.
"""

from typing import Optional, Sequence, Tuple
import logging
import math
import numpy as np

from ..geometry.vectors import vec3

logger = logging.getLogger(__name__)


def yaw_toward(
    root_pos: Sequence[float],
    aim_target: Sequence[float],
    current_yaw: float,
    epsilon: float = 0.01
) -> float:
    """
    Heading that faces the aim target from the root.

    Args:
        root_pos: Creature root position
        aim_target: Point to face
        current_yaw: Heading to keep when the target is (almost) on the root
        epsilon: Minimum squared horizontal distance to turn

    Returns:
        atan2(dx, dz) of the root -> target vector, or current_yaw
    """
    dx = float(aim_target[0]) - float(root_pos[0])
    dz = float(aim_target[2]) - float(root_pos[2])
    if dx * dx + dz * dz <= epsilon:
        return current_yaw
    return math.atan2(dx, dz)


class CameraFollow:
    """
    Orbit camera follow state machine

    Features:
    - Locked follow preserving the user's relative view
    - Free mode (no camera changes)
    - User orbit input
    """

    STATE_LOCKED = "locked"
    STATE_FREE = "free"

    def __init__(
        self,
        camera_pos: Sequence[float] = (0.0, 6.0, -10.0),
        follow_target: Sequence[float] = (0.0, 0.0, 0.0),
        locked: bool = True
    ):
        """
        Initialize camera follow.

        Args:
            camera_pos: Initial camera position
            follow_target: Initial orbit target (what the camera looks at)
            locked: Start in locked follow mode
        """
        self.camera_pos = vec3(camera_pos)
        self.follow_target = vec3(follow_target)
        self.state = self.STATE_LOCKED if locked else self.STATE_FREE

    @property
    def locked(self) -> bool:
        return self.state == self.STATE_LOCKED

    @property
    def offset(self) -> np.ndarray:
        return self.camera_pos - self.follow_target

    def update(self, root_pos: Optional[Sequence[float]]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Re-center on the root for this tick.

        Args:
            root_pos: Creature root position (None if not available yet)

        Returns:
            (camera position, follow target) copies
        """
        if self.locked and root_pos is not None:
            root = vec3(root_pos)
            offset = self.camera_pos - self.follow_target
            self.follow_target = root
            self.camera_pos = root + offset
        return self.camera_pos.copy(), self.follow_target.copy()

    def orbit(self, camera_pos: Sequence[float]) -> None:
        """Record a camera position chosen by the user (orbit/zoom input)."""
        self.camera_pos = vec3(camera_pos)

    def set_state(self, new_state: str) -> None:
        """Update follow state"""
        if new_state != self.state:
            if new_state in [self.STATE_LOCKED, self.STATE_FREE]:
                self.state = new_state
                logger.info(f"Camera follow state changed to: {new_state}")
            else:
                logger.warning(f"Ignoring unknown camera state: {new_state}")

    def set_locked(self, locked: bool) -> None:
        self.set_state(self.STATE_LOCKED if locked else self.STATE_FREE)

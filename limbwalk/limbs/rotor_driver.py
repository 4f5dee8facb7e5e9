"""
Rotor Driver
Fixed-rotor appendage for the quad-rotor variant (no IK, no gait state)

Even rotor ids spin one way, odd ids the other, so opposing torques cancel.
"""

from typing import Optional
import logging
import math
import numpy as np

from ..gait.limb_state import LimbConfiguration
from ..geometry.frames import BodyFrame, world_anchor
from ..geometry.vectors import WORLD_UP, quat_from_axis_angle, quat_multiply
from .base import Appendage, SkipReason, Transform, VisualConfig

logger = logging.getLogger(__name__)


class RotorDriver(Appendage):
    """
    Spinning rotor mounted at a limb origin

    Features:
    - Constant spin, direction from rotor id parity
    - Rotor hub raised above the mount point
    """

    kind = "rotor"

    SPIN_RATE = 0.3
    SPIN_GAIN = 100.0
    HUB_HEIGHT = 0.3

    def __init__(self, config: LimbConfiguration, visual: Optional[VisualConfig] = None):
        super().__init__(config, visual)
        self.spin_speed = self.SPIN_RATE if config.id % 2 == 0 else -self.SPIN_RATE
        self.spin_angle = 0.0
        self._pose: Optional[Transform] = None

    @property
    def pose(self) -> Optional[Transform]:
        return self._pose

    def update(self, frame: Optional[BodyFrame], snapshot=None, dt: float = 0.0) -> Optional[Transform]:
        """
        Advance the rotor spin and place the hub.

        Args:
            frame: Body frame (None before the body exists)
            snapshot: Ignored; rotors have no gait state
            dt: Tick duration in seconds

        Returns:
            Rotor hub transform, or the previous one when the frame is missing
        """
        if frame is None:
            self._record_skip(SkipReason.MISSING_FRAME)
            logger.debug(f"Rotor {self.limb_id}: no frame yet, skipping")
            return self._pose

        if math.isfinite(dt) and dt > 0:
            self.spin_angle = math.fmod(self.spin_angle + dt * self.SPIN_GAIN * self.spin_speed, 2.0 * math.pi)

        mount = world_anchor(frame, self.config.origin_offset)
        spin = quat_from_axis_angle(np.array(WORLD_UP), self.spin_angle)

        self._pose = Transform(
            position=mount + frame.up() * self.HUB_HEIGHT,
            orientation=quat_multiply(frame.orientation, spin),
        )
        self._record_skip(SkipReason.NONE)
        return self._pose

"""
Simulation
Headless tick loop: body driver -> creature -> camera follow
"""

from typing import List, Optional, Sequence
import logging
import numpy as np

from ..control.body_driver import BodyDriver
from ..geometry.vectors import vec3
from ..tracking.camera_follow import CameraFollow
from ..tracking.pid_controller import PIDController
from .assembly import Creature, CreatureFrame, build_creature
from .layouts import layout_summary

logger = logging.getLogger(__name__)


class Simulation:
    """
    One creature walking toward a target under a following camera

    Features:
    - Fixed-rate ticks
    - Peak concurrent swing-group tracking
    - Run summary
    """

    def __init__(
        self,
        creature: Creature,
        body: BodyDriver,
        camera: CameraFollow,
        tick_rate: float = 60.0
    ):
        """
        Initialize simulation.

        Args:
            creature: Assembled creature
            body: Body controller stand-in
            camera: Camera follow
            tick_rate: Ticks per second
        """
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive (got {tick_rate})")
        self.creature = creature
        self.body = body
        self.camera = camera
        self.dt = 1.0 / tick_rate
        self.peak_swing_groups = 0
        self.last_frame: Optional[CreatureFrame] = None

    @classmethod
    def from_config(cls, config) -> "Simulation":
        """Build creature, body driver and camera from a Config."""
        creature = build_creature(config)
        body = BodyDriver(
            creature.ground,
            start=config.get("body.start", [0.0, 0.0, 0.0]),
            speed=config.get("body.speed", 2.0),
            turn_rate=config.get("body.turn_rate", 3.0),
            ride_height=config.get("body.ride_height", 1.0),
            arrive_radius=config.get("body.arrive_radius", 0.3),
            height_pid=PIDController(
                kp=config.get("body.pid_kp", 4.0),
                ki=config.get("body.pid_ki", 0.5),
                kd=config.get("body.pid_kd", 0.2),
            ),
        )
        root = body.frame.position
        camera = CameraFollow(
            camera_pos=root + vec3(config.get("camera.offset", [0.0, 6.0, -10.0])),
            follow_target=root,
            locked=config.get("camera.locked", True),
        )
        logger.info(f"Layout: {layout_summary(creature.configs)}")
        return cls(creature, body, camera, tick_rate=config.get("system.tick_rate", 60.0))

    def step(self, aim_target: Sequence[float]) -> CreatureFrame:
        frame, is_moving = self.body.update(aim_target, self.dt)
        result = self.creature.tick(frame, aim_target, is_moving, self.dt)
        self.camera.update(frame.position)

        if self.creature.gait is not None:
            self.peak_swing_groups = max(self.peak_swing_groups, len(self.creature.gait.moving_groups()))
        self.last_frame = result
        return result

    def run(self, ticks: int, aim_target: Sequence[float]) -> List[CreatureFrame]:
        """
        Run a fixed number of ticks.

        Args:
            ticks: Number of ticks
            aim_target: Point the creature walks to

        Returns:
            Every CreatureFrame produced
        """
        frames = [self.step(aim_target) for _ in range(ticks)]
        logger.info(f"Simulated {ticks} ticks ({ticks * self.dt:.2f}s)")
        return frames

    def summary(self) -> dict:
        stats = self.creature.get_statistics()
        stats.update({
            "peak_swing_groups": self.peak_swing_groups,
            "root": np.round(self.body.frame.position, 3).tolist(),
            "camera": np.round(self.camera.camera_pos, 3).tolist(),
            "arrived": not self.body.is_moving,
        })
        return stats

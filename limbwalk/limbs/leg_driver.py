"""
Leg Driver
Turns a limb's foot position into segment transforms via two-bone IK

Per tick:
1. Shoulder anchor from the body frame and the limb's origin offset
2. Foot clamped to max_reach * 0.99 (a new array; the snapshot is untouched)
3. Elbow from the IK solver
4. Upper/lower segment transforms (midpoint, orientation, length scale),
   joint transform (aligned to the bend axis) and foot position

Segments are unit-height cylinders along local +Y, so the orientation maps
local +Y onto the segment and scale.y is the segment length.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import math
import numpy as np

from ..gait.limb_state import LimbConfiguration, LimbSnapshot
from ..geometry.frames import BodyFrame, world_anchor
from ..geometry.vectors import (
    WORLD_FORWARD,
    WORLD_RIGHT,
    quat_from_axis_angle,
    quat_identity,
    quat_look_rotation,
    quat_multiply,
    safe_normalize,
)
from ..kinematics.inverse_kinematics import DEFAULT_REACH_MARGIN, InverseKinematics, clamp_to_reach
from .base import Appendage, SkipReason, Transform, VisualConfig

logger = logging.getLogger(__name__)

_MIN_SEGMENT_LENGTH = 1e-6
_MIN_BEND_AXIS_SQ = 0.01

# Cylinder alignment: turns local +Y onto the look direction (+Z)
_CYLINDER_ALIGN = quat_from_axis_angle(np.array(WORLD_RIGHT), math.pi / 2)


@dataclass
class LegPose:
    """Everything the renderer needs for one leg."""
    upper: Transform
    lower: Transform
    joint: Transform
    foot: Transform

    @property
    def elbow(self) -> np.ndarray:
        return self.joint.position


def segment_orientation(direction: np.ndarray, up: np.ndarray) -> Optional[np.ndarray]:
    """Orientation of a +Y-aligned segment pointing along `direction`."""
    look = quat_look_rotation(direction, up)
    if look is None:
        return None
    return quat_multiply(look, _CYLINDER_ALIGN)


def forward_hint(frame: BodyFrame, shoulder: np.ndarray) -> np.ndarray:
    """
    Outward bend hint for a limb.

    Body center -> shoulder direction; a shoulder on the body center falls
    back to body forward, then world forward.
    """
    fallback = safe_normalize(frame.forward(), WORLD_FORWARD)
    return safe_normalize(shoulder - frame.position, fallback)


class LegDriver(Appendage):
    """
    Walking-limb appendage

    Features:
    - Reach clamp before solving
    - IK solve with body up / outward hints
    - Segment, joint and foot transforms
    - Previous pose kept on unsolvable or missing input
    """

    kind = "leg"

    def __init__(self, config: LimbConfiguration, visual: Optional[VisualConfig] = None):
        """
        Initialize leg driver.

        Args:
            config: Limb configuration
            visual: Display toggles (passed through)
        """
        super().__init__(config, visual)
        self.ik = InverseKinematics(config.l1, config.l2)
        self._pose: Optional[LegPose] = None
        self.last_effective_foot: Optional[np.ndarray] = None

    @property
    def uses_gait(self) -> bool:
        return True

    @property
    def pose(self) -> Optional[LegPose]:
        return self._pose

    def shoulder_position(self, frame: BodyFrame) -> np.ndarray:
        return world_anchor(frame, self.config.origin_offset)

    def effective_foot(self, shoulder: np.ndarray, foot: np.ndarray) -> np.ndarray:
        """Foot position actually handed to the solver."""
        return clamp_to_reach(shoulder, foot, self.config.max_reach, DEFAULT_REACH_MARGIN)

    def update(
        self,
        frame: Optional[BodyFrame],
        snapshot: Optional[LimbSnapshot] = None,
        dt: float = 0.0
    ) -> Optional[LegPose]:
        """
        Update the leg pose for this tick.

        Args:
            frame: Body frame (None before the body exists)
            snapshot: This limb's gait state for the tick
            dt: Unused by legs

        Returns:
            The new pose, or the previous one when the update was skipped
        """
        if frame is None or snapshot is None:
            self._record_skip(SkipReason.MISSING_FRAME)
            logger.debug(f"Leg {self.limb_id}: no frame/state yet, skipping")
            return self._pose

        shoulder = self.shoulder_position(frame)
        foot = self.effective_foot(shoulder, snapshot.current_pos)
        self.last_effective_foot = foot
        up = frame.up()

        elbow = self.ik.solve(shoulder, foot, up, forward_hint(frame, shoulder))
        if elbow is None:
            self._record_skip(SkipReason.UNSOLVABLE_IK)
            logger.debug(f"Leg {self.limb_id}: IK unsolvable, keeping previous pose")
            return self._pose

        previous = self._pose
        degenerate = False

        upper, ok = self._segment(shoulder, elbow, up, previous.upper if previous else None)
        degenerate |= not ok
        lower, ok = self._segment(elbow, foot, up, previous.lower if previous else None)
        degenerate |= not ok

        joint = Transform(position=elbow.copy())
        upper_dir = safe_normalize(elbow - shoulder, (0.0, 0.0, 0.0))
        lower_dir = safe_normalize(foot - elbow, (0.0, 0.0, 0.0))
        axis = np.cross(upper_dir, lower_dir)
        joint_orientation = None
        if float(np.dot(axis, axis)) > _MIN_BEND_AXIS_SQ:
            joint_orientation = quat_look_rotation(axis, up)
        if joint_orientation is None:
            degenerate = True
            joint.orientation = previous.joint.orientation.copy() if previous else quat_identity()
        else:
            joint.orientation = joint_orientation

        foot_transform = Transform(position=foot.copy())

        self._pose = LegPose(upper=upper, lower=lower, joint=joint, foot=foot_transform)
        self._record_skip(SkipReason.DEGENERATE_ORIENTATION if degenerate else SkipReason.NONE)
        return self._pose

    @staticmethod
    def _segment(start, end, up, previous: Optional[Transform]):
        """Transform spanning start -> end; (transform, orientation_ok)."""
        vector = end - start
        seg_length = float(np.linalg.norm(vector))
        transform = Transform(
            position=(start + end) * 0.5,
            scale=np.array([1.0, seg_length, 1.0]),
        )

        orientation = None
        if seg_length > _MIN_SEGMENT_LENGTH:
            orientation = segment_orientation(vector, up)
        if orientation is None:
            transform.orientation = previous.orientation.copy() if previous else quat_identity()
            return transform, False

        transform.orientation = orientation
        return transform, True

    def get_statistics(self) -> dict:
        stats = self.ik.get_statistics()
        stats.update({reason.value: count for reason, count in self.skip_counts.items()})
        return stats

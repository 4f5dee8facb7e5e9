"""
Inverse Kinematics
Analytic two-bone solver for shoulder -> elbow -> foot limbs

The solver treats shoulder, elbow and foot as a triangle with sides l1, l2
and the shoulder-foot distance d, finds the shoulder angle with the law of
cosines and swings the reach axis by that angle inside the bend plane picked
from the up/forward hints.
"""

from typing import Optional, Sequence, Tuple
import logging
import numpy as np

from ..geometry.vectors import (
    WORLD_FORWARD,
    WORLD_RIGHT,
    WORLD_UP,
    is_finite,
    normalize,
)

logger = logging.getLogger(__name__)

DEFAULT_REACH_MARGIN = 0.99

# Keeps a nonzero bend at full extension so the bend side stays defined
_STRAIGHT_LIMB_COS = 1.0 - 1e-9
_MIN_REACH = 1e-9
_MIN_BEND_COMPONENT = 1e-6


def _bend_direction(
    reach_dir: np.ndarray,
    up_hint: np.ndarray,
    forward_hint: np.ndarray
) -> np.ndarray:
    """
    Unit vector perpendicular to the reach axis pointing to the elbow side.

    Candidates are tried in a fixed order (up+forward, up, forward, then
    world axes) so the choice depends only on the inputs.
    """
    up = normalize(up_hint)
    fwd = normalize(forward_hint)
    candidates = (
        up + fwd,
        up,
        fwd,
        np.array(WORLD_UP),
        np.array(WORLD_FORWARD),
        np.array(WORLD_RIGHT),
    )
    for candidate in candidates:
        perpendicular = candidate - reach_dir * np.dot(candidate, reach_dir)
        n = np.linalg.norm(perpendicular)
        if n > _MIN_BEND_COMPONENT:
            return perpendicular / n

    # Unreachable: the three world axes cannot all be parallel to reach_dir
    raise AssertionError("no bend direction candidate")


def solve_two_bone_ik(
    shoulder_pos: Sequence[float],
    foot_pos: Sequence[float],
    l1: float,
    l2: float,
    up_hint: Sequence[float],
    forward_hint: Sequence[float]
) -> Optional[np.ndarray]:
    """
    Solve two-bone IK for the elbow/knee position.

    Args:
        shoulder_pos: World position of the limb root
        foot_pos: Desired world position of the limb tip
        l1: Upper bone length (shoulder -> elbow)
        l2: Lower bone length (elbow -> foot)
        up_hint: Approximate body up; the elbow bends toward it
        forward_hint: Limb outward direction; the elbow bends toward it

    Returns:
        Elbow world position, or None if the triangle cannot be formed
    """
    shoulder = np.asarray(shoulder_pos, dtype=np.float64)
    foot = np.asarray(foot_pos, dtype=np.float64)
    up = np.asarray(up_hint, dtype=np.float64)
    fwd = np.asarray(forward_hint, dtype=np.float64)

    if not is_finite(shoulder, foot, up, fwd, [l1, l2]):
        return None
    if l1 <= 0.0 or l2 <= 0.0:
        return None

    reach = foot - shoulder
    d = float(np.linalg.norm(reach))

    if d < _MIN_REACH:
        return None
    if d > l1 + l2 or d < abs(l1 - l2):
        return None

    reach_dir = reach / d

    cos_root = (l1 * l1 + d * d - l2 * l2) / (2.0 * l1 * d)
    cos_root = float(np.clip(cos_root, -1.0, _STRAIGHT_LIMB_COS))
    sin_root = float(np.sqrt(1.0 - cos_root * cos_root))

    bend_dir = _bend_direction(reach_dir, up, fwd)

    return shoulder + l1 * (cos_root * reach_dir + sin_root * bend_dir)


def clamp_to_reach(
    shoulder_pos: Sequence[float],
    foot_pos: Sequence[float],
    max_reach: float,
    margin: float = DEFAULT_REACH_MARGIN
) -> np.ndarray:
    """
    Pull a foot position back inside the limb's safe reach.

    Args:
        shoulder_pos: World position of the limb root
        foot_pos: Requested foot position (not modified)
        max_reach: Maximum reach of the limb
        margin: Fraction of max_reach that is safe to solve for

    Returns:
        New array: foot_pos itself if close enough, otherwise the point at
        max_reach * margin along the shoulder -> foot direction
    """
    shoulder = np.asarray(shoulder_pos, dtype=np.float64)
    foot = np.array(foot_pos, dtype=np.float64)
    limit = max_reach * margin

    offset = foot - shoulder
    dist = float(np.linalg.norm(offset))
    if dist > limit:
        return shoulder + offset * (limit / dist)
    return foot


class InverseKinematics:
    """
    Two-bone IK solver bound to one limb's bone lengths

    Features:
    - Elbow position from shoulder/foot positions
    - Reach limits for the limb
    - Solve statistics
    """

    def __init__(self, upper_length: float, lower_length: float):
        """
        Initialize IK solver.

        Args:
            upper_length: Shoulder -> elbow bone length
            lower_length: Elbow -> foot bone length
        """
        if upper_length <= 0 or lower_length <= 0:
            raise ValueError(
                f"Bone lengths must be positive (got {upper_length}, {lower_length})"
            )
        self.upper_length = float(upper_length)
        self.lower_length = float(lower_length)

        self.solves = 0
        self.unsolvable = 0

    def reach_limits(self) -> Tuple[float, float]:
        """Closest and farthest solvable shoulder -> foot distance."""
        return (
            abs(self.upper_length - self.lower_length),
            self.upper_length + self.lower_length,
        )

    def solve(
        self,
        shoulder_pos: Sequence[float],
        foot_pos: Sequence[float],
        up_hint: Sequence[float],
        forward_hint: Sequence[float]
    ) -> Optional[np.ndarray]:
        """
        Solve inverse kinematics.

        Args:
            shoulder_pos: World position of the limb root
            foot_pos: World position of the foot
            up_hint: Body up direction
            forward_hint: Limb outward direction

        Returns:
            Elbow position or None if unsolvable
        """
        self.solves += 1
        elbow = solve_two_bone_ik(
            shoulder_pos, foot_pos,
            self.upper_length, self.lower_length,
            up_hint, forward_hint
        )
        if elbow is None:
            self.unsolvable += 1
            logger.debug(
                f"IK unsolvable: d={np.linalg.norm(np.subtract(foot_pos, shoulder_pos)):.4f}, "
                f"limits={self.reach_limits()}"
            )
        return elbow

    def get_statistics(self) -> dict:
        return {
            "solves": self.solves,
            "unsolvable": self.unsolvable,
        }

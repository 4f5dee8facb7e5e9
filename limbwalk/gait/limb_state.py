"""
Limb configuration and per-limb gait state
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence
import numpy as np

from ..geometry.vectors import vec3


@dataclass(frozen=True, eq=False)
class LimbConfiguration:
    """Static description of one limb, fixed at creature assembly."""
    id: int
    origin_offset: Sequence[float]   # shoulder mount in body coordinates
    l1: float                        # shoulder -> elbow
    l2: float                        # elbow -> foot
    max_reach: float                 # <= l1 + l2
    group: Optional[int] = None      # explicit stability group
    stance_radius: float = 1.0       # outward rest distance of the foot

    def __post_init__(self):
        offset = vec3(self.origin_offset)
        offset.setflags(write=False)
        object.__setattr__(self, 'origin_offset', offset)

        if self.l1 <= 0 or self.l2 <= 0:
            raise ValueError(f"Limb {self.id}: bone lengths must be positive")
        if self.max_reach <= 0 or self.max_reach > self.l1 + self.l2:
            raise ValueError(
                f"Limb {self.id}: max_reach {self.max_reach} must be in (0, {self.l1 + self.l2}]"
            )
        if self.stance_radius < 0:
            raise ValueError(f"Limb {self.id}: stance_radius must be >= 0")

    @classmethod
    def from_dict(cls, data: dict) -> "LimbConfiguration":
        """Build from a config mapping (keys as in the YAML `limbs` list)."""
        l1 = float(data['l1'])
        l2 = float(data['l2'])
        return cls(
            id=int(data['id']),
            origin_offset=data['origin_offset'],
            l1=l1,
            l2=l2,
            max_reach=float(data.get('max_reach', l1 + l2)),
            group=data.get('group'),
            stance_radius=float(data.get('stance_radius', 1.0)),
        )


@dataclass(frozen=True, eq=False)
class LimbSnapshot:
    """Read-only copy of a LimbState handed out once per tick."""
    limb_id: int
    current_pos: np.ndarray
    target_pos: np.ndarray
    is_grounded: bool
    is_moving: bool


@dataclass
class LimbState:
    """
    Mutable gait state of one limb

    Owned and mutated only by the gait controller; everything else reads
    LimbSnapshot copies.
    """
    limb_id: int
    current_pos: np.ndarray = field(default_factory=lambda: np.zeros(3))
    target_pos: np.ndarray = field(default_factory=lambda: np.zeros(3))
    is_grounded: bool = True
    is_moving: bool = False

    PHASE_PLANTED = "planted"
    PHASE_SWINGING = "swinging"
    PHASE_AIRBORNE = "airborne"

    @property
    def phase(self) -> str:
        if self.is_moving:
            return self.PHASE_SWINGING
        if self.is_grounded:
            return self.PHASE_PLANTED
        return self.PHASE_AIRBORNE

    def plant(self, position: Sequence[float]) -> None:
        """Put the foot down at `position` and clear any swing."""
        self.current_pos = vec3(position)
        self.target_pos = self.current_pos.copy()
        self.is_grounded = True
        self.is_moving = False

    def snapshot(self) -> LimbSnapshot:
        current = self.current_pos.copy()
        target = self.target_pos.copy()
        current.setflags(write=False)
        target.setflags(write=False)
        return LimbSnapshot(
            limb_id=self.limb_id,
            current_pos=current,
            target_pos=target,
            is_grounded=self.is_grounded,
            is_moving=self.is_moving,
        )

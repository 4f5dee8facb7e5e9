"""
Appendage base types
Shared transform/pose types and the frame-local skip taxonomy
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional
import numpy as np

from ..geometry.vectors import quat_identity


class SkipReason(Enum):
    """Why a driver left (part of) its pose unchanged this tick"""
    NONE = "none"
    UNSOLVABLE_IK = "unsolvable_ik"
    DEGENERATE_ORIENTATION = "degenerate_orientation"
    MISSING_FRAME = "missing_frame"


@dataclass
class Transform:
    """World transform handed to the renderer."""
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = field(default_factory=quat_identity)
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def copy(self) -> "Transform":
        return Transform(self.position.copy(), self.orientation.copy(), self.scale.copy())


@dataclass
class VisualConfig:
    """Display toggles passed through to the renderer untouched."""
    show_body: bool = True
    show_plating: bool = True
    plating_opacity: float = 1.0
    leg_color: str = "#2a2a35"

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "VisualConfig":
        data = data or {}
        return cls(
            show_body=bool(data.get("show_body", True)),
            show_plating=bool(data.get("show_plating", True)),
            plating_opacity=float(data.get("plating_opacity", 1.0)),
            leg_color=str(data.get("leg_color", "#2a2a35")),
        )


class Appendage(ABC):
    """
    Something mounted on the body that produces a pose every tick

    Variants are chosen once at assembly: walking legs (IK driven) and
    fixed rotors (spin only).
    """

    kind = "appendage"

    def __init__(self, config, visual: Optional[VisualConfig] = None):
        self.config = config
        self.visual = visual or VisualConfig()
        self.last_skip = SkipReason.NONE
        self.skip_counts: Dict[SkipReason, int] = {r: 0 for r in SkipReason if r is not SkipReason.NONE}

    @property
    def limb_id(self) -> int:
        return self.config.id

    @property
    def uses_gait(self) -> bool:
        """Whether this appendage reads a LimbSnapshot from the gait controller"""
        return False

    def _record_skip(self, reason: SkipReason) -> None:
        self.last_skip = reason
        if reason is not SkipReason.NONE:
            self.skip_counts[reason] += 1

    @abstractmethod
    def update(self, frame, snapshot=None, dt: float = 0.0):
        """Compute this tick's pose; returns the current pose (may be None)."""

    @property
    @abstractmethod
    def pose(self):
        """Most recent valid pose, or None before the first one."""

"""
Creature Assembly
Wires limb configurations to the gait controller and appendage drivers

Tick order:
1. Gait update for every limb (walker variant only)
2. Barrier: snapshots of every limb state are taken
3. Each appendage driver reads its snapshot and produces a pose
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from ..gait.gait_controller import GaitController, GaitSettings
from ..gait.limb_state import LimbConfiguration, LimbSnapshot
from ..geometry.frames import BodyFrame
from ..limbs.base import Appendage, SkipReason, VisualConfig
from ..limbs.leg_driver import LegDriver
from ..limbs.rotor_driver import RotorDriver
from ..terrain.ground import FlatGround, GroundQuery, make_ground
from .layouts import get_layout

logger = logging.getLogger(__name__)


@dataclass
class CreatureFrame:
    """Outbound data for one tick (consumed by the renderer)."""
    tick: int
    root: Optional[BodyFrame]
    poses: Dict[int, object]
    skips: Dict[int, SkipReason]
    limbs: Tuple[LimbSnapshot, ...] = ()
    visual: VisualConfig = field(default_factory=VisualConfig)


class Creature:
    """
    Multi-limbed creature

    Variants:
    - walker: IK legs driven by the gait controller
    - rotor: fixed rotors, no gait
    """

    VARIANT_WALKER = "walker"
    VARIANT_ROTOR = "rotor"

    def __init__(
        self,
        configs: Sequence[LimbConfiguration],
        variant: str = VARIANT_WALKER,
        ground: Optional[GroundQuery] = None,
        gait_settings: Optional[GaitSettings] = None,
        visual: Optional[VisualConfig] = None,
        groups: Optional[Dict[int, int]] = None
    ):
        """
        Assemble a creature.

        Args:
            configs: Limb configurations
            variant: "walker" or "rotor"
            ground: Terrain query (flat ground if None)
            gait_settings: Gait tuning (walker only)
            visual: Display toggles, passed through untouched
            groups: Explicit {limb_id: stability group} (walker only)
        """
        if variant not in (self.VARIANT_WALKER, self.VARIANT_ROTOR):
            raise ValueError(f"Unknown creature variant: {variant!r}")

        self.configs: List[LimbConfiguration] = list(configs)
        self.variant = variant
        self.ground = ground or FlatGround()
        self.visual = visual or VisualConfig()
        self.tick_count = 0

        self.gait: Optional[GaitController] = None
        self.appendages: List[Appendage] = []

        if variant == self.VARIANT_WALKER:
            settings = gait_settings or GaitSettings()
            self.gait = GaitController(self.configs, self.ground, settings, groups)
            self.appendages = [
                LegDriver(c, self.visual) for c in self.configs
            ]
        else:
            self.appendages = [RotorDriver(c, self.visual) for c in self.configs]

        logger.info(f"Assembled {variant} creature with {len(self.configs)} appendages")

    def tick(
        self,
        frame: Optional[BodyFrame],
        aim_target: Optional[Sequence[float]] = None,
        is_moving: bool = False,
        dt: float = 1.0 / 60.0
    ) -> CreatureFrame:
        """
        Run one simulate + pose pass.

        Args:
            frame: Body frame for this tick (None if not available yet)
            aim_target: Point the body is heading to
            is_moving: Movement intent
            dt: Tick duration in seconds

        Returns:
            CreatureFrame with every appendage pose
        """
        self.tick_count += 1

        snapshots: Tuple[LimbSnapshot, ...] = ()
        if self.gait is not None and frame is not None:
            snapshots = self.gait.update(frame, aim_target, is_moving, dt)
        by_id = {s.limb_id: s for s in snapshots}

        poses = {}
        skips = {}
        for appendage in self.appendages:
            snapshot = by_id.get(appendage.limb_id) if appendage.uses_gait else None
            poses[appendage.limb_id] = appendage.update(frame, snapshot, dt)
            skips[appendage.limb_id] = appendage.last_skip

        return CreatureFrame(
            tick=self.tick_count,
            root=frame.copy() if frame is not None else None,
            poses=poses,
            skips=skips,
            limbs=snapshots,
            visual=self.visual,
        )

    def get_statistics(self) -> dict:
        stats = {
            "variant": self.variant,
            "ticks": self.tick_count,
            "skips": {
                reason.value: sum(a.skip_counts[reason] for a in self.appendages)
                for reason in SkipReason if reason is not SkipReason.NONE
            },
        }
        if self.gait is not None:
            stats["gait"] = self.gait.get_statistics()
        return stats


def build_creature(config, ground: Optional[GroundQuery] = None) -> Creature:
    """
    Assemble a creature from configuration.

    Args:
        config: limbwalk.utils.config.Config
        ground: Terrain query; built from the `terrain` section if None

    Returns:
        Creature
    """
    variant = config.get("creature.variant", Creature.VARIANT_WALKER)

    limbs = config.get("creature.limbs")
    if limbs:
        configs = [LimbConfiguration.from_dict(item) for item in limbs]
    else:
        configs = get_layout(config.get("creature.layout", "spider"))

    if ground is None:
        terrain = dict(config.get("terrain", {}) or {})
        ground = make_ground(terrain.pop("type", "flat"), **terrain)

    return Creature(
        configs,
        variant=variant,
        ground=ground,
        gait_settings=GaitSettings.from_dict(config.get("gait")),
        visual=VisualConfig.from_dict(config.get("visual")),
    )

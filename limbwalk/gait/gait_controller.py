"""
Gait Controller
Per-limb foot placement state machine with stability-group scheduling

Each tick runs in two phases:
1. Scheduling: decide from the pre-tick state whether a stability group
   starts a swing. Only one group may be in the air at a time.
2. Limb update: every limb advances on its own (launch, swing, land or stay
   planted). No limb reads another limb's state in this phase, so the
   order of limbs does not matter.

Swing profile:
- Horizontal: sine ease-in-out from the lift-off point to the target
- Vertical: step_height * sin(pi * progress) along the ground normal
- Landing: current_pos is set to target_pos exactly
"""

from dataclasses import dataclass, fields
from typing import Dict, List, Optional, Sequence, Set, Tuple
import logging
import math
import numpy as np

from ..geometry.frames import BodyFrame, world_anchor
from ..geometry.vectors import distance, horizontal, lerp, normalize, vec3
from ..kinematics.inverse_kinematics import DEFAULT_REACH_MARGIN
from ..terrain.ground import GroundQuery
from .limb_state import LimbConfiguration, LimbSnapshot, LimbState
from .stability_groups import assign_stability_groups, group_members

logger = logging.getLogger(__name__)

# Shortening factors tried when a full stride would overreach
_STRIDE_FRACTIONS = (1.0, 0.75, 0.5, 0.25, 0.0)


@dataclass
class GaitSettings:
    """Gait tuning shared by all limbs of one creature."""
    stride_threshold: float = 0.6   # planted foot drift that triggers a step
    stride_length: float = 0.6      # how far ahead of the stance point to land
    stance_lead: float = 0.2        # stance point shift along travel direction
    swing_duration: float = 0.25    # seconds per swing
    step_height: float = 0.35       # arc peak at mid-swing
    reach_margin: float = 0.99      # fraction of max_reach a target may use
    travel_epsilon: float = 1e-3    # aim closer than this means no travel

    def __post_init__(self):
        if self.swing_duration <= 0:
            raise ValueError(f"swing_duration must be positive (got {self.swing_duration})")
        if self.stride_threshold <= 0:
            raise ValueError(f"stride_threshold must be positive (got {self.stride_threshold})")
        if not 0.0 < self.reach_margin <= DEFAULT_REACH_MARGIN:
            raise ValueError(
                f"reach_margin must be in (0, {DEFAULT_REACH_MARGIN}] (got {self.reach_margin})"
            )

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "GaitSettings":
        """Build from a config section, ignoring unknown keys."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown gait settings: {sorted(unknown)}")
        return cls(**{k: float(v) for k, v in data.items() if k in known})


class _Swing:
    """Lift-off point and landing normal of one limb's current swing."""
    __slots__ = ("start", "normal")

    def __init__(self, start: np.ndarray, normal: np.ndarray):
        self.start = start
        self.normal = normal


class GaitController:
    """
    Limb placement and gait coordination

    Features:
    - Ideal stance point per limb from the body frame and terrain
    - Step trigger on stride threshold, one stability group at a time
    - Eased swing arc with exact landing
    - Step statistics
    """

    def __init__(
        self,
        configs: Sequence[LimbConfiguration],
        ground: GroundQuery,
        settings: Optional[GaitSettings] = None,
        groups: Optional[Dict[int, int]] = None
    ):
        """
        Initialize gait controller.

        Args:
            configs: Limb configurations (ids must be unique)
            ground: Terrain height/normal query
            settings: Gait tuning (defaults if None)
            groups: {limb_id: group}; assigned from the layout if None
        """
        ids = [c.id for c in configs]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate limb ids: {ids}")
        if not configs:
            raise ValueError("A gait controller needs at least one limb")

        self.configs: List[LimbConfiguration] = list(configs)
        self._by_id = {c.id: c for c in self.configs}
        self.ground = ground
        self.settings = settings or GaitSettings()

        self.groups = dict(groups) if groups is not None else assign_stability_groups(self.configs)
        missing = set(ids) - set(self.groups)
        if missing:
            raise ValueError(f"No stability group for limbs {sorted(missing)}")
        self.group_members = group_members({i: self.groups[i] for i in ids})
        self._group_order = sorted(self.group_members)

        self.states: Dict[int, LimbState] = {c.id: LimbState(c.id) for c in self.configs}
        self._swings: Dict[int, _Swing] = {}

        # Shared timing data: the only link between limbs
        self.active_group: Optional[int] = None
        self.swing_elapsed = 0.0
        self._next_group_index = 0

        self.initialized = False
        self.tick_count = 0
        self.steps_taken: Dict[int, int] = {c.id: 0 for c in self.configs}
        self.group_launches: Dict[int, int] = {g: 0 for g in self._group_order}

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def ground_point(self, point: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Drop a point onto the terrain; returns (point, surface normal)."""
        height, normal = self.ground.height_and_normal_at(float(point[0]), float(point[2]))
        out = np.array(point, dtype=np.float64)
        out[1] = height
        return out, normalize(normal)

    def ideal_stance(
        self,
        frame: BodyFrame,
        config: LimbConfiguration,
        travel_dir: np.ndarray
    ) -> np.ndarray:
        """
        Ground position the limb should occupy while bearing weight.

        The shoulder anchor is pushed outward (horizontally, away from the
        body center) by stance_radius, shifted along the travel direction by
        stance_lead, then projected onto the terrain.
        """
        shoulder = world_anchor(frame, config.origin_offset)
        outward = normalize(horizontal(frame.to_world(horizontal(config.origin_offset))))
        point = shoulder + outward * config.stance_radius + travel_dir * self.settings.stance_lead
        return self.ground_point(point)[0]

    def travel_direction(
        self,
        frame: BodyFrame,
        aim_target: Optional[Sequence[float]],
        is_moving: bool
    ) -> np.ndarray:
        """Horizontal unit vector toward the aim target, or zero when idle."""
        if not is_moving or aim_target is None:
            return np.zeros(3)
        delta = horizontal(vec3(aim_target) - frame.position)
        if np.linalg.norm(delta) <= self.settings.travel_epsilon:
            return np.zeros(3)
        return normalize(delta)

    def choose_target(
        self,
        frame: BodyFrame,
        config: LimbConfiguration,
        travel_dir: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Pick the landing point of a new swing.

        The stride is shortened in quarter steps until the landing point is
        within max_reach * reach_margin of the shoulder.

        Returns:
            (target position, surface normal at the target)
        """
        ideal = self.ideal_stance(frame, config, travel_dir)
        shoulder = world_anchor(frame, config.origin_offset)
        limit = config.max_reach * self.settings.reach_margin

        for fraction in _STRIDE_FRACTIONS:
            candidate = ideal + travel_dir * (self.settings.stride_length * fraction)
            target, normal = self.ground_point(candidate)
            if distance(shoulder, target) <= limit:
                if fraction < 1.0:
                    logger.debug(f"Limb {config.id}: stride shortened to {fraction:.2f}")
                return target, normal

        logger.debug(f"Limb {config.id}: stance point out of reach, landing there anyway")
        return self.ground_point(ideal)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def reset(self, frame: BodyFrame) -> None:
        """Plant every foot on its ideal stance point and clear all swings."""
        zero = np.zeros(3)
        for config in self.configs:
            self.states[config.id].plant(self.ideal_stance(frame, config, zero))
        self._swings.clear()
        self.active_group = None
        self.swing_elapsed = 0.0
        self._next_group_index = 0
        self.initialized = True
        logger.debug(f"Gait reset: {len(self.configs)} limbs planted")

    def update(
        self,
        frame: BodyFrame,
        aim_target: Optional[Sequence[float]] = None,
        is_moving: bool = False,
        dt: float = 1.0 / 60.0
    ) -> Tuple[LimbSnapshot, ...]:
        """
        Advance the gait by one tick.

        Args:
            frame: Body frame for this tick
            aim_target: Point the body is heading to
            is_moving: Movement intent from the body controller
            dt: Tick duration in seconds

        Returns:
            Snapshots of every limb after the update
        """
        if not self.initialized:
            self.reset(frame)

        self.tick_count += 1
        travel_dir = self.travel_direction(frame, aim_target, is_moving)
        dt = max(0.0, float(dt)) if math.isfinite(dt) else 0.0

        # Phase 1: scheduling from the pre-tick state
        launching = None
        if self.active_group is None:
            launching = self._pick_group(frame, travel_dir)
        else:
            self.swing_elapsed += dt
        progress = min(1.0, self.swing_elapsed / self.settings.swing_duration)

        # Phase 2: independent per-limb updates
        for config in self.configs:
            group = self.groups[config.id]
            if group == launching:
                self._launch(frame, config, travel_dir)
            elif group == self.active_group and config.id in self._swings:
                self._advance(config, progress)

        if launching is not None:
            self.active_group = launching
            self.swing_elapsed = 0.0
            self.group_launches[launching] += 1
        elif self.active_group is not None and progress >= 1.0:
            logger.debug(f"Group {self.active_group} landed (tick {self.tick_count})")
            self.active_group = None
            self.swing_elapsed = 0.0

        return self.snapshot()

    def _needs_step(self, frame: BodyFrame, config: LimbConfiguration, travel_dir: np.ndarray) -> bool:
        state = self.states[config.id]
        if state.is_moving:
            return False
        ideal = self.ideal_stance(frame, config, travel_dir)
        return distance(state.current_pos, ideal) > self.settings.stride_threshold

    def _pick_group(self, frame: BodyFrame, travel_dir: np.ndarray) -> Optional[int]:
        """Round-robin over groups, starting after the group that swung last."""
        count = len(self._group_order)
        for i in range(count):
            index = (self._next_group_index + i) % count
            group = self._group_order[index]
            members = self.group_members[group]
            if any(self._needs_step(frame, self._config(limb_id), travel_dir) for limb_id in members):
                self._next_group_index = (index + 1) % count
                logger.debug(f"Group {group} lifting limbs {members} (tick {self.tick_count})")
                return group
        return None

    def _launch(self, frame: BodyFrame, config: LimbConfiguration, travel_dir: np.ndarray) -> None:
        state = self.states[config.id]
        target, normal = self.choose_target(frame, config, travel_dir)
        self._swings[config.id] = _Swing(state.current_pos.copy(), normal)
        state.target_pos = target
        state.is_moving = True
        state.is_grounded = False

    def _advance(self, config: LimbConfiguration, progress: float) -> None:
        state = self.states[config.id]
        swing = self._swings[config.id]

        if progress >= 1.0:
            state.plant(state.target_pos)
            del self._swings[config.id]
            self.steps_taken[config.id] += 1
            return

        eased = 0.5 - 0.5 * math.cos(math.pi * progress)
        lift = self.settings.step_height * math.sin(math.pi * progress)
        state.current_pos = lerp(swing.start, state.target_pos, eased) + swing.normal * lift

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def _config(self, limb_id: int) -> LimbConfiguration:
        return self._by_id[limb_id]

    def snapshot(self) -> Tuple[LimbSnapshot, ...]:
        """Read-only copies of every limb state, in configuration order."""
        return tuple(self.states[c.id].snapshot() for c in self.configs)

    def moving_groups(self) -> Set[int]:
        return {self.groups[i] for i, s in self.states.items() if s.is_moving}

    def limbs_in_phase(self, phase: str) -> List[int]:
        return [i for i, s in self.states.items() if s.phase == phase]

    def get_statistics(self) -> dict:
        """
        Get gait statistics.

        Returns:
            Dictionary with statistics
        """
        return {
            "ticks": self.tick_count,
            "steps_taken": dict(self.steps_taken),
            "total_steps": sum(self.steps_taken.values()),
            "group_launches": dict(self.group_launches),
            "active_group": self.active_group,
        }

"""
Tests for creature assembly and the headless simulation.

Success Criteria:
- Variants pick the right appendage drivers
- A walking quadruped alternates diagonal pairs
- The camera keeps its offset from the root while following
"""

from pathlib import Path

import numpy as np
import pytest

from limbwalk.creature import Creature, Simulation, build_creature, get_layout
from limbwalk.creature.layouts import LAYOUTS, layout_summary
from limbwalk.gait import GaitSettings, LimbState
from limbwalk.geometry.frames import BodyFrame
from limbwalk.limbs import LegDriver, RotorDriver, SkipReason
from limbwalk.terrain.ground import RollingHills
from limbwalk.utils.config import Config

SAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "config" / "quadruped_hills.yaml"


def _quadruped_config():
    config = Config()
    config.set("creature.layout", "quadruped")
    return config


class TestLayouts:
    @pytest.mark.parametrize("name, count", [("spider", 8), ("hexapod", 6), ("quadruped", 4), ("quad_rotor", 4)])
    def test_sizes(self, name, count):
        configs = get_layout(name)
        assert len(configs) == count
        assert sorted(c.id for c in configs) == list(range(count))
        assert layout_summary(configs)["limbs"] == count

    def test_unknown_layout(self):
        with pytest.raises(KeyError):
            get_layout("centipede")

    def test_reach_within_bone_lengths(self):
        for name in LAYOUTS:
            for config in get_layout(name):
                assert config.max_reach <= config.l1 + config.l2


class TestCreature:
    def test_walker_uses_legs(self, quadruped):
        creature = Creature(quadruped)
        assert creature.gait is not None
        assert all(isinstance(a, LegDriver) for a in creature.appendages)

    def test_rotor_uses_rotors(self, quadruped, standing_frame):
        creature = Creature(quadruped, variant=Creature.VARIANT_ROTOR)
        assert creature.gait is None
        assert all(isinstance(a, RotorDriver) for a in creature.appendages)

        frame = creature.tick(standing_frame, dt=0.1)
        assert frame.limbs == ()
        assert all(reason is SkipReason.NONE for reason in frame.skips.values())
        assert set(frame.poses) == {0, 1, 2, 3}

    def test_unknown_variant(self, quadruped):
        with pytest.raises(ValueError):
            Creature(quadruped, variant="hover")

    def test_missing_frame(self, quadruped):
        creature = Creature(quadruped)
        frame = creature.tick(None)
        assert frame.root is None
        assert all(reason is SkipReason.MISSING_FRAME for reason in frame.skips.values())
        assert creature.gait.tick_count == 0
        assert creature.get_statistics()["skips"]["missing_frame"] == 4

    def test_tick_poses_every_leg(self, quadruped, standing_frame):
        creature = Creature(quadruped)
        frame = creature.tick(standing_frame)
        assert frame.tick == 1
        assert [s.limb_id for s in frame.limbs] == [0, 1, 2, 3]
        for limb_id, pose in frame.poses.items():
            assert pose is not None
            assert frame.skips[limb_id] is SkipReason.NONE
            assert pose.elbow[1] > 0.0

    def test_root_is_a_copy(self, quadruped, standing_frame):
        creature = Creature(quadruped)
        frame = creature.tick(standing_frame)
        standing_frame.position[0] = 10.0
        assert frame.root.position[0] == 0.0


class TestBuildCreature:
    def test_explicit_limbs(self):
        config = Config()
        config.set("creature.limbs", [
            {"id": 0, "origin_offset": [0.8, 0.0, 0.5], "l1": 1.0, "l2": 1.2, "group": 0},
            {"id": 1, "origin_offset": [-0.8, 0.0, 0.5], "l1": 1.0, "l2": 1.2, "group": 1},
        ])
        creature = build_creature(config)
        assert len(creature.appendages) == 2
        assert creature.gait.groups == {0: 0, 1: 1}

    def test_sample_config(self):
        creature = build_creature(Config(str(SAMPLE_CONFIG)))
        assert isinstance(creature.ground, RollingHills)
        assert len(creature.configs) == 4

    def test_visual_passthrough(self):
        config = _quadruped_config()
        config.set("visual.leg_color", "#ff0000")
        creature = build_creature(config)
        frame = creature.tick(BodyFrame.from_yaw((0.0, 1.0, 0.0)))
        assert frame.visual.leg_color == "#ff0000"


class TestSimulation:
    def test_quadruped_walks_in_diagonal_pairs(self):
        simulation = Simulation.from_config(_quadruped_config())
        frames = simulation.run(240, (0.0, 0.0, 12.0))

        for frame in frames:
            moving = {s.limb_id: s.is_moving for s in frame.limbs}
            assert moving[0] == moving[3]
            assert moving[1] == moving[2]
            assert not (moving[0] and moving[1])

        summary = simulation.summary()
        assert summary["peak_swing_groups"] == 1
        assert summary["skips"]["unsolvable_ik"] == 0
        assert all(count > 0 for count in summary["gait"]["steps_taken"].values())
        assert summary["root"][2] > 5.0

    def test_camera_follows_root(self):
        simulation = Simulation.from_config(_quadruped_config())
        simulation.run(60, (0.0, 0.0, 12.0))
        offset = simulation.camera.camera_pos - simulation.body.frame.position
        np.testing.assert_allclose(offset, [0.0, 6.0, -10.0], atol=1e-9)

    def test_rotor_variant(self):
        config = Config()
        config.set("creature.variant", "rotor")
        config.set("creature.layout", "quad_rotor")
        simulation = Simulation.from_config(config)
        simulation.run(30, (3.0, 0.0, 3.0))

        summary = simulation.summary()
        assert "gait" not in summary
        assert summary["peak_swing_groups"] == 0

    def test_repeatable(self):
        first = Simulation.from_config(_quadruped_config())
        second = Simulation.from_config(_quadruped_config())
        first.run(120, (2.0, 0.0, 8.0))
        second.run(120, (2.0, 0.0, 8.0))
        for limb_id, state in first.creature.gait.states.items():
            assert np.array_equal(state.current_pos, second.creature.gait.states[limb_id].current_pos)

    def test_rejects_bad_tick_rate(self):
        config = _quadruped_config()
        config.set("system.tick_rate", 0)
        with pytest.raises(ValueError):
            Simulation.from_config(config)


class TestReachClamp:
    def test_gait_margin_does_not_loosen_leg_clamp(self, quadruped):
        frame = BodyFrame.from_yaw((0.0, 0.0, 0.0))
        state = LimbState(0)
        state.plant((1.0, 0.0, 3.5))
        creature = Creature(quadruped, gait_settings=GaitSettings(reach_margin=0.5))
        leg = creature.appendages[0]
        leg.update(frame, state.snapshot())

        shoulder = np.array([1.0, 0.0, 1.0])
        assert np.linalg.norm(leg.last_effective_foot - shoulder) == pytest.approx(1.98)

    @pytest.mark.parametrize("margin", [0.0, 0.995, 1.0, 1.5])
    def test_gait_margin_out_of_range(self, margin):
        with pytest.raises(ValueError):
            GaitSettings(reach_margin=margin)

    def test_gait_margin_from_config_is_checked(self):
        config = _quadruped_config()
        config.set("gait.reach_margin", 1.0)
        with pytest.raises(ValueError):
            build_creature(config)


"""Tests for limb configuration validation and limb state snapshots."""

import numpy as np
import pytest

from limbwalk.gait.limb_state import LimbConfiguration, LimbState


class TestLimbConfiguration:
    def test_offset_is_read_only_copy(self):
        offset = [1.0, 0.0, 1.0]
        config = LimbConfiguration(id=0, origin_offset=offset, l1=1.0, l2=1.0, max_reach=2.0)
        offset[0] = 5.0
        assert config.origin_offset[0] == 1.0
        with pytest.raises(ValueError):
            config.origin_offset[0] = 3.0

    @pytest.mark.parametrize("kwargs", [
        {"l1": 0.0, "l2": 1.0, "max_reach": 1.0},
        {"l1": 1.0, "l2": -1.0, "max_reach": 1.0},
        {"l1": 1.0, "l2": 1.0, "max_reach": 2.5},
        {"l1": 1.0, "l2": 1.0, "max_reach": 0.0},
    ])
    def test_invalid_lengths(self, kwargs):
        with pytest.raises(ValueError):
            LimbConfiguration(id=0, origin_offset=(0, 0, 0), **kwargs)

    def test_from_dict_defaults_reach(self):
        config = LimbConfiguration.from_dict({"id": 4, "origin_offset": [0.5, 0, 1], "l1": 1.2, "l2": 1.5})
        assert config.id == 4
        assert config.max_reach == pytest.approx(2.7)
        assert config.group is None


class TestLimbState:
    def test_plant_sets_target_and_flags(self):
        state = LimbState(0)
        state.is_moving = True
        state.is_grounded = False
        state.plant((1.0, 0.0, 2.0))

        assert np.array_equal(state.current_pos, state.target_pos)
        assert state.current_pos is not state.target_pos
        assert state.is_grounded and not state.is_moving
        assert state.phase == LimbState.PHASE_PLANTED

    def test_phases(self):
        state = LimbState(0)
        state.is_moving = True
        state.is_grounded = False
        assert state.phase == LimbState.PHASE_SWINGING
        state.is_moving = False
        assert state.phase == LimbState.PHASE_AIRBORNE

    def test_snapshot_is_frozen_copy(self):
        state = LimbState(0)
        state.plant((1.0, 0.0, 2.0))
        snap = state.snapshot()

        state.current_pos[0] = 9.0
        assert snap.current_pos[0] == 1.0
        with pytest.raises(ValueError):
            snap.current_pos[0] = 3.0
        with pytest.raises(AttributeError):
            snap.is_moving = True

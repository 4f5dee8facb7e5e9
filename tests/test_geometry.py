"""Tests for vector/quaternion helpers and the body frame."""

import math

import numpy as np
import pytest

from limbwalk.geometry.frames import BodyFrame, world_anchor
from limbwalk.geometry.vectors import (
    horizontal,
    lerp,
    normalize,
    quat_from_axis_angle,
    quat_look_rotation,
    quat_multiply,
    quat_rotate_vector,
    safe_normalize,
    vec3,
)


# ---------------------------------------------------------------------------
# Vectors
# ---------------------------------------------------------------------------

class TestVectors:
    def test_vec3_copies_input(self):
        source = [1.0, 2.0, 3.0]
        v = vec3(source)
        v[0] = 9.0
        assert source[0] == 1.0
        assert v.dtype == np.float64

    def test_vec3_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            vec3([1.0, 2.0])

    def test_normalize_zero_is_zero(self):
        assert np.array_equal(normalize(np.zeros(3)), np.zeros(3))

    def test_safe_normalize_fallback(self):
        out = safe_normalize(np.zeros(3), (0.0, 0.0, 1.0))
        assert np.array_equal(out, [0.0, 0.0, 1.0])
        out = safe_normalize(np.array([0.0, 3.0, 4.0]), (1.0, 0.0, 0.0))
        np.testing.assert_allclose(out, [0.0, 0.6, 0.8])

    def test_horizontal_drops_y(self):
        assert np.array_equal(horizontal([1.0, 5.0, -2.0]), [1.0, 0.0, -2.0])

    def test_lerp_endpoints(self):
        a = np.array([0.0, 0.0, 0.0])
        b = np.array([2.0, 4.0, 6.0])
        assert np.array_equal(lerp(a, b, 0.0), a)
        assert np.array_equal(lerp(a, b, 1.0), b)
        np.testing.assert_allclose(lerp(a, b, 0.5), [1.0, 2.0, 3.0])


# ---------------------------------------------------------------------------
# Quaternions
# ---------------------------------------------------------------------------

class TestQuaternions:
    def test_axis_angle_rotation(self):
        q = quat_from_axis_angle(np.array([0.0, 1.0, 0.0]), math.pi / 2)
        np.testing.assert_allclose(quat_rotate_vector(q, np.array([0.0, 0.0, 1.0])), [1.0, 0.0, 0.0], atol=1e-12)

    def test_multiply_applies_right_first(self):
        yaw = quat_from_axis_angle(np.array([0.0, 1.0, 0.0]), math.pi / 2)
        pitch = quat_from_axis_angle(np.array([1.0, 0.0, 0.0]), math.pi / 2)
        # pitch takes +Y to +Z, then yaw takes +Z to +X
        out = quat_rotate_vector(quat_multiply(yaw, pitch), np.array([0.0, 1.0, 0.0]))
        np.testing.assert_allclose(out, [1.0, 0.0, 0.0], atol=1e-12)

    def test_look_rotation_axes(self):
        q = quat_look_rotation(np.array([1.0, 0.0, 0.0]), (0.0, 1.0, 0.0))
        np.testing.assert_allclose(quat_rotate_vector(q, np.array([0.0, 0.0, 1.0])), [1.0, 0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(quat_rotate_vector(q, np.array([0.0, 1.0, 0.0])), [0.0, 1.0, 0.0], atol=1e-12)

    def test_look_rotation_parallel_to_up(self):
        q = quat_look_rotation(np.array([0.0, 2.0, 0.0]), (0.0, 1.0, 0.0))
        assert q is not None
        np.testing.assert_allclose(quat_rotate_vector(q, np.array([0.0, 0.0, 1.0])), [0.0, 1.0, 0.0], atol=1e-12)

    def test_look_rotation_zero_forward(self):
        assert quat_look_rotation(np.zeros(3)) is None


# ---------------------------------------------------------------------------
# Body frame
# ---------------------------------------------------------------------------

class TestBodyFrame:
    def test_default_axes(self):
        frame = BodyFrame()
        np.testing.assert_allclose(frame.up(), [0.0, 1.0, 0.0])
        np.testing.assert_allclose(frame.forward(), [0.0, 0.0, 1.0])
        np.testing.assert_allclose(frame.right(), [1.0, 0.0, 0.0])

    def test_yaw_round_trip(self):
        frame = BodyFrame.from_yaw((0.0, 0.0, 0.0), math.pi / 2)
        assert frame.yaw() == pytest.approx(math.pi / 2)
        np.testing.assert_allclose(frame.forward(), [1.0, 0.0, 0.0], atol=1e-12)

    def test_orientation_is_normalized(self):
        frame = BodyFrame(position=(0.0, 0.0, 0.0), orientation=(2.0, 0.0, 0.0, 0.0))
        assert np.linalg.norm(frame.orientation) == pytest.approx(1.0)

    def test_world_anchor(self):
        frame = BodyFrame.from_yaw((2.0, 1.0, 3.0), math.pi / 2)
        np.testing.assert_allclose(world_anchor(frame, (1.0, 0.0, 1.0)), [3.0, 1.0, 2.0], atol=1e-12)

    def test_copy_is_independent(self):
        frame = BodyFrame.from_yaw((1.0, 1.0, 1.0))
        clone = frame.copy()
        clone.position[0] = 5.0
        assert frame.position[0] == 1.0

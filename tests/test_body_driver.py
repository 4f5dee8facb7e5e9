"""Tests for the body driver used by the headless simulation."""

import math

import numpy as np
import pytest

from limbwalk.control.body_driver import BodyDriver, wrap_angle
from limbwalk.terrain.ground import FlatGround, RollingHills


def test_wrap_angle():
    assert wrap_angle(3.0 * math.pi) == pytest.approx(-math.pi)
    assert wrap_angle(0.5) == pytest.approx(0.5)
    assert wrap_angle(-1.5 * math.pi) == pytest.approx(0.5 * math.pi)


def test_starts_at_ride_height():
    driver = BodyDriver(FlatGround(0.5), start=(2.0, 0.0, 3.0), ride_height=1.0)
    np.testing.assert_allclose(driver.frame.position, [2.0, 1.5, 3.0])
    assert not driver.is_moving


def test_walks_straight_to_target():
    driver = BodyDriver(FlatGround(), speed=2.0, arrive_radius=0.3)
    frame, moving = driver.update((0.0, 0.0, 10.0), 0.1)
    assert moving
    np.testing.assert_allclose(frame.position, [0.0, 1.0, 0.2], atol=1e-12)

    for _ in range(100):
        frame, moving = driver.update((0.0, 0.0, 10.0), 0.1)
    assert not moving
    assert frame.position[2] == pytest.approx(9.7)
    assert frame.position[1] == 1.0


def test_turn_rate_is_limited():
    driver = BodyDriver(FlatGround(), turn_rate=3.0)
    frame, _ = driver.update((10.0, 0.0, 0.0), 0.1)
    assert frame.yaw() == pytest.approx(0.3)


def test_returns_frame_copy():
    driver = BodyDriver(FlatGround())
    frame, _ = driver.update((0.0, 0.0, 5.0), 0.1)
    frame.position[0] = 42.0
    assert driver.frame.position[0] == 0.0


def test_follows_terrain_height():
    hills = RollingHills(amplitude=0.3, wavelength=10.0)
    driver = BodyDriver(hills, start=(2.5, 0.0, 0.0), speed=1.0)
    for _ in range(600):
        frame, _ = driver.update((2.5, 0.0, 5.0), 1.0 / 60.0)

    ground, _ = hills.height_and_normal_at(frame.position[0], frame.position[2])
    assert frame.position[1] == pytest.approx(ground + 1.0, abs=0.05)

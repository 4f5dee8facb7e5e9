"""Tests for stability group assignment."""

import pytest

from limbwalk.gait.limb_state import LimbConfiguration
from limbwalk.gait.stability_groups import assign_stability_groups, group_members


def test_quadruped_diagonal_pairs(quadruped):
    groups = assign_stability_groups(quadruped)
    # 0 FR, 1 FL, 2 BR, 3 BL
    assert groups[0] == groups[3]
    assert groups[1] == groups[2]
    assert groups[0] != groups[1]


def test_hexapod_tripods(hexapod):
    members = group_members(assign_stability_groups(hexapod))
    tripods = sorted(sorted(ids) for ids in members.values())
    # Right side 0..2 front to back, left side 3..5 front to back
    assert tripods == [[0, 2, 4], [1, 3, 5]]


def test_spider_alternates_along_each_side(spider):
    groups = assign_stability_groups(spider)
    right = [groups[i] for i in range(4)]
    left = [groups[i] for i in range(4, 8)]
    assert right == [0, 1, 0, 1]
    assert left == [1, 0, 1, 0]


def test_assignment_ignores_input_order(hexapod):
    assert assign_stability_groups(hexapod) == assign_stability_groups(list(reversed(hexapod)))


def test_explicit_groups_are_used():
    configs = [
        LimbConfiguration(id=i, origin_offset=(1.0, 0.0, float(i)), l1=1.0, l2=1.0, max_reach=2.0, group=i % 3)
        for i in range(3)
    ]
    assert assign_stability_groups(configs) == {0: 0, 1: 1, 2: 2}


def test_partial_explicit_groups_rejected():
    configs = [
        LimbConfiguration(id=0, origin_offset=(1.0, 0.0, 1.0), l1=1.0, l2=1.0, max_reach=2.0, group=0),
        LimbConfiguration(id=1, origin_offset=(-1.0, 0.0, 1.0), l1=1.0, l2=1.0, max_reach=2.0),
    ]
    with pytest.raises(ValueError):
        assign_stability_groups(configs)


def test_group_members_sorted():
    assert group_members({3: 0, 0: 0, 2: 1, 1: 1}) == {0: [0, 3], 1: [1, 2]}

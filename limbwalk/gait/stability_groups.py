"""
Stability Groups
Fixed assignment of limbs to groups that swing together

Limbs are split by side (origin x >= 0 is the right side), ordered front to
back along z, and alternate groups along each side with the opposite parity
on the other side:

    4 limbs -> diagonal pairs (FR+BL, FL+BR)
    6 limbs -> tripods
    8 limbs -> alternating tetrapods
"""

from typing import Dict, List, Sequence
import logging

from .limb_state import LimbConfiguration

logger = logging.getLogger(__name__)


def assign_stability_groups(configs: Sequence[LimbConfiguration]) -> Dict[int, int]:
    """
    Assign every limb a stability group.

    Args:
        configs: Limb configurations of one creature

    Returns:
        {limb_id: group_index}
    """
    explicit = [c for c in configs if c.group is not None]
    if explicit and len(explicit) != len(configs):
        raise ValueError("Either all limbs or no limbs may set an explicit group")
    if explicit:
        return {c.id: int(c.group) for c in configs}

    groups: Dict[int, int] = {}
    for side, members in enumerate(_split_sides(configs)):
        ordered = sorted(members, key=lambda c: (-c.origin_offset[2], c.id))
        for index, config in enumerate(ordered):
            groups[config.id] = (index + side) % 2

    logger.debug(f"Stability groups: {groups}")
    return groups


def _split_sides(configs: Sequence[LimbConfiguration]) -> List[List[LimbConfiguration]]:
    right = [c for c in configs if c.origin_offset[0] >= 0.0]
    left = [c for c in configs if c.origin_offset[0] < 0.0]
    return [right, left]


def group_members(groups: Dict[int, int]) -> Dict[int, List[int]]:
    """Invert {limb_id: group} into {group: [limb_id, ...]} (ids sorted)."""
    members: Dict[int, List[int]] = {}
    for limb_id, group in sorted(groups.items()):
        members.setdefault(group, []).append(limb_id)
    return members

"""
Built-in limb layouts

Offsets are in body coordinates (+X right, +Y up, +Z forward). Every layout
assumes a ride height of about 1.0 above the ground.
"""

from typing import Dict, List

from ..gait.limb_state import LimbConfiguration


def _mirrored(rows, l1: float, l2: float, max_reach: float, stance_radius: float) -> List[LimbConfiguration]:
    """Right side front to back, then left side front to back."""
    configs = []
    for side in (1.0, -1.0):
        for x, z in rows:
            configs.append(LimbConfiguration(
                id=len(configs),
                origin_offset=(side * x, 0.0, z),
                l1=l1,
                l2=l2,
                max_reach=max_reach,
                stance_radius=stance_radius,
            ))
    return configs


def spider_layout() -> List[LimbConfiguration]:
    """Eight legs, four per side."""
    rows = [(0.5, 0.8), (0.6, 0.3), (0.6, -0.2), (0.5, -0.7)]
    return _mirrored(rows, l1=1.2, l2=1.5, max_reach=2.6, stance_radius=1.3)


def hexapod_layout() -> List[LimbConfiguration]:
    """Six legs, three per side."""
    rows = [(0.6, 0.8), (0.7, 0.0), (0.6, -0.8)]
    return _mirrored(rows, l1=1.0, l2=1.3, max_reach=2.2, stance_radius=1.1)


def quadruped_layout() -> List[LimbConfiguration]:
    """Four legs on the quadrant corners: front-right, front-left, back-right, back-left."""
    return [
        LimbConfiguration(id=0, origin_offset=(1.0, 0.0, 1.0), l1=1.0, l2=1.0, max_reach=2.0),
        LimbConfiguration(id=1, origin_offset=(-1.0, 0.0, 1.0), l1=1.0, l2=1.0, max_reach=2.0),
        LimbConfiguration(id=2, origin_offset=(1.0, 0.0, -1.0), l1=1.0, l2=1.0, max_reach=2.0),
        LimbConfiguration(id=3, origin_offset=(-1.0, 0.0, -1.0), l1=1.0, l2=1.0, max_reach=2.0),
    ]


def quad_rotor_layout() -> List[LimbConfiguration]:
    """Rotor mounts of the quad-rotor variant (same corners as the quadruped)."""
    return quadruped_layout()


LAYOUTS = {
    "spider": spider_layout,
    "hexapod": hexapod_layout,
    "quadruped": quadruped_layout,
    "quad_rotor": quad_rotor_layout,
}


def get_layout(name: str) -> List[LimbConfiguration]:
    """
    Get a built-in layout by name.

    Args:
        name: One of LAYOUTS

    Returns:
        Fresh list of limb configurations
    """
    if name not in LAYOUTS:
        raise KeyError(f"Unknown layout {name!r} (choose from {sorted(LAYOUTS)})")
    return LAYOUTS[name]()


def layout_summary(configs: List[LimbConfiguration]) -> Dict[str, float]:
    return {
        "limbs": len(configs),
        "max_reach": max(c.max_reach for c in configs),
    }

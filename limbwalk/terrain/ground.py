"""
Ground Query
Height/normal lookups the gait controller uses to place feet

The terrain itself belongs to the host application; these implementations
cover the flat floor and the rolling-hills terrain used by the demo.
"""

from typing import Protocol, Tuple
import logging
import math
import numpy as np

logger = logging.getLogger(__name__)


class GroundQuery(Protocol):
    """Anything that can answer height_and_normal_at(x, z)."""

    def height_and_normal_at(self, x: float, z: float) -> Tuple[float, np.ndarray]:
        ...


class FlatGround:
    """Infinite horizontal plane"""

    def __init__(self, height: float = 0.0):
        self.height = float(height)

    def height_and_normal_at(self, x: float, z: float) -> Tuple[float, np.ndarray]:
        return self.height, np.array([0.0, 1.0, 0.0])


class RollingHills:
    """
    Smooth sinusoidal terrain

    height(x, z) = amplitude * sin(kx) * cos(kz), k = 2*pi / wavelength
    """

    def __init__(self, amplitude: float = 0.4, wavelength: float = 12.0, base_height: float = 0.0):
        """
        Initialize terrain.

        Args:
            amplitude: Peak height above/below base_height
            wavelength: Distance between two crests
            base_height: Mean ground height
        """
        if wavelength <= 0:
            raise ValueError(f"wavelength must be positive (got {wavelength})")
        self.amplitude = float(amplitude)
        self.wavelength = float(wavelength)
        self.base_height = float(base_height)
        self._k = 2.0 * math.pi / self.wavelength

    def height_and_normal_at(self, x: float, z: float) -> Tuple[float, np.ndarray]:
        k = self._k
        a = self.amplitude
        height = self.base_height + a * math.sin(k * x) * math.cos(k * z)

        # Normal of y = h(x, z) is (-dh/dx, 1, -dh/dz), normalized
        dh_dx = a * k * math.cos(k * x) * math.cos(k * z)
        dh_dz = -a * k * math.sin(k * x) * math.sin(k * z)
        normal = np.array([-dh_dx, 1.0, -dh_dz])
        return height, normal / np.linalg.norm(normal)


TERRAINS = {
    "flat": FlatGround,
    "hills": RollingHills,
}


def make_ground(name: str = "flat", **kwargs) -> GroundQuery:
    """
    Create a ground query by terrain name.

    Args:
        name: "flat" or "hills"
        **kwargs: Constructor arguments of the chosen terrain

    Returns:
        Ground query instance
    """
    if name not in TERRAINS:
        raise KeyError(f"Unknown terrain {name!r} (choose from {sorted(TERRAINS)})")
    logger.info(f"Using {name} terrain {kwargs if kwargs else ''}".rstrip())
    return TERRAINS[name](**kwargs)

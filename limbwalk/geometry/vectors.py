"""
Vector and Quaternion Primitives
Pure numpy helpers shared by the solver, gait controller and drivers

All quaternions are in [w, x, y, z] format.
All vectors are float64 numpy arrays of shape (3,).
Every function allocates its own temporaries; nothing here keeps state.
"""

from typing import Optional, Sequence
import numpy as np

EPSILON = 1e-10

WORLD_UP = (0.0, 1.0, 0.0)
WORLD_FORWARD = (0.0, 0.0, 1.0)
WORLD_RIGHT = (1.0, 0.0, 0.0)


def vec3(values: Sequence[float] = (0.0, 0.0, 0.0)) -> np.ndarray:
    """Copy any 3-sequence into a fresh float64 array."""
    arr = np.array(values, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {arr.shape}")
    return arr


def distance(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.linalg.norm(np.asarray(b) - np.asarray(a)))


def normalize(v: np.ndarray) -> np.ndarray:
    """
    Normalize a vector to unit length.

    Args:
        v: Input vector

    Returns:
        Normalized vector (or zero vector if input is zero)
    """
    v = np.asarray(v, dtype=np.float64)
    n = np.linalg.norm(v)
    if n < EPSILON:
        return np.zeros_like(v)
    return v / n


def safe_normalize(v: np.ndarray, fallback: Sequence[float]) -> np.ndarray:
    """
    Normalize a vector with fallback for zero-length vectors.

    Args:
        v: Input vector
        fallback: Vector to return if input is zero-length

    Returns:
        Normalized vector or a copy of the fallback
    """
    v = np.asarray(v, dtype=np.float64)
    n = np.linalg.norm(v)
    if n < EPSILON or not np.isfinite(n):
        return np.array(fallback, dtype=np.float64)
    return v / n


def horizontal(v: np.ndarray) -> np.ndarray:
    """Drop the vertical (Y) component."""
    out = np.array(v, dtype=np.float64)
    out[1] = 0.0
    return out


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Linear interpolation between two vectors."""
    return np.asarray(a) * (1.0 - t) + np.asarray(b) * t


def is_finite(*vectors) -> bool:
    return all(np.all(np.isfinite(np.asarray(v, dtype=np.float64))) for v in vectors)


# =============================================================================
# QUATERNION OPERATIONS
# =============================================================================

def quat_identity() -> np.ndarray:
    """Return identity quaternion [w, x, y, z]."""
    return np.array([1.0, 0.0, 0.0, 0.0])


def quat_normalize(q: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(q)
    if n < EPSILON:
        return quat_identity()
    return np.asarray(q, dtype=np.float64) / n


def quat_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """
    Multiply two quaternions.

    Args:
        q1, q2: Quaternions in [w, x, y, z] format

    Returns:
        Product quaternion q1 * q2 (apply q2 first, then q1)
    """
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2

    return np.array([
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
    ])


def quat_conjugate(q: np.ndarray) -> np.ndarray:
    return np.array([q[0], -q[1], -q[2], -q[3]], dtype=np.float64)


def quat_rotate_vector(q: np.ndarray, v: np.ndarray) -> np.ndarray:
    """
    Rotate a vector by a unit quaternion.

    Args:
        q: Quaternion [w, x, y, z]
        v: Vector [x, y, z]

    Returns:
        Rotated vector
    """
    v_quat = np.array([0.0, v[0], v[1], v[2]])
    result = quat_multiply(quat_multiply(q, v_quat), quat_conjugate(q))
    return result[1:].copy()


def quat_from_axis_angle(axis: np.ndarray, angle: float) -> np.ndarray:
    """
    Create quaternion from axis-angle representation.

    Args:
        axis: Rotation axis (will be normalized)
        angle: Rotation angle in radians

    Returns:
        Quaternion [w, x, y, z]
    """
    axis = normalize(axis)
    half = angle * 0.5
    s = np.sin(half)
    return np.array([np.cos(half), axis[0] * s, axis[1] * s, axis[2] * s])


def quat_look_rotation(forward: np.ndarray, up: Sequence[float] = WORLD_UP) -> Optional[np.ndarray]:
    """
    Orientation whose local +Z points along `forward` with local +Y as close
    to `up` as possible.

    Returns None when `forward` has no length. When `forward` is parallel to
    `up`, world +Z (or +X) is used as the secondary axis instead.
    """
    f = normalize(forward)
    if not np.any(f):
        return None

    u = np.asarray(up, dtype=np.float64)
    right = np.cross(u, f)
    if np.linalg.norm(right) < 1e-6:
        alt = np.array(WORLD_FORWARD) if abs(f[2]) < 0.9 else np.array(WORLD_RIGHT)
        right = np.cross(alt, f)
    right = normalize(right)
    true_up = np.cross(f, right)

    # Columns are the rotated basis vectors (x=right, y=up, z=forward)
    m = np.column_stack((right, true_up, f))
    return quat_from_matrix(m)


def quat_from_matrix(m: np.ndarray) -> np.ndarray:
    """Convert a 3x3 rotation matrix to a quaternion [w, x, y, z]."""
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        s = 0.5 / np.sqrt(trace + 1.0)
        q = [0.25 / s,
             (m[2, 1] - m[1, 2]) * s,
             (m[0, 2] - m[2, 0]) * s,
             (m[1, 0] - m[0, 1]) * s]
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        s = 2.0 * np.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2])
        q = [(m[2, 1] - m[1, 2]) / s,
             0.25 * s,
             (m[0, 1] + m[1, 0]) / s,
             (m[0, 2] + m[2, 0]) / s]
    elif m[1, 1] > m[2, 2]:
        s = 2.0 * np.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2])
        q = [(m[0, 2] - m[2, 0]) / s,
             (m[0, 1] + m[1, 0]) / s,
             0.25 * s,
             (m[1, 2] + m[2, 1]) / s]
    else:
        s = 2.0 * np.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1])
        q = [(m[1, 0] - m[0, 1]) / s,
             (m[0, 2] + m[2, 0]) / s,
             (m[1, 2] + m[2, 1]) / s,
             0.25 * s]
    return quat_normalize(np.array(q))

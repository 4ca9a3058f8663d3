"""Spatial algebra helpers for rigid-body mass properties.

All vectors and matrices are plain float64 numpy arrays expressed in the
body axis system (BAS) unless stated otherwise: x forward, y right, z down.

Example:
    >>> from airframe.spatial import parallel_axis, point_mass_inertia
    >>>
    >>> # 10 kg point mass 2 m ahead of the reference point
    >>> I = point_mass_inertia(10.0, np.array([2.0, 0.0, 0.0]))
    >>> I[1, 1]
    40.0
"""

import math

import numpy as np
from beartype import beartype
from numpy.typing import ArrayLike, NDArray

TWO_PI: float = 2.0 * math.pi


# =============================================================================
# Coercion
# =============================================================================


def as_vector3(value: ArrayLike) -> NDArray[np.float64]:
    """Convert to a float64 3-vector, validating shape."""
    vector = np.array(value, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"Vector must be shape (3,), got {vector.shape}")
    return vector


def as_matrix3x3(value: ArrayLike) -> NDArray[np.float64]:
    """Convert to a float64 3x3 matrix, validating shape."""
    matrix = np.array(value, dtype=np.float64)
    if matrix.shape != (3, 3):
        raise ValueError(f"Matrix must be shape (3, 3), got {matrix.shape}")
    return matrix


# =============================================================================
# Matrix Utilities
# =============================================================================


@beartype
def skew(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Cross-product matrix such that ``skew(a) @ b == np.cross(a, b)``."""
    x, y, z = v
    return np.array([
        [0.0, -z, y],
        [z, 0.0, -x],
        [-y, x, 0.0],
    ])


@beartype
def symmetrize(matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    """Return the symmetric part of a square matrix."""
    return 0.5 * (matrix + matrix.T)


@beartype
def point_mass_inertia(mass: float, offset: NDArray[np.float64]) -> NDArray[np.float64]:
    """Inertia of a point mass about a point displaced by ``offset``.

    I = m * (|d|^2 * I3 - d (x) d)

    Args:
        mass: Point mass [kg]
        offset: Vector from the reference point to the mass [m]

    Returns:
        3x3 inertia tensor [kg*m^2]
    """
    d_sq = float(np.dot(offset, offset))
    return mass * (d_sq * np.eye(3) - np.outer(offset, offset))


@beartype
def parallel_axis(
    inertia: NDArray[np.float64],
    mass: float,
    offset: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Translate an inertia tensor away from the body's own center of mass.

    Args:
        inertia: Inertia tensor about the body's center of mass [kg*m^2]
        mass: Body mass [kg]
        offset: Vector from the new reference point to the center of mass [m]

    Returns:
        Inertia tensor about the new reference point [kg*m^2]
    """
    return inertia + point_mass_inertia(mass, offset)


@beartype
def spatial_inertia_matrix(
    mass: float,
    first_moment: NDArray[np.float64],
    inertia: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Build the 6x6 rigid-body inertia matrix about the BAS origin.

    Layout::

        | m*I3   -S~ |
        |  S~     I  |

    where S~ is the cross-product matrix of the first moment of mass.

    Args:
        mass: Total mass [kg]
        first_moment: First moment of mass about the BAS origin [kg*m]
        inertia: Inertia tensor about the BAS origin [kg*m^2]
    """
    s_tilde = skew(first_moment)

    matrix = np.zeros((6, 6))
    matrix[:3, :3] = mass * np.eye(3)
    matrix[:3, 3:] = -s_tilde
    matrix[3:, :3] = s_tilde
    matrix[3:, 3:] = inertia
    return matrix


# =============================================================================
# Attitude and Angles
# =============================================================================


@beartype
def euler_to_dcm(roll: float, pitch: float, yaw: float) -> NDArray[np.float64]:
    """Rotation matrix from the local NED frame to BAS (3-2-1 sequence).

    Args:
        roll: Roll angle [rad]
        pitch: Pitch angle [rad]
        yaw: Heading angle [rad]
    """
    cr, sr = math.cos(roll), math.sin(roll)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)

    return np.array([
        [cp * cy, cp * sy, -sp],
        [sr * sp * cy - cr * sy, sr * sp * sy + cr * cy, sr * cp],
        [cr * sp * cy + sr * sy, cr * sp * sy - sr * cy, cr * cp],
    ])


@beartype
def wrap_angle(angle: float) -> float:
    """Wrap an angle into [0, 2*pi)."""
    wrapped = math.fmod(angle, TWO_PI)
    if wrapped < 0.0:
        wrapped += TWO_PI
    # -tiny + 2*pi rounds up to exactly 2*pi
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped

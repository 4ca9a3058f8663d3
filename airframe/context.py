"""Shared per-step flight context read by aircraft components.

The aircraft assembly owns one ``FlightContext`` and updates it before
stepping its components. Components hold a reference and read the gravity
vector and time step from it rather than receiving them as arguments.
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from airframe.spatial import as_matrix3x3, euler_to_dcm

# Standard gravity
G0: float = 9.80665  # [m/s^2]


@beartype
@dataclass
class FlightContext:
    """Attitude and gravity context for the current step.

    Attributes:
        gravity: Local gravitational acceleration magnitude [m/s^2]
        dcm_ned2bas: Rotation matrix from local NED to BAS
        time_step: Current integration time step [s]
    """
    gravity: float = G0
    dcm_ned2bas: NDArray[np.float64] = field(default_factory=lambda: np.eye(3))
    time_step: float = 0.0

    def __post_init__(self) -> None:
        """Validate attitude matrix."""
        self.dcm_ned2bas = as_matrix3x3(self.dcm_ned2bas)

    @property
    def gravity_ned(self) -> NDArray[np.float64]:
        """Gravity acceleration in NED [m/s^2]."""
        return np.array([0.0, 0.0, self.gravity])

    @property
    def gravity_bas(self) -> NDArray[np.float64]:
        """Gravity acceleration expressed in BAS [m/s^2]."""
        return self.dcm_ned2bas @ self.gravity_ned

    def set_attitude(self, roll: float, pitch: float, yaw: float) -> None:
        """Set attitude from Euler angles [rad]."""
        self.dcm_ned2bas = euler_to_dcm(roll, pitch, yaw)

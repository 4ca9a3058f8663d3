"""Rotor phase kinematics.

Advances a rotor's azimuth (phase) angle from its angular rate. The rate is
set by the owning propulsion model each step; torque balance is not
modelled here.

Example:
    >>> from airframe.propulsion import RotorKinematics
    >>>
    >>> rotor = RotorKinematics(omega=42.4)
    >>> rotor.update(0.01)
    >>> print(f"{rotor.psi:.3f} rad")
    0.424 rad
"""

import logging
import math

from beartype import beartype

from airframe.spatial import TWO_PI, wrap_angle

logger = logging.getLogger(__name__)


@beartype
class RotorKinematics:
    """Rotor azimuth integrator.

    Attributes:
        omega: Angular rate [rad/s], positive or negative
        psi: Phase angle wrapped to [0, 2*pi) [rad]
        revolutions: Signed number of completed turns since reset
    """

    def __init__(self, omega: float = 0.0, psi: float = 0.0) -> None:
        self._omega = 0.0
        self.omega = omega
        self._psi = 0.0
        self._revolutions = 0
        self.reset(psi)

    @property
    def omega(self) -> float:
        """Angular rate [rad/s]."""
        return self._omega

    @omega.setter
    def omega(self, value: float) -> None:
        if not math.isfinite(value):
            logger.warning("Rotor rate rejected: non-finite value %s", value)
            return
        self._omega = float(value)

    @property
    def psi(self) -> float:
        """Phase angle in [0, 2*pi) [rad]."""
        return self._psi

    @property
    def revolutions(self) -> int:
        """Signed count of full turns wrapped away since the last reset."""
        return self._revolutions

    def reset(self, psi: float = 0.0) -> None:
        """Set the phase angle and clear the revolution count."""
        if not math.isfinite(psi):
            raise ValueError(f"Rotor phase must be finite, got {psi}")
        self._psi = wrap_angle(psi)
        self._revolutions = 0

    def update(self, dt: float) -> float:
        """Advance the phase angle.

        Args:
            dt: Time step [s]

        Returns:
            Wrapped phase angle [rad]
        """
        if dt < 0.0:
            raise ValueError(f"Time step must be non-negative, got {dt}")
        if not math.isfinite(dt):
            logger.warning("Rotor update rejected: non-finite time step %s", dt)
            return self._psi

        unwrapped = self._psi + self._omega * dt
        self._psi = wrap_angle(unwrapped)
        self._revolutions += round((unwrapped - self._psi) / TWO_PI)
        return self._psi

    def __repr__(self) -> str:
        return f"RotorKinematics(omega={self._omega}, psi={self._psi})"

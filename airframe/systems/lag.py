"""First-order lag (low-pass) filter.

Discrete approximation of the transfer function::

    G(s) = 1 / (tau * s + 1)

using the bilinear (Tustin) transform. The same element models actuator
travel, sensor smoothing and engine spool-up throughout the simulation.

Example:
    >>> from airframe.systems import Lag
    >>>
    >>> lag = Lag(time_constant=2.0)
    >>> for _ in range(1000):
    ...     lag.update(1.0, dt=0.01)
    >>> print(f"{lag.value:.3f}")
    0.993
"""

import logging
import math

from beartype import beartype
from numba import njit

from airframe.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Longest single Tustin step as a multiple of the time constant; the
# discrete pole (2 - dt/tau) / (2 + dt/tau) is non-negative up to here
MAX_STEP_RATIO: float = 2.0


# =============================================================================
# Numba Kernel
# =============================================================================


@njit(cache=True)
def tustin_step(
    u: float,
    u_prev: float,
    y_prev: float,
    dt: float,
    time_constant: float,
) -> float:
    """Single Tustin step of a first-order lag."""
    c = 1.0 / time_constant
    denom = 2.0 + dt * c
    ca = dt * c / denom
    cb = (2.0 - dt * c) / denom
    return (u + u_prev) * ca + y_prev * cb


# =============================================================================
# Lag Filter
# =============================================================================


@beartype
class Lag:
    """Stateful first-order lag filter.

    The filter keeps the previous input and output. A step longer than twice
    the time constant is split into equal sub-steps: the first one blends
    the previous and current input, the rest hold the current input. This
    keeps the discrete pole non-negative so the step response never overshoots.

    Attributes:
        time_constant: Filter time constant [s], must be positive
        value: Current filtered output
    """

    def __init__(self, time_constant: float, value: float = 0.0) -> None:
        """Initialize filter.

        Args:
            time_constant: Time constant [s]
            value: Initial output; the filter starts at rest at this value

        Raises:
            ConfigurationError: If the time constant is not positive and finite
        """
        self._time_constant = 1.0
        self.time_constant = time_constant
        self._u_prev = 0.0
        self._y = 0.0
        self.reset(value)

    @property
    def time_constant(self) -> float:
        """Time constant [s]."""
        return self._time_constant

    @time_constant.setter
    def time_constant(self, value: float) -> None:
        if not math.isfinite(value) or value <= 0.0:
            raise ConfigurationError(
                f"Lag time constant must be positive, got {value}",
                field="time_constant",
            )
        self._time_constant = float(value)

    @property
    def value(self) -> float:
        """Current filtered output."""
        return self._y

    def reset(self, value: float = 0.0) -> None:
        """Seed the filter at rest with output and previous input at ``value``."""
        if not math.isfinite(value):
            raise ValueError(f"Lag seed value must be finite, got {value}")
        self._u_prev = float(value)
        self._y = float(value)

    def update(self, u: float, dt: float) -> float:
        """Advance the filter by one time step.

        Args:
            u: Current input
            dt: Time step [s]; zero is a no-op

        Returns:
            Filtered output after the step
        """
        if dt < 0.0:
            raise ValueError(f"Time step must be non-negative, got {dt}")

        if not (math.isfinite(u) and math.isfinite(dt)):
            logger.warning("Lag update rejected: non-finite input u=%s dt=%s", u, dt)
            return self._y

        if dt == 0.0:
            return self._y

        steps = max(1, math.ceil(dt / (MAX_STEP_RATIO * self._time_constant)))

        h = dt / steps
        y = tustin_step(u, self._u_prev, self._y, h, self._time_constant)
        for _ in range(steps - 1):
            y = tustin_step(u, u, y, h, self._time_constant)

        self._u_prev = float(u)
        self._y = float(y)
        return self._y

    def __repr__(self) -> str:
        return f"Lag(time_constant={self._time_constant}, value={self._y})"

"""Reusable dynamic elements for actuator, sensor and engine models.

Example:
    >>> from airframe.systems import Lag
    >>>
    >>> spool = Lag(time_constant=1.5)
    >>> spool.update(1.0, dt=0.01)
"""

from airframe.systems.lag import Lag, tustin_step

__all__ = [
    "Lag",
    "tustin_step",
]

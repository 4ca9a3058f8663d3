"""Propulsion models: engine spool and rotor kinematics.

Example:
    >>> from airframe.propulsion import RotorKinematics, RotorPropulsion
    >>>
    >>> rotor = RotorKinematics(omega=42.4)
    >>> rotor.update(0.01)
"""

from airframe.propulsion.propulsion import RotorPropulsion
from airframe.propulsion.rotor import RotorKinematics

__all__ = [
    "RotorKinematics",
    "RotorPropulsion",
]

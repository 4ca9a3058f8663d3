"""Rotorcraft propulsion: engine spool and rotor drive train.

A normalised rotor speed command (0 to 1 of nominal) is spooled through a
first-order lag standing in for engine and governor dynamics. The main
rotor turns at the spooled fraction of its nominal rate, and the tail
rotor is geared to it. Rotor loads are produced by the rotor aerodynamic
model, so this component contributes no force or moment of its own.

Example:
    >>> from airframe.propulsion import RotorPropulsion
    >>>
    >>> propulsion = RotorPropulsion(inputs, context)
    >>> propulsion.read_data(config["aircraft"]["propulsion"])
    >>> inputs.set("propulsion/rotor_speed", 1.0)
    >>> propulsion.update(0.01)
    >>> print(propulsion.main_rotor_omega, propulsion.main_rotor_psi)
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from airframe.config import read_scalar, read_string, require_section
from airframe.context import FlightContext
from airframe.errors import ConfigurationError
from airframe.inputs import InputHandle, InputTable
from airframe.propulsion.rotor import RotorKinematics
from airframe.systems.lag import Lag

logger = logging.getLogger(__name__)

COMPONENT = "propulsion"

# Prefix of the input names bound by propulsion
INPUT_PREFIX = "propulsion/"

# Rotation direction seen from above
_DIRECTIONS = {"ccw": 1.0, "cw": -1.0}


@beartype
class RotorPropulsion:
    """Engine spool and main/tail rotor kinematics.

    Attributes:
        main_rotor: Main rotor phase integrator
        tail_rotor: Tail rotor phase integrator
        spool: Engine spool lag (fraction of nominal rotor speed)
    """

    def __init__(self, inputs: InputTable, context: FlightContext) -> None:
        self._inputs = inputs
        self._context = context

        self._input: InputHandle | None = None
        self._omega_nominal = 0.0   # [rad/s]
        self._direction = 1.0
        self._gear_ratio = 1.0
        self._command = 0.0        # last valid command

        self.spool = Lag(time_constant=1.0)
        self.main_rotor = RotorKinematics()
        self.tail_rotor = RotorKinematics()

        self._for_bas = np.zeros(3)
        self._mom_bas = np.zeros(3)

    # -------------------------------------------------------------------------
    # Component interface
    # -------------------------------------------------------------------------

    def read_data(self, node: Mapping[str, Any]) -> None:
        """Read propulsion configuration.

        Raises:
            ConfigurationError: On missing or invalid fields
        """
        input_name = read_string(node, "input", COMPONENT, default="rotor_speed")

        engine = require_section(node, "engine", COMPONENT)
        time_constant = read_scalar(engine, "time_constant", COMPONENT, "engine")
        try:
            spool = Lag(time_constant=time_constant)
        except ConfigurationError as err:
            raise ConfigurationError(
                f"Engine time constant must be positive, got {time_constant}",
                COMPONENT,
                "engine.time_constant",
            ) from err

        main_rotor = require_section(node, "main_rotor", COMPONENT)
        omega_nominal = read_scalar(main_rotor, "omega_nominal", COMPONENT, "main_rotor")
        if omega_nominal <= 0.0:
            raise ConfigurationError(
                f"Nominal rotor speed must be positive, got {omega_nominal}",
                COMPONENT,
                "main_rotor.omega_nominal",
            )

        direction = read_string(main_rotor, "direction", COMPONENT, "main_rotor", default="ccw")
        if direction.lower() not in _DIRECTIONS:
            raise ConfigurationError(
                f"Rotor direction must be 'ccw' or 'cw', got {direction!r}",
                COMPONENT,
                "main_rotor.direction",
            )

        tail_rotor = node.get("tail_rotor") or {}
        if not isinstance(tail_rotor, Mapping):
            raise ConfigurationError("Section must be a mapping", COMPONENT, "tail_rotor")
        gear_ratio = read_scalar(tail_rotor, "gear_ratio", COMPONENT, "tail_rotor", default=0.0)

        self._input = self._inputs.bind(INPUT_PREFIX + input_name)
        self._omega_nominal = omega_nominal
        self._direction = _DIRECTIONS[direction.lower()]
        self._gear_ratio = gear_ratio
        self.spool = spool

        logger.info(
            "Propulsion data read: nominal rotor speed %.2f rad/s, tail gear ratio %.2f",
            self._omega_nominal,
            self._gear_ratio,
        )

        self.initialize()

    def initialize(self) -> None:
        """Stop both rotors and reset the engine spool."""
        self._command = 0.0
        self.spool.reset(0.0)
        self.main_rotor.omega = 0.0
        self.main_rotor.reset()
        self.tail_rotor.omega = 0.0
        self.tail_rotor.reset()

    def compute_force_and_moment(self) -> None:
        """Propulsion carries no direct loads; rotor loads are aerodynamic."""
        self._for_bas = np.zeros(3)
        self._mom_bas = np.zeros(3)

    def update(self, dt: float) -> None:
        """Spool the engine and advance rotor phases.

        Args:
            dt: Time step [s]
        """
        command = self._inputs[self._input] if self._input is not None else 0.0
        if math.isnan(command):
            logger.warning("Rotor speed command is NaN, holding previous command")
            command = self._command
        command = min(max(command, 0.0), 1.0)
        self._command = command

        spool = self.spool.update(command, dt)

        self.main_rotor.omega = self._direction * spool * self._omega_nominal
        self.tail_rotor.omega = self._gear_ratio * self.main_rotor.omega

        self.main_rotor.update(dt)
        self.tail_rotor.update(dt)

        self.compute_force_and_moment()

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def force_bas(self) -> NDArray[np.float64]:
        """Force contribution in BAS [N]."""
        return self._for_bas.copy()

    @property
    def moment_bas(self) -> NDArray[np.float64]:
        """Moment contribution about BAS origin [N*m]."""
        return self._mom_bas.copy()

    @property
    def main_rotor_psi(self) -> float:
        """Main rotor azimuth [rad]."""
        return self.main_rotor.psi

    @property
    def tail_rotor_psi(self) -> float:
        """Tail rotor azimuth [rad]."""
        return self.tail_rotor.psi

    @property
    def main_rotor_omega(self) -> float:
        """Main rotor angular rate [rad/s]."""
        return self.main_rotor.omega

    @property
    def tail_rotor_omega(self) -> float:
        """Tail rotor angular rate [rad/s]."""
        return self.tail_rotor.omega

    @property
    def omega_nominal(self) -> float:
        """Nominal main rotor speed [rad/s]."""
        return self._omega_nominal

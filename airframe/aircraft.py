"""Aircraft assembly: drives model components through a simulation step.

The assembly owns the input table and flight context shared by its
components, updates the components in a fixed order, and sums their force
and moment contributions in BAS. The rigid-body integrator that consumes
these totals lives outside this package.

Example:
    >>> from airframe import Aircraft
    >>>
    >>> aircraft = Aircraft.from_file("r44.yaml")
    >>> aircraft.inputs.set("mass/fuel", 0.8)
    >>> aircraft.inputs.set("propulsion/rotor_speed", 1.0)
    >>>
    >>> for _ in range(100):
    ...     aircraft.step(dt=0.01)
    >>>
    >>> print(f"Weight: {aircraft.force_bas} N")
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from airframe.component import Component
from airframe.config import load_config, read_string, require_section
from airframe.context import FlightContext
from airframe.inputs import InputTable
from airframe.mass import MassModel
from airframe.propulsion.propulsion import RotorPropulsion

logger = logging.getLogger(__name__)


@beartype
class Aircraft:
    """Aircraft model composed of mass and propulsion components.

    Attributes:
        inputs: External input table shared with components
        context: Flight context shared with components
        mass: Mass, inertia and weight model
        propulsion: Engine and rotor model
        name: Aircraft name from configuration
    """

    def __init__(
        self,
        inputs: InputTable | None = None,
        context: FlightContext | None = None,
    ) -> None:
        self.inputs = inputs if inputs is not None else InputTable()
        self.context = context if context is not None else FlightContext()
        self.name = ""

        self.mass = MassModel(self.inputs, self.context)
        self.propulsion = RotorPropulsion(self.inputs, self.context)

        self._time = 0.0
        self._for_bas = np.zeros(3)
        self._mom_bas = np.zeros(3)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        inputs: InputTable | None = None,
        context: FlightContext | None = None,
    ) -> "Aircraft":
        """Build an aircraft from a YAML configuration file."""
        aircraft = cls(inputs=inputs, context=context)
        aircraft.read_data(load_config(path))
        return aircraft

    @property
    def components(self) -> tuple[Component, ...]:
        """Components in update order."""
        return (self.mass, self.propulsion)

    def read_data(self, document: Mapping[str, Any]) -> None:
        """Read all component sections from a configuration document.

        Raises:
            ConfigurationError: If any section is missing or malformed
        """
        root = require_section(document, "aircraft", "aircraft")
        self.name = read_string(root, "name", "aircraft", "aircraft", default="aircraft")

        self.mass.read_data(require_section(root, "mass", "mass", "aircraft"))
        self.propulsion.read_data(require_section(root, "propulsion", "propulsion", "aircraft"))

        logger.info("Aircraft '%s' configured with %d components", self.name, len(self.components))
        self.initialize()

    def initialize(self) -> None:
        """Reset every component and the simulation clock."""
        for component in self.components:
            component.initialize()

        self._time = 0.0
        self._for_bas = np.zeros(3)
        self._mom_bas = np.zeros(3)

    def set_attitude(self, roll: float, pitch: float, yaw: float) -> None:
        """Set attitude used for the weight vector [rad]."""
        self.context.set_attitude(roll, pitch, yaw)

    def step(self, dt: float) -> None:
        """Update components in order and sum their loads.

        Args:
            dt: Time step [s]
        """
        if dt <= 0.0:
            raise ValueError(f"Time step must be positive, got {dt}")

        self.context.time_step = dt

        force = np.zeros(3)
        moment = np.zeros(3)
        for component in self.components:
            component.update(dt)
            force += component.force_bas
            moment += component.moment_bas

        self._for_bas = force
        self._mom_bas = moment
        self._time += dt

        logger.debug("t=%.3f s mass=%.2f kg force=%s", self._time, self.mass.mass, force)

    @property
    def time(self) -> float:
        """Simulation time since initialize [s]."""
        return self._time

    @property
    def force_bas(self) -> NDArray[np.float64]:
        """Total force in BAS [N]."""
        return self._for_bas.copy()

    @property
    def moment_bas(self) -> NDArray[np.float64]:
        """Total moment about BAS origin [N*m]."""
        return self._mom_bas.copy()

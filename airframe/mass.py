"""Mass, inertia, balance and weight of an aircraft.

Combines a fixed empty-airframe baseline with any number of named variable
mass components (fuel, crew, cargo) whose current mass follows an external
input. Aggregate mass properties are rebuilt from scratch every step:

1. Sum mass and first moment of mass to locate the combined center of mass.
2. Sum each contributor's inertia about that point (parallel axis theorem).

Both passes are plain sums, so the result does not depend on the order in
which components are added.

Each variable mass input is a normalised fill fraction: the component mass
is ``clip(input, 0, 1) * mass_max``.

Example:
    >>> from airframe.context import FlightContext
    >>> from airframe.inputs import InputTable
    >>> from airframe.mass import MassModel
    >>>
    >>> inputs = InputTable()
    >>> mass = MassModel(inputs, FlightContext())
    >>> mass.read_data(config["aircraft"]["mass"])
    >>> inputs.set("mass/fuel", 0.5)
    >>> mass.update()
    >>> print(f"Mass: {mass.mass:.0f} kg, CG: {mass.center_of_mass}")
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from airframe.config import read_matrix3x3, read_scalar, read_string, read_vector3
from airframe.context import FlightContext
from airframe.errors import ConfigurationError, VariableMassNotFoundError
from airframe.inputs import InputHandle, InputTable
from airframe.spatial import as_vector3, parallel_axis, spatial_inertia_matrix, symmetrize

logger = logging.getLogger(__name__)

COMPONENT = "mass"

# Prefix of the input names bound for variable masses
INPUT_PREFIX = "mass/"


# =============================================================================
# Numba Kernel
# =============================================================================


@njit(cache=True)
def _point_masses_inertia(
    masses: NDArray[np.float64],
    positions: NDArray[np.float64],
    reference: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Sum of point-mass inertias about ``reference``."""
    inertia = np.zeros((3, 3))

    for i in range(masses.shape[0]):
        m = masses[i]
        dx = positions[i, 0] - reference[0]
        dy = positions[i, 1] - reference[1]
        dz = positions[i, 2] - reference[2]

        inertia[0, 0] += m * (dy * dy + dz * dz)
        inertia[1, 1] += m * (dx * dx + dz * dz)
        inertia[2, 2] += m * (dx * dx + dy * dy)
        inertia[0, 1] -= m * dx * dy
        inertia[0, 2] -= m * dx * dz
        inertia[1, 2] -= m * dy * dz

    inertia[1, 0] = inertia[0, 1]
    inertia[2, 0] = inertia[0, 2]
    inertia[2, 1] = inertia[1, 2]

    return inertia


# =============================================================================
# Data Classes
# =============================================================================


@beartype
@dataclass
class VariableMass:
    """Variable mass component.

    Attributes:
        name: Unique component name
        input: Handle of the external fill-fraction input (read only)
        mass_max: Maximum mass [kg]
        r_bas: Position of the mass in BAS [m]
        mass: Current mass [kg], always within [0, mass_max]
    """
    name: str
    input: InputHandle
    mass_max: float
    r_bas: NDArray[np.float64]
    mass: float = 0.0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        self.r_bas = as_vector3(self.r_bas)

        if not math.isfinite(self.mass_max) or self.mass_max < 0.0:
            raise ConfigurationError(
                f"Maximum mass must be non-negative, got {self.mass_max}",
                self.name,
                "mass_max",
            )
        self.mass = min(max(self.mass, 0.0), self.mass_max)

    def apply_input(self, value: float) -> float:
        """Set current mass from a fill fraction, clamped to [0, mass_max].

        A NaN input keeps the previous mass.

        Returns:
            Current mass [kg]
        """
        if math.isnan(value):
            logger.warning("Variable mass '%s': NaN input ignored", self.name)
            return self.mass

        fraction = min(max(value, 0.0), 1.0)
        if fraction != value:
            logger.debug("Variable mass '%s': input %s clamped to %s", self.name, value, fraction)

        self.mass = fraction * self.mass_max
        return self.mass


@beartype
@dataclass(frozen=True)
class MassState:
    """Immutable snapshot of aggregate mass properties.

    Attributes:
        mass: Total mass [kg]
        center_of_mass: Center of mass in BAS [m]
        first_moment: First moment of mass about BAS origin [kg*m]
        inertia_tensor: Inertia tensor about the center of mass [kg*m^2]
        force_bas: Weight force in BAS [N]
        moment_bas: Weight moment about BAS origin [N*m]
        variable_masses: Current mass of each variable component [kg]
    """
    mass: float
    center_of_mass: NDArray[np.float64]
    first_moment: NDArray[np.float64]
    inertia_tensor: NDArray[np.float64]
    force_bas: NDArray[np.float64]
    moment_bas: NDArray[np.float64]
    variable_masses: Mapping[str, float]


# =============================================================================
# Mass Model
# =============================================================================


@beartype
class MassModel:
    """Mass, inertia and weight aggregator.

    Instances are not copyable; use ``snapshot()`` to capture state.

    Example:
        >>> mass = MassModel(inputs, context)
        >>> mass.read_data(node)
        >>> mass.update()
        >>> fuel = mass.get_variable_mass_by_name("fuel")
        >>> print(f"Fuel: {fuel.mass:.1f} / {fuel.mass_max:.1f} kg")
    """

    def __init__(self, inputs: InputTable, context: FlightContext) -> None:
        self._inputs = inputs
        self._context = context

        self._masses: dict[str, VariableMass] = {}

        self._mass_e = 0.0              # [kg] empty mass
        self._cm_e_bas = np.zeros(3)    # [m] empty center of mass
        self._it_e_bas = np.zeros((3, 3))  # [kg*m^2] empty inertia about empty CM

        self._mass_t = 0.0
        self._st_t_bas = np.zeros(3)
        self._cm_t_bas = np.zeros(3)
        self._it_t_bas = np.zeros((3, 3))   # about total CM
        self._it_o_bas = np.zeros((3, 3))   # about BAS origin

        self._for_bas = np.zeros(3)
        self._mom_bas = np.zeros(3)

        self._contrib_masses: list[float] = []
        self._contrib_positions: list[NDArray[np.float64]] = []

    def __copy__(self):
        raise TypeError("MassModel cannot be copied, use snapshot() instead")

    def __deepcopy__(self, memo):
        raise TypeError("MassModel cannot be copied, use snapshot() instead")

    # -------------------------------------------------------------------------
    # Component interface
    # -------------------------------------------------------------------------

    def initialize(self) -> None:
        """Reset to the empty-airframe baseline."""
        for var_mass in self._masses.values():
            var_mass.mass = 0.0

        self._rebuild()
        self._for_bas = np.zeros(3)
        self._mom_bas = np.zeros(3)

    def read_data(self, node: Mapping[str, Any]) -> None:
        """Read mass configuration.

        Args:
            node: Mass section of the configuration document

        Raises:
            ConfigurationError: On missing, non-numeric or duplicate entries
        """
        mass_e = read_scalar(node, "empty_mass", COMPONENT)
        if mass_e <= 0.0:
            raise ConfigurationError(
                f"Empty mass must be positive, got {mass_e}", COMPONENT, "empty_mass"
            )

        it_e = read_matrix3x3(node, "inertia_tensor", COMPONENT)
        if not np.allclose(it_e, it_e.T):
            logger.warning("Empty inertia tensor is not symmetric, using its symmetric part")
        it_e = symmetrize(it_e)

        cm_e = read_vector3(node, "center_of_mass", COMPONENT)

        entries = node.get("variable_masses") or []
        if not isinstance(entries, list):
            raise ConfigurationError("Expected a list", COMPONENT, "variable_masses")

        masses: dict[str, VariableMass] = {}
        for i, entry in enumerate(entries):
            var_mass = self._read_variable_mass(entry, f"variable_masses[{i}]")
            if var_mass.name in self._masses or var_mass.name in masses:
                raise ConfigurationError(
                    f"Duplicate variable mass '{var_mass.name}'",
                    var_mass.name,
                    f"variable_masses[{i}].name",
                )
            masses[var_mass.name] = var_mass

        self._mass_e = mass_e
        self._it_e_bas = it_e
        self._cm_e_bas = cm_e
        self._masses.update(masses)

        logger.info(
            "Mass data read: empty mass %.1f kg, %d variable masses",
            self._mass_e,
            len(self._masses),
        )

        self.initialize()

    def compute_force_and_moment(self) -> None:
        """Compute weight force and moment in BAS from current aggregate state."""
        self._for_bas = self._mass_t * self._context.gravity_bas
        self._mom_bas = np.cross(self._cm_t_bas, self._for_bas)

    def update(self, dt: float = 0.0) -> None:
        """Read inputs, rebuild mass properties and recompute weight.

        Args:
            dt: Time step [s], unused; kept for the component interface
        """
        for var_mass in self._masses.values():
            var_mass.apply_input(self._inputs[var_mass.input])

        self._rebuild()
        self.compute_force_and_moment()

    # -------------------------------------------------------------------------
    # Variable masses
    # -------------------------------------------------------------------------

    def add_variable_mass(self, var_mass: VariableMass) -> None:
        """Merge one variable mass into the running aggregate.

        Center of mass and inertia are re-derived over every contributor
        merged so far.
        """
        self._accumulate(var_mass)
        self._derive()

    def get_variable_mass_by_name(self, name: str) -> VariableMass:
        """Return the variable mass registered under ``name``.

        Raises:
            VariableMassNotFoundError: If no such component exists
        """
        try:
            return self._masses[name]
        except KeyError:
            raise VariableMassNotFoundError(name) from None

    @property
    def variable_masses(self) -> Mapping[str, VariableMass]:
        """Read-only view of registered variable masses."""
        return MappingProxyType(self._masses)

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def _read_variable_mass(self, entry: Any, prefix: str) -> VariableMass:
        if not isinstance(entry, Mapping):
            raise ConfigurationError("Variable mass entry must be a mapping", COMPONENT, prefix)

        input_name = read_string(entry, "input", COMPONENT, prefix)
        name = read_string(entry, "name", COMPONENT, prefix, default=input_name)

        mass_max = read_scalar(entry, "mass_max", name, prefix)
        r_bas = read_vector3(entry, "coordinates", name, prefix)

        return VariableMass(
            name=name,
            input=self._inputs.bind(INPUT_PREFIX + input_name),
            mass_max=mass_max,
            r_bas=r_bas,
        )

    def _reset_aggregate(self) -> None:
        self._mass_t = self._mass_e
        self._st_t_bas = self._mass_e * self._cm_e_bas
        self._contrib_masses = []
        self._contrib_positions = []

    def _accumulate(self, var_mass: VariableMass) -> None:
        self._mass_t += var_mass.mass
        self._st_t_bas = self._st_t_bas + var_mass.mass * var_mass.r_bas
        self._contrib_masses.append(var_mass.mass)
        self._contrib_positions.append(var_mass.r_bas)

    def _derive(self) -> None:
        if self._mass_t <= 0.0:
            self._cm_t_bas = np.zeros(3)
            self._it_t_bas = np.zeros((3, 3))
            self._it_o_bas = np.zeros((3, 3))
            return

        self._cm_t_bas = self._st_t_bas / self._mass_t

        masses = np.array(self._contrib_masses, dtype=np.float64)
        positions = np.array(self._contrib_positions, dtype=np.float64).reshape(-1, 3)

        it_empty = parallel_axis(self._it_e_bas, self._mass_e, self._cm_e_bas - self._cm_t_bas)
        self._it_t_bas = it_empty + _point_masses_inertia(masses, positions, self._cm_t_bas)
        self._it_o_bas = parallel_axis(self._it_t_bas, self._mass_t, self._cm_t_bas)

    def _rebuild(self) -> None:
        self._reset_aggregate()
        for var_mass in self._masses.values():
            self._accumulate(var_mass)
        self._derive()

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def mass(self) -> float:
        """Total mass [kg]."""
        return float(self._mass_t)

    @property
    def empty_mass(self) -> float:
        """Empty airframe mass [kg]."""
        return self._mass_e

    @property
    def center_of_mass(self) -> NDArray[np.float64]:
        """Total center of mass in BAS [m]."""
        return self._cm_t_bas.copy()

    @property
    def first_moment_of_mass(self) -> NDArray[np.float64]:
        """Total first moment of mass about BAS origin [kg*m]."""
        return self._st_t_bas.copy()

    @property
    def inertia_tensor(self) -> NDArray[np.float64]:
        """Total inertia tensor about the total center of mass [kg*m^2]."""
        return self._it_t_bas.copy()

    @property
    def inertia_tensor_origin(self) -> NDArray[np.float64]:
        """Total inertia tensor about the BAS origin [kg*m^2]."""
        return self._it_o_bas.copy()

    @property
    def force_bas(self) -> NDArray[np.float64]:
        """Weight force in BAS from the last ``compute_force_and_moment`` [N]."""
        return self._for_bas.copy()

    @property
    def moment_bas(self) -> NDArray[np.float64]:
        """Weight moment about BAS origin from the last ``compute_force_and_moment`` [N*m]."""
        return self._mom_bas.copy()

    def inertia_matrix(self) -> NDArray[np.float64]:
        """6x6 rigid-body inertia matrix about the BAS origin."""
        return spatial_inertia_matrix(self._mass_t, self._st_t_bas, self._it_o_bas)

    def snapshot(self) -> MassState:
        """Capture current aggregate state."""
        return MassState(
            mass=self.mass,
            center_of_mass=self.center_of_mass,
            first_moment=self.first_moment_of_mass,
            inertia_tensor=self.inertia_tensor,
            force_bas=self.force_bas,
            moment_bas=self.moment_bas,
            variable_masses=MappingProxyType(
                {name: vm.mass for name, vm in self._masses.items()}
            ),
        )

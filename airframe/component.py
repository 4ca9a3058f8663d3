"""Shared interface of aircraft model components.

Every force-contributing component (mass, propulsion, and the external
aerodynamic and landing-gear models) follows the same lifecycle, so an
aircraft assembly can drive a fixed list of them uniformly and sum their
force and moment contributions.

Lifecycle:
    read_data(node) -> initialize() -> [update(dt) -> force_bas/moment_bas]*
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class Component(Protocol):
    """Protocol for aircraft model components."""

    def initialize(self) -> None:
        """Reset state to its initial condition. Must be idempotent."""
        ...

    def read_data(self, node: Mapping[str, Any]) -> None:
        """Read the component's configuration section."""
        ...

    def compute_force_and_moment(self) -> None:
        """Compute force and moment contributions for the current step."""
        ...

    def update(self, dt: float) -> None:
        """Advance internal state by one step and recompute outputs."""
        ...

    @property
    def force_bas(self) -> NDArray[np.float64]:
        """Force contribution in BAS [N]."""
        ...

    @property
    def moment_bas(self) -> NDArray[np.float64]:
        """Moment contribution about BAS origin [N*m]."""
        ...

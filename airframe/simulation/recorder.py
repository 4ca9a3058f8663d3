"""Step history recording for aircraft simulations.

Example:
    >>> from airframe.simulation import HistoryRecorder
    >>>
    >>> recorder = HistoryRecorder()
    >>> for _ in range(500):
    ...     aircraft.step(dt=0.01)
    ...     recorder.record(aircraft)
    >>>
    >>> df = recorder.to_dataframe()
    >>> df.select(["time", "mass", "cm_x"]).tail()
"""

from typing import NamedTuple

import numpy as np
import polars as pl
from beartype import beartype
from numpy.typing import NDArray

from airframe.aircraft import Aircraft


class StepRecord(NamedTuple):
    """Aircraft outputs captured after one step."""
    time: float                         # [s]
    mass: float                         # [kg]
    center_of_mass: NDArray[np.float64]  # [m] BAS
    force_bas: NDArray[np.float64]       # [N]
    moment_bas: NDArray[np.float64]      # [N*m]
    main_rotor_psi: float               # [rad]
    main_rotor_omega: float             # [rad/s]
    tail_rotor_psi: float               # [rad]
    tail_rotor_omega: float             # [rad/s]


@beartype
class HistoryRecorder:
    """Accumulates ``StepRecord`` entries and exports them as a DataFrame."""

    def __init__(self) -> None:
        self._records: list[StepRecord] = []

    def record(self, aircraft: Aircraft) -> StepRecord:
        """Capture the aircraft's current outputs."""
        entry = StepRecord(
            time=aircraft.time,
            mass=aircraft.mass.mass,
            center_of_mass=aircraft.mass.center_of_mass,
            force_bas=aircraft.force_bas,
            moment_bas=aircraft.moment_bas,
            main_rotor_psi=aircraft.propulsion.main_rotor_psi,
            main_rotor_omega=aircraft.propulsion.main_rotor_omega,
            tail_rotor_psi=aircraft.propulsion.tail_rotor_psi,
            tail_rotor_omega=aircraft.propulsion.tail_rotor_omega,
        )
        self._records.append(entry)
        return entry

    @property
    def records(self) -> list[StepRecord]:
        """Recorded entries in step order."""
        return self._records.copy()

    def clear(self) -> None:
        """Drop all recorded entries."""
        self._records = []

    def __len__(self) -> int:
        return len(self._records)

    def to_dataframe(self) -> pl.DataFrame:
        """Convert history to a Polars DataFrame, one row per step."""
        if not self._records:
            cm = force = moment = np.zeros((0, 3))
        else:
            cm = np.array([r.center_of_mass for r in self._records])
            force = np.array([r.force_bas for r in self._records])
            moment = np.array([r.moment_bas for r in self._records])

        return pl.DataFrame({
            "time": [r.time for r in self._records],
            "mass": [r.mass for r in self._records],
            "cm_x": cm[:, 0],
            "cm_y": cm[:, 1],
            "cm_z": cm[:, 2],
            "fx": force[:, 0],
            "fy": force[:, 1],
            "fz": force[:, 2],
            "mx": moment[:, 0],
            "my": moment[:, 1],
            "mz": moment[:, 2],
            "main_rotor_psi": [r.main_rotor_psi for r in self._records],
            "main_rotor_omega": [r.main_rotor_omega for r in self._records],
            "tail_rotor_psi": [r.tail_rotor_psi for r in self._records],
            "tail_rotor_omega": [r.tail_rotor_omega for r in self._records],
        }, schema_overrides={
            "time": pl.Float64,
            "mass": pl.Float64,
            "main_rotor_psi": pl.Float64,
            "main_rotor_omega": pl.Float64,
            "tail_rotor_psi": pl.Float64,
            "tail_rotor_omega": pl.Float64,
        })

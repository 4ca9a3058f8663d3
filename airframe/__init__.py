"""Airframe - Component-based flight dynamics core.

This package provides the per-step physics building blocks of an aircraft
model: a mass and inertia aggregator with variable mass components, a
first-order lag filter for actuator and engine dynamics, rotor phase
kinematics, and the shared component interface that lets an aircraft
assembly sum their force and moment contributions.

Example:
    >>> from airframe import Aircraft
    >>>
    >>> aircraft = Aircraft.from_file("r44.yaml")
    >>> aircraft.inputs.set("mass/fuel", 1.0)
    >>> aircraft.step(dt=0.01)
    >>> print(f"Mass: {aircraft.mass.mass:.1f} kg")
    >>> print(f"Inertia:\\n{aircraft.mass.inertia_tensor}")
"""

__version__ = "0.1.0"

from airframe.aircraft import Aircraft
from airframe.component import Component
from airframe.config import load_config
from airframe.context import G0, FlightContext
from airframe.errors import (
    AirframeError,
    ConfigurationError,
    InputNotFoundError,
    VariableMassNotFoundError,
)
from airframe.inputs import InputHandle, InputTable
from airframe.mass import MassModel, MassState, VariableMass
from airframe.propulsion import RotorKinematics, RotorPropulsion
from airframe.simulation import HistoryRecorder, StepRecord
from airframe.systems import Lag

__all__ = [
    "__version__",
    # Assembly
    "Aircraft",
    "Component",
    "FlightContext",
    "G0",
    # Configuration and inputs
    "load_config",
    "InputHandle",
    "InputTable",
    # Mass
    "MassModel",
    "MassState",
    "VariableMass",
    # Propulsion
    "RotorKinematics",
    "RotorPropulsion",
    # Systems
    "Lag",
    # Simulation
    "HistoryRecorder",
    "StepRecord",
    # Errors
    "AirframeError",
    "ConfigurationError",
    "InputNotFoundError",
    "VariableMassNotFoundError",
]

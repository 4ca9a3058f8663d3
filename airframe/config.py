"""Configuration document loading and typed field readers.

Aircraft data is stored as YAML. A document is loaded into nested
dictionaries and each component reads its own section through the typed
readers below, which coerce values and report failures as
``ConfigurationError`` with the dotted path of the offending field.

Example document::

    aircraft:
      name: R44
      mass:
        empty_mass: 680.0
        inertia_tensor:
          - [680.0, 0.0, 120.0]
          - [0.0, 1880.0, 0.0]
          - [120.0, 0.0, 1550.0]
        center_of_mass: [0.0, 0.0, 0.1]
        variable_masses:
          - input: pilot_l
            mass_max: 120.0
            coordinates: [1.0, -0.3, 0.4]
      propulsion:
        input: rotor_speed
        engine:
          time_constant: 1.5
        main_rotor:
          omega_nominal: 42.4
          direction: ccw
        tail_rotor:
          gear_ratio: 6.0
"""

import logging
import math
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import numpy as np
import yaml
from beartype import beartype
from numpy.typing import NDArray

from airframe.errors import ConfigurationError

logger = logging.getLogger(__name__)


# =============================================================================
# Loading
# =============================================================================


@beartype
def load_config(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration document.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed document as nested dictionaries

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path) as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigurationError(f"Invalid YAML in {path}: {err}") from err

    if not isinstance(document, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {path}")

    logger.info("Loaded configuration from %s", path)
    return document


# =============================================================================
# Typed Readers
# =============================================================================


def _field_path(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _to_float(raw: Any, component: str, field: str) -> float:
    # bool is an int subclass but never a meaningful number here
    if isinstance(raw, bool):
        raise ConfigurationError("Expected a number, got a boolean", component, field)
    try:
        value = float(raw)
    except (TypeError, ValueError) as err:
        raise ConfigurationError(f"Expected a number, got {raw!r}", component, field) from err
    if not math.isfinite(value):
        raise ConfigurationError(f"Value must be finite, got {value}", component, field)
    return value


@beartype
def require_section(
    node: Mapping[str, Any],
    key: str,
    component: str,
    prefix: str = "",
) -> Mapping[str, Any]:
    """Return a required nested mapping."""
    field = _field_path(prefix, key)
    if key not in node:
        raise ConfigurationError("Missing required section", component, field)
    section = node[key]
    if not isinstance(section, Mapping):
        raise ConfigurationError("Section must be a mapping", component, field)
    return section


@beartype
def read_scalar(
    node: Mapping[str, Any],
    key: str,
    component: str,
    prefix: str = "",
    default: float | None = None,
) -> float:
    """Read a numeric scalar field.

    Args:
        node: Mapping holding the field
        key: Field name
        component: Component name for error context
        prefix: Dotted path of ``node`` for error context
        default: Value used when the field is absent; required if None
    """
    field = _field_path(prefix, key)
    if key not in node or node[key] is None:
        if default is None:
            raise ConfigurationError("Missing required field", component, field)
        return default
    return _to_float(node[key], component, field)


@beartype
def read_vector3(
    node: Mapping[str, Any],
    key: str,
    component: str,
    prefix: str = "",
) -> NDArray[np.float64]:
    """Read a required 3-vector field given as a sequence of three numbers."""
    field = _field_path(prefix, key)
    if key not in node or node[key] is None:
        raise ConfigurationError("Missing required field", component, field)

    raw = node[key]
    if isinstance(raw, (str, Mapping)) or not hasattr(raw, "__len__") or len(raw) != 3:
        raise ConfigurationError(f"Expected 3 numbers, got {raw!r}", component, field)

    return np.array(
        [_to_float(v, component, f"{field}[{i}]") for i, v in enumerate(raw)],
        dtype=np.float64,
    )


@beartype
def read_matrix3x3(
    node: Mapping[str, Any],
    key: str,
    component: str,
    prefix: str = "",
) -> NDArray[np.float64]:
    """Read a required 3x3 matrix given as three rows or nine numbers."""
    field = _field_path(prefix, key)
    if key not in node or node[key] is None:
        raise ConfigurationError("Missing required field", component, field)

    raw = node[key]
    if isinstance(raw, (str, Mapping)) or not hasattr(raw, "__len__"):
        raise ConfigurationError(f"Expected a 3x3 matrix, got {raw!r}", component, field)

    if len(raw) == 3 and all(hasattr(row, "__len__") and not isinstance(row, str) for row in raw):
        if any(len(row) != 3 for row in raw):
            raise ConfigurationError("Each matrix row must have 3 numbers", component, field)
        flat = [v for row in raw for v in row]
    elif len(raw) == 9:
        flat = list(raw)
    else:
        raise ConfigurationError(f"Expected a 3x3 matrix, got {raw!r}", component, field)

    values = [_to_float(v, component, f"{field}[{i // 3}][{i % 3}]") for i, v in enumerate(flat)]
    return np.array(values, dtype=np.float64).reshape(3, 3)


@beartype
def read_string(
    node: Mapping[str, Any],
    key: str,
    component: str,
    prefix: str = "",
    default: str | None = None,
) -> str:
    """Read a non-empty string field."""
    field = _field_path(prefix, key)
    raw = node.get(key)
    if raw is None:
        if default is None:
            raise ConfigurationError("Missing required field", component, field)
        return default
    if not isinstance(raw, str) or not raw.strip():
        raise ConfigurationError(f"Expected a non-empty string, got {raw!r}", component, field)
    return raw.strip()

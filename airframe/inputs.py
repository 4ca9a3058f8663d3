"""Named external inputs observed by aircraft components.

The caller owns an ``InputTable`` and writes control and loading values
into it between steps. Components resolve the names they need into
``InputHandle`` values once, while reading configuration, and only ever
read through those handles.

Example:
    >>> from airframe.inputs import InputTable
    >>>
    >>> inputs = InputTable()
    >>> fuel = inputs.bind("mass/fuel")
    >>> inputs.set("mass/fuel", 0.75)
    >>> inputs[fuel]
    0.75
"""

import logging
from typing import NamedTuple

from beartype import beartype

from airframe.errors import InputNotFoundError

logger = logging.getLogger(__name__)


class InputHandle(NamedTuple):
    """Resolved reference into an ``InputTable``."""
    index: int
    name: str


@beartype
class InputTable:
    """Caller-owned table of named scalar inputs.

    Values default to 0.0 when an input is first bound. Handles stay valid
    for the lifetime of the table since entries are never removed.
    """

    def __init__(self, values: dict[str, float] | None = None) -> None:
        self._index: dict[str, int] = {}
        self._values: list[float] = []

        for name, value in (values or {}).items():
            self.set(self.bind(name), value)

    def bind(self, name: str) -> InputHandle:
        """Resolve ``name`` to a handle, creating the input if needed."""
        if name not in self._index:
            self._index[name] = len(self._values)
            self._values.append(0.0)
            logger.debug("Created input '%s'", name)
        return InputHandle(self._index[name], name)

    def handle(self, name: str) -> InputHandle:
        """Resolve an existing input name to its handle."""
        try:
            return InputHandle(self._index[name], name)
        except KeyError:
            raise InputNotFoundError(name) from None

    def set(self, key: InputHandle | str, value: float) -> None:
        """Write an input value (caller side only)."""
        if isinstance(key, str):
            key = self.handle(key)
        self._values[key.index] = float(value)

    def get(self, key: InputHandle | str) -> float:
        """Read an input value."""
        if isinstance(key, str):
            key = self.handle(key)
        return self._values[key.index]

    def __getitem__(self, key: InputHandle | str) -> float:
        return self.get(key)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._values)

    @property
    def names(self) -> list[str]:
        """Registered input names in binding order."""
        return list(self._index)

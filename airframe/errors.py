"""Exception types raised by the airframe package.

Configuration problems are fatal and surface while an aircraft is being
built. Lookup failures are recoverable and subclass ``KeyError`` so callers
can handle them the usual way. Numeric anomalies during a step are never
raised: they are clamped or rejected where they occur and logged.
"""


class AirframeError(Exception):
    """Base class for all airframe errors."""


class ConfigurationError(AirframeError, ValueError):
    """Malformed, missing, or inconsistent configuration data.

    Attributes:
        component: Name of the component being configured (e.g. "mass")
        field: Dotted path of the offending field, if known
    """

    def __init__(self, message: str, component: str | None = None, field: str | None = None) -> None:
        self.component = component
        self.field = field

        context = []
        if component:
            context.append(f"component '{component}'")
        if field:
            context.append(f"field '{field}'")

        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class VariableMassNotFoundError(AirframeError, KeyError):
    """No variable mass component is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Variable mass '{self.name}' not found"


class InputNotFoundError(AirframeError, KeyError):
    """No external input is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Input '{self.name}' not found"

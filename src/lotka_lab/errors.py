"""Exceptions raised by the simulation engine."""


class InvalidParameter(ValueError):
    """A parameter value or name that cannot be used for integration."""

    def __init__(self, name: str, value=None, reason: str = "must be a finite number"):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid parameter '{name}'={value!r}: {reason}")


class SessionStateError(RuntimeError):
    """An operation was called in a session state that does not allow it."""

"""
Exceptions raised by cadence.
"""


class CadenceError(Exception):
    """Base exception for cadence errors."""
    pass


class MissingPriorityError(CadenceError, ValueError):
    """An item without a priority was pushed onto a queue."""
    pass


class InvalidEventSpecError(CadenceError, ValueError):
    """A score event spec could not be turned into an event."""
    pass


class ConfigError(CadenceError, ValueError):
    """The configuration names something cadence doesn't know about."""
    pass

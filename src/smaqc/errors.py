# smaqc/errors.py
"""Exception types raised by the metric engine and its collaborators."""


class SmaqcError(Exception):
    """Base class for errors raised by smaqc."""


class DataAccessError(SmaqcError):
    """The data access port failed to run a query or read a column."""


class UnknownMetricError(SmaqcError, LookupError):
    """A measurement name has no registered metric."""

    def __init__(self, name):
        super().__init__(f"Unknown measurement: {name}")
        self.name = name


class ConfigError(SmaqcError, ValueError):
    """Invalid run settings or measurement list."""

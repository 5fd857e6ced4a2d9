"""Exceptions and warnings raised by the Simon engine."""


class SimonError(Exception):
    """Base class of the errors raised by the engine."""


class ConfigurationError(SimonError, ValueError):
    """The (word width, key words) pair is not a Simon instance."""


class EngineBusyError(SimonError):
    """A request was submitted while an operation was in flight."""


class ProtocolError(SimonError):
    """A component was used out of order, e.g. a response accepted before it is valid."""


class ExperimentalConfigurationWarning(UserWarning):
    """The instance relies on constants that have not been verified."""

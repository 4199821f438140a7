"""Exception classes for data-access errors."""


class DataAccessError(Exception):
    """Base class for errors raised by the data-access layer itself."""

    pass


class ConfigurationError(DataAccessError):
    """Raised when a required setting, such as a connection URI, is missing."""

    pass

"""Exception types shared across hostwatch."""


class HostwatchError(Exception):
    """Base class for hostwatch errors."""


class ProviderUnavailable(HostwatchError):
    """System stats could not be read this tick."""


class NotifierFailure(HostwatchError):
    """A single alert could not be delivered."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ConfigurationInvalid(HostwatchError, ValueError):
    """Configuration is malformed or incomplete."""

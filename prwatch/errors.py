class PrwatchError(RuntimeError):
    """Base class for every failure surfaced to the command line."""


class ConfigError(PrwatchError):
    """Bad arguments, unreadable configuration or a missing credential."""


class FetchError(PrwatchError):
    """A page request could not be completed or returned an unusable payload."""


class ReducerError(PrwatchError):
    """Raised by a page reducer to abort pagination."""

"""Exceptions raised by yuque-mirror."""


class FetchError(RuntimeError):
    """A remote resource could not be fetched, parsed or saved."""

"""Exceptions for the readly application."""


class ReadlyError(Exception):
    """Base class for all application errors."""

    pass


class ConfigurationError(ReadlyError):
    """Error raised when a configuration value is missing or invalid."""

    pass


class ClippingsFileError(ConfigurationError):
    """Error raised when the Kindle clippings file cannot be read."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path

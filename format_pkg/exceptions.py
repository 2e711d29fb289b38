"""Custom exceptions for the genomic format description package."""


class FormatError(Exception):
    """Base exception for all format errors."""
    pass


class ConfigurationError(FormatError):
    """Raised when a format descriptor is set up with invalid input."""
    pass


class UnknownFormatError(ConfigurationError):
    """Raised when a format name cannot be resolved to a registered format."""
    pass


class UnknownFieldError(FormatError, KeyError):
    """Raised when a record is accessed with a name that is neither a field nor an accessor."""

    def __str__(self):
        return Exception.__str__(self)


class RecordValidationError(FormatError):
    """Raised when a record is explicitly checked and one or more fields fail validation."""

    def __init__(self, message, issues=None):
        super().__init__(message)
        self.issues = list(issues or [])

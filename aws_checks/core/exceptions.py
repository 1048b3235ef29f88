class AWSChecksError(Exception):
    """Base exception for aws_checks package."""

    pass


class ConfigurationError(AWSChecksError):
    """Raised when there's a configuration error."""

    pass


class SessionError(AWSChecksError):
    """Raised when session operations fail."""

    pass


class ResourceError(AWSChecksError):
    """Raised when a requested AWS resource cannot be found."""

    pass


class UsageError(AWSChecksError):
    """Raised when the command line cannot be parsed."""

    pass

from .exceptions import (
    AWSChecksError,
    ConfigurationError,
    SessionError,
    ResourceError,
    UsageError,
)
from .session import AWSSession, create_session
from .severity import CheckResult, Severity, worst

__all__ = [
    # Errors
    "AWSChecksError",
    "ConfigurationError",
    "SessionError",
    "ResourceError",
    "UsageError",

    # Session related
    "AWSSession",
    "create_session",

    # Results
    "CheckResult",
    "Severity",
    "worst",
]

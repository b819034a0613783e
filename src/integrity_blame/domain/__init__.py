from .errors import (
    AuthenticationError,
    ConfigurationError,
    ExecutionError,
    IntegrityBlameError,
    InvalidArgumentError,
)
from .models import (
    BlameEntry,
    BlameResult,
    CommandInvocation,
    CommandOutcome,
    RepositoryEndpoint,
    WorkingContext,
)

__all__ = [
    "AuthenticationError",
    "BlameEntry",
    "BlameResult",
    "CommandInvocation",
    "CommandOutcome",
    "ConfigurationError",
    "ExecutionError",
    "IntegrityBlameError",
    "InvalidArgumentError",
    "RepositoryEndpoint",
    "WorkingContext",
]

from typing import Optional


class IntegrityBlameError(Exception):
    """Base exception for domain-specific errors."""


class InvalidArgumentError(IntegrityBlameError, ValueError):
    """Missing or empty input (e.g., no filename to blame)."""


class AuthenticationError(IntegrityBlameError):
    """`si connect` failed or could not be run."""

    def __init__(
        self, message: str, *, exit_code: Optional[int] = None, output: str = ""
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.output = output


class ConfigurationError(IntegrityBlameError):
    """Root directory detection failed or the working dir lies outside of it."""


class ExecutionError(IntegrityBlameError):
    """An external process could not be started or did not finish."""

    def __init__(self, message: str, *, command_line: str = "") -> None:
        super().__init__(message)
        self.command_line = command_line

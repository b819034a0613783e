from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from ..commandline import redact_arguments, to_command_line


@dataclass(frozen=True)
class RepositoryEndpoint:
    """Connection details of an Integrity server."""
    host: str
    port: int
    user: str
    password: str = field(default="", repr=False)
    config_path: Optional[str] = None  # e.g. "#/repo/project#b=1.0"


@dataclass(frozen=True)
class WorkingContext:
    base_directory: Path


@dataclass(frozen=True, repr=False)
class CommandInvocation:
    """One external command, built fresh for every run."""
    executable: str
    arguments: Tuple[str, ...]
    working_directory: Path

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.arguments]

    def command_line(self) -> str:
        """Printable command line; the password is always masked."""
        return to_command_line(self.argv)

    def __repr__(self) -> str:
        return (
            f"CommandInvocation(executable={self.executable!r}, "
            f"arguments={tuple(redact_arguments(self.arguments))!r}, "
            f"working_directory={self.working_directory!r})"
        )


@dataclass(frozen=True)
class CommandOutcome:
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        """stdout and stderr together, as a single stream consumer would see them."""
        return self.stdout + self.stderr


@dataclass(frozen=True)
class BlameEntry:
    """Attribution of a single line (1-based)."""
    line_number: int
    revision: str
    author: str
    date: str


@dataclass(frozen=True)
class BlameResult:
    entries: Tuple[BlameEntry, ...]
    success: bool
    command_line: str
    error_message: Optional[str] = None
    provider_message: str = ""

    @classmethod
    def failed(cls, command_line: str, error_message: str) -> BlameResult:
        return cls(
            entries=(),
            success=False,
            command_line=command_line,
            error_message=error_message,
        )

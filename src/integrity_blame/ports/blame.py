# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from typing import Protocol, Sequence, Tuple

from ..domain.models import (
    BlameEntry,
    CommandInvocation,
    CommandOutcome,
    RepositoryEndpoint,
    WorkingContext,
)


class BlameStrategyPort(Protocol):
    """
    Provider-specific blame capability: connect, annotate, parse.
    BlameService drives an implementation; each VCS backend ships its own.
    """

    def name(self) -> str: ...

    def connect(self, endpoint: RepositoryEndpoint, context: WorkingContext) -> None:
        """Establish a session. Raise AuthenticationError on failure."""
        ...

    def annotate(
        self, endpoint: RepositoryEndpoint, context: WorkingContext, filename: str
    ) -> Tuple[CommandInvocation, CommandOutcome]:
        """
        Run the annotate command. Raise ExecutionError if it cannot run;
        a nonzero exit is returned in the outcome.
        """
        ...

    def parse(self, stdout: str) -> Sequence[BlameEntry]:
        """Turn raw annotate output into ordered blame entries."""
        ...

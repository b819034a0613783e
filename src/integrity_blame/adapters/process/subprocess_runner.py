# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
import subprocess
from typing import Optional

from ...domain.errors import ExecutionError
from ...domain.models import CommandInvocation, CommandOutcome
from ...ports.runner import CommandRunnerPort

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunnerPort):
    """
    Runs commands with `subprocess.run` and captures text output.

    Output is decoded with the locale encoding; undecodable bytes (e.g. a
    Latin-1 author name) become U+FFFD instead of failing the run.

    No timeout by default: a hung client blocks the caller. Pass `timeout`
    (seconds) to turn a hang into an ExecutionError.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._timeout = timeout

    def run(self, invocation: CommandInvocation) -> CommandOutcome:
        try:
            proc = subprocess.run(
                invocation.argv,
                cwd=str(invocation.working_directory),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ExecutionError(
                f"Command timed out after {e.timeout} seconds",
                command_line=invocation.command_line(),
            ) from e
        except OSError as e:
            raise ExecutionError(str(e), command_line=invocation.command_line()) from e

        logger.debug("Exit code %s from %s", proc.returncode, invocation.executable)
        return CommandOutcome(
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

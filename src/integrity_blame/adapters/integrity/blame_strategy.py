# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from ...commandline import shadow_password
from ...domain.errors import AuthenticationError, ExecutionError
from ...domain.models import (
    BlameEntry,
    CommandInvocation,
    CommandOutcome,
    RepositoryEndpoint,
    WorkingContext,
)
from ...ports.blame import BlameStrategyPort
from ...ports.consumer import BlameConsumerPort
from ...ports.runner import CommandRunnerPort
from ...services.project_url_service import ProjectUrlService
from .blame_consumer import IntegrityBlameConsumer

logger = logging.getLogger(__name__)

SI_EXECUTABLE = "si"
PROJECT_FILE = "project.pj"
ANNOTATE_FIELDS = "--fields=date,revision,author"


def _session_arguments(endpoint: RepositoryEndpoint) -> List[str]:
    return [
        f"--hostname={endpoint.host}",
        f"--port={endpoint.port}",
        f"--user={endpoint.user}",
        "--batch",
    ]


def project_file_exists(base_directory: Path) -> bool:
    return (Path(base_directory) / PROJECT_FILE).exists()


class IntegrityBlameStrategy(BlameStrategyPort):
    """
    Blame through the `si` command-line client: `si connect` to make sure the
    shell client holds a session, then `si annotate` on the file.
    """

    def __init__(
        self,
        runner: CommandRunnerPort,
        project_urls: ProjectUrlService,
        *,
        consumer_factory: Optional[Callable[[], BlameConsumerPort]] = None,
        executable: str = SI_EXECUTABLE,
    ) -> None:
        self._runner = runner
        self._project_urls = project_urls
        self._consumer_factory = consumer_factory or IntegrityBlameConsumer
        self._executable = executable

    def name(self) -> str:
        return "integrity"

    # --- invocations --------------------------------------------------------

    def connect_invocation(
        self, endpoint: RepositoryEndpoint, context: WorkingContext
    ) -> CommandInvocation:
        args = ["connect", *_session_arguments(endpoint)]
        args.append(f"--password={endpoint.password}")
        return CommandInvocation(
            self._executable, tuple(args), Path(context.base_directory)
        )

    def annotate_invocation(
        self, endpoint: RepositoryEndpoint, context: WorkingContext, filename: str
    ) -> CommandInvocation:
        base_dir = Path(context.base_directory)
        args = ["annotate", *_session_arguments(endpoint)]
        if not project_file_exists(base_dir):
            logger.debug("Project pj file doesn't exist.")
            project_url = self._project_urls.resolve_project_url(
                base_dir, endpoint.config_path
            )
            logger.debug("Computed project url: %s", project_url)
            args.append(f"--project={project_url}")
        args.append(ANNOTATE_FIELDS)
        # one argv element, spaces included; no shell is involved
        args.append(filename)
        return CommandInvocation(self._executable, tuple(args), base_dir)

    # --- BlameStrategyPort --------------------------------------------------

    def connect(self, endpoint: RepositoryEndpoint, context: WorkingContext) -> None:
        invocation = self.connect_invocation(endpoint, context)
        logger.debug("Executing: %s", invocation.command_line())
        try:
            outcome = self._runner.run(invocation)
        except ExecutionError as e:
            message = shadow_password(str(e), endpoint.password)
            logger.error("Command Line Connect Exception: %s", message)
            raise AuthenticationError(
                f"Can't login to integrity. Message : {message}"
            ) from e

        if outcome.exit_code != 0:
            output = shadow_password(outcome.output, endpoint.password)
            raise AuthenticationError(
                f"Can't login to integrity. Exit code: '{outcome.exit_code}'. "
                f"Message : '{output}'",
                exit_code=outcome.exit_code,
                output=output,
            )

    def annotate(
        self, endpoint: RepositoryEndpoint, context: WorkingContext, filename: str
    ) -> Tuple[CommandInvocation, CommandOutcome]:
        invocation = self.annotate_invocation(endpoint, context, filename)
        logger.debug("Executing: %s", invocation.command_line())
        return invocation, self._runner.run(invocation)

    def parse(self, stdout: str) -> Sequence[BlameEntry]:
        consumer = self._consumer_factory()
        for line in stdout.splitlines():
            consumer.consume_line(line)
        return consumer.entries

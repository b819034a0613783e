# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging

from ..domain.errors import ExecutionError, InvalidArgumentError
from ..domain.models import BlameResult, RepositoryEndpoint, WorkingContext
from ..ports.blame import BlameStrategyPort

logger = logging.getLogger(__name__)


class BlameService:
    """
    Orchestrates blame for a single file:
      - validates the filename
      - establishes a session (failures raise AuthenticationError)
      - runs annotate and parses its output into a BlameResult

    Note:
      * A connect failure aborts the call, while an annotate process that
        cannot run at all comes back as a failed BlameResult with no entries.
      * A nonzero annotate exit is not an error here: success is False and
        the entries are whatever the parser recognised.
      * No retries and no timeouts at this level.
    """

    def __init__(self, strategy: BlameStrategyPort) -> None:
        self._strategy = strategy

    def execute_blame(
        self, endpoint: RepositoryEndpoint, context: WorkingContext, filename: str
    ) -> BlameResult:
        logger.info("Attempting to display blame results for file: %s", filename)
        if not filename:
            raise InvalidArgumentError(
                "A single filename is required to execute the blame command!"
            )

        self._strategy.connect(endpoint, context)

        try:
            invocation, outcome = self._strategy.annotate(endpoint, context, filename)
        except ExecutionError as e:
            logger.error("Command Line Exception: %s", e)
            return BlameResult.failed(e.command_line, str(e))

        entries = tuple(self._strategy.parse(outcome.stdout))
        success = outcome.exit_code == 0
        if not success:
            logger.warning(
                "%s annotate exited with %s for %s",
                self._strategy.name(),
                outcome.exit_code,
                filename,
            )
        return BlameResult(
            entries=entries,
            success=success,
            command_line=invocation.command_line(),
            error_message=None if success else (outcome.stderr.strip() or None),
            provider_message=f"Exit Code: {outcome.exit_code}",
        )

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

from abc import ABC, abstractmethod

from ..domain.models import CommandInvocation, CommandOutcome


class CommandRunnerPort(ABC):
    """Abstract interface for running an external command to completion."""

    @abstractmethod
    def run(self, invocation: CommandInvocation) -> CommandOutcome:
        """
        Run the command synchronously and return its exit code and output.
        Raise ExecutionError when the process cannot be started or finished.
        A nonzero exit code is not an error at this level.
        """
        raise NotImplementedError

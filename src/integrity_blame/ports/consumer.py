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
from typing import List

from ..domain.models import BlameEntry


class BlameConsumerPort(ABC):
    """Line-oriented consumer turning raw annotate output into blame entries."""

    @abstractmethod
    def consume_line(self, line: str) -> None:
        """Feed one line of output (without its line terminator)."""
        raise NotImplementedError

    @property
    @abstractmethod
    def entries(self) -> List[BlameEntry]:
        """Entries parsed so far, in file order."""
        raise NotImplementedError

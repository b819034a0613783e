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

"""
Rendering of external command lines for logs, errors and results.

Arguments are redacted before they are joined, so a password holding
spaces or quotes never reaches the rendered string.
"""

import re
import shlex
from typing import Iterable, List

PASSWORD_FLAG = "--password="
PASSWORD_MASK = "*********"

_PASSWORD_IN_TEXT = re.compile(r"--password=\S*")


def redact_arguments(args: Iterable[str]) -> List[str]:
    """Replace the value of every `--password=` argument, keeping the flag."""
    return [
        PASSWORD_FLAG + PASSWORD_MASK if a.startswith(PASSWORD_FLAG) else a
        for a in args
    ]


def to_command_line(argv: Iterable[str]) -> str:
    """Shell-quoted, password-redacted rendering of an argv list."""
    return shlex.join(redact_arguments(argv))


def shadow_password(text: str, secret: str = "") -> str:
    """
    Redact `--password=...` tokens in free text (e.g., captured tool output).
    When `secret` is given, any literal occurrence of it is masked as well.
    """
    text = text or ""
    if secret:
        text = text.replace(secret, PASSWORD_MASK)
    return _PASSWORD_IN_TEXT.sub(PASSWORD_FLAG + PASSWORD_MASK, text)

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
Sources for the Integrity root directory, resolved in a fixed order:

  1. INTEGRITY_ROOT_DIR  explicit override, canonicalized
  2. WORKSPACE           CI workspace root (Jenkins and friends), used as-is
  3. the current working directory

A variable set to the empty string still counts as present.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

ROOT_DIR_ENV = "INTEGRITY_ROOT_DIR"
WORKSPACE_ENV = "WORKSPACE"


def canonical_path(path: str | Path, what: str) -> str:
    """Absolute, symlink-free path; filesystem errors become ConfigurationError."""
    try:
        return str(Path(path).resolve())
    except (OSError, RuntimeError) as e:
        logger.error("Cannot get canonical path for %s.", what, exc_info=True)
        raise ConfigurationError(
            f"Cannot get canonical path for {what}: {e}"
        ) from e


@dataclass(frozen=True)
class RootDirectoryConfig:
    root_dir_override: Optional[str] = None
    workspace_dir: Optional[str] = None
    cwd: Optional[str] = None

    @classmethod
    def from_environ(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> RootDirectoryConfig:
        env = os.environ if environ is None else environ
        return cls(
            root_dir_override=env.get(ROOT_DIR_ENV),
            workspace_dir=env.get(WORKSPACE_ENV),
            cwd=os.getcwd(),
        )

    def root_directory(self) -> str:
        if self.root_dir_override is not None:
            logger.debug(
                "The integrity root directory override provided value is: '%s'",
                self.root_dir_override,
            )
            return canonical_path(
                self.root_dir_override, "integrity root directory"
            )
        if self.workspace_dir is not None:
            logger.debug(
                "The workspace directory provided value is: '%s'", self.workspace_dir
            )
            return self.workspace_dir
        logger.debug("No integrity root directory provided; using working directory.")
        return self.cwd if self.cwd is not None else os.getcwd()

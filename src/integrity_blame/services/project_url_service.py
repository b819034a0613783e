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

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..config import RootDirectoryConfig, canonical_path
from ..domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _unix_separators(path: str) -> str:
    return path.replace("\\", "/")


class ProjectUrlService:
    """
    Derives the Integrity project identifier for a working directory that has
    no local `project.pj`: the configured project path followed by the
    directory's location relative to the Integrity root directory.

    Example:
      root `/ws`, config path `proj/cfg`, base `/ws/sub/dir` -> `proj/cfg/sub/dir`
    """

    def __init__(self, config: RootDirectoryConfig) -> None:
        self._config = config

    def resolve_project_url(
        self, base_directory: str | Path, config_path: Optional[str] = None
    ) -> str:
        project_config_path = config_path or ""
        if project_config_path.endswith("/"):
            project_config_path = project_config_path[:-1]

        root_dir = self._config.root_directory()
        base_dir = canonical_path(base_directory, "base directory")
        logger.debug(
            "The project config path '%s', current scm base dir '%s' and "
            "Integrity root directory '%s'.",
            project_config_path,
            base_dir,
            root_dir,
        )

        root_dir = _unix_separators(root_dir)
        base_dir = _unix_separators(base_dir)
        if not base_dir.lower().startswith(root_dir.lower()):
            raise ConfigurationError(
                f"The Integrity root directory '{root_dir}' isn't correctly identified."
            )

        relative_dir = base_dir[len(root_dir):]
        if not relative_dir.startswith("/"):
            relative_dir = "/" + relative_dir
        logger.debug("The project relative dir: %s", relative_dir)
        return project_config_path + relative_dir

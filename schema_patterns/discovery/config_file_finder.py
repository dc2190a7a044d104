# Copyright 2026 TIER IV, inc.
#
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

"""Config file lookup inside discovered config directories."""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .patterns import PatternLike, compile_pattern
from ..exceptions import UnreadableEntryError
from ..report import ResolutionResult

logger = logging.getLogger(__name__)


class ConfigFileFinder:
    """Finds readable config files directly inside each config directory."""

    def find(
        self,
        dirs: Iterable[Union[str, Path]],
        file_name_pattern: PatternLike,
        result: Optional[ResolutionResult] = None,
    ) -> List[Path]:
        """Return files whose full path matches ``file_name_pattern``.

        Directories are processed in the given order and their matches
        concatenated. Subdirectories are not searched.
        """
        pattern = compile_pattern(file_name_pattern, "config_file_pattern")
        files: List[Path] = []

        for directory in dirs:
            directory = os.fspath(directory)
            try:
                with os.scandir(directory) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as exc:
                self._skip(UnreadableEntryError(directory, exc.strerror or str(exc)), result)
                continue

            for entry in entries:
                if not pattern.search(entry.path):
                    continue
                # is_file() follows symlinks, so a link to a regular file counts
                try:
                    is_file = entry.is_file()
                except OSError as exc:
                    self._skip(UnreadableEntryError(entry.path, exc.strerror or str(exc)), result)
                    continue
                if not is_file:
                    continue
                if not os.access(entry.path, os.R_OK):
                    self._skip(UnreadableEntryError(entry.path, "permission denied"), result)
                    continue
                logger.debug(f"Found config file: {entry.path}")
                files.append(Path(entry.path))

        return files

    @staticmethod
    def _skip(error: UnreadableEntryError, result: Optional[ResolutionResult]) -> None:
        logger.warning(f"Skipping unreadable entry: {error}")
        if result is not None:
            result.record(error)

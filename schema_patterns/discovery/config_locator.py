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

"""Upward search for config directories along the ancestor chain."""

import logging
import os
from pathlib import Path
from typing import List, Optional, Set, Union

from .patterns import PatternLike, compile_pattern
from ..exceptions import InvalidStartError, UnreadableEntryError
from ..report import ResolutionResult

logger = logging.getLogger(__name__)


class ConfigLocator:
    """Collects config directories from every level between a start directory and the root."""

    def locate(
        self,
        start_dir: Union[str, Path],
        dir_name_pattern: PatternLike,
        result: Optional[ResolutionResult] = None,
    ) -> List[Path]:
        """Find directories matching ``dir_name_pattern`` among the children of each ancestor.

        The walk inspects only the direct children of ``start_dir``, then of its
        parent, and so on up to the filesystem root. Parents are computed
        lexically, so symlinked start directories are not resolved.

        Args:
            start_dir: Directory the walk starts from
            dir_name_pattern: Regex searched in each child's full path
            result: Optional result collecting unreadable entries

        Returns:
            Matching directories, nearest level first

        Raises:
            InvalidStartError: If ``start_dir`` is missing, not a directory or unreadable
        """
        pattern = compile_pattern(dir_name_pattern, "config_dir_pattern")
        start = os.path.abspath(os.fspath(start_dir))

        if not os.path.exists(start):
            raise InvalidStartError(f"Start directory does not exist: {start}")
        if not os.path.isdir(start):
            raise InvalidStartError(f"Start path is not a directory: {start}")

        found: List[Path] = []
        visited: Set[str] = set()
        current = start

        while current not in visited:
            visited.add(current)

            try:
                with os.scandir(current) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as exc:
                if current == start:
                    raise InvalidStartError(f"Start directory is not readable: {start} ({exc.strerror})")
                # Parent is unreadable; nothing above it can be reached either
                self._skip(UnreadableEntryError(current, exc.strerror or str(exc)), result)
                break

            for entry in entries:
                if not pattern.search(entry.path):
                    continue
                try:
                    is_dir = entry.is_dir()
                except OSError as exc:
                    self._skip(UnreadableEntryError(entry.path, exc.strerror or str(exc)), result)
                    continue
                if is_dir:
                    logger.debug(f"Found config directory: {entry.path}")
                    found.append(Path(entry.path))

            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent

        return found

    @staticmethod
    def _skip(error: UnreadableEntryError, result: Optional[ResolutionResult]) -> None:
        logger.warning(f"Skipping unreadable entry: {error}")
        if result is not None:
            result.record(error)

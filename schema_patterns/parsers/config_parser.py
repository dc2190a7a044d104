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

"""Parse config files into pattern/schema associations."""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..config import DEFAULT_MARKER
from ..exceptions import MalformedConfigError
from ..models.association import PatternAssociation
from ..report import ResolutionResult
from ..utils.source_location import source_from_node
from .sexp_reader import SExpressionError, SList, read_sexp

logger = logging.getLogger(__name__)


class ConfigParser:
    """Reads ``(schema-patterns ("<regex>" "<schema>") ...)`` config files."""

    def __init__(self, marker: str = DEFAULT_MARKER, strict_mode: bool = False):
        """Initialize the parser.

        Args:
            marker: Tag expected as the first element of the top-level list
            strict_mode: Reject files without the marker instead of skipping them
        """
        self.marker = marker
        self.strict_mode = strict_mode

    def parse(self, file_path: Union[str, Path]) -> List[PatternAssociation]:
        """Parse one config file.

        Returns:
            Associations in file order; empty if the file is not tagged with the marker

        Raises:
            MalformedConfigError: If the file cannot be read or parsed, or an entry is invalid
        """
        path = Path(file_path)
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedConfigError(f"Config file is not valid UTF-8: {exc}", path)
        except OSError as exc:
            raise MalformedConfigError(f"Failed to read config file: {exc.strerror or exc}", path)

        return self.parse_string(content, path)

    def parse_string(self, content: str,
                     file_path: Optional[Union[str, Path]] = None) -> List[PatternAssociation]:
        """Parse config content; ``file_path`` is only used for error locations."""
        try:
            data = read_sexp(content)
        except SExpressionError as exc:
            raise MalformedConfigError(exc.message, file_path, exc.line, exc.column)

        if not self._is_tagged(data):
            if self.strict_mode:
                raise MalformedConfigError(
                    f"Top-level expression is not a '{self.marker}' list",
                    file_path,
                    getattr(data, "line", None),
                    getattr(data, "column", None),
                )
            logger.info(f"No '{self.marker}' list in {file_path or '<string>'}; ignoring it")
            return []

        associations: List[PatternAssociation] = []
        for index, entry in enumerate(data[1:]):
            associations.append(self._parse_entry(entry, index, data, file_path))

        logger.debug(f"Parsed {len(associations)} associations from {file_path or '<string>'}")
        return associations

    def parse_many(self, file_paths: Iterable[Union[str, Path]],
                   result: Optional[ResolutionResult] = None) -> List[PatternAssociation]:
        """Parse several files, skipping the ones that fail.

        Each failure is logged and recorded on ``result``; the remaining files
        are still parsed.
        """
        associations: List[PatternAssociation] = []
        for file_path in file_paths:
            try:
                associations.extend(self.parse(file_path))
            except MalformedConfigError as exc:
                logger.warning(f"Skipping malformed config file: {exc}")
                if result is not None:
                    result.record(exc)
        return associations

    def _is_tagged(self, data) -> bool:
        return isinstance(data, SList) and len(data) > 0 and data[0] == self.marker

    @staticmethod
    def _parse_entry(entry, index: int, parent: SList,
                     file_path: Optional[Union[str, Path]]) -> PatternAssociation:
        line = getattr(entry, "line", None) or parent.line
        column = getattr(entry, "column", None) or parent.column

        if not isinstance(entry, SList):
            raise MalformedConfigError(
                f"Association {index + 1} must be a list of (pattern schema-path), got {entry!r}",
                file_path, line, column,
            )
        if len(entry) != 2:
            raise MalformedConfigError(
                f"Association {index + 1} must have exactly two elements, got {len(entry)}",
                file_path, line, column,
            )

        pattern, schema_path = entry
        if not isinstance(pattern, str) or not isinstance(schema_path, str):
            raise MalformedConfigError(
                f"Association {index + 1} must contain two strings",
                file_path, line, column,
            )

        try:
            return PatternAssociation.from_strings(
                pattern, schema_path, source_from_node(file_path, entry, index)
            )
        except re.error as exc:
            raise MalformedConfigError(
                f"Invalid regular expression '{pattern}' in association {index + 1}: {exc}",
                file_path, line, column,
            )

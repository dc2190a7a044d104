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

"""Pattern/schema associations read from config files."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Pattern

from ..utils.source_location import SourceLocation, format_source


@dataclass(frozen=True)
class PatternAssociation:
    """A filename pattern paired with the schema that validates matching documents."""
    pattern: Pattern[str]
    schema_path: str
    source: SourceLocation = field(default_factory=SourceLocation, compare=False)

    @classmethod
    def from_strings(cls, pattern: str, schema_path: str,
                     source: SourceLocation = None) -> "PatternAssociation":
        """Compile ``pattern`` and build an association. Raises ``re.error`` on a bad pattern."""
        return cls(re.compile(pattern), schema_path, source or SourceLocation())

    def matches(self, document_path: str, match_basename: bool = False) -> bool:
        """Search the pattern in the document path, falling back to its basename."""
        if self.pattern.search(document_path):
            return True
        if match_basename:
            basename = os.path.basename(document_path)
            return basename != document_path and bool(self.pattern.search(basename))
        return False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "pattern": self.pattern.pattern,
            "schema": self.schema_path,
        }
        location = format_source(self.source)
        if location:
            data["source"] = location
        return data

    def __str__(self) -> str:
        location = format_source(self.source)
        suffix = f" ({location})" if location else ""
        return f"{self.pattern.pattern!r} -> {self.schema_path}{suffix}"

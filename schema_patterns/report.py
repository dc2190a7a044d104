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

"""Per-document resolution results."""

from pathlib import Path
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .exceptions import MalformedConfigError, SchemaPatternsError, UnreadableEntryError
from .models.association import PatternAssociation

if TYPE_CHECKING:
    from .dispatch.validator import ValidationOutcome


class ResolutionResult:
    """Container for everything found while resolving schemas for one document."""

    def __init__(self, document_path: Path):
        """Initialize resolution result.

        Args:
            document_path: Absolute path of the document being resolved
        """
        self.document_path = document_path
        self.config_dirs: List[Path] = []
        self.config_files: List[Path] = []
        self.associations: List[PatternAssociation] = []
        self.schema_paths: List[str] = []
        self.outcomes: List["ValidationOutcome"] = []
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []

    def add_error(
        self,
        message: str,
        file_path: Optional[Path] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        """Add an error message.

        Args:
            message: Error message
            file_path: Optional config file or directory the error belongs to
            line: Optional line number where error occurred
            column: Optional column number where error occurred
        """
        self.errors.append(self._entry(message, file_path, line, column))

    def add_warning(
        self,
        message: str,
        file_path: Optional[Path] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        """Add a warning message."""
        self.warnings.append(self._entry(message, file_path, line, column))

    def record(self, error: SchemaPatternsError):
        """Record a collected per-entry failure as an error or warning."""
        if isinstance(error, MalformedConfigError):
            self.add_error(error.message, error.file_path, error.line, error.column)
        elif isinstance(error, UnreadableEntryError):
            self.add_warning(f"Unreadable entry: {error.reason or 'unknown error'}", error.path)
        else:
            self.add_error(str(error))

    @property
    def failed_validations(self) -> List["ValidationOutcome"]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def ok(self) -> bool:
        return not self.errors and not self.failed_validations

    def to_dict(self) -> Dict[str, Any]:
        return {
            'document': str(self.document_path),
            'config_files': [str(p) for p in self.config_files],
            'associations': [a.to_dict() for a in self.associations],
            'schemas': list(self.schema_paths),
            'validations': [o.to_dict() for o in self.outcomes],
            'errors': self.errors,
            'warnings': self.warnings,
        }

    @staticmethod
    def _entry(message, file_path, line, column) -> Dict[str, Any]:
        entry: Dict[str, Any] = {'message': message}
        if file_path is not None:
            entry['file'] = str(file_path)
        if line is not None:
            entry['line'] = line
        if column is not None:
            entry['column'] = column
        return entry

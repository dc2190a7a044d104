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

"""Custom exceptions for schema association resolution."""

from pathlib import Path
from typing import Optional, Union


class SchemaPatternsError(Exception):
    """Base exception for schema-pattern resolution errors."""
    pass


class InvalidStartError(SchemaPatternsError):
    """Exception raised when the resolution starting point is not a readable directory."""
    pass


class MalformedConfigError(SchemaPatternsError):
    """Exception raised when a config file cannot be turned into associations."""

    def __init__(
        self,
        message: str,
        file_path: Optional[Union[str, Path]] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.file_path = Path(file_path) if file_path is not None else None
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.file_path is None:
            return self.message
        if self.line is not None and self.column is not None:
            return f"{self.file_path}:{self.line}:{self.column}: {self.message}"
        if self.line is not None:
            return f"{self.file_path}:{self.line}: {self.message}"
        return f"{self.file_path}: {self.message}"


class UnreadableEntryError(SchemaPatternsError):
    """Exception raised for a filesystem entry that cannot be read mid-walk."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot read {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ValidatorUnavailableError(SchemaPatternsError):
    """Exception raised when the external validator cannot be invoked."""
    pass


class SettingsError(SchemaPatternsError):
    """Exception raised for unreadable or invalid settings."""
    pass

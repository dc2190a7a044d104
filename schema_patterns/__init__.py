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

"""Resolve which JSON Schemas apply to a document from nearby pattern files."""

from pathlib import Path
from typing import List, Optional, Union

from .config import ResolverConfig
from .exceptions import (
    InvalidStartError,
    MalformedConfigError,
    SchemaPatternsError,
    SettingsError,
    UnreadableEntryError,
    ValidatorUnavailableError,
)
from .pipeline import SchemaResolver
from .report import ResolutionResult

__version__ = "0.1.0"

__all__ = [
    'InvalidStartError',
    'MalformedConfigError',
    'ResolutionResult',
    'ResolverConfig',
    'SchemaPatternsError',
    'SchemaResolver',
    'SettingsError',
    'UnreadableEntryError',
    'ValidatorUnavailableError',
    'resolve_schemas',
]


def resolve_schemas(document_path: Union[str, Path],
                    config: Optional[ResolverConfig] = None) -> List[str]:
    """Return the schema paths associated with a document.

    Args:
        document_path: Document to resolve
        config: Settings; defaults when omitted

    Returns:
        Schema paths in association order, duplicates included
    """
    return SchemaResolver(config).resolve(document_path).schema_paths

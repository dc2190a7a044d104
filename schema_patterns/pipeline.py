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

"""Resolve the schemas that apply to a document and hand them to a validator."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .config import ResolverConfig
from .discovery import ConfigFileFinder, ConfigLocator, compile_pattern
from .dispatch import Trigger, ValidationDispatcher
from .parsers import ConfigParser
from .report import ResolutionResult
from .resolvers import PatternResolver

logger = logging.getLogger(__name__)


class SchemaResolver:
    """Runs locate -> find -> parse -> resolve for one document at a time.

    Nothing is kept between calls: every call walks the filesystem and reads
    the config files again, so edits to a config file apply immediately.
    """

    def __init__(self, config: Optional[ResolverConfig] = None):
        self.config = config if config is not None else ResolverConfig()
        self.dir_pattern = compile_pattern(self.config.config_dir_pattern, "config_dir_pattern")
        self.file_pattern = compile_pattern(self.config.config_file_pattern, "config_file_pattern")
        self.locator = ConfigLocator()
        self.file_finder = ConfigFileFinder()
        self.config_parser = ConfigParser(marker=self.config.marker, strict_mode=self.config.strict_mode)
        self.pattern_resolver = PatternResolver(match_basename=self.config.match_basename)

    def resolve(self, document_path: Union[str, Path]) -> ResolutionResult:
        """Resolve the schemas for a document.

        Problems with individual config files are recorded on the result and
        never abort the call.

        Raises:
            InvalidStartError: If the document's directory is not a readable directory
        """
        document = Path(os.path.abspath(os.fspath(document_path)))
        result = ResolutionResult(document)

        # 1. config directories along the ancestor chain
        result.config_dirs = self.locator.locate(document.parent, self.dir_pattern, result)

        # 2. config files inside them
        result.config_files = self.file_finder.find(result.config_dirs, self.file_pattern, result)

        # 3. associations from every file that parses
        result.associations = self.config_parser.parse_many(result.config_files, result)

        # 4. schemas whose pattern matches the document
        result.schema_paths = self.pattern_resolver.resolve(str(document), result.associations)

        logger.info(
            f"{document}: {len(result.schema_paths)} schema(s) from "
            f"{len(result.associations)} association(s) in {len(result.config_files)} config file(s)"
        )
        return result

    def validate(
        self,
        document_path: Union[str, Path],
        dispatcher: ValidationDispatcher,
        trigger: str = Trigger.MANUAL,
    ) -> ResolutionResult:
        """Resolve the schemas for a document and dispatch one validation per schema."""
        result = self.resolve(document_path)
        result.outcomes = dispatcher.dispatch(result.document_path, result.schema_paths, trigger)
        return result

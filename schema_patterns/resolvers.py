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

"""Match documents against pattern associations."""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Union

from .models.association import PatternAssociation

logger = logging.getLogger(__name__)


class PatternResolver:
    """Selects the schemas whose association pattern matches a document path."""

    def __init__(self, match_basename: bool = True):
        """Initialize the resolver.

        Args:
            match_basename: Also try patterns that miss the full path against the file name
        """
        self.match_basename = match_basename

    def resolve(self, document_path: Union[str, Path],
                associations: Iterable[PatternAssociation]) -> List[str]:
        """Return the schema path of every matching association, in order.

        Duplicates are kept and every association is tested; an empty list
        means no schema applies to the document.
        """
        path = os.fspath(document_path)
        schema_paths: List[str] = []

        for association in associations:
            if association.matches(path, self.match_basename):
                logger.debug(f"{path} matches {association}")
                schema_paths.append(association.schema_path)

        if not schema_paths:
            logger.debug(f"No schema associated with {path}")
        return schema_paths

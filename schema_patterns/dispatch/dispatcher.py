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

"""Issue one validation request per resolved schema."""

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from ..exceptions import SchemaPatternsError
from .session import Trigger, ValidationSession
from .validator import BaseValidator, ValidationOutcome

logger = logging.getLogger(__name__)

OutputSink = Callable[[ValidationOutcome], None]


class ValidationDispatcher:
    """Sends (document, schema) requests to a validator and forwards the reports."""

    def __init__(
        self,
        validator: BaseValidator,
        session: Optional[ValidationSession] = None,
        output: Optional[OutputSink] = None,
    ):
        """Initialize the dispatcher.

        Args:
            validator: Collaborator that performs the actual validation
            session: Session settings; a fresh session with defaults when omitted
            output: Called with every outcome; calls are serialized
        """
        self.validator = validator
        self.session = session if session is not None else ValidationSession()
        self.output = output
        self._output_lock = threading.Lock()

    def dispatch(
        self,
        document_path: Union[str, Path],
        schema_paths: Iterable[str],
        trigger: str = Trigger.MANUAL,
    ) -> List[ValidationOutcome]:
        """Validate the document against each schema, one request per schema.

        A failing request is recorded in its own outcome and does not stop
        the remaining requests.
        """
        schema_paths = list(schema_paths)
        if not schema_paths:
            return []
        if not self.session.should_validate(trigger):
            logger.debug(f"Skipping {trigger} validation of {document_path}: automatic validation is off")
            return []

        document = os.fspath(document_path)
        outcomes: List[ValidationOutcome] = []
        for schema_path in schema_paths:
            outcome = self._request(document, schema_path)
            outcomes.append(outcome)
            self._emit(outcome)
        return outcomes

    def _request(self, document: str, schema_path: str) -> ValidationOutcome:
        try:
            return self.validator.validate(document, schema_path)
        except SchemaPatternsError as exc:
            logger.warning(f"Validation of {document} against {schema_path} failed: {exc}")
            return ValidationOutcome(document, schema_path, error=str(exc))

    def _emit(self, outcome: ValidationOutcome) -> None:
        if self.output is None:
            return
        with self._output_lock:
            self.output(outcome)

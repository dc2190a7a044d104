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

"""Boundary to the external JSON Schema validator."""

import logging
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..config import DEFAULT_VALIDATOR_ARGS, DEFAULT_VALIDATOR_COMMAND, ResolverConfig
from ..exceptions import ValidatorUnavailableError

logger = logging.getLogger(__name__)

SCHEMA_PLACEHOLDER = "{schema}"
DOCUMENT_PLACEHOLDER = "{document}"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of one (document, schema) validation request."""
    document_path: str
    schema_path: str
    returncode: Optional[int] = None
    output: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'document': self.document_path,
            'schema': self.schema_path,
            'returncode': self.returncode,
            'output': self.output,
            'error': self.error,
        }


class BaseValidator(ABC):
    """Abstract validator collaborator."""

    @abstractmethod
    def check_available(self) -> bool:
        """Return True if the validator can be invoked."""
        pass

    @abstractmethod
    def validate(self, document_path: str, schema_path: str) -> ValidationOutcome:
        """Validate one document against one schema.

        Raises:
            ValidatorUnavailableError: If the validator cannot be run at all
        """
        pass


class ExternalValidator(BaseValidator):
    """Runs a validator executable once per request and keeps its output verbatim."""

    def __init__(
        self,
        command: str = DEFAULT_VALIDATOR_COMMAND,
        args: Sequence[str] = DEFAULT_VALIDATOR_ARGS,
        timeout: Optional[float] = None,
    ):
        self.command = command
        self.args = list(args)
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "ExternalValidator":
        return cls(config.validator_command, config.validator_args, config.validator_timeout)

    def build_command(self, document_path: Union[str, Path], schema_path: str) -> List[str]:
        """Expand ``{schema}`` and ``{document}`` in the argument template.

        Without any placeholder the schema and document are appended in that order.
        """
        document = os.fspath(document_path)
        if not any(SCHEMA_PLACEHOLDER in a or DOCUMENT_PLACEHOLDER in a for a in self.args):
            return [self.command, *self.args, schema_path, document]
        return [self.command] + [
            a.replace(SCHEMA_PLACEHOLDER, schema_path).replace(DOCUMENT_PLACEHOLDER, document)
            for a in self.args
        ]

    def check_available(self) -> bool:
        available = shutil.which(self.command) is not None
        if not available:
            logger.info(f"Validator executable not found: {self.command}")
        return available

    def validate(self, document_path: str, schema_path: str) -> ValidationOutcome:
        cmd = self.build_command(document_path, schema_path)
        logger.debug(f"Running validator: {' '.join(cmd)}")

        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError:
            raise ValidatorUnavailableError(f"Validator executable not found: {self.command}")
        except subprocess.TimeoutExpired as exc:
            output = exc.output or ""
            if isinstance(output, bytes):
                output = output.decode("utf-8", errors="replace")
            return ValidationOutcome(
                document_path, schema_path,
                output=output,
                error=f"Validator timed out after {self.timeout} seconds",
            )
        except (OSError, ValueError) as exc:
            # ValueError: arguments subprocess cannot pass, e.g. an embedded NUL
            raise ValidatorUnavailableError(f"Failed to run validator {self.command}: {exc}")

        return ValidationOutcome(document_path, schema_path, proc.returncode, proc.stdout or "")

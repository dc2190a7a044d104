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

"""Per-session validation settings."""

import logging
from dataclasses import dataclass
from typing import Optional

from .validator import BaseValidator

logger = logging.getLogger(__name__)


class Trigger:
    """What asked for a validation run."""
    MANUAL = "manual"
    ON_SAVE = "on-save"

    @classmethod
    def get_all_types(cls):
        return [cls.MANUAL, cls.ON_SAVE]


@dataclass
class ValidationSession:
    """Settings that live as long as one editing or CLI session.

    ``validator_available`` stays ``None`` until :meth:`activate` has checked
    the validator once.
    """
    auto_validate: bool = True
    validator_available: Optional[bool] = None

    def activate(self, validator: BaseValidator) -> "ValidationSession":
        """Check the validator once and turn off automatic validation if it is missing."""
        self.validator_available = validator.check_available()
        if not self.validator_available and self.auto_validate:
            logger.info("Validator is not available; automatic validation disabled for this session")
            self.auto_validate = False
        return self

    def should_validate(self, trigger: str = Trigger.MANUAL) -> bool:
        if trigger == Trigger.MANUAL:
            return True
        if trigger == Trigger.ON_SAVE:
            return self.auto_validate
        raise ValueError(f"Unknown validation trigger: '{trigger}'. Valid triggers: {Trigger.get_all_types()}")

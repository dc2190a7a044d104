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

"""Configuration management for schema association resolution."""

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import jsonschema
import yaml

from .exceptions import SettingsError
from .schema import load_schema
from .utils.logging_utils import configure_split_stream_logging, parse_level

logger = logging.getLogger(__name__)

ENV_PREFIX = "SCHEMA_PATTERNS_"

DEFAULT_CONFIG_DIR_PATTERN = r"(^|[/\\])\.schemas$"
DEFAULT_CONFIG_FILE_PATTERN = r"\.schema-patterns$"
DEFAULT_MARKER = "schema-patterns"
DEFAULT_VALIDATOR_COMMAND = "check-jsonschema"
DEFAULT_VALIDATOR_ARGS = ("--schemafile", "{schema}", "{document}")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_timeout(value: str) -> Optional[float]:
    value = value.strip()
    if not value or value.lower() == "none":
        return None
    return float(value)


@dataclass
class ResolverConfig:
    """Settings for one resolution session."""
    config_dir_pattern: str = DEFAULT_CONFIG_DIR_PATTERN
    config_file_pattern: str = DEFAULT_CONFIG_FILE_PATTERN
    marker: str = DEFAULT_MARKER

    # external validator
    validator_command: str = DEFAULT_VALIDATOR_COMMAND
    validator_args: List[str] = field(default_factory=lambda: list(DEFAULT_VALIDATOR_ARGS))
    validator_timeout: Optional[float] = None

    match_basename: bool = True
    strict_mode: bool = False
    auto_validate: bool = True

    log_level: str = "INFO"
    print_level: str = "WARNING"

    @classmethod
    def from_env(cls, base: Optional["ResolverConfig"] = None,
                 environ: Optional[Mapping[str, str]] = None) -> "ResolverConfig":
        """Create configuration from ``SCHEMA_PATTERNS_*`` environment variables.

        Variables that are not set keep the value from ``base`` (or the defaults).
        """
        environ = os.environ if environ is None else environ
        config = base if base is not None else cls()
        overrides: Dict[str, Any] = {}

        string_keys = ("config_dir_pattern", "config_file_pattern", "marker",
                       "validator_command", "log_level", "print_level")
        bool_keys = ("match_basename", "strict_mode", "auto_validate")

        for key in string_keys:
            value = environ.get(ENV_PREFIX + key.upper())
            if value:
                overrides[key] = value
        for key in bool_keys:
            value = environ.get(ENV_PREFIX + key.upper())
            if value is not None:
                overrides[key] = _parse_bool(value)

        args = environ.get(ENV_PREFIX + "VALIDATOR_ARGS")
        if args:
            overrides["validator_args"] = args.split()

        timeout = environ.get(ENV_PREFIX + "VALIDATOR_TIMEOUT")
        if timeout is not None:
            try:
                overrides["validator_timeout"] = _parse_timeout(timeout)
            except ValueError:
                raise SettingsError(f"Invalid {ENV_PREFIX}VALIDATOR_TIMEOUT value: '{timeout}'")

        return replace(config, **overrides) if overrides else config

    @classmethod
    def from_file(cls, file_path: Union[str, Path],
                  base: Optional["ResolverConfig"] = None) -> "ResolverConfig":
        """Load settings from a YAML file checked against the bundled settings schema."""
        path = Path(file_path)
        if not path.is_file():
            raise SettingsError(f"Settings file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise SettingsError(f"Failed to parse YAML settings file {path}: {exc}")
        except (OSError, UnicodeDecodeError) as exc:
            raise SettingsError(f"Failed to read settings file {path}: {exc}")

        if data is None:
            data = {}

        try:
            jsonschema.validate(instance=data, schema=load_schema("settings"))
        except jsonschema.ValidationError as exc:
            location = "/" + "/".join(str(p) for p in exc.absolute_path) if exc.absolute_path else "/"
            raise SettingsError(f"Invalid settings file {path} at {location}: {exc.message}")

        logger.debug(f"Loaded settings from {path}")
        config = base if base is not None else cls()
        return replace(config, **data)

    @classmethod
    def load(cls, settings_file: Optional[Union[str, Path]] = None,
             environ: Optional[Mapping[str, str]] = None,
             **overrides: Any) -> "ResolverConfig":
        """Build configuration from defaults, a settings file, the environment and overrides.

        Later sources win. ``None`` overrides are ignored so CLI options that were
        not given do not reset earlier values.
        """
        config = cls()
        if settings_file is not None:
            config = cls.from_file(settings_file, base=config)
        config = cls.from_env(base=config, environ=environ)

        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise SettingsError(f"Unknown settings: {sorted(unknown)}")
        explicit = {key: value for key, value in overrides.items() if value is not None}
        return replace(config, **explicit) if explicit else config

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = parse_level(self.log_level, logging.INFO)
        stderr_level = parse_level(self.print_level, logging.WARNING)
        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)
        return logging.getLogger('schema_patterns')

"""Shared pytest fixtures for schema_patterns tests."""

import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from schema_patterns.config import ResolverConfig  # noqa: E402
from schema_patterns.dispatch import BaseValidator, ValidationOutcome  # noqa: E402
from schema_patterns.exceptions import ValidatorUnavailableError  # noqa: E402

# Unusual name so directories elsewhere on the ancestor chain of tmp_path never match.
CONFIG_DIR_NAME = ".schemas-under-test"

PROPERTY_CONFIG = (
    '(schema-patterns\n'
    ' (".*\\\\.schema\\\\.json$" "/usr/share/schema.json")\n'
    ' ("^data\\\\.json$" "/home/user/data.schema.json"))\n'
)


class FakeValidator(BaseValidator):
    """Records requests instead of running a process."""

    def __init__(self, available=True, unavailable_for=(), failing_for=()):
        self.available = available
        self.unavailable_for = set(unavailable_for)
        self.failing_for = set(failing_for)
        self.calls = []
        self.availability_checks = 0

    def check_available(self):
        self.availability_checks += 1
        return self.available

    def validate(self, document_path, schema_path):
        self.calls.append((document_path, schema_path))
        if schema_path in self.unavailable_for:
            raise ValidatorUnavailableError(f"cannot validate against {schema_path}")
        if schema_path in self.failing_for:
            return ValidationOutcome(document_path, schema_path, 1, f"{document_path}: invalid\n")
        return ValidationOutcome(document_path, schema_path, 0, f"{document_path}: ok\n")


@pytest.fixture
def config_dir_name():
    return CONFIG_DIR_NAME


@pytest.fixture
def property_config():
    return PROPERTY_CONFIG


@pytest.fixture
def resolver_config():
    return ResolverConfig(config_dir_pattern=r"[/\\]\.schemas-under-test$")


@pytest.fixture
def write_config():
    """Write a config file into ``<directory>/.schemas-under-test/``."""
    def _write(directory: Path, content: str, name: str = "main.schema-patterns") -> Path:
        config_dir = directory / CONFIG_DIR_NAME
        config_dir.mkdir(parents=True, exist_ok=True)
        path = config_dir / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def fake_validator():
    return FakeValidator()


@pytest.fixture
def make_validator():
    return FakeValidator

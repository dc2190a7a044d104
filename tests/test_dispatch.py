"""Tests for the validation dispatcher, session settings and external validator."""

import subprocess
import sys
from unittest.mock import patch

import pytest

from schema_patterns.config import ResolverConfig
from schema_patterns.dispatch import (
    ExternalValidator,
    Trigger,
    ValidationDispatcher,
    ValidationOutcome,
    ValidationSession,
)
from schema_patterns.exceptions import ValidatorUnavailableError


class TestValidationDispatcher:
    def test_one_request_per_schema_in_order(self, fake_validator):
        dispatcher = ValidationDispatcher(fake_validator)

        outcomes = dispatcher.dispatch("/d.json", ["/a.json", "/b.json", "/a.json"])

        assert fake_validator.calls == [("/d.json", "/a.json"), ("/d.json", "/b.json"), ("/d.json", "/a.json")]
        assert [o.schema_path for o in outcomes] == ["/a.json", "/b.json", "/a.json"]
        assert all(o.ok for o in outcomes)

    def test_empty_schema_set_issues_nothing(self, fake_validator):
        emitted = []
        dispatcher = ValidationDispatcher(fake_validator, output=emitted.append)

        assert dispatcher.dispatch("/d.json", []) == []
        assert fake_validator.calls == []
        assert emitted == []

    def test_failures_do_not_affect_other_requests(self, make_validator):
        validator = make_validator(unavailable_for={"/a.json"}, failing_for={"/b.json"})
        dispatcher = ValidationDispatcher(validator)

        outcomes = dispatcher.dispatch("/d.json", ["/a.json", "/b.json", "/c.json"])

        assert len(validator.calls) == 3
        assert outcomes[0].error == "cannot validate against /a.json"
        assert outcomes[1].returncode == 1 and outcomes[1].error is None
        assert outcomes[2].ok
        assert [o.ok for o in outcomes] == [False, False, True]

    def test_unrunnable_schema_path_does_not_stop_later_requests(self):
        validator = ExternalValidator(sys.executable, ["-c", "pass"])

        outcomes = ValidationDispatcher(validator).dispatch("/d.json", ["/bad\x00.json", "/good.json"])

        assert [o.schema_path for o in outcomes] == ["/bad\x00.json", "/good.json"]
        assert "Failed to run validator" in outcomes[0].error
        assert not outcomes[0].ok
        assert outcomes[1].ok

    def test_output_receives_every_outcome(self, fake_validator):
        emitted = []
        dispatcher = ValidationDispatcher(fake_validator, output=emitted.append)

        outcomes = dispatcher.dispatch("/d.json", ["/a.json", "/b.json"])

        assert emitted == outcomes

    def test_on_save_respects_auto_validate(self, fake_validator):
        session = ValidationSession(auto_validate=False)
        dispatcher = ValidationDispatcher(fake_validator, session)

        assert dispatcher.dispatch("/d.json", ["/a.json"], Trigger.ON_SAVE) == []
        assert len(dispatcher.dispatch("/d.json", ["/a.json"], Trigger.MANUAL)) == 1


class TestValidationSession:
    def test_activate_checks_availability_once(self, fake_validator):
        session = ValidationSession().activate(fake_validator)

        assert fake_validator.availability_checks == 1
        assert session.validator_available is True
        assert session.should_validate(Trigger.ON_SAVE)

    def test_missing_validator_disables_auto_validation(self, make_validator):
        session = ValidationSession().activate(make_validator(available=False))

        assert session.validator_available is False
        assert session.auto_validate is False
        assert not session.should_validate(Trigger.ON_SAVE)
        assert session.should_validate(Trigger.MANUAL)

    def test_unknown_trigger(self):
        with pytest.raises(ValueError, match="Unknown validation trigger"):
            ValidationSession().should_validate("on-idle")

    def test_sessions_do_not_share_state(self, make_validator):
        first = ValidationSession().activate(make_validator(available=False))
        second = ValidationSession()
        assert first.auto_validate is False
        assert second.auto_validate is True


class TestExternalValidator:
    def test_build_command_expands_placeholders(self):
        validator = ExternalValidator("check-jsonschema", ["--schemafile", "{schema}", "{document}"])
        assert validator.build_command("/d.json", "/s.json") == [
            "check-jsonschema", "--schemafile", "/s.json", "/d.json",
        ]

    def test_build_command_appends_without_placeholders(self):
        validator = ExternalValidator("validate", ["--quiet"])
        assert validator.build_command("/d.json", "/s.json") == ["validate", "--quiet", "/s.json", "/d.json"]

    def test_from_config(self):
        config = ResolverConfig(validator_command="ajv", validator_args=["-s", "{schema}", "-d", "{document}"],
                                validator_timeout=5.0)
        validator = ExternalValidator.from_config(config)
        assert validator.command == "ajv"
        assert validator.timeout == 5.0
        assert validator.build_command("/d.json", "/s.json") == ["ajv", "-s", "/s.json", "-d", "/d.json"]

    def test_check_available(self):
        with patch("schema_patterns.dispatch.validator.shutil.which", return_value="/usr/bin/check-jsonschema"):
            assert ExternalValidator().check_available() is True
        with patch("schema_patterns.dispatch.validator.shutil.which", return_value=None):
            assert ExternalValidator().check_available() is False

    def test_validate_returns_output_verbatim(self):
        completed = subprocess.CompletedProcess(args=[], returncode=1, stdout="line 1\nline 2\n")
        with patch("schema_patterns.dispatch.validator.subprocess.run", return_value=completed) as run:
            outcome = ExternalValidator().validate("/d.json", "/s.json")

        assert outcome == ValidationOutcome("/d.json", "/s.json", 1, "line 1\nline 2\n")
        assert not outcome.ok
        assert run.call_args.args[0] == ["check-jsonschema", "--schemafile", "/s.json", "/d.json"]

    def test_missing_executable(self):
        with patch("schema_patterns.dispatch.validator.subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(ValidatorUnavailableError, match="not found"):
                ExternalValidator("no-such-validator").validate("/d.json", "/s.json")

    def test_embedded_null_byte_is_unavailable(self):
        with pytest.raises(ValidatorUnavailableError, match="Failed to run validator"):
            ExternalValidator(sys.executable, ["-c", "pass", "{schema}"]).validate("/d.json", "/s\x00.json")

    def test_timeout_is_reported_in_outcome(self):
        error = subprocess.TimeoutExpired(cmd=["v"], timeout=1.0, output=b"partial")
        with patch("schema_patterns.dispatch.validator.subprocess.run", side_effect=error):
            outcome = ExternalValidator(timeout=1.0).validate("/d.json", "/s.json")

        assert outcome.output == "partial"
        assert "timed out" in outcome.error
        assert not outcome.ok

    @pytest.mark.skipif(sys.platform == "win32", reason="requires a POSIX shell")
    def test_runs_real_process(self, tmp_path):
        script = tmp_path / "validator.sh"
        script.write_text('#!/bin/sh\necho "checked $2 with $1"\nexit 0\n', encoding="utf-8")
        script.chmod(0o755)

        outcome = ExternalValidator(str(script), ["{schema}", "{document}"]).validate("/d.json", "/s.json")

        assert outcome.ok
        assert outcome.output == "checked /d.json with /s.json\n"

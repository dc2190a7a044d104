"""End-to-end tests for resolving and validating documents."""

import pytest

from schema_patterns import resolve_schemas
from schema_patterns.dispatch import Trigger, ValidationDispatcher, ValidationSession
from schema_patterns.exceptions import InvalidStartError
from schema_patterns.pipeline import SchemaResolver


@pytest.fixture
def project(tmp_path, write_config):
    """tmp/.schemas/root.schema-patterns and tmp/app/.schemas/app.schema-patterns."""
    write_config(tmp_path, '(schema-patterns ("\\\\.json$" "/schemas/any.json"))', "root.schema-patterns")
    write_config(
        tmp_path / "app",
        '(schema-patterns ("settings\\\\.json$" "/schemas/settings.json") (".*" "/schemas/any.json"))',
        "app.schema-patterns",
    )
    (tmp_path / "app" / "conf").mkdir(parents=True)
    return tmp_path


class TestSchemaResolver:
    def test_collects_associations_from_all_levels(self, project, resolver_config):
        result = SchemaResolver(resolver_config).resolve(project / "app" / "conf" / "settings.json")

        assert [p.name for p in result.config_files] == ["app.schema-patterns", "root.schema-patterns"]
        assert result.schema_paths == ["/schemas/settings.json", "/schemas/any.json", "/schemas/any.json"]
        assert result.errors == []

    def test_document_need_not_exist(self, project, resolver_config):
        result = SchemaResolver(resolver_config).resolve(project / "app" / "conf" / "missing.yaml")
        assert result.schema_paths == ["/schemas/any.json"]

    def test_no_config_files(self, tmp_path, resolver_config):
        (tmp_path / "lonely").mkdir()
        result = SchemaResolver(resolver_config).resolve(tmp_path / "lonely" / "data.json")

        assert result.config_files == []
        assert result.schema_paths == []
        assert result.ok

    def test_repeated_calls_are_identical(self, project, resolver_config):
        resolver = SchemaResolver(resolver_config)
        document = project / "app" / "conf" / "settings.json"

        first = resolver.resolve(document)
        second = resolver.resolve(document)

        assert first.schema_paths == second.schema_paths
        assert first.to_dict() == second.to_dict()

    def test_config_edits_apply_to_the_next_call(self, project, resolver_config, write_config):
        resolver = SchemaResolver(resolver_config)
        document = project / "app" / "conf" / "settings.json"
        assert "/schemas/new.json" not in resolver.resolve(document).schema_paths

        write_config(project, '(schema-patterns ("settings" "/schemas/new.json"))', "root.schema-patterns")

        assert resolver.resolve(document).schema_paths[-1] == "/schemas/new.json"

    def test_malformed_config_does_not_hide_other_configs(self, project, resolver_config, write_config):
        broken = write_config(project / "app", '(schema-patterns ("x" "/y.json")', "app.schema-patterns")

        result = SchemaResolver(resolver_config).resolve(project / "app" / "conf" / "settings.json")

        assert result.schema_paths == ["/schemas/any.json"]
        assert len(result.errors) == 1
        assert result.errors[0]["file"] == str(broken)
        assert not result.ok

    def test_deeply_nested_config_is_reported_and_skipped(self, project, resolver_config, write_config):
        deep = write_config(project / "app", "(" * 5000 + ")" * 5000, "deep.schema-patterns")

        result = SchemaResolver(resolver_config).resolve(project / "app" / "conf" / "settings.json")

        assert result.schema_paths == ["/schemas/settings.json", "/schemas/any.json", "/schemas/any.json"]
        assert len(result.errors) == 1
        assert result.errors[0]["file"] == str(deep)
        assert "Nesting too deep" in result.errors[0]["message"]

    def test_unrelated_config_file_is_skipped_silently(self, project, resolver_config, write_config):
        write_config(project / "app", "(some-other-tool (x y))", "zz-other.schema-patterns")

        result = SchemaResolver(resolver_config).resolve(project / "app" / "conf" / "settings.json")

        assert len(result.config_files) == 3
        assert result.errors == []
        assert len(result.schema_paths) == 3

    def test_strict_mode_reports_unrelated_config_file(self, project, resolver_config, write_config):
        write_config(project / "app", "(some-other-tool (x y))", "zz-other.schema-patterns")
        resolver_config.strict_mode = True

        result = SchemaResolver(resolver_config).resolve(project / "app" / "conf" / "settings.json")

        assert len(result.errors) == 1
        assert len(result.schema_paths) == 3

    def test_nonexistent_start_directory(self, tmp_path, resolver_config):
        with pytest.raises(InvalidStartError):
            SchemaResolver(resolver_config).resolve(tmp_path / "missing" / "data.json")

    def test_resolve_schemas_helper(self, project, resolver_config):
        document = project / "app" / "conf" / "settings.json"
        assert resolve_schemas(document, resolver_config)[0] == "/schemas/settings.json"


class TestValidate:
    def test_dispatches_one_request_per_schema(self, project, resolver_config, fake_validator):
        document = project / "app" / "conf" / "settings.json"

        result = SchemaResolver(resolver_config).validate(document, ValidationDispatcher(fake_validator))

        assert [schema for _, schema in fake_validator.calls] == result.schema_paths
        assert all(doc == str(document) for doc, _ in fake_validator.calls)
        assert len(result.outcomes) == 3
        assert result.ok

    def test_no_match_issues_no_request(self, tmp_path, resolver_config, write_config, fake_validator):
        write_config(tmp_path, '(schema-patterns ("\\\\.yaml$" "/schemas/yaml.json"))')
        (tmp_path / "docs").mkdir()

        result = SchemaResolver(resolver_config).validate(
            tmp_path / "docs" / "data.json", ValidationDispatcher(fake_validator)
        )

        assert result.schema_paths == []
        assert result.outcomes == []
        assert fake_validator.calls == []

    def test_failed_validation_marks_result(self, project, resolver_config, make_validator):
        validator = make_validator(failing_for={"/schemas/settings.json"})
        document = project / "app" / "conf" / "settings.json"

        result = SchemaResolver(resolver_config).validate(document, ValidationDispatcher(validator))

        assert len(result.failed_validations) == 1
        assert not result.ok

    def test_on_save_with_auto_validate_off(self, project, resolver_config, fake_validator):
        dispatcher = ValidationDispatcher(fake_validator, ValidationSession(auto_validate=False))
        document = project / "app" / "conf" / "settings.json"

        result = SchemaResolver(resolver_config).validate(document, dispatcher, Trigger.ON_SAVE)

        assert len(result.schema_paths) == 3
        assert result.outcomes == []
        assert fake_validator.calls == []

#!/usr/bin/env python3
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

"""CLI entry point for resolving and validating documents against associated schemas."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from .config import ResolverConfig
from .dispatch import ExternalValidator, ValidationDispatcher, ValidationOutcome, ValidationSession
from .exceptions import InvalidStartError, SettingsError
from .pipeline import SchemaResolver
from .report import ResolutionResult
from .utils.source_location import SourceLocation, format_source

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='schema-patterns',
        description='Find the JSON Schemas associated with documents and validate them',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'documents',
        nargs='+',
        help='Documents to resolve schemas for',
    )
    parser.add_argument(
        '--settings',
        default=None,
        help='YAML settings file',
    )
    parser.add_argument(
        '--config-dir-pattern',
        default=None,
        help='Regex matched against config directory paths',
    )
    parser.add_argument(
        '--config-file-pattern',
        default=None,
        help='Regex matched against config file paths',
    )
    parser.add_argument(
        '--validator-command',
        default=None,
        help='External validator executable',
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        default=None,
        help='Report config files without the association marker as errors',
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='Only list config files, associations and resolved schemas',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging',
    )
    return parser


def _log_level(args) -> str | None:
    if args.verbose:
        return 'DEBUG'
    # keep stdout machine-readable
    if args.format != 'human':
        return 'WARNING'
    return None


def _print_outcome(outcome: ValidationOutcome) -> None:
    status = "ok" if outcome.ok else "FAILED"
    print(f"== {outcome.document_path} against {outcome.schema_path}: {status}")
    if outcome.output:
        print(outcome.output.rstrip("\n"))
    if outcome.error:
        print(f"  ERROR: {outcome.error}")


def _format_location(entry: dict) -> str:
    if 'file' not in entry:
        return ""
    loc = SourceLocation(Path(entry['file']), entry.get('line'), entry.get('column'))
    return f"{format_source(loc)}: "


def _print_human(result: ResolutionResult, list_only: bool) -> None:
    if list_only:
        print(f"\n{result.document_path}:")
        for config_file in result.config_files:
            print(f"  config: {config_file}")
        for association in result.associations:
            print(f"  association: {association}")
        if result.schema_paths:
            for schema_path in result.schema_paths:
                print(f"  schema: {schema_path}")
        else:
            print("  no schema applies")

    if result.errors or result.warnings:
        print(f"\n{result.document_path}:")
        for error in result.errors:
            print(f"  ERROR: {_format_location(error)}{error['message']}")
        for warning in result.warnings:
            print(f"  WARNING: {_format_location(warning)}{warning['message']}")


def _print_github_actions(result: ResolutionResult) -> None:
    for error in result.errors:
        file_path = error.get('file', result.document_path)
        print(f"::error file={file_path},line={error.get('line', 1)}::{error['message']}")
    for warning in result.warnings:
        file_path = warning.get('file', result.document_path)
        print(f"::warning file={file_path},line={warning.get('line', 1)}::{warning['message']}")
    for outcome in result.failed_validations:
        message = outcome.error or (outcome.output.strip().replace("\n", "%0A") or "validation failed")
        print(f"::error file={result.document_path},line=1::{outcome.schema_path}: {message}")


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the schema-patterns CLI."""
    args = _build_parser().parse_args(argv)

    try:
        config = ResolverConfig.load(
            settings_file=args.settings,
            config_dir_pattern=args.config_dir_pattern,
            config_file_pattern=args.config_file_pattern,
            validator_command=args.validator_command,
            strict_mode=args.strict,
            log_level=_log_level(args),
        )
        resolver = SchemaResolver(config)
    except SettingsError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    config.set_logging()

    validator = ExternalValidator.from_config(config)
    session = ValidationSession(auto_validate=config.auto_validate)
    output = _print_outcome if args.format == 'human' and not args.list else None
    dispatcher = ValidationDispatcher(validator, session, output=output)

    if not args.list:
        session.activate(validator)
        if not session.validator_available:
            logger.warning(f"Validator '{config.validator_command}' not found; validation requests will fail")

    results: List[ResolutionResult] = []
    invalid_starts: List[str] = []
    for document in args.documents:
        try:
            if args.list:
                results.append(resolver.resolve(document))
            else:
                results.append(resolver.validate(document, dispatcher))
        except InvalidStartError as e:
            logger.error(f"{document}: {e}")
            invalid_starts.append(document)

    if args.format == 'json':
        output_data = {
            'documents': len(results),
            'invalid': invalid_starts,
            'errors': sum(len(r.errors) for r in results),
            'warnings': sum(len(r.warnings) for r in results),
            'failed_validations': sum(len(r.failed_validations) for r in results),
            'results': [r.to_dict() for r in results],
        }
        print(json.dumps(output_data, indent=2))
    elif args.format == 'github-actions':
        for result in results:
            _print_github_actions(result)
    else:  # human-readable
        for result in results:
            _print_human(result, args.list)

    # Exit with error code if anything went wrong
    if invalid_starts or any(not r.ok for r in results):
        sys.exit(1)
    sys.exit(0)


if __name__ == '__main__':
    main()

#!/usr/bin/env python3
"""
Validate all package schema fixtures.

Fixtures in tests/fixtures/ must pass the metaschema and import cleanly;
fixtures in tests/fixtures/invalid/ must be rejected by one of the two.
"""

import sys
from pathlib import Path
from typing import List, Tuple

from schema_templates.cli import TemplatesCLI
from schema_templates.core.errors import CoreError
from schema_templates.schema import import_spec, validate_document

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"


def get_fixtures_to_validate(fixtures_dir: Path = FIXTURES_DIR) -> List[Tuple[Path, bool]]:
    """Get list of (fixture_path, expected_valid) tuples for validation."""
    if not fixtures_dir.exists():
        return []

    fixtures = [(p, True) for p in sorted(fixtures_dir.glob("*.json"))]
    invalid_dir = fixtures_dir / "invalid"
    if invalid_dir.exists():
        fixtures.extend((p, False) for p in sorted(invalid_dir.glob("*.json")))
    return fixtures


def check_fixture(fixture_path: Path) -> List[str]:
    """Return the problems found in a fixture; empty when it imports cleanly."""
    cli = TemplatesCLI("validate-fixtures")
    try:
        document = cli.load_spec(str(fixture_path))
    except CoreError as e:
        return [e.message]

    is_valid, errors = validate_document(document)
    if not is_valid:
        return errors

    try:
        import_spec(document, validate=False)
    except CoreError as e:
        return list(e.context.get("diagnostics", [])) or [e.message]
    return []


def validate_fixtures(fixtures_dir: Path = FIXTURES_DIR) -> int:
    """Validate all fixtures and return exit code."""
    fixtures = get_fixtures_to_validate(fixtures_dir)

    if not fixtures:
        print("No fixtures found to validate")
        return 0

    results = []

    print(f"Validating {len(fixtures)} schema fixtures...\n")

    for fixture_path, expected_valid in fixtures:
        print(f"Validating {fixture_path.name} (expect {'valid' if expected_valid else 'invalid'})...")
        problems = check_fixture(fixture_path)

        if expected_valid and not problems:
            print("  OK: imports cleanly")
            results.append(True)
        elif not expected_valid and problems:
            print(f"  OK: rejected ({len(problems)} problem(s))")
            results.append(True)
        elif expected_valid:
            print("  FAILED:")
            for problem in problems:
                print(f"    - {problem}")
            results.append(False)
        else:
            print("  FAILED: fixture was expected to be rejected but imported cleanly")
            results.append(False)

        print()

    passed = sum(results)
    total = len(results)
    failed = total - passed

    print("=" * 50)
    print("FIXTURE VALIDATION RESULTS")
    print("=" * 50)
    print(f"Passed: {passed}")
    print(f"Failed: {failed}")
    print(f"Total:  {total}")

    if failed == 0:
        print("\nAll fixtures behave as expected")
        return 0
    print(f"\n{failed} fixture(s) failed validation")
    return 1


if __name__ == "__main__":
    sys.exit(validate_fixtures())

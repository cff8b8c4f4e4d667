"""Tests for the layering import checker."""

import ast
from pathlib import Path

from scripts.check_imports import ImportViolationChecker, check_layer_imports


def _violations(source: str, layer: str):
    checker = ImportViolationChecker("test.py", layer)
    checker.visit(ast.parse(source))
    return checker.violations


class TestImportViolationChecker:
    def test_forbidden_absolute_imports(self):
        checker = ImportViolationChecker("test.py", "schema")

        assert checker._is_forbidden_import("schema_templates.templates.generator")
        assert checker._is_forbidden_import("schema_templates.cli")
        assert not checker._is_forbidden_import("schema_templates.core.errors")
        assert not checker._is_forbidden_import("pydantic")
        assert not checker._is_forbidden_import("jsonschema")

    def test_core_may_not_import_schema(self):
        violations = _violations("from ..schema.model import Package", "core")
        assert len(violations) == 1
        assert "Forbidden import: from ..schema.model import Package" in violations[0][1]

    def test_relative_package_import(self):
        violations = _violations("from .. import templates", "schema")
        assert len(violations) == 1

    def test_plain_import(self):
        violations = _violations("import schema_templates.generate", "templates")
        assert violations == [(1, "Forbidden import: import schema_templates.generate")]

    def test_allowed_imports(self):
        source = """
from ..core.errors import GenerationError
from ..schema.model import Package
from .project import build_project
import yaml
"""
        assert _violations(source, "templates") == []

    def test_same_package_relative_import(self):
        assert _violations("from .generate import thing", "core") == []


def test_repository_has_no_violations():
    root = Path(__file__).parent.parent
    assert check_layer_imports(root) == []

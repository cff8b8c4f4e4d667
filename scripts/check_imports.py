#!/usr/bin/env python3
"""
Static analyzer to enforce the layering between sub-packages.

- core/ imports nothing else from schema_templates
- schema/ may import core/ only
- templates/ may not import the CLI or the generate pipeline
"""

import ast
import sys
from pathlib import Path
from typing import Dict, List, Tuple

PACKAGE = "schema_templates"

# Sub-package -> modules it must not import (absolute or relative form)
FORBIDDEN: Dict[str, List[str]] = {
    "core": ["schema", "templates", "cli", "generate", "config"],
    "schema": ["templates", "cli", "generate"],
    "templates": ["cli", "generate"],
}


class ImportViolationChecker(ast.NodeVisitor):
    """AST visitor to check for forbidden imports in one sub-package."""

    def __init__(self, file_path: str, layer: str):
        self.file_path = file_path
        self.layer = layer
        self.violations: List[Tuple[int, str]] = []
        self.forbidden = FORBIDDEN.get(layer, [])

    def _is_forbidden_import(self, module_name: str, level: int = 0) -> bool:
        """Check if a module name resolves to a forbidden sibling."""
        if level == 0:
            if not module_name.startswith(PACKAGE + "."):
                return False
            target = module_name[len(PACKAGE) + 1 :].split(".")[0]
        elif level == 1:
            # Same sub-package
            return False
        else:
            target = module_name.split(".")[0] if module_name else ""
        return target in self.forbidden

    def visit_Import(self, node: ast.Import) -> None:
        for alias in node.names:
            if self._is_forbidden_import(alias.name):
                self.violations.append((node.lineno, f"Forbidden import: import {alias.name}"))
        self.generic_visit(node)

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        module = node.module or ""
        names = ", ".join(alias.name for alias in node.names)
        if node.level >= 2 and not module:
            # from .. import templates
            hits = [a.name for a in node.names if a.name in self.forbidden]
        else:
            hits = [module] if self._is_forbidden_import(module, node.level) else []
        for _ in hits:
            prefix = "." * node.level
            self.violations.append(
                (node.lineno, f"Forbidden import: from {prefix}{module} import {names}")
            )
        self.generic_visit(node)


def check_layer_imports(root_path: Path) -> List[Tuple[str, int, str]]:
    """
    Check every layered sub-package for forbidden imports.

    Returns:
        List of violations as (file_path, line_number, message) tuples
    """
    violations = []
    package_path = root_path / PACKAGE

    for layer in FORBIDDEN:
        layer_path = package_path / layer
        if not layer_path.exists():
            print(f"Warning: {layer_path} does not exist")
            continue

        for py_file in sorted(layer_path.rglob("*.py")):
            try:
                source = py_file.read_text(encoding="utf-8")
                tree = ast.parse(source, filename=str(py_file))
            except SyntaxError as e:
                violations.append((str(py_file), e.lineno or 0, f"Syntax error: {e}"))
                continue

            checker = ImportViolationChecker(str(py_file), layer)
            checker.visit(tree)
            for line_no, message in checker.violations:
                violations.append((str(py_file), line_no, message))

    return violations


def main() -> int:
    root_path = Path(__file__).parent.parent
    violations = check_layer_imports(root_path)

    if not violations:
        print("All layer imports are valid")
        return 0

    print("Cross-layer import violations found:")
    print()
    for file_path, line_no, message in violations:
        rel_path = Path(file_path).relative_to(root_path)
        print(f"  {rel_path}:{line_no} - {message}")
    print()
    print(f"Total violations: {len(violations)}")
    return 1


if __name__ == "__main__":
    sys.exit(main())

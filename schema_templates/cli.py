#!/usr/bin/env python3
"""
CLI for schema-templates.

Reads a provider package schema, generates a project template for every
resource it declares and writes the files under an output directory.
"""

import json
import sys
import argparse
import os
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from .config import get_settings
from .core.errors import CoreError, ErrorCode, SpecLoadError, UsageError, wrap_exception
from .core.logger import get_logger, set_level
from .generate import generate_docs_from_schema

logger = get_logger(__name__)


class TemplatesCLI:
    """CLI for turning a package schema into project templates."""

    def __init__(self, prog: Optional[str] = None):
        self.prog = prog or os.path.basename(sys.argv[0]) or "schema-templates"
        self.settings = get_settings()

    def usage(self) -> str:
        return f"error: usage: {self.prog} <out-dir> <provider-schema-file>"

    def parse_paths(self, paths: List[str]) -> Tuple[str, str]:
        """Return the output directory and schema file. Extra paths are ignored."""
        if len(paths) < 2:
            raise UsageError(self.usage(), context={"args": list(paths)})
        return paths[0], paths[1]

    def load_spec(self, schema_file: str) -> Dict[str, Any]:
        """Read and decode the schema file."""
        try:
            with open(schema_file, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise SpecLoadError(
                "error reading schema file from path", path=schema_file, original_error=e
            ) from e

        try:
            document = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SpecLoadError(
                "error unmarshalling schema into a PackageSpec",
                path=schema_file,
                error_code=ErrorCode.FORMAT_ERROR,
                original_error=e,
            ) from e

        if not isinstance(document, dict):
            raise SpecLoadError(
                f"error unmarshalling schema into a PackageSpec: expected an object, "
                f"got {type(document).__name__}",
                path=schema_file,
                error_code=ErrorCode.FORMAT_ERROR,
            )
        logger.debug("loaded schema file %s (%d bytes)", schema_file, len(raw))
        return document

    def run_generate(self, out_dir: str, schema_file: str) -> int:
        """Run generation and return exit code."""
        try:
            spec = self.load_spec(schema_file)
            count = generate_docs_from_schema(out_dir, spec, self.settings)
        except CoreError as e:
            logger.error("%s", e)
            return 1

        logger.info("generated %d files in %s", count, out_dir)
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate project templates from a provider package schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write templates for every resource in schema.json under ./templates
  %(prog)s ./templates schema.json

Environment:
  SCHEMA_TEMPLATES_GENERATOR_NAME  name written into generated file banners
  SCHEMA_TEMPLATES_LOG_LEVEL       DEBUG, INFO, WARNING or ERROR
  SCHEMA_TEMPLATES_RUNTIME         runtime written into Pulumi.yaml (default: yaml)
        """,
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="<out-dir> <provider-schema-file>")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args(argv)

    try:
        cli = TemplatesCLI(parser.prog)
    except ValidationError as e:
        logger.error("%s", wrap_exception(e, "invalid settings", ErrorCode.USAGE_ERROR))
        return 1

    try:
        out_dir, schema_file = cli.parse_paths(args.paths)
    except UsageError as e:
        print(e.message, file=sys.stderr)
        return 1

    set_level("DEBUG" if args.verbose else cli.settings.log_level)

    return cli.run_generate(out_dir, schema_file)


if __name__ == "__main__":
    sys.exit(main())

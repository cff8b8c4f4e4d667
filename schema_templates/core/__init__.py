"""Core utilities and error handling for schema_templates."""

from .errors import (
    CoreError,
    UsageError,
    SpecLoadError,
    ImportSpecError,
    GenerationError,
    EmitError,
    ErrorCode,
    wrap_exception,
    to_core_error,
)
from .utils import (
    ensure_dir,
    parse_token,
    token_to_module,
    kebab_case,
    camel_case,
)
from .emit import emit_file, emit_files
from .logger import get_logger

__all__ = [
    # Error classes
    "CoreError",
    "UsageError",
    "SpecLoadError",
    "ImportSpecError",
    "GenerationError",
    "EmitError",
    "ErrorCode",
    "wrap_exception",
    "to_core_error",
    # Utility functions
    "ensure_dir",
    "parse_token",
    "token_to_module",
    "kebab_case",
    "camel_case",
    # Emission
    "emit_file",
    "emit_files",
    "get_logger",
]

from __future__ import annotations
import json
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from pydantic import ValidationError as PydanticValidationError


class ErrorCode(str, Enum):
    USAGE_ERROR = "usage_error"
    IO_ERROR = "io_error"
    FORMAT_ERROR = "format_error"
    INVALID_SPEC = "invalid_spec"
    IMPORT_ERROR = "import_error"
    GENERATION_ERROR = "generation_error"
    EMIT_ERROR = "emit_error"
    UNKNOWN_ERROR = "unknown_error"


class CoreError(Exception):
    """Structured error used across the loader, importer, generator and emitter.

    Attributes:
        message: Human-readable message
        error_code: ErrorCode enum value
        context: Optional structured context payload safe to log/serialize
        original_error: Optional wrapped exception
    """

    def __init__(
        self,
        message: str = "",
        error_code: Optional[ErrorCode] = None,
        *,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code if error_code is not None else ErrorCode.UNKNOWN_ERROR
        self.context = context or {}
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "error_code": self.error_code.name,
            "message": self.message,
            "context": self.context,
        }
        if self.original_error is not None:
            data["original_error"] = type(self.original_error).__name__
        return data

    def __str__(self) -> str:
        base = f"[{self.error_code.name}] {self.message}"
        if self.original_error is not None:
            return f"{base} (Original: {self.original_error})"
        return base


class UsageError(CoreError):
    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, ErrorCode.USAGE_ERROR, context=context)


class SpecLoadError(CoreError):
    """Raised when the schema file cannot be read or decoded."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.IO_ERROR,
        original_error: Optional[BaseException] = None,
    ) -> None:
        ctx = {"path": path} if path is not None else {}
        super().__init__(message, error_code, context=ctx, original_error=original_error)


class ImportSpecError(CoreError):
    """Raised by the importer with every diagnostic it collected."""

    def __init__(
        self,
        diagnostics: List[str],
        *,
        package_name: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        self.diagnostics = list(diagnostics)
        ctx: Dict[str, Any] = {"diagnostics": self.diagnostics}
        if package_name:
            ctx["package_name"] = package_name
        message = "; ".join(self.diagnostics) if self.diagnostics else "invalid package spec"
        super().__init__(
            message,
            ErrorCode.INVALID_SPEC,
            context=ctx,
            original_error=original_error,
        )


class GenerationError(CoreError):
    def __init__(
        self,
        message: str,
        *,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.GENERATION_ERROR,
            context=context,
            original_error=original_error,
        )


class EmitError(CoreError):
    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        ctx = {"path": path} if path is not None else {}
        super().__init__(message, ErrorCode.EMIT_ERROR, context=ctx, original_error=original_error)


# Order matters: JSONDecodeError is a ValueError, so it is listed before generic fallbacks.
_EXCEPTION_CODE_MAP: Dict[Type[BaseException], ErrorCode] = {
    json.JSONDecodeError: ErrorCode.FORMAT_ERROR,
    UnicodeDecodeError: ErrorCode.FORMAT_ERROR,
    PydanticValidationError: ErrorCode.INVALID_SPEC,
    OSError: ErrorCode.IO_ERROR,
}


def to_core_error(exc: BaseException) -> CoreError:
    """Convert an arbitrary exception to a CoreError with best-effort code mapping.

    CoreError instances are returned unchanged.
    """
    if isinstance(exc, CoreError):
        return exc
    for etype, code in _EXCEPTION_CODE_MAP.items():
        if isinstance(exc, etype):
            return CoreError(str(exc), code, original_error=exc)
    return CoreError(str(exc), ErrorCode.UNKNOWN_ERROR, original_error=exc)


def wrap_exception(
    exception: BaseException,
    message: str,
    error_code: Optional[ErrorCode] = None,
    context: Optional[Dict[str, Any]] = None,
) -> CoreError:
    """Wrap an exception in a CoreError whose message is prefixed with ``message``.

    When no code is given the wrapped exception's code is kept, so a chain of
    wraps reads like ``emitting file a/b.md: creating directory: ...``.
    """
    inner = to_core_error(exception)
    return CoreError(
        f"{message}: {inner.message}" if inner.message else message,
        error_code or inner.error_code,
        context={**inner.context, **(context or {})},
        original_error=inner.original_error or exception,
    )

from __future__ import annotations
from typing import Any, Mapping, Optional, Union
import os

from .config import TemplateSettings, get_settings
from .core.emit import emit_files
from .core.errors import CoreError, ErrorCode, wrap_exception
from .core.logger import get_logger
from .schema.binder import import_spec
from .schema.spec import PackageSpec
from .templates.generator import generate_package

logger = get_logger(__name__)


def generate_docs_from_schema(
    out_dir: Union[str, os.PathLike],
    spec: Union[PackageSpec, Mapping[str, Any]],
    settings: Optional[TemplateSettings] = None,
) -> int:
    """Import ``spec``, generate its templates and write them under ``out_dir``.

    Returns the number of files written.
    """
    settings = settings or get_settings()

    try:
        package = import_spec(spec)
    except CoreError as e:
        raise wrap_exception(e, "error importing package spec", ErrorCode.IMPORT_ERROR) from e

    try:
        files = generate_package(settings.generator_name, package, settings)
    except CoreError as e:
        raise wrap_exception(e, "generating package", ErrorCode.GENERATION_ERROR) from e

    logger.debug("writing %d files to %s", len(files), out_dir)
    return emit_files(out_dir, files)

from __future__ import annotations
import os
from typing import Mapping, Union

from .errors import EmitError, wrap_exception
from .logger import get_logger
from .utils import ensure_dir

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


def _resolve(out_dir: PathLike, rel_path: str) -> str:
    if os.path.isabs(rel_path):
        raise EmitError(f"refusing to write absolute path {rel_path}", path=rel_path)
    target = os.path.normpath(os.path.join(out_dir, rel_path))
    root = os.path.normpath(os.fspath(out_dir))
    if os.path.commonpath([os.path.abspath(root), os.path.abspath(target)]) != os.path.abspath(
        root
    ):
        raise EmitError(f"refusing to write outside of {root}: {rel_path}", path=rel_path)
    return target


def emit_file(out_dir: PathLike, rel_path: str, contents: bytes) -> str:
    """Write ``contents`` to ``out_dir/rel_path``, creating parent directories.

    An existing file is truncated. Returns the path written.
    """
    target = _resolve(out_dir, rel_path)
    try:
        ensure_dir(os.path.dirname(target) or ".")
    except OSError as e:
        raise EmitError("creating directory", path=rel_path, original_error=e) from e

    try:
        f = open(target, "wb")
    except OSError as e:
        raise EmitError("creating file", path=rel_path, original_error=e) from e

    try:
        f.write(contents)
        # Buffered data must reach the file here, the close below ignores errors
        f.flush()
    except OSError as e:
        raise EmitError("writing file", path=rel_path, original_error=e) from e
    finally:
        try:
            f.close()
        except OSError:
            pass
    return target


def emit_files(out_dir: PathLike, files: Mapping[str, bytes]) -> int:
    """Write every generated file, one at a time, stopping at the first failure.

    Files written before a failure are left on disk. Returns the number of
    files written.
    """
    count = 0
    for rel_path, contents in files.items():
        try:
            written = emit_file(out_dir, rel_path, contents)
        except EmitError as e:
            raise wrap_exception(e, f"emitting file {rel_path}", context={"path": rel_path}) from e
        logger.debug("wrote %s (%d bytes)", written, len(contents))
        count += 1
    return count

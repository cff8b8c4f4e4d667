from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

METASCHEMA_PATH = Path(__file__).parent / "metaschema.json"


@lru_cache(maxsize=1)
def load_metaschema() -> Dict[str, Any]:
    with open(METASCHEMA_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def _format_path(parts) -> str:
    if not parts:
        return "root"
    return " -> ".join(f"[{p}]" if isinstance(p, int) else str(p) for p in parts)


def validate_document(
    document: Any, schema: Optional[Dict[str, Any]] = None
) -> Tuple[bool, List[str]]:
    """Validate a raw package document. Returns (is_valid, error_messages).

    Errors are sorted by location so the output is stable between runs.
    """
    validator = Draft202012Validator(schema if schema is not None else load_metaschema())
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path])
    messages = [f"At '{_format_path(list(e.absolute_path))}': {e.message}" for e in errors]
    return len(messages) == 0, messages


def check_metaschema(schema: Dict[str, Any]) -> bool:
    """Return True if ``schema`` is itself a valid draft 2020-12 schema."""
    try:
        Draft202012Validator.check_schema(schema)
        return True
    except SchemaError:
        return False

"""Core utilities shared by the importer, the generator and the emitter.

This module provides:
- Idempotent directory creation
- Token parsing and module extraction for package tokens
- Name casing helpers used for template paths and resource names
"""

from __future__ import annotations
import os
import re
from typing import Optional, Tuple, Union


DEFAULT_MODULE_FORMAT = "(.*)"
INDEX_MODULE = "index"
PROVIDERS_MODULE = "providers"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def ensure_dir(path: Union[str, os.PathLike]) -> None:
    """Create ``path`` and any missing parents. Existing directories are left as is.

    Raises:
        OSError: if the path exists and is not a directory, or cannot be created.
    """
    os.makedirs(path, exist_ok=True)


def parse_token(token: str) -> Tuple[str, str, str]:
    """Split a ``package:module:Name`` token into its three segments.

    The module segment may be empty; the package and name segments may not.

    Examples:
        >>> parse_token("aws:s3/bucket:Bucket")
        ('aws', 's3/bucket', 'Bucket')
        >>> parse_token("random::RandomId")
        ('random', '', 'RandomId')

    Raises:
        ValueError: if the token does not have exactly three segments.
    """
    if not isinstance(token, str):
        raise ValueError(f"token must be a string, got {type(token).__name__}")
    parts = token.split(":")
    if len(parts) != 3:
        raise ValueError(f"invalid token '{token}': expected 'package:module:name'")
    pkg, module, name = parts
    if not pkg:
        raise ValueError(f"invalid token '{token}': package segment is empty")
    if not name:
        raise ValueError(f"invalid token '{token}': name segment is empty")
    return pkg, module, name


def token_to_module(token: str, module_format: Optional[str] = None) -> str:
    """Return the module a token belongs to, ``index`` for top-level members.

    ``module_format`` is a regular expression applied to the module segment;
    its first group is the module name. Provider tokens always map to ``index``.

    Examples:
        >>> token_to_module("aws:s3/bucket:Bucket", "(.*)(?:/[^/]*)")
        's3'
        >>> token_to_module("random:index/randomId:RandomId", "(.*)(?:/[^/]*)")
        'index'
        >>> token_to_module("pulumi:providers:aws")
        'index'
    """
    _, module, _ = parse_token(token)
    if module == PROVIDERS_MODULE:
        return INDEX_MODULE
    match = re.search(module_format or DEFAULT_MODULE_FORMAT, module)
    if match is None or match.lastindex is None:
        name = module
    else:
        name = match.group(1) or ""
    if not name or name.startswith(INDEX_MODULE):
        return INDEX_MODULE
    return name


def kebab_case(name: str) -> str:
    """Convert a Pascal/camel case name to kebab case.

    Examples:
        >>> kebab_case("BucketObjectV2")
        'bucket-object-v2'
        >>> kebab_case("VPCEndpoint")
        'vpc-endpoint'
    """
    s = _ACRONYM_BOUNDARY.sub(r"\1-\2", name)
    s = _WORD_BOUNDARY.sub(r"\1-\2", s)
    s = _NON_ALNUM.sub("-", s)
    return s.strip("-").lower()


def camel_case(name: str) -> str:
    """Lower the leading capital (or leading acronym) of a name.

    Examples:
        >>> camel_case("Bucket")
        'bucket'
        >>> camel_case("VPCEndpoint")
        'vpcEndpoint'
        >>> camel_case("ID")
        'id'
    """
    cleaned = _NON_ALNUM.sub("", name)
    match = re.match(r"[A-Z]+", cleaned)
    if match is None:
        return cleaned
    run = match.group()
    if len(run) == len(cleaned):
        return cleaned.lower()
    if len(run) > 1 and cleaned[len(run)].islower():
        return run[:-1].lower() + cleaned[len(run) - 1 :]
    if len(run) > 1:
        return run.lower() + cleaned[len(run) :]
    return cleaned[0].lower() + cleaned[1:]

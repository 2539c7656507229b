"""
Naming conventions: record type name -> table name, identity column resolution.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from .types import FieldDescriptor

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[\s\-]+")


def table_name(type_name: str) -> str:
    """
    Normalize a type identifier to the lower-case, underscore-separated table name.

    No pluralization is applied:
        UserAccount -> user_account
        HTTPRequest -> http_request
        Order2Item  -> order2_item
    """
    s = _SEPARATORS.sub("_", type_name.strip())
    s = _ACRONYM_BOUNDARY.sub(r"\1_\2", s)
    s = _WORD_BOUNDARY.sub(r"\1_\2", s)
    s = re.sub(r"_+", "_", s)
    return s.strip("_").lower()


def schema_ident(type_name: str) -> str:
    """Name of the static metadata symbol for a type, e.g. USER_ACCOUNT_SCHEMA."""
    return f"{table_name(type_name).upper()}_SCHEMA"


def resolve_id_field(fields: Sequence[FieldDescriptor]) -> FieldDescriptor:
    """
    Resolve the identity field.

    The annotated field wins; if several are annotated the last one wins.
    Without any annotation the first declared field is the id.
    """
    if not fields:
        raise ValueError("cannot resolve an id field from an empty field list")
    annotated: Optional[FieldDescriptor] = None
    for f in fields:
        if f.is_id_candidate:
            annotated = f
    return annotated if annotated is not None else fields[0]

from __future__ import annotations

from typing import Dict, Union

from crudsql.errors import raise_model_error
from crudsql.types import DatabaseKind
from .base import SQLDialect

_REGISTRY: Dict[DatabaseKind, SQLDialect] = {}

# spelling accepted by the `#[database = "..."]` attribute syntax
_ALIASES: Dict[str, DatabaseKind] = {"Mssql": DatabaseKind.MSSQL}


def register(dialect: SQLDialect) -> None:
    kind = getattr(dialect, "kind", None)
    if not isinstance(kind, DatabaseKind):
        raise ValueError("Dialect must define a DatabaseKind .kind")
    _REGISTRY[kind] = dialect


def parse_kind(tag: Union[str, DatabaseKind]) -> DatabaseKind:
    """
    Resolve a dialect tag ("Any", "MsSql", "MySql", "Postgres", "Sqlite").

    Matching is exact; unknown tags are fatal rather than defaulted.
    """
    if isinstance(tag, DatabaseKind):
        return tag
    if isinstance(tag, str):
        if tag in _ALIASES:
            return _ALIASES[tag]
        for kind in DatabaseKind:
            if kind.value == tag:
                return kind
    raise_model_error(
        "CRUDSQL_UNKNOWN_DIALECT",
        f"unknown database type {tag!r}",
        details={"database": repr(tag), "available": [k.value for k in DatabaseKind]},
        remediation="Use one of: " + ", ".join(k.value for k in DatabaseKind) + ".",
    )


def get(tag: Union[str, DatabaseKind]) -> SQLDialect:
    kind = parse_kind(tag)
    if kind not in _REGISTRY:
        available = ", ".join(sorted(k.value for k in _REGISTRY))
        raise KeyError(f"No dialect registered for '{kind.value}'. Available: {available}")
    return _REGISTRY[kind]


def available() -> Dict[DatabaseKind, SQLDialect]:
    return dict(_REGISTRY)

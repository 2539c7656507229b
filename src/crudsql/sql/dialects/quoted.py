from __future__ import annotations

from crudsql.types import DatabaseKind
from .registry import register


class DoubleQuotedDialect:
    """
    Dialects that quote identifiers with double quotes.

    Embedded quote characters are not escaped; identifiers are expected to be
    simple names.
    """

    paramstyle = "qmark"

    def __init__(self, kind: DatabaseKind, family: str) -> None:
        self.kind = kind
        self.name = kind.value
        self.family = family

    def quote_ident(self, ident: str) -> str:
        return f'"{ident}"'

    def placeholder(self) -> str:
        return "?"

    def __repr__(self) -> str:
        return f"DoubleQuotedDialect({self.name})"


register(DoubleQuotedDialect(DatabaseKind.ANY, "any"))
register(DoubleQuotedDialect(DatabaseKind.MSSQL, "mssql"))
register(DoubleQuotedDialect(DatabaseKind.POSTGRES, "postgres"))
register(DoubleQuotedDialect(DatabaseKind.SQLITE, "sqlite"))

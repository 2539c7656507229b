from __future__ import annotations

from typing import Protocol

from crudsql.types import DatabaseKind


class SQLDialect(Protocol):
    name: str
    kind: DatabaseKind
    family: str      # driver family used by the data-access layer
    paramstyle: str  # "qmark" for every dialect shipped here

    def quote_ident(self, ident: str) -> str: ...
    def placeholder(self) -> str: ...

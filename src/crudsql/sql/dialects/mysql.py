from __future__ import annotations

from crudsql.types import DatabaseKind
from .registry import register


class MySqlDialect:
    name = DatabaseKind.MYSQL.value
    kind = DatabaseKind.MYSQL
    family = "mysql"
    paramstyle = "qmark"

    def quote_ident(self, ident: str) -> str:
        # MySQL uses backticks
        return f"`{ident}`"

    def placeholder(self) -> str:
        return "?"


register(MySqlDialect())

# src/crudsql/sql_generator.py
"""
CRUD SQL generator.

Given a ModelDescriptor, render the five fixed statements:

  SELECT {columns} FROM {table}
  SELECT {columns} FROM {table} WHERE {table.id} = ? LIMIT 1
  INSERT INTO {table} ({insert columns}) VALUES (?, ...) RETURNING {columns}
  UPDATE {table} SET {col = ?, ...} WHERE {table.id} = ? RETURNING {columns}
  DELETE FROM {table} WHERE {table.id} = ?

Design goals:
- Deterministic: column order is declaration order, formatting is fixed.
- Pure: no database access; a valid descriptor cannot make generation fail.
- Dialect-aware quoting: identifiers are quoted by the descriptor's dialect.
  The placeholder token is the same for every dialect ("?").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .sql.dialects import SQLDialect, get as get_dialect
from .types import FieldDescriptor, ModelDescriptor


@dataclass(frozen=True)
class SqlStatements:
    select_sql: str
    select_by_id_sql: str
    insert_sql: str
    update_by_id_sql: str
    delete_by_id_sql: str


def quoted_table(desc: ModelDescriptor, dialect: SQLDialect) -> str:
    return dialect.quote_ident(desc.table_name)


def qualified_id_column(desc: ModelDescriptor, dialect: SQLDialect) -> str:
    return f"{quoted_table(desc, dialect)}.{dialect.quote_ident(desc.id_column)}"


def column_list(desc: ModelDescriptor, dialect: SQLDialect) -> str:
    """Every column qualified with the table name, in declaration order."""
    table = quoted_table(desc, dialect)
    return ", ".join(f"{table}.{dialect.quote_ident(f.name)}" for f in desc.fields)


def insert_column_list(desc: ModelDescriptor, dialect: SQLDialect) -> str:
    """Unqualified insert columns; the id column only when ids are external."""
    return ", ".join(dialect.quote_ident(f.name) for f in desc.insert_fields)


def insert_placeholder_count(desc: ModelDescriptor) -> int:
    n = len(desc.fields)
    return n if desc.external_id else n - 1


def placeholders(count: int, dialect: SQLDialect) -> str:
    return ", ".join(dialect.placeholder() for _ in range(count))


def update_set_list(desc: ModelDescriptor, dialect: SQLDialect) -> str:
    return _assignments(desc.non_id_fields, dialect)


def _assignments(fields: Sequence[FieldDescriptor], dialect: SQLDialect) -> str:
    return ", ".join(f"{dialect.quote_ident(f.name)} = {dialect.placeholder()}" for f in fields)


def generate_sql(desc: ModelDescriptor) -> SqlStatements:
    """
    Render the five CRUD statements for a descriptor.

    Note:
    - Table and column names are quoted but never escaped; they are assumed to
      be plain identifiers (validated at descriptor construction).
    """
    dialect = get_dialect(desc.dialect)
    table = quoted_table(desc, dialect)
    id_col = qualified_id_column(desc, dialect)
    columns = column_list(desc, dialect)
    p = dialect.placeholder()

    select_sql = f"SELECT {columns} FROM {table}"
    select_by_id_sql = f"SELECT {columns} FROM {table} WHERE {id_col} = {p} LIMIT 1"
    insert_sql = (
        f"INSERT INTO {table} ({insert_column_list(desc, dialect)}) "
        f"VALUES ({placeholders(insert_placeholder_count(desc), dialect)}) "
        f"RETURNING {columns}"
    )
    update_by_id_sql = (
        f"UPDATE {table} SET {update_set_list(desc, dialect)} "
        f"WHERE {id_col} = {p} RETURNING {columns}"
    )
    delete_by_id_sql = f"DELETE FROM {table} WHERE {id_col} = {p}"

    return SqlStatements(
        select_sql=select_sql,
        select_by_id_sql=select_by_id_sql,
        insert_sql=insert_sql,
        update_by_id_sql=update_by_id_sql,
        delete_by_id_sql=delete_by_id_sql,
    )

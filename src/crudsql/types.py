from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class DatabaseKind(str, Enum):
    ANY = "Any"
    MSSQL = "MsSql"
    MYSQL = "MySql"
    POSTGRES = "Postgres"
    SQLITE = "Sqlite"


DEFAULT_DATABASE = DatabaseKind.SQLITE


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type: str  # opaque: "int", "str", "uuid", ...
    is_id_candidate: bool = False


@dataclass(frozen=True)
class ModelDescriptor:
    type_name: str
    fields: Tuple[FieldDescriptor, ...]  # declaration order
    id_field: FieldDescriptor
    external_id: bool
    dialect: DatabaseKind
    table_name: str

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("a record type must declare at least one field")
        if self.id_field not in self.fields:
            raise ValueError(f"id field '{self.id_field.name}' is not one of the record's fields")
        if not self.table_name:
            raise ValueError("table_name must be non-empty")

    @property
    def columns(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def id_column(self) -> str:
        return self.id_field.name

    @property
    def non_id_fields(self) -> Tuple[FieldDescriptor, ...]:
        return tuple(f for f in self.fields if f.name != self.id_field.name)

    @property
    def insert_fields(self) -> Tuple[FieldDescriptor, ...]:
        # caller-supplied ids are written; database-assigned ids are not
        if self.external_id:
            return self.fields
        return self.non_id_fields

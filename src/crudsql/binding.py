# src/crudsql/binding.py

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Tuple

from .types import ModelDescriptor


class Statement(str, Enum):
    INSERT = "insert"
    UPDATE_BY_ID = "update_by_id"
    SELECT_BY_ID = "select_by_id"
    DELETE_BY_ID = "delete_by_id"


@dataclass(frozen=True)
class BindingPlan:
    """
    Ordered field names to bind, positionally, to each parameterized statement.

    insert_order matches the insert statement's column list exactly: the id
    is only bound when ids are supplied by the caller.
    """
    id_field: str
    insert_order: Tuple[str, ...]
    update_order: Tuple[str, ...]
    select_by_id_order: Tuple[str, ...]
    delete_by_id_order: Tuple[str, ...]

    def order(self, statement: Statement) -> Tuple[str, ...]:
        return {
            Statement.INSERT: self.insert_order,
            Statement.UPDATE_BY_ID: self.update_order,
            Statement.SELECT_BY_ID: self.select_by_id_order,
            Statement.DELETE_BY_ID: self.delete_by_id_order,
        }[Statement(statement)]

    def values(self, statement: Statement, record: Any) -> Tuple[Any, ...]:
        return tuple(_extract(record, name) for name in self.order(statement))

    def insert_values(self, record: Any) -> Tuple[Any, ...]:
        return self.values(Statement.INSERT, record)

    def update_values(self, record: Any) -> Tuple[Any, ...]:
        return self.values(Statement.UPDATE_BY_ID, record)

    def id_value(self, record: Any) -> Any:
        return _extract(record, self.id_field)


def _extract(record: Any, name: str) -> Any:
    # No coercion: the value is bound exactly as stored on the record.
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


def build_binding_plan(desc: ModelDescriptor) -> BindingPlan:
    """
    Derive bind orders from the descriptor.

    This function and the SQL generator are the only places that decide
    column order; both read it from desc.fields.
    """
    id_name = desc.id_column
    return BindingPlan(
        id_field=id_name,
        insert_order=tuple(f.name for f in desc.insert_fields),
        update_order=tuple(f.name for f in desc.non_id_fields) + (id_name,),
        select_by_id_order=(id_name,),
        delete_by_id_order=(id_name,),
    )

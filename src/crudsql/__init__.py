"""crudsql: compile record type definitions into CRUD SQL statements and bind orders."""

from .binding import BindingPlan, Statement, build_binding_plan
from .errors import CrudSqlException, CrudSqlProblem, ExitCode
from .metadata import GeneratedMetadata, emit_metadata
from .model import build_model_descriptor, descriptor_from_dataclass
from .naming import resolve_id_field, table_name
from .schema import ModelSchema, compile_model, crud_model, register_model, schema_for
from .sql_generator import SqlStatements, generate_sql
from .types import DatabaseKind, FieldDescriptor, ModelDescriptor

__all__ = [
    "BindingPlan",
    "Statement",
    "build_binding_plan",
    "CrudSqlException",
    "CrudSqlProblem",
    "ExitCode",
    "GeneratedMetadata",
    "emit_metadata",
    "build_model_descriptor",
    "descriptor_from_dataclass",
    "resolve_id_field",
    "table_name",
    "ModelSchema",
    "compile_model",
    "crud_model",
    "register_model",
    "schema_for",
    "SqlStatements",
    "generate_sql",
    "DatabaseKind",
    "FieldDescriptor",
    "ModelDescriptor",
]

"""
Model descriptor construction.

This is the only stage of the compiler that can fail. Everything downstream
(SQL generation, binding plans, metadata) is a pure function of the
descriptor built here.

Validation policy:
- Fatal: empty field list, malformed type/field names, duplicate field names,
  unknown database tags.
- Silent fallback: unparseable external-id text -> False; several id
  annotations -> last wins; no id annotation -> first field.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterable, List, Mapping, Optional, Union

from .errors import raise_model_error
from .log import get_logger
from .naming import resolve_id_field, table_name
from .sql.dialects import parse_kind
from .types import DEFAULT_DATABASE, DatabaseKind, FieldDescriptor, ModelDescriptor

logger = get_logger(__name__)

RawField = Union[FieldDescriptor, Mapping[str, Any]]


def parse_external_id(value: Union[None, bool, str]) -> bool:
    """
    Parse the external-id flag.

    Text must be exactly "true" or "false"; anything else falls back to False.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value != "false":
        logger.debug("external_id_unparseable", value=value, fallback=False)
    return False


def _coerce_field(raw: RawField, index: int) -> FieldDescriptor:
    if isinstance(raw, FieldDescriptor):
        f = raw
    elif isinstance(raw, Mapping):
        f = FieldDescriptor(
            name=raw.get("name"),
            type=raw.get("type", raw.get("dtype")),
            is_id_candidate=raw.get("id", raw.get("is_id_candidate", False)),
        )
    else:
        raise_model_error(
            "CRUDSQL_INVALID_FIELD",
            f"field #{index} must be a FieldDescriptor or a mapping",
            details={"index": index, "type": type(raw).__name__},
            remediation="Describe each field as {name: ..., type: ..., id: true|false}.",
        )

    if not isinstance(f.name, str) or not f.name.isidentifier():
        raise_model_error(
            "CRUDSQL_INVALID_FIELD",
            f"field #{index} has an invalid name: {f.name!r}",
            details={"index": index, "name": repr(f.name)},
            remediation="Field names must be simple identifiers (letters, digits, underscore).",
        )
    if not isinstance(f.type, str) or not f.type.strip():
        raise_model_error(
            "CRUDSQL_INVALID_FIELD",
            f"field '{f.name}' has a missing or malformed type",
            details={"index": index, "name": f.name, "type": repr(f.type)},
            remediation="Give every field a non-empty type name.",
        )
    if not isinstance(f.is_id_candidate, bool):
        raise_model_error(
            "CRUDSQL_INVALID_FIELD",
            f"field '{f.name}' has a non-boolean id flag: {f.is_id_candidate!r}",
            details={"index": index, "name": f.name, "id": repr(f.is_id_candidate)},
            remediation="Mark the identity field with id: true (a boolean, not text).",
        )
    return f


def build_model_descriptor(
    type_name: str,
    fields: Iterable[RawField],
    *,
    dialect: Union[None, str, DatabaseKind] = None,
    external_id: Union[None, bool, str] = None,
) -> ModelDescriptor:
    """
    Validate raw inputs and build the ModelDescriptor for one record type.

    Parameters:
    - type_name: source identifier of the record type (e.g. "UserAccount")
    - fields: ordered field list; FieldDescriptor instances or mappings with
      keys name/type/id
    - dialect: database tag, defaults to Sqlite
    - external_id: bool, or textual boolean ("true"/"false")
    """
    if not isinstance(type_name, str) or not type_name.isidentifier():
        raise_model_error(
            "CRUDSQL_INVALID_TYPE_NAME",
            f"invalid record type name: {type_name!r}",
            details={"type_name": repr(type_name)},
            remediation="Use the record type's identifier, e.g. 'UserAccount'.",
        )
    if not table_name(type_name):
        raise_model_error(
            "CRUDSQL_INVALID_TYPE_NAME",
            f"record type name {type_name!r} yields an empty table name",
            details={"type_name": type_name},
            remediation="Use a type name containing at least one letter or digit.",
        )

    resolved: List[FieldDescriptor] = [_coerce_field(raw, i) for i, raw in enumerate(fields)]
    if not resolved:
        raise_model_error(
            "CRUDSQL_EMPTY_FIELDS",
            "a record type must declare at least one field",
            details={"type_name": type_name},
            remediation="Declare at least one field on the record type.",
        )

    seen = set()
    for f in resolved:
        if f.name in seen:
            raise_model_error(
                "CRUDSQL_INVALID_FIELD",
                f"duplicate field name '{f.name}' in {type_name}",
                details={"type_name": type_name, "name": f.name},
                remediation="Field names must be unique within a record type.",
            )
        seen.add(f.name)

    kind = DEFAULT_DATABASE if dialect is None else parse_kind(dialect)

    annotated = [f.name for f in resolved if f.is_id_candidate]
    if len(annotated) > 1:
        logger.debug("multiple_id_annotations", type_name=type_name, annotated=annotated, chosen=annotated[-1])
    id_field = resolve_id_field(resolved)

    descriptor = ModelDescriptor(
        type_name=type_name,
        fields=tuple(resolved),
        id_field=id_field,
        external_id=parse_external_id(external_id),
        dialect=kind,
        table_name=table_name(type_name),
    )
    logger.debug(
        "model_descriptor_built",
        type_name=type_name,
        table_name=descriptor.table_name,
        id_column=id_field.name,
        external_id=descriptor.external_id,
        dialect=kind.value,
    )
    return descriptor


def _type_label(tp: Any) -> str:
    if isinstance(tp, str):
        return tp
    return getattr(tp, "__name__", None) or str(tp)


def descriptor_from_dataclass(
    cls: type,
    *,
    dialect: Union[None, str, DatabaseKind] = None,
    external_id: Union[None, bool, str] = None,
) -> ModelDescriptor:
    """
    Build a descriptor from a dataclass definition.

    The identity field is marked with field metadata, e.g.
    ``id: int = field(metadata={"id": True})``. Dialect and external-id
    annotations come from the keyword arguments or, failing that, the class
    attributes ``__database__`` and ``__external_ids__``.
    """
    if not dataclasses.is_dataclass(cls) or not isinstance(cls, type):
        raise_model_error(
            "CRUDSQL_INVALID_TYPE_NAME",
            f"{cls!r} is not a dataclass type",
            details={"type": repr(cls)},
            remediation="Decorate the record type with @dataclasses.dataclass.",
        )

    fields = [
        FieldDescriptor(
            name=f.name,
            type=_type_label(f.type),
            is_id_candidate=f.metadata.get("id", False),
        )
        for f in dataclasses.fields(cls)
    ]
    if dialect is None:
        dialect = getattr(cls, "__database__", None)
    if external_id is None:
        external_id = getattr(cls, "__external_ids__", None)
    return build_model_descriptor(cls.__name__, fields, dialect=dialect, external_id=external_id)

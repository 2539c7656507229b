"""
Process-wide registry of compiled record types.

Each record type is compiled once (at import or start-up) into a ModelSchema
holding its descriptor, metadata and binding plan. Entries are never replaced
after registration, so readers may share them without locking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .binding import BindingPlan, build_binding_plan
from .log import get_logger
from .metadata import GeneratedMetadata, emit_metadata
from .model import descriptor_from_dataclass
from .types import DatabaseKind, ModelDescriptor

logger = get_logger(__name__)


@dataclass(frozen=True)
class ModelSchema:
    descriptor: ModelDescriptor
    metadata: GeneratedMetadata
    binding: BindingPlan

    @property
    def table_name(self) -> str:
        return self.metadata.table_name

    @property
    def id_column(self) -> str:
        return self.metadata.id_column

    def to_dict(self) -> Dict[str, Any]:
        d = self.metadata.to_dict()
        d["type_name"] = self.descriptor.type_name
        d["external_id"] = self.descriptor.external_id
        d["binding"] = {
            "insert": list(self.binding.insert_order),
            "update_by_id": list(self.binding.update_order),
            "select_by_id": list(self.binding.select_by_id_order),
            "delete_by_id": list(self.binding.delete_by_id_order),
        }
        d["fingerprint"] = self.metadata.fingerprint()
        return d


def compile_model(desc: ModelDescriptor) -> ModelSchema:
    """Run SQL generation and binding-plan derivation for one descriptor."""
    return ModelSchema(
        descriptor=desc,
        metadata=emit_metadata(desc),
        binding=build_binding_plan(desc),
    )


_REGISTRY: Dict[type, ModelSchema] = {}


def register_model(
    cls: type,
    *,
    database: Union[None, str, DatabaseKind] = None,
    external_ids: Union[None, bool, str] = None,
) -> ModelSchema:
    """
    Compile and register a dataclass record type.

    Registering the same type again returns the existing entry unchanged.
    """
    existing = _REGISTRY.get(cls)
    if existing is not None:
        return existing
    schema = compile_model(descriptor_from_dataclass(cls, dialect=database, external_id=external_ids))
    _REGISTRY[cls] = schema
    logger.debug("model_registered", type_name=cls.__name__, table_name=schema.table_name)
    return schema


def crud_model(
    cls: Optional[type] = None,
    *,
    database: Union[None, str, DatabaseKind] = None,
    external_ids: Union[None, bool, str] = None,
) -> Any:
    """
    Class decorator form of register_model.

        @crud_model(database="Postgres")
        @dataclass
        class UserAccount:
            id: int = field(metadata={"id": True})
            email: str = ""
    """
    def wrap(c: type) -> type:
        register_model(c, database=database, external_ids=external_ids)
        return c

    if cls is None:
        return wrap
    return wrap(cls)


def schema_for(record_or_type: Any) -> ModelSchema:
    cls = record_or_type if isinstance(record_or_type, type) else type(record_or_type)
    try:
        return _REGISTRY[cls]
    except KeyError:
        raise KeyError(f"{cls.__name__} is not a registered crud model") from None


def registered() -> Dict[type, ModelSchema]:
    return dict(_REGISTRY)

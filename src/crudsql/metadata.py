# src/crudsql/metadata.py
from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .log import get_logger
from .naming import schema_ident
from .sql_generator import generate_sql
from .types import ModelDescriptor

logger = get_logger(__name__)


METADATA_SCHEMA_VERSION = "crudsql.metadata/0.1"


# =============================================================================
# Canonicalization + hashing
# =============================================================================

def _canonical_json_bytes(obj: Any) -> bytes:
    """
    Canonical JSON for stable hashing:
    - sort_keys=True ensures deterministic key order
    - separators remove whitespace differences
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str).encode("utf-8")


def _sha256_hex_obj(obj: Any) -> str:
    return hashlib.sha256(_canonical_json_bytes(obj)).hexdigest()


# =============================================================================
# Metadata artifact
# =============================================================================

@dataclass(frozen=True)
class GeneratedMetadata:
    schema_ident: str
    dialect: str
    table_name: str
    id_column: str
    columns: Tuple[str, ...]
    select_sql: str
    select_by_id_sql: str
    insert_sql: str
    update_by_id_sql: str
    delete_by_id_sql: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": METADATA_SCHEMA_VERSION,
            "schema_ident": self.schema_ident,
            "dialect": self.dialect,
            "table_name": self.table_name,
            "id_column": self.id_column,
            "columns": list(self.columns),
            "select_sql": self.select_sql,
            "select_by_id_sql": self.select_by_id_sql,
            "insert_sql": self.insert_sql,
            "update_by_id_sql": self.update_by_id_sql,
            "delete_by_id_sql": self.delete_by_id_sql,
        }

    def fingerprint(self) -> str:
        """Deterministic fingerprint; identical descriptors give identical fingerprints."""
        return _sha256_hex_obj(self.to_dict())


def emit_metadata(desc: ModelDescriptor) -> GeneratedMetadata:
    sql = generate_sql(desc)
    meta = GeneratedMetadata(
        schema_ident=schema_ident(desc.type_name),
        dialect=desc.dialect.value,
        table_name=desc.table_name,
        id_column=desc.id_column,
        columns=desc.columns,
        select_sql=sql.select_sql,
        select_by_id_sql=sql.select_by_id_sql,
        insert_sql=sql.insert_sql,
        update_by_id_sql=sql.update_by_id_sql,
        delete_by_id_sql=sql.delete_by_id_sql,
    )
    logger.info(
        "metadata_emitted",
        type_name=desc.type_name,
        table_name=meta.table_name,
        dialect=meta.dialect,
        columns=len(meta.columns),
    )
    return meta

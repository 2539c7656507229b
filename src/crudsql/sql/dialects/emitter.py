from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Optional

from crudsql.metadata import GeneratedMetadata
from .registry import get as get_dialect


def _crudsql_header_comment(meta: GeneratedMetadata, extra: Optional[Dict[str, Any]] = None) -> str:
    dialect = get_dialect(meta.dialect)
    info = {
        "schema": meta.schema_ident,
        "table": meta.table_name,
        "id_column": meta.id_column,
        "dialect": meta.dialect,
        "family": dialect.family,
        "paramstyle": dialect.paramstyle,
        "fingerprint": meta.fingerprint(),
    }
    if extra:
        info.update(extra)
    # keep single-line JSON so the header survives grep/diff tooling
    info_json = json.dumps(info, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return f"-- crudsql:{info_json}"


def emit_sql(meta: GeneratedMetadata, extra: Optional[Dict[str, Any]] = None) -> str:
    """Render one model's statements as an annotated SQL script block."""
    lines = [
        _crudsql_header_comment(meta, extra),
        "-- select",
        meta.select_sql + ";",
        "-- select_by_id",
        meta.select_by_id_sql + ";",
        "-- insert",
        meta.insert_sql + ";",
        "-- update_by_id",
        meta.update_by_id_sql + ";",
        "-- delete_by_id",
        meta.delete_by_id_sql + ";",
    ]
    return "\n".join(lines) + "\n"


def emit_sql_script(metas: Iterable[GeneratedMetadata]) -> str:
    return "\n".join(emit_sql(m) for m in metas)

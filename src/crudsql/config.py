"""
Model definition loading for the crudsql CLI.

Loads YAML/JSON model files and returns typed config objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import CrudSqlException, CrudSqlProblem, ExitCode, raise_config_error
from .model import build_model_descriptor
from .types import FieldDescriptor, ModelDescriptor


@dataclass(frozen=True)
class ModelConfig:
    """One record type as declared in a model file."""

    name: str
    fields: List[FieldDescriptor]
    database: Optional[str] = None
    external_ids: Union[None, bool, str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ModelConfig:
        fields: List[FieldDescriptor] = []
        for f in d.get("fields") or []:
            if not isinstance(f, dict):
                raise ValueError(f"model '{d.get('name')}': fields items must be objects")
            fields.append(
                FieldDescriptor(
                    name=f.get("name"),
                    type=f.get("type", f.get("dtype")),
                    is_id_candidate=f.get("id", False),
                )
            )
        return cls(
            name=d.get("name"),
            fields=fields,
            database=d.get("database"),
            external_ids=d.get("external_ids"),
        )

    def to_descriptor(self) -> ModelDescriptor:
        return build_model_descriptor(
            self.name,
            self.fields,
            dialect=self.database,
            external_id=self.external_ids,
        )


@dataclass(frozen=True)
class ModelsConfig:
    """Loaded model definition file."""

    raw: Dict[str, Any]
    models: List[ModelConfig]

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ModelsConfig:
        models = d.get("models")
        if not isinstance(models, list):
            raise ValueError("'models' must be a list")
        out: List[ModelConfig] = []
        for m in models:
            if not isinstance(m, dict):
                raise ValueError("'models' items must be objects")
            out.append(ModelConfig.from_dict(m))
        return cls(raw=d, models=out)

    def descriptors(self) -> List[ModelDescriptor]:
        return [m.to_descriptor() for m in self.models]


def load_models_config(path: str) -> ModelsConfig:
    """
    Load model definitions from a YAML or JSON file.

    The file must contain a mapping with a 'models' list; each model has a
    name, a fields list and optional database / external_ids annotations.
    """
    p = Path(path)
    if not p.exists():
        raise_config_error(
            "CRUDSQL_CONFIG_NOT_FOUND",
            f"Model file not found: {path}",
            details={"path": path},
            remediation="Verify the path is correct and the file exists.",
        )
    try:
        obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
        raise CrudSqlException(
            CrudSqlProblem(
                code="CRUDSQL_CONFIG_PARSE_ERROR",
                category="config",
                message=f"Failed to parse model file: {path}",
                details={"path": path, "error": repr(e)},
                remediation="Ensure the file is valid YAML or JSON encoded in UTF-8.",
            ),
            ExitCode.CONFIG_INVALID,
            cause=e,
        ) from e
    if not isinstance(obj, dict):
        raise_config_error(
            "CRUDSQL_CONFIG_TOPLEVEL_NOT_OBJECT",
            f"Model file must be a YAML/JSON object, got {type(obj).__name__}",
            details={"path": path, "type": type(obj).__name__},
            remediation="Put the models under a top-level 'models' key.",
        )
    try:
        return ModelsConfig.from_dict(obj)
    except ValueError as e:
        raise CrudSqlException(
            CrudSqlProblem(
                code="CRUDSQL_CONFIG_INVALID",
                category="config",
                message=str(e),
                details={"path": path},
                remediation="Fix the model file structure and retry.",
            ),
            ExitCode.CONFIG_INVALID,
            cause=e,
        ) from e

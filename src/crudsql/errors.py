from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class ExitCode(int, Enum):
    OK = 0
    CONFIG_INVALID = 10
    MODEL_INVALID = 20
    RUNTIME_ERROR = 30
    INTERNAL_ERROR = 50


@dataclass(frozen=True)
class CrudSqlProblem:
    code: str                 # stable machine code, e.g. "CRUDSQL_UNKNOWN_DIALECT"
    category: str             # "config" | "model" | "runtime" | "internal"
    message: str              # short human message
    details: Dict[str, Any]   # structured details for debugging
    remediation: Optional[str] = None  # actionable next step


class CrudSqlException(Exception):
    def __init__(
        self,
        problem: CrudSqlProblem,
        exit_code: ExitCode,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(problem.message)
        self.problem = problem
        self.exit_code = exit_code
        self.cause = cause


def raise_model_error(code: str, message: str, *, details: Dict[str, Any], remediation: str) -> None:
    raise CrudSqlException(
        CrudSqlProblem(
            code=code,
            category="model",
            message=message,
            details=details,
            remediation=remediation,
        ),
        ExitCode.MODEL_INVALID,
    )


def raise_config_error(code: str, message: str, *, details: Dict[str, Any], remediation: str) -> None:
    raise CrudSqlException(
        CrudSqlProblem(
            code=code,
            category="config",
            message=message,
            details=details,
            remediation=remediation,
        ),
        ExitCode.CONFIG_INVALID,
    )


def problem_to_dict(p: CrudSqlProblem) -> Dict[str, Any]:
    d = asdict(p)
    if d.get("remediation") is None:
        d.pop("remediation", None)
    return d

# src/crudsql/cli.py
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from .config import load_models_config
from .errors import CrudSqlException, ExitCode, problem_to_dict
from .log import configure_logging, get_logger
from .schema import ModelSchema, compile_model
from .sql.dialects.emitter import emit_sql_script

logger = get_logger(__name__)


# =============================================================================
# Helpers: output + IO
# =============================================================================

def _print_payload(payload: Any, fmt: str) -> None:
    if fmt == "json":
        print(json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True, default=str))
    elif fmt == "jsonl":
        print(json.dumps(payload, ensure_ascii=False, sort_keys=True, default=str))
    else:
        # "text": caller prints human-friendly output
        pass


def _write_text(path: str | Path, text: str) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


def _compile_all(models_path: str) -> List[ModelSchema]:
    cfg = load_models_config(models_path)
    schemas = [compile_model(desc) for desc in cfg.descriptors()]
    logger.info("models_compiled", path=models_path, count=len(schemas))
    return schemas


# =============================================================================
# Commands
# =============================================================================

def cmd_validate(args: argparse.Namespace) -> int:
    cfg = load_models_config(args.models)
    descriptors = cfg.descriptors()

    if args.format in ("json", "jsonl"):
        _print_payload(
            {"ok": True, "models": [d.type_name for d in descriptors]},
            args.format,
        )
    else:
        print(f"OK: {len(descriptors)} model(s) are valid")
    return int(ExitCode.OK)


def cmd_compile(args: argparse.Namespace) -> int:
    schemas = _compile_all(args.models)
    out: List[Dict[str, Any]] = [s.to_dict() for s in schemas]

    _write_text(args.out, json.dumps(out, indent=2, ensure_ascii=False, sort_keys=True) + "\n")

    if args.format in ("json", "jsonl"):
        _print_payload({"ok": True, "out": str(args.out), "models": len(out)}, args.format)
    else:
        print(f"Wrote metadata: {args.out}")
    return int(ExitCode.OK)


def cmd_emit_sql(args: argparse.Namespace) -> int:
    schemas = _compile_all(args.models)
    sql = emit_sql_script(s.metadata for s in schemas)

    _write_text(args.out, sql)

    if args.format in ("json", "jsonl"):
        _print_payload({"ok": True, "out": str(args.out)}, args.format)
    else:
        print(f"Wrote SQL: {args.out}")
    return int(ExitCode.OK)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crudsql",
        description="Compile record type definitions into CRUD SQL statements.",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING (default), ERROR")
    parser.add_argument("--log-json", action="store_true", help="emit JSON log lines on stderr")
    sub = parser.add_subparsers(dest="cmd")

    def _common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--models", required=True, help="YAML/JSON model definition file")
        p.add_argument("--format", choices=("text", "json", "jsonl"), default="text")

    p_validate = sub.add_parser("validate", help="validate a model definition file")
    _common(p_validate)
    p_validate.set_defaults(func=cmd_validate)

    p_compile = sub.add_parser("compile", help="write generated metadata as JSON")
    _common(p_compile)
    p_compile.add_argument("--out", required=True)
    p_compile.set_defaults(func=cmd_compile)

    p_emit = sub.add_parser("emit-sql", help="write generated statements as an annotated SQL script")
    _common(p_emit)
    p_emit.add_argument("--out", required=True)
    p_emit.set_defaults(func=cmd_emit_sql)

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point used by the console script: `from crudsql.cli import main`.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "cmd", None):
        parser.print_help()
        return 2

    configure_logging(args.log_level, args.log_json or None)

    try:
        return int(args.func(args))
    except CrudSqlException as e:
        payload = {"ok": False, "error": problem_to_dict(e.problem), "exit_code": int(e.exit_code)}
        fmt = getattr(args, "format", "text")
        if fmt in ("json", "jsonl"):
            _print_payload(payload, fmt)
        else:
            err = payload["error"]
            print(f"ERROR[{err.get('code', 'CRUDSQL_ERROR')}]: {err.get('message')}", file=sys.stderr)
            if err.get("remediation"):
                print(f"REMEDIATION: {err['remediation']}", file=sys.stderr)
            print(f"DETAILS: {err.get('details', {})}", file=sys.stderr)
        return int(e.exit_code)
    except Exception as e:
        logger.exception("unexpected_error", cmd=args.cmd)
        print(f"ERROR[CRUDSQL_INTERNAL_ERROR]: {e!r}", file=sys.stderr)
        return int(ExitCode.INTERNAL_ERROR)


if __name__ == "__main__":
    sys.exit(main())

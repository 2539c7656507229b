"""Supported SQL dialects. Importing this package registers all of them."""

from . import mysql, quoted  # noqa: F401  (register on import)
from .base import SQLDialect
from .registry import available, get, parse_kind, register

__all__ = [
    "SQLDialect",
    "available",
    "get",
    "parse_kind",
    "register",
]

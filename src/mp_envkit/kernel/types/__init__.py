"""Kernel value types — public re-export surface.

Modules:
  result.py   — Ok, Err, Result, result_all
  loadable.py — Immediate, Deferred, Loadable
"""

from mp_envkit.kernel.types.loadable import (
    Deferred,
    Immediate,
    Loadable,
    as_loadable,
    resolve_result,
)
from mp_envkit.kernel.types.result import Err, Ok, Result, result_all

__all__ = [
    "Deferred",
    "Err",
    "Immediate",
    "Loadable",
    "Ok",
    "Result",
    "as_loadable",
    "resolve_result",
    "result_all",
]

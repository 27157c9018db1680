"""cp-style recursive copying for build and automation tooling."""

from __future__ import annotations

from .engine import copy, cp
from .errors import (
    CopyError,
    InvalidOperationError,
    IOFailureError,
    NotFoundError,
    PermissionDeniedError,
)
from .infrastructure.config import ConfigError
from .options import parse_options, validate_flags
from .plan import read_plan, run_plan
from .resolver import resolve
from .types import (
    CopyFailure,
    CopyOptions,
    CopyOutcome,
    CopyPlan,
    CopyStep,
    ErrorKind,
    OverwritePolicy,
    PathInfo,
    PathKind,
    PlanResult,
)
from .walker import entries

__all__ = [
    # engine
    "copy",
    "cp",
    # errors
    "CopyError",
    "InvalidOperationError",
    "IOFailureError",
    "NotFoundError",
    "PermissionDeniedError",
    "ConfigError",
    # options
    "parse_options",
    "validate_flags",
    # plan
    "read_plan",
    "run_plan",
    # resolver
    "resolve",
    # types
    "CopyFailure",
    "CopyOptions",
    "CopyOutcome",
    "CopyPlan",
    "CopyStep",
    "ErrorKind",
    "OverwritePolicy",
    "PathInfo",
    "PathKind",
    "PlanResult",
    # walker
    "entries",
]

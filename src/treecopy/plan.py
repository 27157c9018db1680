"""Copy plans: an ordered list of copy steps read from YAML."""

from __future__ import annotations

from pathlib import Path

import yaml

from .engine import copy
from .infrastructure.config import CopyDefaults
from .infrastructure.logger import logger
from .options import parse_options, validate_flags
from .types import CopyPlan, CopyStep, PlanResult


def read_plan(plan_path: Path) -> CopyPlan:
    """Read and validate a copy plan file.

    The file holds either a mapping with a ``steps`` list or the list itself.
    Raises ValueError for malformed YAML, missing fields or unknown flags.
    """
    if not plan_path.exists():
        raise FileNotFoundError(f"Copy plan not found: {plan_path}")

    try:
        raw = yaml.safe_load(plan_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise ValueError(f"Copy plan is not valid YAML: {plan_path}: {err}") from err

    if isinstance(raw, list):
        raw = {"steps": raw}
    if not isinstance(raw, dict) or not isinstance(raw.get("steps"), list):
        raise ValueError(f"Copy plan must contain a list of steps: {plan_path}")

    for i, step in enumerate(raw["steps"]):
        if not isinstance(step, dict):
            raise ValueError(f"Copy plan step {i} must be a mapping")
        for field in ("source", "destination"):
            if step.get(field) is None:
                raise ValueError(f"Copy plan step {i} missing required field: {field}")

    plan = CopyPlan.model_validate(raw)
    for i, step in enumerate(plan.steps):
        try:
            validate_flags(step.flags)
        except ValueError as err:
            raise ValueError(f"Copy plan step {i}: {err}") from err

    return plan


def run_plan(plan: CopyPlan, base_dir: Path | None = None, defaults: CopyDefaults | None = None) -> PlanResult:
    """Run each step in order, stopping at the first failed step.

    Relative step paths are taken relative to ``base_dir`` when given.
    """
    defaults = defaults or CopyDefaults.from_env()
    result = PlanResult(success=True, outcomes=[])

    for i, step in enumerate(plan.steps):
        source, destination = _step_paths(step, base_dir)
        options = parse_options(step.flags, step.continue_on_error, step.retry_count, defaults=defaults)
        logger.info("Running copy step", step=i, source=source, destination=destination, flags=step.flags)

        outcome = copy(source, destination, options, retry_delay=defaults.retry_delay)
        result.outcomes.append(outcome)
        if not outcome.success:
            result.success = False
            result.error = f"step {i}: {outcome.error.message if outcome.error else 'failed'}"
            return result

    return result


def _step_paths(step: CopyStep, base_dir: Path | None) -> tuple[str, str]:
    if base_dir is None:
        return step.source, step.destination
    # Empty paths stay empty so they still fail as missing.
    return tuple(  # type: ignore[return-value]
        str(base_dir / p) if p and not Path(p).is_absolute() else p for p in (step.source, step.destination)
    )

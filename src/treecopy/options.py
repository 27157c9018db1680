"""Parse cp-style flags into CopyOptions at the call boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .infrastructure.config import CopyDefaults
from .types import CopyOptions, OverwritePolicy

if TYPE_CHECKING:
    from collections.abc import Iterable

# -i would prompt before overwriting; prompting is unsupported, so it behaves like -f.
KNOWN_FLAGS = frozenset("rRfnpi")


def validate_flags(flags: str | Iterable[str] | None) -> list[str]:
    """Return the flag letters in ``flags``, raising ValueError on anything unrecognised."""
    if flags is None:
        return []
    tokens = flags.split() if isinstance(flags, str) else list(flags)
    letters: list[str] = []
    for token in tokens:
        if not token.startswith("-") or token == "-":
            raise ValueError(f"Invalid cp option: {token!r} (options must start with '-')")
        letters.extend(token[1:])

    unknown = sorted(set(letters) - KNOWN_FLAGS)
    if unknown:
        raise ValueError(f"Unknown cp option(s): {', '.join('-' + u for u in unknown)}")
    return letters


def parse_options(
    flags: str | Iterable[str] | None = None,
    continue_on_error: bool | None = None,
    retry_count: int | None = None,
    *,
    defaults: CopyDefaults | None = None,
) -> CopyOptions:
    """Build CopyOptions from flags such as ``"-rf"`` or ``["-r", "-n"]``.

    ``-n`` wins over ``-f`` whatever their order. Trailing parameters left as
    None fall back to ``defaults`` (read from the environment when omitted).
    """
    letters = validate_flags(flags)

    if continue_on_error is None or retry_count is None:
        defaults = defaults or CopyDefaults.from_env()
        if continue_on_error is None:
            continue_on_error = defaults.continue_on_error
        if retry_count is None:
            retry_count = defaults.retry_count

    overwrite = OverwritePolicy.NO_CLOBBER if "n" in letters else OverwritePolicy.FORCE

    return CopyOptions(
        recursive="r" in letters or "R" in letters,
        overwrite=overwrite,
        preserve_timestamps="p" in letters,
        continue_on_error=continue_on_error,
        retry_count=retry_count,
    )

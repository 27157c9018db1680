"""Copy engine: cp-style copying of files, symlinks and directory trees."""

from __future__ import annotations

import errno
import os
import shutil
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import error_from_failure, failure_from_os_error, make_failure
from .infrastructure.config import CopyDefaults
from .infrastructure.logger import logger
from .options import parse_options
from .resolver import absolute, is_directory_target, resolve
from .retry import run_with_retry
from .types import CopyFailure, CopyOptions, CopyOutcome, PathInfo
from .walker import entries

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class _CopyRun:
    """Per-call state for copy(); discarded when the call returns."""

    def __init__(self, options: CopyOptions, retry_delay: float) -> None:
        self.options = options
        self.retry_delay = retry_delay
        self.outcome = CopyOutcome()

    @property
    def aborted(self) -> bool:
        return self.outcome.error is not None

    def attempt(self, operation: Callable[[], None], source: str, target: Path, *, in_walk: bool = False) -> bool:
        """Run one filesystem operation with retries. Returns True if it succeeded."""
        try:
            run_with_retry(
                operation,
                self.options.retry_count,
                delay_s=self.retry_delay,
                description=f"cp '{source}' -> '{target}'",
            )
        except OSError as err:
            self.record(failure_from_os_error(err, source, str(target)), in_walk=in_walk)
            return False
        logger.debug("Copied", source=source, destination=str(target))
        self.outcome.copied.append((source, str(target)))
        return True

    def record(self, failure: CopyFailure, *, in_walk: bool) -> None:
        """Fatal unless the failure is an entry of a tree walk and continue_on_error is set."""
        if in_walk and self.options.continue_on_error:
            logger.warning(failure.message, code=failure.code, source=failure.source, destination=failure.destination)
            self.outcome.failures.append(failure)
        else:
            self.outcome.fail(failure)

    def copy_entry(self, source: PathInfo, target: Path, *, in_walk: bool = False) -> None:
        """Copy a regular file or recreate a symlink at exactly ``target``."""
        if self.options.no_clobber and (target.is_symlink() or target.exists()):
            logger.info("Destination exists, skipping (no-clobber)", source=source.path, destination=str(target))
            self.outcome.skipped.append((source.path, str(target)))
            return

        src = Path(source.path)
        if source.is_symlink:
            operation = partial(_copy_symlink, src, target, self.options)
        else:
            operation = partial(_copy_bytes, src, target, self.options.preserve_timestamps)
        self.attempt(operation, source.path, target, in_walk=in_walk)

    def copy_tree(self, source: PathInfo, destination: Path) -> None:
        target_root = _tree_target(source, destination)

        # Compare real paths so a destination reached through a symlink is caught too.
        source_real = Path(source.absolute_path).resolve()
        root_real = target_root.resolve()
        if root_real == source_real or source_real in root_real.parents:
            self.outcome.fail(make_failure("EINVAL", source.path, str(target_root)))
            return

        if self.attempt(lambda: target_root.mkdir(parents=True, exist_ok=True), source.path, target_root):
            self.walk(Path(source.path), target_root, root=True)

    def walk(self, source_dir: Path, target_dir: Path, *, root: bool = False) -> None:
        try:
            children = entries(source_dir)
        except OSError as err:
            self.record(failure_from_os_error(err, str(source_dir), str(target_dir)), in_walk=not root)
            return

        for name, info in children:
            target = target_dir / name
            if not info.exists:
                # Removed since the directory was listed.
                self.record(make_failure("ENOENT", info.path, str(target)), in_walk=True)
            elif info.is_directory:
                if self.attempt(lambda t=target: t.mkdir(exist_ok=True), info.path, target, in_walk=True):
                    self.walk(Path(info.path), target)
            else:
                self.copy_entry(info, target, in_walk=True)
            if self.aborted:
                return


def _file_target(source: PathInfo, destination: Path) -> Path:
    if is_directory_target(destination):
        return destination / Path(source.absolute_path).name
    return destination


def _tree_target(source: PathInfo, destination: Path) -> Path:
    name = Path(source.absolute_path).name
    if destination.name == name:
        return destination
    return destination / name


def _copy_bytes(source: Path, target: Path, preserve_timestamps: bool) -> None:
    # An existing link at target is replaced, never written through.
    if target.is_symlink():
        target.unlink()
    shutil.copyfile(source, target)
    if preserve_timestamps:
        shutil.copystat(source, target)
    else:
        shutil.copymode(source, target)


def _copy_symlink(source: Path, target: Path, options: CopyOptions) -> None:
    # os.readlink keeps the stored text exactly; Path.readlink would normalise it.
    link_text = os.readlink(source)
    if not options.verbatim_symlinks and not Path(link_text).is_absolute():
        link_text = str(absolute(source.parent / link_text))

    if target.is_symlink() or target.exists():
        if target.is_dir() and not target.is_symlink():
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), str(target))
        target.unlink()
    target.symlink_to(link_text, target_is_directory=source.is_dir())

    if options.preserve_timestamps and os.utime in os.supports_follow_symlinks:
        st = source.lstat()
        os.utime(target, ns=(st.st_atime_ns, st.st_mtime_ns), follow_symlinks=False)


def copy(
    source: str | os.PathLike[str],
    destination: str | os.PathLike[str],
    options: CopyOptions | None = None,
    *,
    retry_delay: float = 0.0,
) -> CopyOutcome:
    """Copy ``source`` to ``destination`` following cp semantics.

    Filesystem failures are returned in the outcome rather than raised. Work
    already done before a fatal failure is left in place.
    """
    options = options or CopyOptions()
    src = os.fspath(source)
    dest = os.fspath(destination)
    run = _CopyRun(options, retry_delay)

    if not src or not dest:
        return run.outcome.fail(make_failure("ENOENT", src, dest))

    info = resolve(src)
    if not info.exists:
        return run.outcome.fail(make_failure("ENOENT", src, dest))

    if info.is_directory:
        if not options.recursive:
            return run.outcome.fail(make_failure("EISDIR", src, dest))
        logger.debug("Copying directory tree", source=src, destination=dest)
        run.copy_tree(info, Path(dest))
        return run.outcome

    target = _file_target(info, Path(dest))
    if not target.absolute().parent.is_dir():
        return run.outcome.fail(make_failure("ENOENT", src, str(target)))

    run.copy_entry(info, target)
    return run.outcome


def _is_flag_string(value: object) -> bool:
    return isinstance(value, str) and value.startswith("-")


def cp(
    source: str | os.PathLike[str],
    destination: str | os.PathLike[str],
    options: CopyOptions | str | os.PathLike[str] | Iterable[str] | None = None,
    continue_on_error: bool | None = None,
    retry_count: int | None = None,
    *,
    retry_delay: float | None = None,
) -> CopyOutcome:
    """Copy with cp flags, raising on failure instead of returning it.

    Accepts ``cp(source, destination, "-rf")`` as well as the flags-first form
    ``cp("-rf", source, destination)``. ``options`` may also be a CopyOptions.
    Trailing parameters and the retry delay left as None come from
    CopyDefaults.from_env(). Raises a CopyError subclass whose message begins
    with the errno name.
    """
    if _is_flag_string(source) and isinstance(options, (str, os.PathLike)) and not _is_flag_string(options):
        source, destination, options = destination, options, source  # type: ignore[assignment]

    defaults = CopyDefaults.from_env()
    if isinstance(options, CopyOptions):
        update: dict[str, object] = {}
        if continue_on_error is not None:
            update["continue_on_error"] = continue_on_error
        if retry_count is not None:
            update["retry_count"] = retry_count
        resolved = CopyOptions.model_validate({**options.model_dump(), **update}) if update else options
    else:
        resolved = parse_options(options, continue_on_error, retry_count, defaults=defaults)  # type: ignore[arg-type]

    delay = defaults.retry_delay if retry_delay is None else retry_delay
    outcome = copy(source, destination, resolved, retry_delay=delay)
    if outcome.error is not None:
        raise error_from_failure(outcome.error)
    return outcome

"""Copy error taxonomy and errno-prefixed failure messages.

Every message starts with the errno name ("ENOENT: ...") because callers
pattern-match on that prefix.
"""

from __future__ import annotations

import errno
import os
import shutil
from typing import Any

from .types import CopyFailure, ErrorKind

_DESCRIPTIONS: dict[str, str] = {
    "ENOENT": "no such file or directory",
    "EISDIR": "illegal operation on a directory",
    "EACCES": "permission denied",
    "EPERM": "operation not permitted",
    "EEXIST": "file already exists",
    "ENOTDIR": "not a directory",
    "ENOSPC": "no space left on device",
    "EBUSY": "resource busy or locked",
    "ELOOP": "too many symbolic links encountered",
    "EINVAL": "invalid argument",
}

_KINDS: dict[str, ErrorKind] = {
    "ENOENT": ErrorKind.NOT_FOUND,
    "EISDIR": ErrorKind.INVALID_OPERATION,
    "EACCES": ErrorKind.PERMISSION_DENIED,
    "EPERM": ErrorKind.PERMISSION_DENIED,
}


class CopyError(Exception):
    """Raised by cp() when a copy fails."""

    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(self, message: str, code: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}

    @property
    def message(self) -> str:
        return self.args[0]


class NotFoundError(CopyError):
    kind = ErrorKind.NOT_FOUND


class InvalidOperationError(CopyError):
    kind = ErrorKind.INVALID_OPERATION


class PermissionDeniedError(CopyError):
    kind = ErrorKind.PERMISSION_DENIED


class IOFailureError(CopyError):
    kind = ErrorKind.IO_FAILURE


_ERROR_CLASSES: dict[ErrorKind, type[CopyError]] = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.INVALID_OPERATION: InvalidOperationError,
    ErrorKind.PERMISSION_DENIED: PermissionDeniedError,
    ErrorKind.IO_FAILURE: IOFailureError,
}


def describe(code: str) -> str:
    """Human description for an errno name, lower-case like the shell tools print it."""
    if code in _DESCRIPTIONS:
        return _DESCRIPTIONS[code]
    number = getattr(errno, code, None)
    if number is None:
        return "unknown error"
    text = os.strerror(number)
    return text[:1].lower() + text[1:]


def format_message(code: str, source: str | None = None, destination: str | None = None) -> str:
    message = f"{code}: {describe(code)}"
    if source is not None and destination is not None:
        message += f", cp '{source}' -> '{destination}'"
    elif source is not None:
        message += f", cp '{source}'"
    return message


def make_failure(code: str, source: str | None = None, destination: str | None = None) -> CopyFailure:
    return CopyFailure(
        code=code,
        kind=_KINDS.get(code, ErrorKind.IO_FAILURE),
        message=format_message(code, source, destination),
        source=source,
        destination=destination,
    )


def failure_from_os_error(err: OSError, source: str | None = None, destination: str | None = None) -> CopyFailure:
    """Wrap an OSError, keeping its errno name as the message prefix."""
    if isinstance(err, shutil.SameFileError):
        return make_failure("EINVAL", source, destination)
    code = errno.errorcode.get(err.errno, "EIO") if err.errno is not None else "EIO"
    return make_failure(code, source, destination)


def error_from_failure(failure: CopyFailure) -> CopyError:
    """Build the exception matching a failure's kind."""
    cls = _ERROR_CLASSES[failure.kind]
    return cls(
        failure.message,
        code=failure.code,
        details={"source": failure.source, "destination": failure.destination},
    )

"""Copy engine domain types."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OverwritePolicy(str, Enum):
    FORCE = "force"
    NO_CLOBBER = "no_clobber"


class PathKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    MISSING = "missing"


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_OPERATION = "invalid_operation"
    PERMISSION_DENIED = "permission_denied"
    IO_FAILURE = "io_failure"


class PathInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    absolute_path: str
    kind: PathKind

    @property
    def exists(self) -> bool:
        return self.kind is not PathKind.MISSING

    @property
    def is_file(self) -> bool:
        return self.kind is PathKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is PathKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is PathKind.SYMLINK


class CopyOptions(BaseModel):
    """Recognized copy options, parsed once at the call boundary."""

    model_config = ConfigDict(frozen=True)

    recursive: bool = False
    overwrite: OverwritePolicy = OverwritePolicy.FORCE
    preserve_timestamps: bool = False
    continue_on_error: bool = False
    retry_count: int = Field(default=0, ge=0)
    verbatim_symlinks: bool = True

    @property
    def force(self) -> bool:
        return self.overwrite is OverwritePolicy.FORCE

    @property
    def no_clobber(self) -> bool:
        return self.overwrite is OverwritePolicy.NO_CLOBBER


class CopyFailure(BaseModel):
    code: str
    kind: ErrorKind
    message: str
    source: str | None = None
    destination: str | None = None


class CopyOutcome(BaseModel):
    success: bool = True
    copied: list[tuple[str, str]] = Field(default_factory=list)
    skipped: list[tuple[str, str]] = Field(default_factory=list)
    failures: list[CopyFailure] = Field(default_factory=list)
    error: CopyFailure | None = None

    def fail(self, failure: CopyFailure) -> CopyOutcome:
        self.success = False
        self.error = failure
        return self


class CopyStep(BaseModel):
    source: str
    destination: str
    flags: str = ""
    continue_on_error: bool | None = None
    retry_count: int | None = Field(default=None, ge=0)


class CopyPlan(BaseModel):
    steps: list[CopyStep]


class PlanResult(BaseModel):
    success: bool
    outcomes: list[CopyOutcome]
    error: str | None = None

from enum import Enum
from pydantic import BaseModel, ConfigDict


class LineType(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    CONTEXT = "context"


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


class DiffLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: LineType
    line_number: int  # position in the new file
    content: str


class DiffHunk(BaseModel):
    model_config = ConfigDict(frozen=True)

    header: str
    lines: tuple[DiffLine, ...] = ()


class DiffFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    old_path: str | None = None
    status: FileStatus
    additions: int = 0
    deletions: int = 0
    hunks: tuple[DiffHunk, ...] = ()


class DiffResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    files: tuple[DiffFile, ...] = ()
    total_additions: int = 0
    total_deletions: int = 0
    raw_diff: str = ""

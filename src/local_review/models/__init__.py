from .config import RepoConfig, ReviewChecks
from .diff import DiffFile, DiffHunk, DiffLine, DiffResult, FileStatus, LineType
from .history import HistoryEntry
from .review import ParsedReview, ReviewDelta, ReviewIssue, Severity

__all__ = [
    "RepoConfig",
    "ReviewChecks",
    "DiffFile",
    "DiffHunk",
    "DiffLine",
    "DiffResult",
    "FileStatus",
    "LineType",
    "HistoryEntry",
    "ParsedReview",
    "ReviewDelta",
    "ReviewIssue",
    "Severity",
]

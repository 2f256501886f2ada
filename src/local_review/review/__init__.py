from .diff_parser import parse_diff, DiffParser
from .issue_parser import parse_review, IssueParser
from .delta import compare_issues, diff_reviews, issue_fingerprint, DeltaEngine
from .engine import ReviewEngine, ReviewReport

__all__ = [
    "parse_diff",
    "DiffParser",
    "parse_review",
    "IssueParser",
    "compare_issues",
    "diff_reviews",
    "issue_fingerprint",
    "DeltaEngine",
    "ReviewEngine",
    "ReviewReport",
]

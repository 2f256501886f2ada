# src/local_review/review/delta.py
from collections.abc import Callable, Hashable, Sequence

from local_review.models.history import HistoryEntry
from local_review.models.review import ParsedReview, ReviewDelta, ReviewIssue


DESCRIPTION_KEY_LENGTH = 60

IssueKey = Callable[[ReviewIssue], Hashable]


def issue_fingerprint(issue: ReviewIssue) -> tuple[str, str, str, str]:
    """Coarse identity of an issue across independently generated reviews.

    Only the first 60 characters of the description take part, so rewording
    towards the end of a sentence still matches. ``raw`` is ignored.
    """
    return (
        issue.severity.value,
        issue.file or "",
        str(issue.line) if issue.line is not None else "",
        issue.description[:DESCRIPTION_KEY_LENGTH],
    )


def compare_issues(
    current: Sequence[ReviewIssue],
    previous: Sequence[ReviewIssue],
    key: IssueKey = issue_fingerprint,
) -> ReviewDelta:
    """Split current and previous issues into new, resolved and persisting."""
    previous_keys = {key(issue) for issue in previous}
    current_keys = {key(issue) for issue in current}

    return ReviewDelta(
        new_issues=tuple(i for i in current if key(i) not in previous_keys),
        resolved_issues=tuple(i for i in previous if key(i) not in current_keys),
        # The current wording wins over the stored copy
        persisting_issues=tuple(i for i in current if key(i) in previous_keys),
    )


def diff_reviews(
    current: ParsedReview,
    previous: HistoryEntry,
    key: IssueKey = issue_fingerprint,
) -> ReviewDelta:
    return compare_issues(current.issues, previous.issues, key=key)


class DeltaEngine:
    def __init__(self, key: IssueKey = issue_fingerprint):
        self.key = key

    def compare(self, current: Sequence[ReviewIssue], previous: Sequence[ReviewIssue]) -> ReviewDelta:
        return compare_issues(current, previous, key=self.key)

# src/local_review/review/engine.py
import fnmatch
import logging
from dataclasses import dataclass

from local_review.config import Settings
from local_review.history.store import HistoryStore
from local_review.models.config import RepoConfig
from local_review.models.diff import DiffResult
from local_review.models.history import HistoryEntry
from local_review.models.review import ParsedReview, ReviewDelta
from .context import FileContext, read_file_context
from .delta import diff_reviews
from .diff_parser import parse_diff
from .git_diff import describe_mode, get_diff_text
from .issue_parser import parse_review


logger = logging.getLogger(__name__)


@dataclass
class ReviewReport:
    """Everything one review run produced."""
    diff: DiffResult
    review: ParsedReview
    entry: HistoryEntry
    file_contexts: dict[str, FileContext]
    delta: ReviewDelta | None = None


class ReviewEngine:
    def __init__(self, settings: Settings, repo_config: RepoConfig | None = None):
        self.settings = settings
        self.repo_config = repo_config or RepoConfig()
        self.history = HistoryStore(settings.history_path)

    def prepare_diff(self, diff_text: str) -> DiffResult:
        """Parse diff text and drop files matching the ignore patterns."""
        diff = parse_diff(diff_text)
        kept = tuple(f for f in diff.files if not self._is_excluded(f.path, self.repo_config.ignore))
        if len(kept) == len(diff.files):
            return diff

        logger.info(f"Ignoring {len(diff.files) - len(kept)} file(s) matched by ignore patterns")
        return DiffResult(
            files=kept,
            total_additions=sum(f.additions for f in kept),
            total_deletions=sum(f.deletions for f in kept),
            raw_diff=diff.raw_diff,
        )

    def run(
        self,
        diff_text: str | None,
        response_text: str,
        model: str | None = None,
        mode: str | None = None,
        since_last: bool = False,
        base: str | None = None,
        staged: bool = False,
    ) -> ReviewReport:
        """Parse a diff and the model's review of it, record it and compare with the last run.

        Without diff_text the diff is read from git in the repo root, for staged
        changes, against base, or for the working tree.
        """
        if diff_text is None:
            diff_text = get_diff_text(self.settings.repo_root, base=base, staged=staged)
        mode = mode or describe_mode(base, staged)
        diff = self.prepare_diff(diff_text)
        file_contexts = read_file_context(
            diff.files,
            root=self.settings.repo_root,
            max_file_size_kb=self.repo_config.review.max_file_size_kb,
        )

        review = parse_review(response_text)

        # Load before saving, otherwise the new entry becomes "latest"
        previous = self.history.load_latest() if since_last else None
        if since_last and previous is None:
            logger.info("No previous review found, skipping delta")

        entry = self.history.save(review, model=model or self.repo_config.model, mode=mode)
        delta = diff_reviews(review, previous) if previous is not None else None

        return ReviewReport(
            diff=diff,
            review=review,
            entry=entry,
            file_contexts=file_contexts,
            delta=delta,
        )

    def _is_excluded(self, file_path: str, patterns: list[str]) -> bool:
        """Check if file matches any ignore pattern."""
        return any(fnmatch.fnmatch(file_path, pattern) for pattern in patterns)

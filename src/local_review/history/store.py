# src/local_review/history/store.py
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from local_review.errors import HistoryError
from local_review.models.history import HistoryEntry
from local_review.models.review import ParsedReview


logger = logging.getLogger(__name__)

LATEST_FILE = "latest.json"
INDEX_FILE = "index.json"


class HistoryStore:
    """Timestamped review records, kept as JSON files in one directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def save(
        self,
        review: ParsedReview,
        model: str,
        mode: str,
        now: datetime | None = None,
    ) -> HistoryEntry:
        now = now or datetime.now(timezone.utc)
        timestamp = now.isoformat()
        entry = HistoryEntry(
            id=timestamp.replace(":", "-").replace(".", "-"),
            timestamp=timestamp,
            model=model,
            mode=mode,
            issue_count=len(review.issues),
            issues=list(review.issues),
            lgtm=list(review.lgtm),
        )

        self.directory.mkdir(parents=True, exist_ok=True)
        payload = entry.model_dump_json(indent=2, by_alias=True)
        (self.directory / f"{entry.id}.json").write_text(payload, encoding="utf-8")
        (self.directory / LATEST_FILE).write_text(payload, encoding="utf-8")

        index = self._read_index()
        index.append(entry.id)
        (self.directory / INDEX_FILE).write_text(json.dumps(index, indent=2), encoding="utf-8")
        self._ensure_gitignored()

        logger.info(f"Review saved to history: {entry.id} ({entry.issue_count} issues)")
        return entry

    def load_latest(self) -> HistoryEntry | None:
        path = self.directory / LATEST_FILE
        if not path.exists():
            return None
        return self._load(path)

    def list_entries(self, limit: int | None = None) -> list[HistoryEntry]:
        """Stored entries, oldest first; with limit, only the most recent ones."""
        entries = []
        for entry_id in self._read_index():
            path = self.directory / f"{entry_id}.json"
            if not path.exists():
                logger.warning(f"History entry {entry_id} is listed but missing")
                continue
            entries.append(self._load(path))
        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []
        return entries

    def _ensure_gitignored(self) -> None:
        """Add the history directory to an existing .gitignore next to it."""
        gitignore = self.directory.parent / ".gitignore"
        if not gitignore.exists():
            return

        content = gitignore.read_text(encoding="utf-8")
        if self.directory.name in content:
            return

        separator = "" if not content or content.endswith("\n") else "\n"
        with gitignore.open("a", encoding="utf-8") as f:
            f.write(f"{separator}\n# Code review history\n{self.directory.name}/\n")
        logger.info(f"Added {self.directory.name}/ to {gitignore}")

    def _load(self, path: Path) -> HistoryEntry:
        try:
            return HistoryEntry.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise HistoryError(f"Could not read history entry {path}: {e}") from e

    def _read_index(self) -> list[str]:
        path = self.directory / INDEX_FILE
        if not path.exists():
            return []
        try:
            index = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise HistoryError(f"Could not read history index {path}: {e}") from e
        if not isinstance(index, list):
            raise HistoryError(f"History index {path} is not a list")
        return [str(entry_id) for entry_id in index]

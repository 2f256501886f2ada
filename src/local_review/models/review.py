from enum import Enum
from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class ReviewIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: Severity
    file: str | None = None
    line: int | None = None
    description: str
    raw: str = ""


class ParsedReview(BaseModel):
    model_config = ConfigDict(frozen=True)

    issues: tuple[ReviewIssue, ...] = ()
    lgtm: tuple[str, ...] = ()
    raw: str = ""


class ReviewDelta(BaseModel):
    """Partition of two issue sets into new, resolved and persisting issues."""
    model_config = ConfigDict(frozen=True)

    new_issues: tuple[ReviewIssue, ...] = ()
    resolved_issues: tuple[ReviewIssue, ...] = ()
    persisting_issues: tuple[ReviewIssue, ...] = ()

    @property
    def unchanged(self) -> bool:
        return not self.new_issues and not self.resolved_issues

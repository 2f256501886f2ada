from pydantic import BaseModel, ConfigDict, Field
from .review import ReviewIssue


class HistoryEntry(BaseModel):
    # Records are written with the camelCase "issueCount" key
    model_config = ConfigDict(populate_by_name=True)

    id: str
    timestamp: str
    model: str
    mode: str
    issue_count: int = Field(alias="issueCount")
    issues: list[ReviewIssue]
    lgtm: list[str] = []

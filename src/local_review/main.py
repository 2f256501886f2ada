# src/local_review/main.py
import logging
from pathlib import Path
from contextlib import asynccontextmanager
from functools import lru_cache
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from local_review.config import Settings, load_repo_config, write_default_config
from local_review.errors import ExportFormatError, GitError, HistoryError
from local_review.history.store import HistoryStore
from local_review.models.diff import DiffResult
from local_review.models.history import HistoryEntry
from local_review.models.review import ParsedReview, ReviewDelta, ReviewIssue
from local_review.review.delta import compare_issues
from local_review.review.diff_parser import parse_diff
from local_review.review.engine import ReviewEngine
from local_review.review.export import ExportFormat, export_review, write_export
from local_review.review.formatter import format_delta, format_review, has_blocking_issues
from local_review.review.issue_parser import parse_review


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=get_settings().log_level)
    logger.info("local-review starting...")
    yield
    logger.info("local-review shutting down...")


app = FastAPI(title="local-review", lifespan=lifespan)


class DiffRequest(BaseModel):
    diff: str


class ReviewTextRequest(BaseModel):
    text: str


class DeltaRequest(BaseModel):
    current: list[ReviewIssue]
    previous: list[ReviewIssue]


class ExportRequest(BaseModel):
    text: str
    format: ExportFormat | str = ExportFormat.MARKDOWN
    output: str | None = None


class FormatRequest(BaseModel):
    text: str
    previous: list[ReviewIssue] | None = None
    color: bool | None = None


class ReviewRequest(BaseModel):
    response: str
    diff: str | None = None
    base: str | None = None
    staged: bool = False
    model: str | None = None
    mode: str | None = None
    since_last: bool = False


class ReviewResponse(BaseModel):
    status: str
    entry_id: str
    files_changed: int
    total_additions: int
    total_deletions: int
    review: ParsedReview
    delta: ReviewDelta | None = None
    blocking: bool


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


@app.post("/api/diff/parse", response_model=DiffResult)
async def parse_diff_endpoint(request: DiffRequest):
    return parse_diff(request.diff)


@app.post("/api/review/parse", response_model=ParsedReview)
async def parse_review_endpoint(request: ReviewTextRequest):
    return parse_review(request.text)


@app.post("/api/review/delta", response_model=ReviewDelta)
async def delta_endpoint(request: DeltaRequest):
    return compare_issues(request.current, request.previous)


@app.post("/api/review/export", response_class=PlainTextResponse)
def export_endpoint(request: ExportRequest):
    review = parse_review(request.text)
    try:
        if request.output:
            output = Path(get_settings().repo_root) / request.output
            return write_export(review, request.format, output).read_text(encoding="utf-8")
        return export_review(review, request.format)
    except ExportFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/api/review/format", response_class=PlainTextResponse)
async def format_endpoint(request: FormatRequest):
    """Render a review (and its delta against previous issues) for a terminal."""
    use_color = get_settings().use_color if request.color is None else request.color
    review = parse_review(request.text)
    text = format_review(review, use_color=use_color)
    if request.previous is not None:
        text += format_delta(compare_issues(review.issues, request.previous), use_color=use_color)
    return text


@app.post("/api/review", response_model=ReviewResponse)
def review_endpoint(request: ReviewRequest):
    """Record a review of a diff and compare it with the previous one.

    Without a diff in the request, it is read from git in the repo root.
    """
    settings = get_settings()
    engine = ReviewEngine(settings=settings, repo_config=load_repo_config(settings.repo_root))

    try:
        report = engine.run(
            diff_text=request.diff,
            response_text=request.response,
            model=request.model,
            mode=request.mode,
            since_last=request.since_last,
            base=request.base,
            staged=request.staged,
        )
    except GitError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HistoryError as e:
        logger.exception(f"Review failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return ReviewResponse(
        status="completed",
        entry_id=report.entry.id,
        files_changed=len(report.diff.files),
        total_additions=report.diff.total_additions,
        total_deletions=report.diff.total_deletions,
        review=report.review,
        delta=report.delta,
        blocking=has_blocking_issues(report.review),
    )


@app.get("/api/history", response_model=list[HistoryEntry])
def history_endpoint(limit: int = Query(10, ge=0)):
    store = HistoryStore(get_settings().history_path)
    try:
        return list(reversed(store.list_entries(limit=limit)))
    except HistoryError as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/init")
def init_endpoint():
    """Create a default .codereview.yaml in the repo root."""
    path, created = write_default_config(get_settings().repo_root)
    return {"status": "created" if created else "exists", "path": str(path)}

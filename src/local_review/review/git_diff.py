# src/local_review/review/git_diff.py
import logging
import subprocess
from pathlib import Path

from local_review.errors import GitError
from local_review.models.diff import DiffResult
from .diff_parser import parse_diff


logger = logging.getLogger(__name__)

CONTEXT_LINES = 5


def _git(args: list[str], cwd: str | Path) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise GitError("git executable not found") from e


def describe_mode(base: str | None = None, staged: bool = False) -> str:
    if staged:
        return "staged changes"
    if base:
        return f"diff against {base}"
    return "working tree"


def get_diff_text(cwd: str | Path = ".", base: str | None = None, staged: bool = False) -> str:
    """Run git diff for staged changes, a base ref, or the working tree."""
    check = _git(["rev-parse", "--is-inside-work-tree"], cwd)
    if check.returncode != 0 or check.stdout.strip() != "true":
        raise GitError("Not a git repository. Run this from your project root.")

    args = ["diff", f"--unified={CONTEXT_LINES}"]
    if staged:
        args.insert(1, "--cached")
    elif base:
        args.insert(1, base)

    result = _git(args, cwd)
    if result.returncode != 0:
        raise GitError(f"git diff failed: {result.stderr.strip()}")

    logger.info(f"Collected {describe_mode(base, staged)} diff ({len(result.stdout)} bytes)")
    return result.stdout


def get_diff(cwd: str | Path = ".", base: str | None = None, staged: bool = False) -> DiffResult:
    return parse_diff(get_diff_text(cwd, base=base, staged=staged))

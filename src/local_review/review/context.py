# src/local_review/review/context.py
import logging
from dataclasses import dataclass
from pathlib import Path

from local_review.models.diff import DiffFile, FileStatus


logger = logging.getLogger(__name__)

LANGUAGES = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".py": "python",
    ".rs": "rust",
    ".go": "go",
    ".java": "java",
    ".cs": "csharp",
    ".cpp": "cpp",
    ".c": "c",
    ".rb": "ruby",
    ".php": "php",
    ".swift": "swift",
    ".kt": "kotlin",
    ".md": "markdown",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
    ".sh": "bash",
}


@dataclass
class FileContext:
    """Full content of a changed file, for context beyond the diff."""
    path: str
    content: str
    language: str
    exists: bool


def detect_language(file_path: str) -> str:
    return LANGUAGES.get(Path(file_path).suffix.lower(), "plaintext")


def read_file_context(
    files: list[DiffFile] | tuple[DiffFile, ...],
    root: str | Path = ".",
    max_file_size_kb: int = 500,
) -> dict[str, FileContext]:
    """Read current contents of every changed file, keyed by path."""
    root = Path(root)
    contexts: dict[str, FileContext] = {}

    for file in files:
        language = detect_language(file.path)

        if file.status is FileStatus.DELETED:
            contexts[file.path] = FileContext(file.path, "", language, exists=False)
            continue

        full_path = root / file.path
        try:
            size = full_path.stat().st_size
            if size > max_file_size_kb * 1024:
                content = f"[File too large to include: {size / 1024:.0f}KB]"
            else:
                content = full_path.read_text(encoding="utf-8")
            contexts[file.path] = FileContext(file.path, content, language, exists=True)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read file content for {file.path}: {e}")
            contexts[file.path] = FileContext(file.path, "[Could not read file]", language, exists=False)

    return contexts

# src/local_review/review/diff_parser.py
import re
from dataclasses import dataclass, field
from enum import Enum, auto

from local_review.models.diff import (
    DiffFile,
    DiffHunk,
    DiffLine,
    DiffResult,
    FileStatus,
    LineType,
)


SECTION_START = "diff --git "
FILE_HEADER_RE = re.compile(r"a/(.+?) b/(.+)$")
HUNK_HEADER_RE = re.compile(r"^@@ .+ @@")
HUNK_RANGE_RE = re.compile(r"@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")


class LexerState(Enum):
    BEFORE_SECTION = auto()
    FILE_HEADER = auto()
    HUNK_HEADER = auto()
    HUNK_BODY = auto()


@dataclass
class _HunkBuilder:
    header: str
    next_line: int
    lines: list[DiffLine] = field(default_factory=list)

    def record(self, line_type: LineType, content: str) -> None:
        self.lines.append(DiffLine(type=line_type, line_number=self.next_line, content=content))
        # Removed lines have no position in the new file
        if line_type is not LineType.REMOVE:
            self.next_line += 1

    def build(self) -> DiffHunk:
        return DiffHunk(header=self.header, lines=tuple(self.lines))


@dataclass
class _FileBuilder:
    old_path: str
    new_path: str
    is_new: bool = False
    is_deleted: bool = False
    hunks: list[_HunkBuilder] = field(default_factory=list)

    @property
    def status(self) -> FileStatus:
        if self.is_new:
            return FileStatus.ADDED
        if self.is_deleted:
            return FileStatus.DELETED
        if self.old_path != self.new_path:
            return FileStatus.RENAMED
        return FileStatus.MODIFIED

    def build(self) -> DiffFile:
        hunks = tuple(h.build() for h in self.hunks)
        lines = [line for hunk in hunks for line in hunk.lines]
        status = self.status
        return DiffFile(
            path=self.new_path,
            old_path=self.old_path if status is FileStatus.RENAMED else None,
            status=status,
            additions=sum(1 for line in lines if line.type is LineType.ADD),
            deletions=sum(1 for line in lines if line.type is LineType.REMOVE),
            hunks=hunks,
        )


class DiffLexer:
    """Line-driven state machine over unified diff text.

    Each ``diff --git`` line starts a new file section. Sections whose header
    does not name an ``a/`` and ``b/`` path are dropped along with their body,
    and so are lines that do not fit the current state.
    """

    def __init__(self) -> None:
        self.state = LexerState.BEFORE_SECTION
        self.files: list[_FileBuilder] = []
        self._file: _FileBuilder | None = None
        self._hunk: _HunkBuilder | None = None

    def feed(self, line: str) -> None:
        if line.startswith(SECTION_START):
            self._open_section(line[len(SECTION_START):])
            return

        if self._file is None:
            # Before the first section, or inside a dropped one
            return

        if HUNK_HEADER_RE.match(line):
            self._open_hunk(line)
            return

        if self.state is LexerState.FILE_HEADER:
            if line.startswith("new file mode"):
                self._file.is_new = True
            elif line.startswith("deleted file mode"):
                self._file.is_deleted = True
            return

        if self.state in (LexerState.HUNK_HEADER, LexerState.HUNK_BODY):
            self.state = LexerState.HUNK_BODY
            self._body_line(line)

    def _open_section(self, header: str) -> None:
        self._hunk = None
        match = FILE_HEADER_RE.search(header)
        if not match:
            self._file = None
            self.state = LexerState.BEFORE_SECTION
            return

        self._file = _FileBuilder(old_path=match.group(1), new_path=match.group(2))
        self.files.append(self._file)
        self.state = LexerState.FILE_HEADER

    def _open_hunk(self, line: str) -> None:
        header_match = HUNK_HEADER_RE.match(line)
        range_match = HUNK_RANGE_RE.match(line)
        start = int(range_match.group(1)) if range_match else 1
        self._hunk = _HunkBuilder(header=header_match.group(0), next_line=start)
        self._file.hunks.append(self._hunk)
        self.state = LexerState.HUNK_HEADER

    def _body_line(self, line: str) -> None:
        if line.startswith("+"):
            self._hunk.record(LineType.ADD, line[1:])
        elif line.startswith("-"):
            self._hunk.record(LineType.REMOVE, line[1:])
        elif line.startswith(" "):
            self._hunk.record(LineType.CONTEXT, line[1:])
        # "\ No newline at end of file" and anything else is skipped

    def result(self, raw_diff: str) -> DiffResult:
        files = tuple(f.build() for f in self.files)
        return DiffResult(
            files=files,
            total_additions=sum(f.additions for f in files),
            total_deletions=sum(f.deletions for f in files),
            raw_diff=raw_diff,
        )


def parse_diff(diff_text: str) -> DiffResult:
    """Parse unified diff text into files, hunks and numbered lines."""
    if not diff_text.strip():
        return DiffResult()

    lexer = DiffLexer()
    for line in diff_text.split("\n"):
        # Tolerate CRLF line endings
        lexer.feed(line.removesuffix("\r"))
    return lexer.result(diff_text)


class DiffParser:
    def parse(self, diff_text: str) -> DiffResult:
        return parse_diff(diff_text)

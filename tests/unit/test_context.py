# tests/unit/test_context.py
from local_review.models.diff import DiffFile, FileStatus
from local_review.review.context import detect_language, read_file_context


def test_detect_language():
    assert detect_language("src/main.py") == "python"
    assert detect_language("web/App.TSX") == "typescript"
    assert detect_language("Makefile") == "plaintext"


def test_read_file_context_reads_changed_files(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("print('hi')\n", encoding="utf-8")
    files = [DiffFile(path="src/main.py", status=FileStatus.MODIFIED)]

    contexts = read_file_context(files, root=tmp_path)

    ctx = contexts["src/main.py"]
    assert ctx.content == "print('hi')\n"
    assert ctx.language == "python"
    assert ctx.exists is True


def test_read_file_context_deleted_file(tmp_path):
    files = [DiffFile(path="gone.go", status=FileStatus.DELETED)]

    ctx = read_file_context(files, root=tmp_path)["gone.go"]

    assert ctx.content == ""
    assert ctx.exists is False
    assert ctx.language == "go"


def test_read_file_context_missing_file(tmp_path):
    files = [DiffFile(path="missing.rs", status=FileStatus.ADDED)]

    ctx = read_file_context(files, root=tmp_path)["missing.rs"]

    assert ctx.content == "[Could not read file]"
    assert ctx.exists is False


def test_read_file_context_large_file(tmp_path):
    (tmp_path / "big.json").write_text("x" * 3 * 1024, encoding="utf-8")
    files = [DiffFile(path="big.json", status=FileStatus.MODIFIED)]

    ctx = read_file_context(files, root=tmp_path, max_file_size_kb=2)["big.json"]

    assert ctx.content == "[File too large to include: 3KB]"
    assert ctx.exists is True

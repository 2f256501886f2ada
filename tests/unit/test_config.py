# tests/unit/test_config.py
import pytest
from local_review.config import CONFIG_FILENAME, Settings, find_config_file, load_repo_config, write_default_config
from local_review.models.config import RepoConfig


def test_settings_loads_from_env(monkeypatch):
    monkeypatch.setenv("CODEREVIEW_HISTORY_DIR", "/tmp/history")
    monkeypatch.setenv("CODEREVIEW_USE_COLOR", "false")

    settings = Settings()

    assert settings.history_dir == "/tmp/history"
    assert settings.use_color is False


def test_settings_defaults():
    settings = Settings(_env_file=None)

    assert settings.repo_root == "."
    assert settings.history_dir == ".codereview-history"
    assert settings.log_level == "INFO"


def test_settings_history_path_is_under_repo_root(tmp_path):
    settings = Settings(repo_root=str(tmp_path), _env_file=None)

    assert settings.history_path == tmp_path / ".codereview-history"


def test_load_repo_config_defaults_without_file(tmp_path):
    assert load_repo_config(tmp_path) == RepoConfig()


def test_load_repo_config_merges_over_defaults(tmp_path):
    (tmp_path / ".codereview.yaml").write_text(
        """
model: codellama
review:
  check_style: false
ignore:
  - "*.generated.ts"
""",
        encoding="utf-8",
    )

    config = load_repo_config(tmp_path)

    assert config.model == "codellama"
    assert config.base_branch == "main"
    assert config.review.check_style is False
    assert config.review.check_security is True
    assert config.review.max_file_size_kb == 500
    assert config.ignore == ["*.generated.ts"]


def test_load_repo_config_searches_parent_directories(tmp_path):
    (tmp_path / ".codereview.yaml").write_text("base_branch: develop\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_config_file(nested) == (tmp_path / ".codereview.yaml").resolve()
    assert load_repo_config(nested).base_branch == "develop"


def test_load_repo_config_stops_after_three_parents(tmp_path):
    (tmp_path / ".codereview.yaml").write_text("base_branch: develop\n", encoding="utf-8")
    nested = tmp_path / "a" / "b" / "c" / "d"
    nested.mkdir(parents=True)

    assert find_config_file(nested) is None


@pytest.mark.parametrize("content", [
    "review: [unclosed",
    "- just\n- a list\n",
    "review:\n  max_file_size_kb: lots\n",
])
def test_load_repo_config_invalid_falls_back(tmp_path, content):
    (tmp_path / ".codereview.yaml").write_text(content, encoding="utf-8")

    assert load_repo_config(tmp_path) == RepoConfig()


def test_write_default_config(tmp_path):
    path, created = write_default_config(tmp_path)

    assert created
    assert path == tmp_path / CONFIG_FILENAME
    assert path.read_text(encoding="utf-8").startswith("# local-review configuration")
    assert load_repo_config(tmp_path) == RepoConfig()


def test_write_default_config_keeps_existing_file(tmp_path):
    (tmp_path / CONFIG_FILENAME).write_text("model: llama3\n", encoding="utf-8")

    path, created = write_default_config(tmp_path)

    assert not created
    assert path.read_text(encoding="utf-8") == "model: llama3\n"

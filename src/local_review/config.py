# src/local_review/config.py
import logging
from pathlib import Path

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

from local_review.models.config import RepoConfig


logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".codereview.yaml"
CONFIG_SEARCH_DEPTH = 4


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="CODEREVIEW_")

    repo_root: str = "."
    history_dir: str = ".codereview-history"
    log_level: str = "INFO"
    use_color: bool = True

    @property
    def history_path(self) -> Path:
        return Path(self.repo_root) / self.history_dir


DEFAULT_CONFIG_HEADER = "# local-review configuration\n\n"


def find_config_file(start: Path) -> Path | None:
    """Look for .codereview.yaml in start and up to three parent directories."""
    directory = start.resolve()
    for _ in range(CONFIG_SEARCH_DEPTH):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if directory.parent == directory:
            break
        directory = directory.parent
    return None


def load_repo_config(start: str | Path = ".") -> RepoConfig:
    """Load .codereview.yaml merged over defaults, or defaults if absent/invalid."""
    config_file = find_config_file(Path(start))
    if config_file is None:
        return RepoConfig()

    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
        defaults = RepoConfig().model_dump()
        review = {**defaults["review"], **(data.get("review") or {})}
        return RepoConfig(**{**defaults, **data, "review": review})
    except Exception as e:
        logger.warning(f"Invalid {config_file}: {e}")
        return RepoConfig()


def write_default_config(directory: str | Path = ".") -> tuple[Path, bool]:
    """Write a default .codereview.yaml unless one exists. Returns (path, created)."""
    path = Path(directory) / CONFIG_FILENAME
    if path.exists():
        logger.info(f"{path} already exists")
        return path, False

    content = yaml.safe_dump(RepoConfig().model_dump(), sort_keys=False)
    path.write_text(DEFAULT_CONFIG_HEADER + content, encoding="utf-8")
    logger.info(f"Created {path}")
    return path, True

from pydantic import BaseModel, Field


class ReviewChecks(BaseModel):
    check_security: bool = True
    check_performance: bool = True
    check_style: bool = True
    max_file_size_kb: int = 500


class RepoConfig(BaseModel):
    model: str = "deepseek-coder"
    base_branch: str = "main"
    review: ReviewChecks = Field(default_factory=ReviewChecks)
    ignore: list[str] = Field(
        default_factory=lambda: [
            "*.lock",
            "dist/**",
            "node_modules/**",
            "*.min.js",
        ]
    )

"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    data_file: Path = Field(
        default=Path("taskboard.yaml"),
        description="YAML file holding users, boards, lists and cards",
    )

    user: str | None = Field(
        default=None,
        description="ID of the user the CLI acts as",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "TASKBOARD_",
    }

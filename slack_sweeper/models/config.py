"""
Pydantic model for run configuration.
Provides validation for every option the sweep consumes.
"""

import math
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

SECONDS_PER_DAY = 24 * 60 * 60
DEFAULT_CUTOFF_DAYS = 120
DEFAULT_MIN_CANDIDATES = 50
FILES_PAGE_SIZE = 50


class SweepConfig(BaseModel):
    """A validated configuration model for one sweep run."""

    token: str
    destination: Path = Field(default_factory=Path.cwd)
    cutoff_days: float = DEFAULT_CUTOFF_DAYS
    run_delete: bool = False
    min_candidates: int = DEFAULT_MIN_CANDIDATES
    page_size: int = FILES_PAGE_SIZE

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        if not v:
            raise ValueError(
                "A Slack API token is required. Pass --token or set SLACK_TOKEN."
            )
        return v

    @field_validator("destination")
    @classmethod
    def resolve_destination(cls, v: Path) -> Path:
        """Anchors the destination to an absolute path."""
        return Path(v).expanduser().resolve()

    @field_validator("cutoff_days")
    @classmethod
    def validate_cutoff(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Cutoff days must be a finite number.")
        if v < 0:
            raise ValueError("Cutoff days cannot be negative.")
        return v

    @field_validator("min_candidates", "page_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Must be at least 1.")
        return v

    @property
    def dry_run(self) -> bool:
        """Observation-only mode: anything short of an explicit --run-delete."""
        return not self.run_delete

    def cutoff_timestamp(self, now: float) -> int:
        """Upper bound (epoch seconds) for files eligible for the sweep."""
        return int(int(now) - self.cutoff_days * SECONDS_PER_DAY)

"""Configuration models for TaskMaster.

The configuration is persisted as JSON by ``ConfigService`` and validated
with these models on load.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Storage configuration."""

    db_path: str | None = Field(
        default=None, description="SQLite database path (default: user data dir)"
    )


class AnalyticsConfig(BaseModel):
    """Analytics and scheduling configuration."""

    timezone: str = Field(
        default="local",
        description="Zone for day buckets and scheduled times ('local' or IANA name)",
    )
    default_window_days: int = Field(default=30, ge=1)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("timezone cannot be empty")
        return v.strip()


class RewardsConfig(BaseModel):
    """Rewards configuration."""

    leaderboard_size: int = Field(default=10, ge=1)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "json", "yaml"] = Field(default="pretty")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main TaskMaster configuration"""

    current_user_id: str | None = Field(
        default=None, description="Active owner of tasks"
    )
    storage: StorageConfig = Field(default_factory=StorageConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    rewards: RewardsConfig = Field(default_factory=RewardsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

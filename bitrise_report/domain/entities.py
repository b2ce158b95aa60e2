"""Provider records and the statistics derived from them."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderModel(BaseModel):
    """Base for records parsed from Bitrise payloads; unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class App(ProviderModel):
    slug: str
    title: str
    project_type: str = Field(default="other")
    is_disabled: bool = False

    @field_validator("project_type", mode="before")
    @classmethod
    def _default_project_type(cls, value):
        return value or "other"


class Build(ProviderModel):
    slug: Optional[str] = None
    build_number: Optional[int] = None
    triggered_at: Optional[datetime] = None
    started_on_worker_at: Optional[datetime] = None
    environment_prepare_finished_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None


class AppStatistic(BaseModel):
    name: str
    type: str
    # Durations are in days
    avg_build_time: float = 0.0
    avg_hold_time: float = 0.0
    count: int = 0


class TypeStatistic(BaseModel):
    type: str
    avg_hold_time: float = 0.0

"""Configuration models (pydantic BaseModel)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .models import DEFAULT_CONTEXT_KEY, DEFAULT_CONTEXT_KIND, EvaluationContext


class ApiSection(BaseModel):
    """Management API connection."""

    base_url: str = "https://app.launchdarkly.com"
    access_token: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0)
    page_size: int = Field(default=100, ge=1, le=100)


class LogSection(BaseModel):
    """Logging."""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class SyncSection(BaseModel):
    """Defaults used when syncing projects."""

    default_context_kind: str = Field(default=DEFAULT_CONTEXT_KIND, min_length=1)
    default_context_key: str = Field(default=DEFAULT_CONTEXT_KEY, min_length=1)

    def default_context(self) -> EvaluationContext:
        return EvaluationContext(kind=self.default_context_kind, key=self.default_context_key)


class FlagMirrorConfig(BaseModel):
    """Top level configuration."""

    api: ApiSection = Field(default_factory=ApiSection)
    log: LogSection = Field(default_factory=LogSection)
    sync: SyncSection = Field(default_factory=SyncSection)

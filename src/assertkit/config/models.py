"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, assertkit.toml only contains
overrides. An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from datetime import timezone, tzinfo
from typing import Literal

from pydantic import BaseModel, Field

# --- assertkit.toml sections ---


class CompareConfig(BaseModel):
    """[compare] section."""

    model_config = {"frozen": True}

    naive_timezone: Literal["utc", "local"] = "utc"

    def naive_tz(self) -> tzinfo | None:
        """Zone assumed for naive datetimes; None selects the local zone."""
        if self.naive_timezone == "local":
            return None
        return timezone.utc


class ReportConfig(BaseModel):
    """[report] section."""

    model_config = {"frozen": True}

    error_trace: bool = True
    max_trace_depth: int = Field(default=10, ge=1)


class HttpConfig(BaseModel):
    """[http] section."""

    model_config = {"frozen": True}

    base_url: str = "http://testserver"
    follow_redirects: bool = False
    raise_server_exceptions: bool = False

"""DTO for the ``{"error": {...}}`` envelope Azure returns on failures.

The same envelope appears as a non-2xx response body and, occasionally, as an
SSE ``data:`` payload in the middle of a stream.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class ErrorDetail(BaseModel):
    """Server-side error detail. ``type`` and ``code`` are optional."""

    model_config = ConfigDict(extra="ignore")

    message: str
    type: Optional[str] = None
    code: Optional[str] = None

    @field_validator("code", mode="before")
    @classmethod
    def _code_to_str(cls, v):
        # Azure sends numeric codes on some endpoints ("429" vs 429).
        return None if v is None else str(v)


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    error: ErrorDetail


__all__ = ["ErrorDetail", "ErrorEnvelope"]

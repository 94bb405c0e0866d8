"""
API response models for SessionGate JSON endpoints.

These Pydantic v2 models define the HTTP transport contract for the JSON
surface (health check and error envelope). They are intentionally separate
from the dataclasses in auth/models.py, which own the domain representation.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Machine-readable code plus a human message. detail is optional context."""

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Envelope for every JSON error: {"error": {...}}."""

    error: ErrorDetail


class HealthResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["healthy", "degraded"] = "healthy"
    version: str
    components: dict[str, str] = {}

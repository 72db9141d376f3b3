"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    version: str = Field(..., description="Application version")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when the document store answers."""

    status: str = Field(default="ok", description="Readiness status")
    store: str = Field(..., description="Document store backend in use")


class ReadinessErrorResponse(BaseModel):
    """Response for GET /health/ready when the document store fails (503)."""

    status: str = Field(default="not_ready", description="Readiness status")
    message: str = Field(..., description="Reason the store check failed")

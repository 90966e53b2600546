"""Health check schema."""

from datetime import datetime

from pydantic import BaseModel, Field

from hitcounter.services.store import StoreStatus


class HealthResponse(BaseModel):
    """Service liveness and store connectivity."""

    status: str = Field("ok")
    timestamp: datetime
    store_status: StoreStatus
    ping_ms: float | None = Field(None, description="Store round-trip time in milliseconds")

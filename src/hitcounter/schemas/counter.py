"""Counter-related Pydantic schemas."""

from pydantic import BaseModel, Field


class CounterRequest(BaseModel):
    """Identifier triple addressing a single page counter."""

    accountid: str | None = Field(None, description="Owning account identifier")
    siteid: str | None = Field(None, description="Site identifier within the account")
    pageid: str | None = Field(None, description="Opaque page identifier within the site")


class CounterResponse(BaseModel):
    """Current (or post-increment) hit count of a page."""

    count: int = Field(..., ge=0, description="Hit count")

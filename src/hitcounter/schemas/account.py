"""Account and site Pydantic schemas."""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Admin-gated account registration."""

    authentication: str | None = Field(None, description="Admin secret")
    password: str | None = Field(None, description="Secret for the new account")


class RegisterResponse(BaseModel):
    """Registration result carrying the generated account id."""

    message: str = Field("Account registered successfully")
    accountid: str = Field(..., description="Generated account identifier")


class AccountCredentials(BaseModel):
    """Account id plus its secret, required for site management."""

    accountid: str | None = Field(None, description="Account identifier")
    authentication: str | None = Field(None, description="Account secret")


class SiteCreatedResponse(BaseModel):
    """Result of provisioning a new site."""

    message: str = Field("Site ID created successfully")
    siteid: str = Field(..., description="Generated site identifier")


class SiteSummaryResponse(BaseModel):
    """All sites of an account with their aggregate hit counts."""

    result: list[tuple[str, int]] = Field(
        default_factory=list,
        description="Pairs of (site id, aggregate count)",
    )

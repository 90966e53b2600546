# src/hitcounter/api/v1/endpoints/sites.py
"""Site management endpoints; all require the account secret."""

from __future__ import annotations

from fastapi import APIRouter, status

from hitcounter.api.v1.dependencies import AggregatorDep, SiteRegistryDep
from hitcounter.schemas.account import (
    AccountCredentials,
    SiteCreatedResponse,
    SiteSummaryResponse,
)

router = APIRouter(prefix="/sites", tags=["sites"])


@router.post(
    "",
    summary="Provision a new site",
    status_code=status.HTTP_201_CREATED,
    response_model=SiteCreatedResponse,
)
async def create_site(payload: AccountCredentials, sites: SiteRegistryDep) -> SiteCreatedResponse:
    """Create a site under the authenticated account."""
    site_id = await sites.provision_site(payload.accountid, payload.authentication)
    return SiteCreatedResponse(siteid=site_id)


@router.post(
    "/summary",
    summary="List sites with their aggregate counts",
    response_model=SiteSummaryResponse,
)
async def site_summary(payload: AccountCredentials, aggregator: AggregatorDep) -> SiteSummaryResponse:
    """Return every site of the account paired with its total hits."""
    summaries = await aggregator.aggregate(payload.accountid, payload.authentication)
    return SiteSummaryResponse(result=[(s.site_id, s.count) for s in summaries])

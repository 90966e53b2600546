# src/hitcounter/api/v1/endpoints/counter.py
"""Page counter endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from hitcounter.api.v1.dependencies import CounterEngineDep
from hitcounter.schemas.counter import CounterRequest, CounterResponse

router = APIRouter(prefix="/counter", tags=["counter"])


@router.get("", summary="Read a page counter", response_model=CounterResponse)
async def read_counter(
    counters: CounterEngineDep,
    accountid: Annotated[str | None, Query()] = None,
    siteid: Annotated[str | None, Query()] = None,
    pageid: Annotated[str | None, Query()] = None,
) -> CounterResponse:
    """Return the current hit count of a page."""
    count = await counters.read(accountid, siteid, pageid)
    return CounterResponse(count=count)


@router.put("", summary="Record a page hit", response_model=CounterResponse)
async def increment_counter(payload: CounterRequest, counters: CounterEngineDep) -> CounterResponse:
    """Increment a page counter and return the post-increment value."""
    count = await counters.increment(payload.accountid, payload.siteid, payload.pageid)
    return CounterResponse(count=count)

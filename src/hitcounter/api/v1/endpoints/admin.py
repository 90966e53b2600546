# src/hitcounter/api/v1/endpoints/admin.py
"""Administrative endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from hitcounter.api.v1.dependencies import AccountAuthorityDep
from hitcounter.schemas.account import RegisterRequest, RegisterResponse

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/register",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
)
async def register_account(
    payload: RegisterRequest,
    accounts: AccountAuthorityDep,
) -> RegisterResponse:
    """Create an account; requires the admin secret."""
    account_id = await accounts.register_account(payload.authentication, payload.password)
    return RegisterResponse(accountid=account_id)

"""FastAPI endpoints for sign-in, sign-out, session status and profile."""

from fastapi import APIRouter, Depends, Request, Response
from protean.utils.globals import current_domain
from starlette.concurrency import run_in_threadpool

from storefront.identity.account import Account
from storefront.identity.api.dependencies import optional_principal, require_principal
from storefront.identity.api.schemas import (
    AccountSummary,
    AuthStatusResponse,
    ProfileResponse,
    SignInRequest,
    SignInResponse,
    SuccessResponse,
)
from storefront.identity.authentication import SignIn
from storefront.identity.session import Principal

auth_router = APIRouter(prefix="/auth", tags=["auth"])
users_router = APIRouter(prefix="/users", tags=["users"])


@auth_router.post("", response_model=SignInResponse)
async def sign_in(body: SignInRequest, request: Request, response: Response) -> SignInResponse:
    state = request.app.state
    # Provider key fetches block on the network
    identity = await run_in_threadpool(state.identity_provider.verify_id_token, body.id_token)

    account_id = current_domain.process(
        SignIn(external_id=identity.uid, email=identity.email),
        asynchronous=False,
    )
    account = current_domain.repository_for(Account).get(account_id)

    settings = state.settings
    response.set_cookie(
        key=settings.session_cookie_name,
        value=state.session_issuer.issue(account_id=str(account.id), email=account.email),
        max_age=int(settings.session_lifetime.total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )
    return SignInResponse(user=AccountSummary(id=str(account.id), email=account.email, role=account.role))


@auth_router.delete("", response_model=SuccessResponse)
async def sign_out(request: Request, response: Response) -> SuccessResponse:
    settings = request.app.state.settings
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return SuccessResponse()


@auth_router.get("/status", response_model=AuthStatusResponse)
async def auth_status(principal: Principal | None = Depends(optional_principal)) -> AuthStatusResponse:
    return AuthStatusResponse(
        is_authenticated=principal is not None,
        is_admin=bool(principal and principal.is_admin),
    )


@users_router.get("/me", response_model=ProfileResponse)
async def my_profile(principal: Principal = Depends(require_principal)) -> ProfileResponse:
    account = current_domain.repository_for(Account).get(principal.account_id)
    return ProfileResponse(
        id=str(account.id),
        email=account.email,
        role=account.role,
        created_at=account.created_at,
    )

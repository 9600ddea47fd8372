"""FastAPI dependencies that resolve and check the caller of a request.

Services live on ``app.state`` (set by ``create_app``), so every dependency
reads them from the request rather than from module globals.
"""

from fastapi import Depends, Request

from storefront.errors import Unauthenticated
from storefront.identity.guard import Capability, authorize
from storefront.identity.session import Principal
from storefront.utils.logging import add_context, get_logger

logger = get_logger(__name__)


def session_token(request: Request) -> str | None:
    return request.cookies.get(request.app.state.settings.session_cookie_name)


async def optional_principal(request: Request) -> Principal | None:
    """The caller if their session verifies, otherwise None."""
    token = session_token(request)
    if not token:
        return None
    try:
        principal = request.app.state.session_verifier.verify(token)
    except Unauthenticated as exc:
        logger.debug("Ignoring unverifiable session", reason=exc.reason)
        return None
    add_context(account_id=principal.account_id)
    return principal


async def require_principal(request: Request) -> Principal:
    principal = request.app.state.session_verifier.verify(session_token(request))
    add_context(account_id=principal.account_id)
    return authorize(principal, Capability.AUTHENTICATED)


async def require_admin(principal: Principal = Depends(require_principal)) -> Principal:
    return authorize(principal, Capability.ADMIN)

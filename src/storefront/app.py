"""Storefront FastAPI application.

``create_app`` wires the services every request needs (identity provider,
session issuer and verifier, owner locks) onto ``app.state`` and wraps each
request in the storefront domain context. It does not initialize the
domain; ``build_app`` does both and is the entry point for uvicorn:

Usage:
    uvicorn storefront.app:build_app --factory --host 0.0.0.0 --port 8000
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers
from sqlalchemy.exc import OperationalError

from storefront.catalogue.api import product_router
from storefront.domain import storefront
from storefront.errors import InvalidInput, NotFound, StorefrontError, Unavailable
from storefront.identity.api import auth_router, users_router
from storefront.identity.provider import IdentityProvider, build_identity_provider
from storefront.identity.session import SessionIssuer, SessionVerifier
from storefront.ordering.api import cart_router, order_router
from storefront.ordering.locks import OwnerLocks
from storefront.settings import Settings
from storefront.utils.db import apply_dependency_timeouts
from storefront.utils.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------
def _render(error: StorefrontError, extra: dict | None = None) -> JSONResponse:
    headers = {"Retry-After": str(error.retry_after_seconds)} if isinstance(error, Unavailable) else None
    content = error.to_dict()
    if extra:
        content.update(extra)
    return JSONResponse(status_code=error.status_code, content=content, headers=headers)


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    log = logger.warning if exc.status_code >= 500 else logger.info
    log("Request rejected", code=exc.code, reason=exc.reason, method=request.method, path=request.url.path)
    return _render(exc)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Invalid input", errors=exc.messages, path=request.url.path)
    return _render(InvalidInput(), {"details": exc.messages})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path"))
        details.setdefault(field or "request", []).append(error["msg"])
    logger.info("Malformed request", errors=details, path=request.url.path)
    return _render(InvalidInput(), {"details": details})


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    logger.info("Resource not found", path=request.url.path)
    return _render(NotFound())


async def dependency_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Dependency failure",
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=exc,
    )
    return _render(Unavailable())


def register_storefront_exception_handlers(app: FastAPI) -> None:
    # Protean's defaults first, then the storefront's error body on top
    register_exception_handlers(app)

    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    for dependency_error in (OperationalError, TimeoutError, ConnectionError):
        app.add_exception_handler(dependency_error, dependency_failure_handler)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
def create_app(
    settings: Settings | None = None,
    identity_provider: IdentityProvider | None = None,
    session_issuer: SessionIssuer | None = None,
    owner_locks: OwnerLocks | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    session_issuer = session_issuer or SessionIssuer(
        secret=settings.session_secret,
        lifetime=settings.session_lifetime,
    )

    app = FastAPI(
        title="Storefront API",
        description="Accounts, product catalogue, carts and orders",
    )
    app.state.settings = settings
    app.state.identity_provider = identity_provider or build_identity_provider(settings)
    app.state.session_issuer = session_issuer
    app.state.session_verifier = SessionVerifier(session_issuer)
    app.state.owner_locks = owner_locks or OwnerLocks(timeout=settings.owner_lock_timeout_seconds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and bind request-scoped log context."""
        clear_context()
        add_context(request_id=request.headers.get("x-request-id") or uuid4().hex)
        with storefront.domain_context():
            response = await call_next(request)
        return response

    register_storefront_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    logger.info(
        "Application created",
        environment=settings.environment,
        identity_provider=type(app.state.identity_provider).__name__,
    )
    return app


def build_app() -> FastAPI:
    """Initialize the domain and build the application (uvicorn factory)."""
    settings = Settings.from_env()
    apply_dependency_timeouts(storefront, settings.dependency_timeout_seconds)
    storefront.init()
    return create_app(settings=settings)

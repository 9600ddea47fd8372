"""Identity API package."""

from storefront.identity.api.routes import auth_router, users_router

__all__ = ["auth_router", "users_router"]

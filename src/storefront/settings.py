"""Application settings read from the environment.

Protean's own configuration (providers, brokers, event processing) lives in
``domain.toml``; this module covers what the HTTP layer and the session and
identity services need.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta

DEFAULT_SESSION_SECRET = "storefront-development-session-secret-change-me"

IDENTITY_PROVIDERS = ("fake", "oidc")


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    session_secret: str = DEFAULT_SESSION_SECRET
    session_lifetime: timedelta = timedelta(days=5)
    session_cookie_name: str = "session"
    identity_provider: str = "fake"
    oidc_jwks_url: str | None = None
    oidc_audience: str | None = None
    oidc_issuer: str | None = None
    oidc_algorithms: tuple[str, ...] = field(default=("RS256",))
    dependency_timeout_seconds: float = 5.0
    owner_lock_timeout_seconds: float = 5.0

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        algorithms = tuple(
            alg.strip() for alg in env.get("OIDC_ALGORITHMS", "RS256").split(",") if alg.strip()
        )
        settings = cls(
            environment=(env.get("PROTEAN_ENV") or env.get("ENVIRONMENT") or "development").lower(),
            session_secret=env.get("SESSION_SECRET", DEFAULT_SESSION_SECRET),
            session_lifetime=timedelta(days=_float(env, "SESSION_LIFETIME_DAYS", 5)),
            session_cookie_name=env.get("SESSION_COOKIE_NAME", "session"),
            identity_provider=env.get("IDENTITY_PROVIDER", "fake").lower(),
            oidc_jwks_url=env.get("OIDC_JWKS_URL"),
            oidc_audience=env.get("OIDC_AUDIENCE"),
            oidc_issuer=env.get("OIDC_ISSUER"),
            oidc_algorithms=algorithms or ("RS256",),
            dependency_timeout_seconds=_float(env, "DEPENDENCY_TIMEOUT_SECONDS", 5.0),
            owner_lock_timeout_seconds=_float(env, "OWNER_LOCK_TIMEOUT_SECONDS", 5.0),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Reject combinations that would be unsafe or unusable at runtime."""
        if self.identity_provider not in IDENTITY_PROVIDERS:
            raise ValueError(
                f"IDENTITY_PROVIDER must be one of {', '.join(IDENTITY_PROVIDERS)}, got {self.identity_provider!r}"
            )

        if self.is_production:
            if self.session_secret == DEFAULT_SESSION_SECRET:
                raise ValueError("SESSION_SECRET must be set in production")
            if self.identity_provider == "fake":
                raise ValueError("The fake identity provider cannot be used in production")

        if self.identity_provider == "oidc":
            missing = [
                name
                for name, value in (
                    ("OIDC_JWKS_URL", self.oidc_jwks_url),
                    ("OIDC_AUDIENCE", self.oidc_audience),
                    ("OIDC_ISSUER", self.oidc_issuer),
                )
                if not value
            ]
            if missing:
                raise ValueError(f"OIDC identity provider requires {', '.join(missing)}")

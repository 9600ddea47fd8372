"""Relational schema management and connection limits for the storefront's
database providers.

Memory providers need no schema and cannot hang, so only SQL providers are
touched.
"""

import math

from protean.domain import Domain
from sqlalchemy import create_engine

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider


def _register_models(domain: Domain, provider) -> None:
    # Touching _dao forces each model to be built and registered on the
    # provider's SQLAlchemy metadata.
    for _, aggregate_record in domain.registry.aggregates.items():
        if aggregate_record.cls.meta_.provider == provider.name:
            domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

    for _, entity_record in domain.registry.entities.items():
        if entity_record.cls.meta_.provider == provider.name:
            domain.repository_for(entity_record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> int:
    """Create tables for every SQL provider. Returns the number of providers touched."""
    touched = 0
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(
                provider.conn_info["database_uri"],
                connect_args=provider.conn_info.get("connect_args", {}),
            )
            _register_models(domain, provider)
            provider._metadata.create_all(engine)
            logger.info("Database schema created", provider=provider.name)
            touched += 1
    return touched


def drop_db(domain: Domain) -> int:
    """Drop tables for every SQL provider. Returns the number of providers touched."""
    touched = 0
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(
                provider.conn_info["database_uri"],
                connect_args=provider.conn_info.get("connect_args", {}),
            )
            _register_models(domain, provider)
            provider._metadata.drop_all(engine)
            logger.info("Database schema dropped", provider=provider.name)
            touched += 1
    return touched


def timeout_connect_args(provider: str, seconds: float) -> dict:
    """DBAPI ``connect_args`` bounding connection and statement time for ``provider``."""
    if provider == "postgresql":
        return {
            "connect_timeout": max(1, math.ceil(seconds)),
            "options": f"-c statement_timeout={int(seconds * 1000)}",
        }
    if provider == "sqlite":
        return {"timeout": seconds}
    return {}


def apply_dependency_timeouts(domain: Domain, seconds: float) -> int:
    """Add timeout ``connect_args`` to every SQL database in the domain's config.

    Must run before ``domain.init()``; Protean passes the extra keys of a
    database entry to ``create_engine``. Explicitly configured values win.
    Returns the number of databases touched.
    """
    touched = 0
    for name, conn_info in domain.config["databases"].items():
        limits = timeout_connect_args(conn_info.get("provider"), seconds)
        if not limits:
            continue
        conn_info["connect_args"] = {**limits, **(conn_info.get("connect_args") or {})}
        logger.info("Database timeouts applied", database=name, seconds=seconds)
        touched += 1
    return touched

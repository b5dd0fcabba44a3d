"""Document store access: one connection string selects the backing store.

``DATABASE_URL`` is read once per domain, before ``domain.init()``, and mapped
onto a Protean database provider. Connection pooling belongs to the provider;
``setup_db`` and ``drop_db`` manage schemas for the SQL-backed stores.
"""

import os
from urllib.parse import urlparse

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

from shared.errors import StoreError

logger = structlog.get_logger(__name__)

_SCHEME_PROVIDERS = {
    "memory": "memory",
    "sqlite": "sqlite",
    "postgres": "postgresql",
    "postgresql": "postgresql",
    "postgresql+psycopg2": "postgresql",
}

_SQL_PROVIDERS = ("sqlite", "postgresql")


def database_settings(url: str | None = None) -> dict:
    """Translate a connection string into a Protean database config block."""
    url = url if url is not None else os.getenv("DATABASE_URL", "")
    if not url:
        return {"provider": "memory"}

    scheme = urlparse(url).scheme
    provider = _SCHEME_PROVIDERS.get(scheme)
    if provider is None:
        raise StoreError(f"Unsupported DATABASE_URL scheme: {scheme or url!r}")

    if provider == "memory":
        return {"provider": "memory"}
    if scheme == "postgres":
        url = "postgresql" + url[len("postgres") :]
    return {"provider": provider, "database_uri": url}


def configure_store(domain: Domain, url: str | None = None) -> None:
    """Point the domain's default database at the configured store."""
    settings = database_settings(url)
    domain.config["databases"]["default"] = settings
    logger.debug("Store configured", domain=domain.name, provider=settings["provider"])


def _load_models(domain: Domain, provider_name: str) -> None:
    # Accessing the DAO registers the model with the provider's SQLAlchemy metadata.
    for _, aggregate_record in domain.registry.aggregates.items():
        if aggregate_record.cls.meta_.provider == provider_name:
            domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

    for _, entity_record in domain.registry.entities.items():
        if entity_record.cls.meta_.provider == provider_name:
            domain.repository_for(entity_record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create tables for every SQL-backed provider of ``domain``."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                _load_models(domain, provider.name)
                provider._metadata.create_all(engine)
                logger.info("Schema created", domain=domain.name, provider=provider.name)


def drop_db(domain: Domain) -> None:
    """Drop tables for every SQL-backed provider of ``domain``."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)
                logger.info("Schema dropped", domain=domain.name, provider=provider.name)


def reset_data(domain: Domain) -> None:
    """Clear every provider and the event store of ``domain``. Used between tests."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()
        domain.event_store.store._data_reset()

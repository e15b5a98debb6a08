from protean.domain import Domain
from sqlalchemy import create_engine

from warehouse.utils.logging import get_logger

logger = get_logger(__name__)

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in _SQL_PROVIDERS:
            yield provider


def setup_db(domain: Domain):
    """Create tables for every aggregate stored in a SQL provider.

    The memory provider needs no schema and is skipped.
    """
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # Touching _dao registers the aggregate's model with the provider metadata
            for _, aggregate_record in domain.registry.aggregates.items():
                if aggregate_record.cls.meta_.provider == provider.name:
                    domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            logger.info("Schema created", provider=provider.name, tables=sorted(provider._metadata.tables))


def drop_db(domain: Domain):
    """Drop all tables owned by SQL providers."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            logger.info("Schema dropped", provider=provider.name)

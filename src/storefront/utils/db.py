from protean.domain import Domain
from sqlalchemy import create_engine

from storefront.utils.sequence import reset_sequences

_RDBMS_PROVIDERS = ("sqlite", "postgresql")


def setup_db(domain: Domain):
    """Create tables for aggregates stored in a relational provider.

    The default in-memory provider needs no schema, so this is a no-op
    unless the domain is configured with sqlite or postgresql.
    """
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _RDBMS_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])

                # Touch each repository's DAO so its model is registered with SQLAlchemy
                for _, aggregate_record in domain.registry.aggregates.items():
                    if aggregate_record.cls.meta_.provider == provider.name:
                        domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

                provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop the relational schema created by ``setup_db``."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _RDBMS_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)


def reset_data(domain: Domain):
    """Empty every provider and restart the identity sequences."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            provider._data_reset()
    reset_sequences()

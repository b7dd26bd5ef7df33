"""Storefront bounded context — Identity, Catalogue, Cart and Orders.

A single Protean domain hosts every aggregate of the storefront. All data
lives in the domain's configured providers (in-memory by default), so the
repositories returned by ``current_domain.repository_for()`` are the one
storage seam of the application.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")

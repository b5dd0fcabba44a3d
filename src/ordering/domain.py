"""Ordering bounded context — carts, wishlists and orders.

Carts and wishlists are keyed by the owning user's id. Orders are immutable
snapshots of what was bought; only their status and payment status move.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)

"""Shops bounded context — seller shop registration and admin moderation."""

import structlog
from protean.domain import Domain

shops = Domain(name="shops")

logger = structlog.get_logger(__name__)

"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
"""

from dataclasses import dataclass, field


@dataclass
class BuyerState:
    """Tracks a simulated buyer's session and what it has touched."""

    token: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None


@dataclass
class SellerState:
    """Tracks a simulated seller's shop and listings."""

    token: str | None = None
    shop_id: str | None = None
    product_ids: list[str] = field(default_factory=list)

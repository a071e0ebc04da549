"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own view of the line ids it created.
The cart itself is shared by every user, so a line may already be gone
(checked out or removed by someone else) by the time it is referenced.
"""

from dataclasses import dataclass, field


@dataclass
class CartState:
    """Tracks the lines one simulated shopper added to the shared cart."""

    line_ids: list[str] = field(default_factory=list)
    receipts: int = 0

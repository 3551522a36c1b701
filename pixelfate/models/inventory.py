"""
Owned Inventory - tier-aware card counts.

INVARIANT: Counts are never negative.
Removal that would go below zero raises InsufficientCopiesError and leaves
the inventory untouched, so check-then-act happens in one call.
"""

from dataclasses import dataclass, field

from pixelfate.config import MAX_TIER, MIN_TIER, SYNTHESIS_COST


class InsufficientCopiesError(Exception):
    """Raised when an operation would consume more copies than are owned."""

    def __init__(self, card_id: int, tier: int, requested: int, available: int) -> None:
        self.card_id = card_id
        self.tier = tier
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot consume {requested} copies of card {card_id} at tier {tier}: "
            f"only {available} owned"
        )


@dataclass
class Inventory:
    """
    A player's owned cards.

    Stored as card id -> tier -> count. Zero counts may be present (a tier
    that was owned and then fully consumed) and are treated as not owned.
    """

    owned: dict[int, dict[int, int]] = field(default_factory=dict)

    def count(self, card_id: int, tier: int) -> int:
        """Copies owned of a card at a tier (0 if never owned)."""
        return self.owned.get(card_id, {}).get(tier, 0)

    def owns(self, card_id: int, tier: int, quantity: int = 1) -> bool:
        return self.count(card_id, tier) >= quantity

    def add(self, card_id: int, tier: int, quantity: int = 1) -> None:
        """Add copies of a card at a tier."""
        if quantity < 0:
            raise ValueError(f"Cannot add a negative quantity ({quantity})")
        tiers = self.owned.setdefault(card_id, {})
        tiers[tier] = tiers.get(tier, 0) + quantity

    def remove(self, card_id: int, tier: int, quantity: int = 1) -> None:
        """
        Consume copies of a card at a tier.

        Raises:
            InsufficientCopiesError: If fewer than `quantity` copies are owned
        """
        available = self.count(card_id, tier)
        if available < quantity:
            raise InsufficientCopiesError(card_id, tier, quantity, available)
        self.owned[card_id][tier] = available - quantity

    def tiers_for(self, card_id: int) -> dict[int, int]:
        """Copy of the tier -> count map for one card."""
        return dict(self.owned.get(card_id, {}))

    def highest_tier(self, card_id: int) -> int | None:
        """Highest tier with at least one copy, or None if none owned."""
        owned_tiers = [tier for tier, count in self.owned.get(card_id, {}).items() if count > 0]
        return max(owned_tiers) if owned_tiers else None

    def synthesizable_tier(self, card_id: int) -> int | None:
        """Lowest tier below the top tier that holds enough copies to synthesize."""
        for tier in range(MIN_TIER, MAX_TIER):
            if self.count(card_id, tier) >= SYNTHESIS_COST:
                return tier
        return None

    def total_cards(self) -> int:
        """Total copies across all cards and tiers."""
        return sum(sum(tiers.values()) for tiers in self.owned.values())

    def unique_cards(self) -> int:
        """Number of card ids with at least one copy."""
        return sum(1 for tiers in self.owned.values() if any(c > 0 for c in tiers.values()))

    def clear(self) -> None:
        self.owned.clear()

    def copy(self) -> "Inventory":
        return Inventory(owned={card_id: dict(tiers) for card_id, tiers in self.owned.items()})

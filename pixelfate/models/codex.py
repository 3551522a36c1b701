"""
Codex - personality codes x tiers ever achieved.

INVARIANT: Append-only. Entries are never removed except by a full reset.
"""

from dataclasses import dataclass, field

from pixelfate.config import MAX_TIER, MIN_TIER

TIERS_PER_CODE = MAX_TIER - MIN_TIER + 1


@dataclass
class Codex:
    """Mapping of personality code -> set of tiers achieved."""

    entries: dict[str, set[int]] = field(default_factory=dict)

    def record(self, code: str, tier: int) -> bool:
        """
        Record that a completed session reached `tier` with `code`.

        Returns True if this combination is new.
        """
        tiers = self.entries.setdefault(code, set())
        if tier in tiers:
            return False
        tiers.add(tier)
        return True

    def tiers(self, code: str) -> set[int]:
        return set(self.entries.get(code, set()))

    def has(self, code: str, tier: int) -> bool:
        return tier in self.entries.get(code, set())

    def progress(self, code: str) -> int:
        """Number of distinct tiers achieved for a code (0 to 3)."""
        return len(self.entries.get(code, set()))

    def completed_codes(self) -> list[str]:
        """Codes with every tier achieved, sorted."""
        return sorted(code for code, tiers in self.entries.items() if len(tiers) >= TIERS_PER_CODE)

    def clear(self) -> None:
        self.entries.clear()

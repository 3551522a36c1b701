"""
Scheduled effects with staleness guards.

Two delayed effects exist: the shuffle settle and the reforge resolve. Each
captures a token when it is requested. After the delay, the token is checked
against the engine's current epoch (bumped by a full reset) and, for
slot-bound effects, the slot's version (bumped whenever the slot changes).
A stale token means the effect is dropped; nothing is applied.

INVARIANT: At most one reforge is pending per slot.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pixelfate.models.slots import SlotBoard, SlotKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EffectToken:
    """Identity of a delayed effect at the moment it was requested."""

    epoch: int
    slot: SlotKey | None = None
    slot_version: int = 0


class EffectScheduler:
    """
    Issues and validates tokens for delayed effects.

    Args:
        board: The slot board whose versions guard slot-bound effects
        sleep: Awaitable delay, replaced in tests
    """

    def __init__(
        self,
        board: SlotBoard,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.board = board
        self.epoch = 0
        self._sleep = sleep
        self._pending: dict[SlotKey, EffectToken] = {}

    def issue(self, slot: SlotKey | None = None) -> EffectToken:
        """Capture the current epoch (and slot version, if given)."""
        if slot is None:
            return EffectToken(epoch=self.epoch)
        return EffectToken(epoch=self.epoch, slot=slot, slot_version=self.board.version(slot))

    def is_current(self, token: EffectToken) -> bool:
        if token.epoch != self.epoch:
            return False
        if token.slot is not None and self.board.version(token.slot) != token.slot_version:
            return False
        return True

    async def wait(self, token: EffectToken, seconds: float) -> bool:
        """
        Sleep for the effect's delay, then report whether it may still apply.

        A zero or negative delay skips the sleep entirely.
        """
        if seconds > 0:
            await self._sleep(seconds)
        current = self.is_current(token)
        if not current:
            logger.debug(
                "Dropping stale effect (epoch %d, now %d, slot %s)",
                token.epoch,
                self.epoch,
                token.slot.value if token.slot else "-",
            )
        return current

    def advance_epoch(self) -> int:
        """Invalidate every outstanding token. Pending reforges are forgotten."""
        self.epoch += 1
        self._pending.clear()
        return self.epoch

    # -------------------------------------------------------------------------
    # Pending reforges
    # -------------------------------------------------------------------------

    def reserve(self, slot: SlotKey) -> EffectToken | None:
        """
        Mark a reforge pending on `slot`.

        Returns its token, or None if one is already pending there.
        """
        if slot in self._pending:
            return None
        token = self.issue(slot)
        self._pending[slot] = token
        return token

    def release(self, token: EffectToken) -> None:
        """Clear the pending mark, unless a newer reservation replaced it."""
        if token.slot is not None and self._pending.get(token.slot) is token:
            del self._pending[token.slot]

    def is_pending(self, slot: SlotKey) -> bool:
        return slot in self._pending

    @property
    def pending_slots(self) -> frozenset[SlotKey]:
        return frozenset(self._pending)

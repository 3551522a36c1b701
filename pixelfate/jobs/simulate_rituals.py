"""
Play complete rituals without delays.

Useful for checking the rarity curve and for seeding a player's collection
in development. Results are persisted through the configured database.
"""

import asyncio
import logging
from collections import Counter

from pixelfate.config import settings
from pixelfate.db.database import async_session_factory, init_db
from pixelfate.models.outcome import DrawOutcome, Phase
from pixelfate.services.engine import FateEngine
from pixelfate.services.persistence import PersistenceStore, SqlStateStore

logger = logging.getLogger(__name__)

DEFAULT_SESSIONS = 50
DEFAULT_PLAYER = "simulator"


async def play_session(engine: FateEngine) -> str | None:
    """
    Run one ritual to completion by drawing from the top of the spread.

    Returns the personality code, or None if the session did not complete.
    """
    await engine.begin_ritual()
    if engine.phase is not Phase.SPREAD:
        return None
    for card in list(engine.deck):
        result = engine.draw(card.id)
        if result.outcome is DrawOutcome.COMPLETED and result.completion:
            return result.completion.code
    return None


async def run_simulation(
    player_id: str = DEFAULT_PLAYER,
    sessions: int = DEFAULT_SESSIONS,
) -> dict[str, int]:
    """
    Play `sessions` rituals for `player_id`.

    Returns:
        Dict mapping personality code to the number of sessions that produced it
    """
    await init_db()
    config = settings.model_copy(
        update={"shuffle_settle_seconds": 0.0, "reforge_resolve_seconds": 0.0}
    )
    store = PersistenceStore(
        SqlStateStore(async_session_factory, player_id),
        history_limit=config.history_limit,
    )
    engine = FateEngine(persistence=store, config=config)
    await engine.load()

    codes: Counter[str] = Counter()
    tiers: Counter[int] = Counter()
    for _ in range(sessions):
        code = await play_session(engine)
        if code is None:
            logger.warning("Session did not complete")
            continue
        codes[code] += 1
        for _, instance in engine.board.in_order():
            if instance is not None:
                tiers[instance.tier] += 1

    await engine.flush()

    drawn = sum(tiers.values()) or 1
    logger.info(
        "Played %d sessions for %s: %d distinct codes, tier mix %s",
        sum(codes.values()),
        player_id,
        len(codes),
        ", ".join(f"{tier}={tiers[tier] / drawn:.2f}" for tier in sorted(tiers)),
    )
    logger.info("Collection now holds %d cards", engine.inventory.total_cards())
    return dict(codes)


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_simulation())


if __name__ == "__main__":
    main()

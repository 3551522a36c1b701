from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PIXELFATE_")

    app_name: str = "PixelFate"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./pixelfate.db"

    # Pacing delays (seconds). Cosmetic only: logical state never depends on them.
    shuffle_settle_seconds: float = 1.5
    reforge_resolve_seconds: float = 1.5
    idle_prompt_seconds: float = 15.0

    # Repeated mutations inside this window collapse into one durable write
    persist_debounce_seconds: float = 1.0

    history_limit: int = 20


settings = Settings()


# =============================================================================
# GAME RULES
# =============================================================================

# Tier bounds: 1 = common, 2 = superior, 3 = legendary
MIN_TIER = 1
MAX_TIER = 3

# Rarity distribution for tier assignment (must sum to 1.0)
TIER_WEIGHTS: dict[int, float] = {1: 0.60, 2: 0.25, 3: 0.15}

# Copies consumed by one synthesis
SYNTHESIS_COST = 3

# Copies consumed by one successful reforge
REFORGE_COST = 1

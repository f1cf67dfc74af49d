from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="FORESTSCORER_")

    app_name: str = "ForestScorer"
    debug: bool = False
    log_level: str = "INFO"

    # Static card definition document, loaded once per process
    card_definitions_path: Path = DATA_DIR / "cards.json"


settings = Settings()


# =============================================================================
# LAYOUT GEOMETRY
# =============================================================================

# Distance below which two edges count as touching (normalized coordinates)
ADJACENT_EPSILON = 1e-3

# How far a card may overlap an anchor edge and still sit beside it
SIDE_OVERLAP_TOLERANCE = 2e-3

# Minimum shared extent across the placement axis, relative to the smaller card
MIN_PERP_OVERLAP_RATIO = 0.20

# Maximum gap along the placement axis, relative to the larger card
MAX_SIDE_GAP_RATIO = 0.50


# =============================================================================
# CARD CATALOG
# =============================================================================

# Definitions carrying this tag are structure anchors
ANCHOR_TAG = "Tree"

# Output group label for cards belonging to a structure ("Structure 1", ...)
GROUP_LABEL_PREFIX = "Structure"

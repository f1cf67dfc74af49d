"""
Card catalog service.

Loads and caches the static card definition document.
"""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from forestscorer.config import ANCHOR_TAG, settings
from forestscorer.models.card import CardDefinition, CardDefinitionDocument
from forestscorer.models.failure import CardCatalogError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardCatalog:
    """
    Card definitions indexed by entity id.

    Attributes:
        definitions: Entity id -> definition (first definition wins on duplicates)
        anchor_ids: Entity ids tagged as structure anchors
    """

    definitions: dict[str, CardDefinition]
    anchor_ids: frozenset[str]

    @classmethod
    def from_definitions(cls, cards: list[CardDefinition]) -> "CardCatalog":
        definitions: dict[str, CardDefinition] = {}
        for card in cards:
            if card.id in definitions:
                logger.warning("Duplicate card definition ignored: %s", card.id)
                continue
            definitions[card.id] = card

        anchor_ids = frozenset(
            card_id for card_id, card in definitions.items() if ANCHOR_TAG in card.tags
        )
        return cls(definitions=definitions, anchor_ids=anchor_ids)

    def get(self, card_id: str) -> CardDefinition | None:
        """Definition for an entity id, None if unknown."""
        return self.definitions.get(card_id)

    def is_anchor(self, card_id: str) -> bool:
        """True if the entity id is a structure anchor."""
        return card_id in self.anchor_ids

    def __len__(self) -> int:
        return len(self.definitions)


def load_card_catalog(path: Path | None = None) -> CardCatalog:
    """
    Load the card catalog from a JSON document.

    Args:
        path: Path to the JSON document. Defaults to the configured path.

    Returns:
        CardCatalog with all definitions.

    Raises:
        CardCatalogError: If the document is missing, unreadable or invalid
    """
    if path is None:
        path = settings.card_definitions_path

    if not path.exists():
        raise CardCatalogError(
            f"Card definitions not found at {path}.",
            detail=str(path),
        )

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise CardCatalogError("Card definitions are not valid JSON.", detail=str(e)) from e

    try:
        document = CardDefinitionDocument.model_validate(raw)
    except ValidationError as e:
        raise CardCatalogError(
            "Card definitions do not match the expected format.",
            detail=f"{e.error_count()} validation error(s)",
        ) from e

    catalog = CardCatalog.from_definitions(document.cards)
    logger.info(
        "Loaded %d card definitions (%d anchors) from %s",
        len(catalog),
        len(catalog.anchor_ids),
        path,
    )
    return catalog


@lru_cache(maxsize=1)
def get_card_catalog() -> CardCatalog:
    """
    Get cached card catalog.

    Returns:
        CardCatalog for the configured definitions path.
        Cached after first load.

    Raises:
        CardCatalogError: If the catalog cannot be loaded
    """
    return load_card_catalog()

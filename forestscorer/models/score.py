from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CardScoreDetail:
    """
    Score of one card, as shown to the players.

    Attributes:
        card_id: Raw detection label ("wolf:oak")
        points: Points awarded to this card
        reason: Human-readable explanation of the points
        title: Entity id of the card
        group: "Structure N" for cards in a structure, None if unattached
    """

    card_id: str
    points: int
    reason: str
    title: str | None = None
    group: str | None = None


@dataclass
class PlayerScoreResult:
    """Final score of one player with per-card details in display order."""

    name: str
    total_score: int = 0
    card_details: list[CardScoreDetail] = field(default_factory=list)

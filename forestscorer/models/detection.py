"""
Detection input models.

A detected card is produced by the recognition step upstream of this
package: a label of the form ``"<entityId>:<attachmentSymbol>"``, a
similarity score and a bounding box in normalized image coordinates.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Box:
    """
    Axis-aligned rectangle of one detected card.

    Attributes:
        x1, y1: Top-left corner
        x2, y2: Bottom-right corner
        cx, cy: Center
        w, h: Width and height
        label: Raw detection label ("wolf:oak")
    """

    x1: float
    y1: float
    x2: float
    y2: float
    cx: float
    cy: float
    w: float
    h: float
    label: str


@dataclass(frozen=True, slots=True)
class DetectedCard:
    """One detection as delivered by the recognition step."""

    card_id: str
    x1: float
    y1: float
    x2: float
    y2: float
    cx: float
    cy: float
    w: float
    h: float
    similarity: float = 1.0

    def to_box(self) -> Box:
        """Drop the similarity and keep the geometry plus label."""
        return Box(
            x1=self.x1,
            y1=self.y1,
            x2=self.x2,
            y2=self.y2,
            cx=self.cx,
            cy=self.cy,
            w=self.w,
            h=self.h,
            label=self.card_id,
        )


@dataclass
class PlayerInput:
    """A player and the cards detected in their play area."""

    name: str
    cards: list[DetectedCard] = field(default_factory=list)


def detected_card_from_corners(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    card_id: str,
    similarity: float = 1.0,
) -> DetectedCard:
    """Build a detection from its corners, deriving center and size."""
    w = x2 - x1
    h = y2 - y1
    return DetectedCard(
        card_id=card_id,
        x1=x1,
        y1=y1,
        x2=x2,
        y2=y2,
        cx=x1 + w / 2,
        cy=y1 + h / 2,
        w=w,
        h=h,
        similarity=similarity,
    )

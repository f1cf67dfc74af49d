"""
Scoring API endpoint.

Scores every player of one game from their detected cards.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from forestscorer.analysis.scorer import score_players
from forestscorer.models.detection import DetectedCard, PlayerInput
from forestscorer.models.failure import CardCatalogError
from forestscorer.services.card_database import CardCatalog, get_card_catalog

router = APIRouter(prefix="/score", tags=["score"])


def get_catalog() -> CardCatalog:
    """Catalog dependency; an unusable catalog makes the service unavailable."""
    try:
        return get_card_catalog()
    except CardCatalogError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.to_response().model_dump(mode="json"),
        ) from e


class DetectedCardRequest(BaseModel):
    """One detected card as delivered by the recognition step."""

    card_id: str = Field(
        ...,
        description="Detection label '<entityId>:<attachmentSymbol>'",
        examples=["wolf:oak"],
    )
    similarity: float = Field(default=1.0, description="Recognition similarity (unused)")
    x1: float
    y1: float
    x2: float
    y2: float
    cx: float | None = Field(default=None, description="Center x, derived from corners if absent")
    cy: float | None = Field(default=None, description="Center y, derived from corners if absent")
    w: float | None = Field(default=None, description="Width, derived from corners if absent")
    h: float | None = Field(default=None, description="Height, derived from corners if absent")

    def to_detected_card(self) -> DetectedCard:
        w = self.w if self.w is not None else self.x2 - self.x1
        h = self.h if self.h is not None else self.y2 - self.y1
        return DetectedCard(
            card_id=self.card_id,
            x1=self.x1,
            y1=self.y1,
            x2=self.x2,
            y2=self.y2,
            cx=self.cx if self.cx is not None else self.x1 + w / 2,
            cy=self.cy if self.cy is not None else self.y1 + h / 2,
            w=w,
            h=h,
            similarity=self.similarity,
        )


class PlayerRequest(BaseModel):
    """A player and their detected cards."""

    name: str
    cards: list[DetectedCardRequest] = Field(default_factory=list)


class ScoreRequest(BaseModel):
    """Request model for scoring a game."""

    players: list[PlayerRequest] = Field(..., description="Players in table order")


class CardScoreResponse(BaseModel):
    """Score of one card."""

    card_id: str
    points: int
    reason: str
    title: str | None = None
    group: str | None = None


class PlayerScoreResponse(BaseModel):
    """Final score of one player."""

    name: str
    total_score: int
    card_details: list[CardScoreResponse] = Field(default_factory=list)


class ScoreResponse(BaseModel):
    """Response model for a scored game."""

    players: list[PlayerScoreResponse] = Field(default_factory=list)


@router.post("", response_model=ScoreResponse)
async def score_game(
    request: ScoreRequest,
    catalog: Annotated[CardCatalog, Depends(get_catalog)],
) -> ScoreResponse:
    """
    Score a game.

    Returns one result per player in request order, each card listed in
    display order with its points and explanation.
    """
    players = [
        PlayerInput(name=p.name, cards=[c.to_detected_card() for c in p.cards])
        for p in request.players
    ]
    results = score_players(players, catalog)

    return ScoreResponse(
        players=[
            PlayerScoreResponse(
                name=result.name,
                total_score=result.total_score,
                card_details=[
                    CardScoreResponse(
                        card_id=detail.card_id,
                        points=detail.points,
                        reason=detail.reason,
                        title=detail.title,
                        group=detail.group,
                    )
                    for detail in result.card_details
                ],
            )
            for result in results
        ]
    )

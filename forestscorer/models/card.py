"""
Card definition models.

These mirror the static card definition document. Validation happens once,
when the catalog is loaded; after that every model is frozen.

The score rule is a tagged variant selected by its ``type`` key, so the shape
of ``amount`` (a scalar for fixed and multiplication rules, a sequence for
table rules) is settled at load time rather than inspected on every score.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

POSITION_BELOW = "below"


class Condition(BaseModel):
    """
    Declarative match condition attached to a score rule.

    An absent name or tag list means "no filter". A present but empty list
    filters everything out.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    names: tuple[str, ...] | None = Field(default=None, alias="name")
    tags: tuple[str, ...] | None = None
    type: str | None = None
    unique: bool = False
    same_tree: bool = Field(default=False, alias="sameTree")
    same_tree_symbol: bool = Field(default=False, alias="sameTreeSymbol")
    full_tree: bool = Field(default=False, alias="fullTree")
    most: bool = False
    same_spot: bool = Field(default=False, alias="sameSpot")
    position: tuple[str, ...] | None = None

    @property
    def below(self) -> bool:
        """True if the condition scans the cards underneath the scored card."""
        return self.position is not None and POSITION_BELOW in self.position


class FixedRule(BaseModel):
    """Award ``amount`` outright, or only when the condition is met."""

    model_config = ConfigDict(frozen=True)

    type: Literal["fixed"] = "fixed"
    amount: int = 0
    min: int | None = None
    condition: Condition | None = None


class MultiplicationRule(BaseModel):
    """Award ``amount`` per matching card."""

    model_config = ConfigDict(frozen=True)

    type: Literal["multiplication"] = "multiplication"
    amount: int = 0
    min: int | None = None
    condition: Condition | None = None


class TableRule(BaseModel):
    """Look the match count up in a points table (1 match -> first entry)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["table"] = "table"
    amounts: tuple[int, ...] = Field(default=(), alias="amount")
    min: int | None = None
    condition: Condition | None = None


ScoreRule = Annotated[
    FixedRule | MultiplicationRule | TableRule,
    Field(discriminator="type"),
]


class Joker(BaseModel):
    """A card that stands in for any card of the given type."""

    model_config = ConfigDict(frozen=True)

    type: str


class CardDefinition(BaseModel):
    """
    Static definition of one card.

    Attributes:
        id: Entity id, the left part of a detection label
        tags: Free-form tags; "Tree" marks a structure anchor
        type: Optional type label matched by conditions
        score: Optional score rule
        joker: Optional joker rule
    """

    model_config = ConfigDict(frozen=True)

    id: str
    tags: tuple[str, ...] = ()
    type: str | None = None
    score: ScoreRule | None = None
    joker: Joker | None = None

    @field_validator("score", mode="before")
    @classmethod
    def _normalize_rule_type(cls, value: Any) -> Any:
        # Rule types are matched case-insensitively
        if isinstance(value, dict) and isinstance(value.get("type"), str):
            return {**value, "type": value["type"].lower()}
        return value


class CardDefinitionDocument(BaseModel):
    """Top-level shape of the card definition document."""

    cards: list[CardDefinition] = Field(default_factory=list)

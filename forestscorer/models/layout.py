"""
Layout models.

A player's play area is reconstructed as a forest: every anchor card (a tree)
owns four ordered attachment lists, one per side. Cards are addressed by
their arena index so every per-card map stays valid from layout building
through scoring to display ordering.
"""

from dataclasses import dataclass, field
from enum import Enum

from forestscorer.models.card import CardDefinition
from forestscorer.models.detection import Box


class Side(str, Enum):
    """Side of an anchor an attachment sits on."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_vertical(self) -> bool:
        """True for sides stacked along the y axis (top and bottom)."""
        return self in (Side.TOP, Side.BOTTOM)


@dataclass(frozen=True, slots=True)
class CardInstance:
    """
    One detected card resolved against the catalog.

    Attributes:
        index: Position in the player's instance arena
        box: Detection geometry and raw label
        id: Entity id parsed from the label
        tree_symbol: Attachment symbol parsed from the label
        definition: Catalog entry, None for unknown ids
    """

    index: int
    box: Box
    id: str
    tree_symbol: str
    definition: CardDefinition | None = None

    @property
    def is_joker(self) -> bool:
        return self.definition is not None and self.definition.joker is not None


@dataclass
class Tree:
    """An anchor card and the cards attached to each of its sides."""

    anchor: CardInstance
    top: list[CardInstance] = field(default_factory=list)
    left: list[CardInstance] = field(default_factory=list)
    right: list[CardInstance] = field(default_factory=list)
    bottom: list[CardInstance] = field(default_factory=list)

    def side(self, side: Side) -> list[CardInstance]:
        """Attachment list for one side."""
        if side is Side.TOP:
            return self.top
        if side is Side.BOTTOM:
            return self.bottom
        if side is Side.LEFT:
            return self.left
        return self.right

    def attachments(self) -> list[CardInstance]:
        """All attached cards, top then bottom then left then right."""
        return [*self.top, *self.bottom, *self.left, *self.right]

    def members(self) -> list[CardInstance]:
        """Anchor followed by attachments, top, left, right, bottom."""
        return [self.anchor, *self.top, *self.left, *self.right, *self.bottom]

    @property
    def is_full(self) -> bool:
        """True if every side holds at least one card."""
        return bool(self.top and self.left and self.bottom and self.right)


@dataclass
class Forest:
    """
    All trees of one player plus the instance arena.

    Instances that no tree reaches are unattached. They are kept: they are
    scored and shown, only without a group label.
    """

    instances: list[CardInstance] = field(default_factory=list)
    trees: list[Tree] = field(default_factory=list)

    def all_instances(self) -> list[CardInstance]:
        """
        Every instance in scoring order.

        Tree members first (trees in build order, each anchor followed by its
        top, left, right and bottom cards), then unattached instances in
        input order.
        """
        seen: set[int] = set()
        result: list[CardInstance] = []
        for tree in self.trees:
            for inst in tree.members():
                if inst.index not in seen:
                    seen.add(inst.index)
                    result.append(inst)
        for inst in self.instances:
            if inst.index not in seen:
                seen.add(inst.index)
                result.append(inst)
        return result

    def unattached(self) -> list[CardInstance]:
        """Instances not reachable from any tree, in input order."""
        reachable = {inst.index for tree in self.trees for inst in tree.members()}
        return [inst for inst in self.instances if inst.index not in reachable]


@dataclass(frozen=True, slots=True)
class Placement:
    """Where an instance sits: its tree, and its side (None for the anchor)."""

    tree: Tree
    side: Side | None

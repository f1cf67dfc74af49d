"""
Forest builder.

Reconstructs a player's layout from unordered detection boxes. Anchor cards
(trees) are fixed points; every other card is attached to at most one side
of at most one tree.

Placement runs in two phases:

1. Direct placement: each card is matched against every tree and side; the
   closest admissible (tree, side) wins, ties going to the larger shared
   extent across the placement axis.
2. Chain expansion: cards still unplaced are attached when they touch a card
   already on a side, so a side can grow into a line of cards even when only
   the first one is close to the tree itself.
"""

import logging
from dataclasses import dataclass

from forestscorer.analysis.geometry import overlap_h, overlap_v
from forestscorer.config import (
    ADJACENT_EPSILON,
    MAX_SIDE_GAP_RATIO,
    MIN_PERP_OVERLAP_RATIO,
    SIDE_OVERLAP_TOLERANCE,
)
from forestscorer.models.detection import Box
from forestscorer.models.layout import CardInstance, Forest, Side, Tree
from forestscorer.services.card_database import CardCatalog
from forestscorer.services.instance_resolver import resolve_instances

logger = logging.getLogger(__name__)

# Evaluation order for direct placement; first side wins exact ties
PLACEMENT_SIDES = (Side.TOP, Side.LEFT, Side.RIGHT, Side.BOTTOM)

# Order in which each tree's sides are grown during chain expansion
EXPANSION_SIDES = (Side.TOP, Side.BOTTOM, Side.LEFT, Side.RIGHT)


@dataclass(frozen=True, slots=True)
class PlacementCandidate:
    """An admissible (tree, side) slot for a card."""

    tree: Tree
    side: Side
    gap: float
    overlap: float

    def beats(self, other: "PlacementCandidate | None") -> bool:
        """Smaller gap wins; equal gaps go to the larger overlap."""
        if other is None:
            return True
        return self.gap < other.gap or (self.gap == other.gap and self.overlap > other.overlap)


def raw_gap(card: Box, anchor: Box, side: Side) -> float:
    """Signed distance from the anchor edge to the card, negative when overlapping."""
    if side is Side.TOP:
        return anchor.y1 - card.y2
    if side is Side.BOTTOM:
        return card.y1 - anchor.y2
    if side is Side.LEFT:
        return anchor.x1 - card.x2
    return card.x1 - anchor.x2


def edge_on_side(card: Box, anchor: Box, side: Side) -> bool:
    """True if the card does not reach past the anchor edge on that side."""
    if side is Side.TOP:
        return card.y2 <= anchor.y1 + ADJACENT_EPSILON
    if side is Side.BOTTOM:
        return card.y1 >= anchor.y2 - ADJACENT_EPSILON
    if side is Side.LEFT:
        return card.x2 <= anchor.x1 + ADJACENT_EPSILON
    return card.x1 >= anchor.x2 - ADJACENT_EPSILON


def center_on_side(card: Box, anchor: Box, side: Side) -> bool:
    """True if the card center lies on that side of the anchor center."""
    if side is Side.TOP:
        return card.cy <= anchor.cy
    if side is Side.BOTTOM:
        return card.cy >= anchor.cy
    if side is Side.LEFT:
        return card.cx <= anchor.cx
    return card.cx >= anchor.cx


def measure_side(card: Box, anchor: Box, side: Side) -> tuple[float, float] | None:
    """
    Check whether a card can sit on one side of an anchor box.

    The card must share enough extent with the anchor across the placement
    axis, must not overlap the anchor edge beyond the tolerance, and must be
    close enough along the placement axis.

    Returns:
        (gap, overlap) with the gap clamped at 0, or None if rejected.
    """
    if side.is_vertical:
        overlap = overlap_h(card, anchor)
        min_perp = max(ADJACENT_EPSILON, min(anchor.w, card.w))
        max_gap = max(ADJACENT_EPSILON, max(anchor.h, card.h)) * MAX_SIDE_GAP_RATIO
    else:
        overlap = overlap_v(card, anchor)
        min_perp = max(ADJACENT_EPSILON, min(anchor.h, card.h))
        max_gap = max(ADJACENT_EPSILON, max(anchor.w, card.w)) * MAX_SIDE_GAP_RATIO

    if overlap < min_perp * MIN_PERP_OVERLAP_RATIO:
        return None

    gap = raw_gap(card, anchor, side)
    if gap < -SIDE_OVERLAP_TOLERANCE:
        return None
    gap = max(0.0, gap)

    if gap > max_gap:
        return None
    return gap, overlap


def best_placement_candidate(card: CardInstance, tree: Tree) -> PlacementCandidate | None:
    """Best side of one tree for a card, None if no side is admissible."""
    best: PlacementCandidate | None = None
    anchor = tree.anchor.box

    for side in PLACEMENT_SIDES:
        measured = measure_side(card.box, anchor, side)
        if measured is None:
            continue
        if not center_on_side(card.box, anchor, side):
            continue

        gap, overlap = measured
        candidate = PlacementCandidate(tree=tree, side=side, gap=gap, overlap=overlap)
        if candidate.beats(best):
            best = candidate

    return best


def pick_directly_adjacent(
    anchor: Box,
    cards: list[CardInstance],
    side: Side,
) -> list[CardInstance]:
    """
    Cards touching an anchor box on one side.

    Only the nearest cards are returned: everything within ADJACENT_EPSILON
    of the smallest admissible gap.
    """
    candidates: list[tuple[CardInstance, float]] = []

    for card in cards:
        measured = measure_side(card.box, anchor, side)
        if measured is None:
            continue
        if not edge_on_side(card.box, anchor, side):
            continue
        candidates.append((card, measured[0]))

    if not candidates:
        return []

    min_gap = min(gap for _, gap in candidates)
    return [card for card, gap in candidates if gap <= min_gap + ADJACENT_EPSILON]


def expand_side_chain(
    anchor: Box,
    side: Side,
    attached: list[CardInstance],
    remaining: list[CardInstance],
) -> None:
    """
    Grow one side of a tree through chains of touching cards.

    Moves cards from ``remaining`` into ``attached`` in rounds until no
    unplaced card touches the chain. Both lists are modified in place.
    """
    chain: list[Box] = [anchor, *(c.box for c in attached)]

    while True:
        found: dict[int, CardInstance] = {}
        for box in chain:
            for card in pick_directly_adjacent(box, remaining, side):
                found.setdefault(card.index, card)
        if not found:
            break

        remaining[:] = [card for card in remaining if card.index not in found]
        for card in found.values():
            attached.append(card)
            chain.append(card.box)


def build_forest(boxes: list[Box], catalog: CardCatalog) -> Forest:
    """
    Build a player's forest from detection boxes.

    Args:
        boxes: Detection boxes in input order
        catalog: Card definitions (anchor ids come from here)

    Returns:
        Forest with one tree per anchor card and the full instance arena.
    """
    instances = resolve_instances(boxes, catalog)
    trees = [Tree(anchor=inst) for inst in instances if catalog.is_anchor(inst.id)]
    cards = [inst for inst in instances if not catalog.is_anchor(inst.id)]

    # Phase 1: direct placement
    for card in cards:
        best: PlacementCandidate | None = None
        for tree in trees:
            candidate = best_placement_candidate(card, tree)
            if candidate is not None and candidate.beats(best):
                best = candidate
        if best is not None:
            best.tree.side(best.side).append(card)
            logger.debug(
                "Placed %s on %s of %s (gap=%.4f)",
                card.box.label,
                best.side.value,
                best.tree.anchor.box.label,
                best.gap,
            )

    # Phase 2: chain expansion for indirectly adjacent cards
    placed = {inst.index for tree in trees for inst in tree.attachments()}
    remaining = [card for card in cards if card.index not in placed]

    for tree in trees:
        for side in EXPANSION_SIDES:
            expand_side_chain(tree.anchor.box, side, tree.side(side), remaining)

    logger.debug(
        "Built forest: %d trees, %d cards, %d unattached",
        len(trees),
        len(instances),
        len(remaining),
    )
    return Forest(instances=instances, trees=trees)

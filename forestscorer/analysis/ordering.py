"""
Display ordering.

Trees are listed in reading order (row by row, left to right). Each tree is
followed by its top, left, right and bottom cards, nearest to the anchor
first. Cards no traversal reaches go last, in input order.
"""

from functools import cmp_to_key

from forestscorer.analysis.forest_builder import edge_on_side
from forestscorer.config import ADJACENT_EPSILON, GROUP_LABEL_PREFIX
from forestscorer.models.layout import CardInstance, Forest, Side, Tree

DISPLAY_SIDES = (Side.TOP, Side.LEFT, Side.RIGHT, Side.BOTTOM)


def sort_trees_visually(trees: list[Tree]) -> list[Tree]:
    """
    Trees in reading order.

    Two anchors share a row when their top edges differ by less than half
    the average anchor height; a row reads left to right.
    """
    if not trees:
        return []

    avg_h = sum(tree.anchor.box.h for tree in trees) / len(trees)
    threshold = max(avg_h / 2, ADJACENT_EPSILON)

    def compare(a: Tree, b: Tree) -> float:
        if abs(a.anchor.box.y1 - b.anchor.box.y1) < threshold:
            return a.anchor.box.x1 - b.anchor.box.x1
        return a.anchor.box.y1 - b.anchor.box.y1

    return sorted(trees, key=cmp_to_key(compare))


def _side_sort_key(inst: CardInstance, side: Side) -> tuple[float, float]:
    box = inst.box
    if side is Side.TOP:
        return (-box.y2, box.cx)
    if side is Side.BOTTOM:
        return (box.y1, box.cx)
    if side is Side.LEFT:
        return (-box.x2, box.cy)
    return (box.x1, box.cy)


def sort_attached(tree: Tree, side: Side) -> list[CardInstance]:
    """
    One side's cards, nearest to the anchor first.

    Cards that do not actually lie on that side of the anchor are left out.
    """
    ordered = sorted(tree.side(side), key=lambda inst: _side_sort_key(inst, side))
    return [inst for inst in ordered if edge_on_side(inst.box, tree.anchor.box, side)]


def order_for_display(forest: Forest) -> list[CardInstance]:
    """Every instance of the forest, each exactly once, in display order."""
    ordered: list[CardInstance] = []
    seen: set[int] = set()

    def emit(inst: CardInstance) -> None:
        if inst.index not in seen:
            seen.add(inst.index)
            ordered.append(inst)

    for tree in sort_trees_visually(forest.trees):
        emit(tree.anchor)
        for side in DISPLAY_SIDES:
            for inst in sort_attached(tree, side):
                emit(inst)

    # Tree members dropped by the side check, then unattached cards
    for tree in forest.trees:
        for inst in tree.members():
            emit(inst)
    for inst in forest.unattached():
        emit(inst)

    return ordered


def tree_index_by_instance(forest: Forest) -> dict[int, int]:
    """Reading-order tree index of every tree member, keyed by arena index."""
    result: dict[int, int] = {}
    for position, tree in enumerate(sort_trees_visually(forest.trees)):
        for inst in tree.members():
            result[inst.index] = position
    return result


def group_label(tree_position: int | None) -> str | None:
    """'Structure N' for a 0-based reading-order position, None if unattached."""
    if tree_position is None:
        return None
    return f"{GROUP_LABEL_PREFIX} {tree_position + 1}"

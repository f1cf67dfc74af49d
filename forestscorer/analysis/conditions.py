"""
Condition evaluation.

Turns a declarative score condition into a match count for one card:
pick the candidate pool (whole layout, same tree, same spot, cards below),
filter it by ids, tags, type and tree symbol, then count.

Uniqueness has two flavours. For most rules it is the number of distinct
ids among the matches (jokers excluded). For table rules the matches are
packed into id-disjoint groups, and each card scores the size of the group
it holds when its turn in scoring order comes. A later card can move it to
another group afterwards without changing that count. The grouping is
shared between cards, so it is computed once per player in a pre-pass
(``build_table_groups``) that walks the scoring order and records each
count as it goes.
"""

from forestscorer.analysis.geometry import overlap_h
from forestscorer.analysis.most import MostResolver
from forestscorer.analysis.placement import PlayerLayout
from forestscorer.models.card import Condition, TableRule
from forestscorer.models.layout import CardInstance


def matches_condition(self_inst: CardInstance, inst: CardInstance, condition: Condition) -> bool:
    """
    True if ``inst`` matches the condition evaluated for ``self_inst``.

    A joker of the condition's type always matches. Otherwise every filter
    the condition sets must pass.
    """
    definition = inst.definition
    if (
        condition.type is not None
        and definition is not None
        and definition.joker is not None
        and definition.joker.type == condition.type
    ):
        return True

    if condition.names is not None and inst.id not in condition.names:
        return False

    if condition.tags is not None:
        card_tags = definition.tags if definition is not None else ()
        if not any(tag in card_tags for tag in condition.tags):
            return False

    if condition.type is not None and (definition is None or definition.type != condition.type):
        return False

    if condition.same_tree_symbol and inst.tree_symbol != self_inst.tree_symbol:
        return False

    return True


def filter_cards(
    self_inst: CardInstance,
    pool: list[CardInstance],
    condition: Condition,
) -> list[CardInstance]:
    """Cards of the pool matching the condition, in pool order."""
    return [inst for inst in pool if matches_condition(self_inst, inst, condition)]


def candidate_pool(
    inst: CardInstance,
    condition: Condition,
    layout: PlayerLayout,
) -> list[CardInstance] | None:
    """
    Cards a condition looks at.

    Returns:
        The pool, or None when the scope cannot apply to this card (a tree
        scope for an unattached card, a spot scope for an anchor).
    """
    placement = layout.placements.get(inst)

    if condition.same_tree:
        if placement is None:
            return None
        tree = placement.tree
        attached = tree.attachments()
        if inst.index == tree.anchor.index:
            return attached
        return [tree.anchor, *attached]

    if condition.same_spot:
        if placement is None or placement.side is None:
            return None
        return list(placement.tree.side(placement.side))

    if condition.below:
        return [
            other
            for other in layout.instances
            if other.box.y1 >= inst.box.y2 and overlap_h(other.box, inst.box) > 0
        ]

    return layout.instances


def uses_table_dedup(inst: CardInstance, condition: Condition) -> bool:
    """True if the card counts unique matches through table grouping."""
    definition = inst.definition
    return (
        condition.unique
        and definition is not None
        and isinstance(definition.score, TableRule)
    )


class TableGroups:
    """
    Id-disjoint match groups shared by the cards of one player.

    Each card maps to one group. A card's table count is the number of ids
    in its group at the time it was recorded.
    """

    def __init__(self) -> None:
        self._groups: dict[int, set[str]] = {}
        self._counts: dict[int, int] = {}

    def __contains__(self, inst: CardInstance) -> bool:
        return inst.index in self._groups

    def size(self, inst: CardInstance) -> int:
        """Current size of the card's group, 0 if it has none."""
        group = self._groups.get(inst.index)
        return len(group) if group is not None else 0

    def record(self, inst: CardInstance) -> None:
        """Freeze the card's count at the size of its current group."""
        self._counts[inst.index] = self.size(inst)

    def count(self, inst: CardInstance) -> int:
        """Recorded count, 0 if the card was never recorded."""
        return self._counts.get(inst.index, 0)

    def assign(self, owner: CardInstance, matches: list[CardInstance]) -> None:
        """
        Pack matches first-fit into groups without repeated ids.

        The owner takes the first group unless it is itself among the
        matches, in which case it keeps the group it was packed into. Every
        match is (re)assigned to its new group.
        """
        groups: list[set[str]] = [set()]
        self._groups[owner.index] = groups[0]

        for match in matches:
            target = next((group for group in groups if match.id not in group), None)
            if target is None:
                target = set()
                groups.append(target)
            self._groups[match.index] = target
            target.add(match.id)


def build_table_groups(layout: PlayerLayout, most: MostResolver) -> TableGroups:
    """
    Compute table groupings and counts for one player before scoring.

    Cards are visited in scoring order. A card not yet grouped packs its
    matches; a card already grouped by an earlier card's matches keeps that
    group. Either way its count is recorded on the spot, so regrouping by a
    later card does not change it.
    """
    groups = TableGroups()

    for inst in layout.instances:
        rule = inst.definition.score if inst.definition is not None else None
        if not isinstance(rule, TableRule) or rule.condition is None:
            continue
        condition = rule.condition
        if not condition.unique:
            continue
        if not most.is_winner(layout.player_index, inst, condition):
            continue
        if condition.full_tree:
            continue

        if inst not in groups:
            pool = candidate_pool(inst, condition, layout)
            if pool is None:
                continue
            groups.assign(inst, filter_cards(inst, pool, condition))
        groups.record(inst)

    return groups


def count_matches(
    inst: CardInstance,
    condition: Condition,
    layout: PlayerLayout,
    most: MostResolver,
    table_groups: TableGroups,
) -> int:
    """
    Number of cards matching a condition for one card.

    Args:
        inst: Card whose rule is evaluated
        condition: The rule's condition
        layout: The card owner's layout
        most: Cross-player winners for this run
        table_groups: The owner's precomputed table groupings

    Returns:
        Non-negative match count.
    """
    if condition.most and not most.is_winner(layout.player_index, inst, condition):
        return 0

    if condition.full_tree:
        placement = layout.placements.get(inst)
        return 1 if placement is not None and placement.tree.is_full else 0

    pool = candidate_pool(inst, condition, layout)
    if pool is None:
        return 0

    if uses_table_dedup(inst, condition):
        return table_groups.count(inst)

    matching = filter_cards(inst, pool, condition)
    if condition.unique:
        return len({m.id for m in matching if not m.is_joker})
    return len(matching)

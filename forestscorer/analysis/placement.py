"""Inverse lookup from a card instance to its tree and side."""

from dataclasses import dataclass

from forestscorer.models.layout import CardInstance, Forest, Placement, Side


class PlacementIndex:
    """
    Where each instance of a forest sits.

    Anchors map to their own tree with no side. If an instance appears more
    than once, the first registration wins (anchor, then top, bottom, left,
    right, trees in build order).
    """

    def __init__(self, forest: Forest) -> None:
        self._by_index: dict[int, Placement] = {}
        for tree in forest.trees:
            self._register(tree.anchor, Placement(tree=tree, side=None))
            for side in (Side.TOP, Side.BOTTOM, Side.LEFT, Side.RIGHT):
                for inst in tree.side(side):
                    self._register(inst, Placement(tree=tree, side=side))

    def _register(self, inst: CardInstance, placement: Placement) -> None:
        self._by_index.setdefault(inst.index, placement)

    def get(self, inst: CardInstance) -> Placement | None:
        """Placement of an instance, None if it is unattached."""
        return self._by_index.get(inst.index)


@dataclass
class PlayerLayout:
    """
    One player's reconstructed layout, ready for scoring.

    Attributes:
        player_index: Position of the player in the scoring run
        forest: Trees and instance arena
        instances: Every instance in scoring order
        placements: Tree and side lookup
    """

    player_index: int
    forest: Forest
    instances: list[CardInstance]
    placements: PlacementIndex

    @classmethod
    def from_forest(cls, player_index: int, forest: Forest) -> "PlayerLayout":
        return cls(
            player_index=player_index,
            forest=forest,
            instances=forest.all_instances(),
            placements=PlacementIndex(forest),
        )

    @classmethod
    def empty(cls, player_index: int) -> "PlayerLayout":
        """Layout of a player without usable detections."""
        return cls.from_forest(player_index, Forest())

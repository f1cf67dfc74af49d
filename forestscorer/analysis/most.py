"""
Cross-player "most" resolution.

A condition flagged ``most`` only pays off for the player(s) holding the
highest count of the matching cards across the whole table. Every player's
layout must therefore exist before any such condition is evaluated.

The resolver is a per-run context object: it is built from all layouts of one
scoring run, memoizes winners per condition key, and is discarded with the
run.
"""

import logging
from dataclasses import dataclass

from forestscorer.analysis.placement import PlayerLayout
from forestscorer.models.card import Condition
from forestscorer.models.layout import CardInstance

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MostKey:
    """Canonical identity of a "most" comparison."""

    names: tuple[str, ...]
    tags: tuple[str, ...]
    unique: bool
    tree_symbol: str | None

    @classmethod
    def for_condition(cls, inst: CardInstance, condition: Condition) -> "MostKey":
        return cls(
            names=tuple(sorted(n for n in condition.names or () if n)),
            tags=tuple(sorted(t for t in condition.tags or () if t)),
            unique=condition.unique,
            tree_symbol=inst.tree_symbol if condition.same_tree_symbol else None,
        )

    def as_string(self) -> str:
        unique = "true" if self.unique else "false"
        return f"{','.join(self.names)}|{','.join(self.tags)}|{unique}|{self.tree_symbol or ''}"


@dataclass(frozen=True, slots=True)
class MostWinners:
    """Highest count for a key and the players reaching it."""

    max_count: int
    winners: frozenset[int]


def count_for_key(key: MostKey, instances: list[CardInstance], condition: Condition) -> int:
    """
    Count one player's cards for a "most" key.

    Always scans the player's whole layout; tree, spot and position scopes
    do not apply to "most" comparisons, and jokers only count as themselves.
    """
    matching: list[CardInstance] = []
    for inst in instances:
        if key.tree_symbol is not None and inst.tree_symbol != key.tree_symbol:
            continue
        definition = inst.definition
        card_tags = definition.tags if definition is not None else ()
        if key.names and inst.id not in key.names:
            continue
        if key.tags and not any(tag in card_tags for tag in key.tags):
            continue
        if condition.type is not None and (definition is None or condition.type != definition.type):
            continue
        matching.append(inst)

    if key.unique:
        return len({inst.id for inst in matching if not inst.is_joker})
    return len(matching)


class MostResolver:
    """Winners of every "most" comparison in one scoring run."""

    def __init__(self, layouts: list[PlayerLayout]) -> None:
        self._layouts = layouts
        self._cache: dict[str, MostWinners] = {}

    def winners(self, key: MostKey, condition: Condition) -> MostWinners:
        """
        Winners for a key, computed on first use.

        A maximum of 0 has no winners; ties at the maximum all win.
        """
        cache_key = key.as_string()
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        counts = [count_for_key(key, layout.instances, condition) for layout in self._layouts]
        max_count = max([0, *counts])
        winners = frozenset(
            layout.player_index
            for layout, count in zip(self._layouts, counts, strict=True)
            if max_count > 0 and count == max_count
        )
        result = MostWinners(max_count=max_count, winners=winners)
        self._cache[cache_key] = result

        logger.debug(
            "Most %s: max=%d winners=%s",
            cache_key,
            max_count,
            sorted(winners),
        )
        return result

    def is_winner(self, player_index: int, inst: CardInstance, condition: Condition) -> bool:
        """True if the player wins the condition's comparison (or it has none)."""
        if not condition.most:
            return True
        key = MostKey.for_condition(inst, condition)
        return player_index in self.winners(key, condition).winners

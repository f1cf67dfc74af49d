"""
Player scoring.

Scoring runs in two passes. First every player's layout is built; then the
cross-player "most" context is created from all layouts and each player is
scored against it. Results are never streamed per player, because a later
player's layout can change an earlier player's points.
"""

import logging

from forestscorer.analysis.conditions import build_table_groups
from forestscorer.analysis.forest_builder import build_forest
from forestscorer.analysis.most import MostResolver
from forestscorer.analysis.ordering import group_label, order_for_display, tree_index_by_instance
from forestscorer.analysis.placement import PlayerLayout
from forestscorer.analysis.score_engine import score_instance
from forestscorer.models.detection import PlayerInput
from forestscorer.models.score import CardScoreDetail, PlayerScoreResult
from forestscorer.services.card_database import CardCatalog

logger = logging.getLogger(__name__)


def build_player_layout(player_index: int, player: PlayerInput, catalog: CardCatalog) -> PlayerLayout:
    """
    Build one player's layout.

    A failure is contained to this player: it is logged and the player is
    scored as having no cards.
    """
    if not player.cards:
        return PlayerLayout.empty(player_index)

    try:
        forest = build_forest([card.to_box() for card in player.cards], catalog)
    except Exception:
        logger.exception("Failed to build layout for player %r", player.name)
        return PlayerLayout.empty(player_index)

    return PlayerLayout.from_forest(player_index, forest)


def score_layout(
    name: str,
    layout: PlayerLayout,
    most: MostResolver,
) -> PlayerScoreResult:
    """Score every card of one layout and emit the details in display order."""
    if not layout.instances:
        return PlayerScoreResult(name=name)

    table_groups = build_table_groups(layout, most)
    scores = {
        inst.index: score_instance(inst, layout, most, table_groups) for inst in layout.instances
    }
    tree_positions = tree_index_by_instance(layout.forest)

    details: list[CardScoreDetail] = []
    for inst in order_for_display(layout.forest):
        points, reason = scores[inst.index]
        details.append(
            CardScoreDetail(
                card_id=inst.box.label,
                points=points,
                reason=reason,
                title=inst.id,
                group=group_label(tree_positions.get(inst.index)),
            )
        )

    return PlayerScoreResult(
        name=name,
        total_score=sum(detail.points for detail in details),
        card_details=details,
    )


def score_players(players: list[PlayerInput], catalog: CardCatalog) -> list[PlayerScoreResult]:
    """
    Score all players of one game.

    Args:
        players: Players in table order with their detected cards
        catalog: Card definitions

    Returns:
        One result per player, in input order.
    """
    # Pass 1: every layout must exist before any "most" comparison
    layouts = [
        build_player_layout(position, player, catalog) for position, player in enumerate(players)
    ]

    # Pass 2: score against the shared per-run context
    most = MostResolver(layouts)
    results = [
        score_layout(player.name, layout, most)
        for player, layout in zip(players, layouts, strict=True)
    ]

    logger.info(
        "Scored %d players: %s",
        len(results),
        ", ".join(f"{r.name}={r.total_score}" for r in results),
    )
    return results

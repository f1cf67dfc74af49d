from forestscorer.analysis.forest_builder import build_forest
from forestscorer.analysis.most import MostResolver
from forestscorer.analysis.ordering import order_for_display, sort_trees_visually
from forestscorer.analysis.placement import PlacementIndex, PlayerLayout
from forestscorer.analysis.scorer import score_players

__all__ = [
    "MostResolver",
    "PlacementIndex",
    "PlayerLayout",
    "build_forest",
    "order_for_display",
    "score_players",
    "sort_trees_visually",
]

from forestscorer.models.card import (
    CardDefinition,
    CardDefinitionDocument,
    Condition,
    FixedRule,
    Joker,
    MultiplicationRule,
    ScoreRule,
    TableRule,
)
from forestscorer.models.detection import (
    Box,
    DetectedCard,
    PlayerInput,
    detected_card_from_corners,
)
from forestscorer.models.failure import (
    ApiResponse,
    CardCatalogError,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
)
from forestscorer.models.layout import CardInstance, Forest, Placement, Side, Tree
from forestscorer.models.score import CardScoreDetail, PlayerScoreResult

__all__ = [
    "ApiResponse",
    "Box",
    "CardCatalogError",
    "CardDefinition",
    "CardDefinitionDocument",
    "CardInstance",
    "CardScoreDetail",
    "Condition",
    "DetectedCard",
    "FailureDetail",
    "FailureKind",
    "FixedRule",
    "Forest",
    "Joker",
    "KnownError",
    "MultiplicationRule",
    "OutcomeType",
    "Placement",
    "PlayerInput",
    "PlayerScoreResult",
    "ScoreRule",
    "Side",
    "TableRule",
    "Tree",
    "detected_card_from_corners",
]

import pytest

from forestscorer.models.card import CardDefinition
from forestscorer.services.card_database import CardCatalog, get_card_catalog

BUTTERFLY_TABLE = [0, 3, 6, 12, 20, 35, 55]


@pytest.fixture(autouse=True)
def clear_catalog_cache():
    """Reset the cached catalog so settings overrides take effect per test."""
    get_card_catalog.cache_clear()
    yield
    get_card_catalog.cache_clear()


@pytest.fixture
def card_definitions() -> list[dict]:
    """Card definition document entries covering every rule and condition shape."""
    return [
        {"id": "oak", "tags": ["Tree"]},
        {"id": "birch", "tags": ["Tree"], "score": {"type": "fixed", "amount": 1}},
        {
            "id": "linden",
            "tags": ["Tree"],
            "score": {"type": "fixed", "amount": 3, "condition": {"name": ["linden"], "most": True}},
        },
        {
            "id": "wolf",
            "tags": ["Paw"],
            "score": {"type": "multiplication", "amount": 5, "condition": {"type": "Deer"}},
        },
        {
            "id": "roe_deer",
            "tags": ["Hoofed"],
            "type": "Deer",
            "score": {"type": "multiplication", "amount": 3, "condition": {"sameTreeSymbol": True}},
        },
        {"id": "red_deer", "tags": ["Hoofed"], "type": "Deer"},
        {"id": "deer_spirit", "tags": ["Hoofed"], "joker": {"type": "Deer"}},
        {
            "id": "peacock_butterfly",
            "tags": ["Butterfly", "Insect"],
            "score": {
                "type": "table",
                "amount": BUTTERFLY_TABLE,
                "condition": {"tags": ["Butterfly"], "unique": True},
            },
        },
        {
            "id": "camberwell_beauty",
            "tags": ["Butterfly", "Insect"],
            "score": {
                "type": "table",
                "amount": BUTTERFLY_TABLE,
                "condition": {"tags": ["Butterfly"], "unique": True},
            },
        },
        {
            "id": "squirrel",
            "tags": ["Paw"],
            "score": {
                "type": "fixed",
                "amount": 5,
                "condition": {"name": ["oak"], "sameTree": True},
            },
        },
        {
            "id": "common_toad",
            "tags": ["Amphibian"],
            "score": {
                "type": "fixed",
                "amount": 5,
                "min": 2,
                "condition": {"name": ["common_toad"], "sameSpot": True},
            },
        },
        {
            "id": "beech_marten",
            "tags": ["Paw"],
            "score": {"type": "fixed", "amount": 5, "condition": {"fullTree": True}},
        },
        {
            "id": "chanterelle",
            "tags": ["Mushroom"],
            "score": {"type": "multiplication", "amount": 1, "condition": {"position": ["below"]}},
        },
        {
            "id": "woodpecker",
            "tags": ["Bird"],
            "score": {"type": "fixed", "amount": 10, "condition": {"tags": ["Tree"], "most": True}},
        },
        {
            "id": "wild_strawberries",
            "tags": ["Plant"],
            "score": {
                "type": "fixed",
                "amount": 10,
                "min": 8,
                "condition": {"tags": ["Tree"], "unique": True},
            },
        },
        {
            "id": "blackberries",
            "tags": ["Plant"],
            "score": {"type": "multiplication", "amount": 3, "condition": {"tags": ["Plant"]}},
        },
        {
            "id": "nothing_matches",
            "tags": ["Plant"],
            "score": {"type": "multiplication", "amount": 1, "condition": {"name": []}},
        },
        {"id": "brown_bear", "tags": ["Paw"]},
    ]


@pytest.fixture
def catalog(card_definitions: list[dict]) -> CardCatalog:
    """Catalog built from the test card definitions."""
    return CardCatalog.from_definitions(
        [CardDefinition.model_validate(d) for d in card_definitions]
    )

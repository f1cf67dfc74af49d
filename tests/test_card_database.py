"""Tests for card catalog loading."""

import json
from pathlib import Path

import pytest

from forestscorer.config import settings
from forestscorer.models.card import (
    CardDefinition,
    FixedRule,
    MultiplicationRule,
    TableRule,
)
from forestscorer.models.failure import CardCatalogError, FailureKind, OutcomeType
from forestscorer.services.card_database import (
    CardCatalog,
    get_card_catalog,
    load_card_catalog,
)


@pytest.fixture
def definitions_file(tmp_path: Path, card_definitions: list[dict]) -> Path:
    """Card definition document on disk."""
    path = tmp_path / "cards.json"
    path.write_text(json.dumps({"cards": card_definitions}), encoding="utf-8")
    return path


class TestCardDefinitionModel:
    def test_rule_variant_selected_by_type(self) -> None:
        """The score rule shape is decided by its type key."""
        fixed = CardDefinition.model_validate({"id": "a", "score": {"type": "fixed", "amount": 2}})
        mult = CardDefinition.model_validate(
            {"id": "b", "score": {"type": "multiplication", "amount": 2, "condition": {}}}
        )
        table = CardDefinition.model_validate(
            {"id": "c", "score": {"type": "table", "amount": [1, 2, 3], "condition": {}}}
        )

        assert isinstance(fixed.score, FixedRule)
        assert isinstance(mult.score, MultiplicationRule)
        assert isinstance(table.score, TableRule)
        assert table.score.amounts == (1, 2, 3)

    def test_rule_type_case_insensitive(self) -> None:
        """Rule types are matched regardless of case."""
        card = CardDefinition.model_validate({"id": "a", "score": {"type": "Fixed", "amount": 4}})
        assert isinstance(card.score, FixedRule)
        assert card.score.amount == 4

    def test_unknown_rule_type_rejected(self) -> None:
        """An unknown rule type is a validation error."""
        with pytest.raises(ValueError):
            CardDefinition.model_validate({"id": "a", "score": {"type": "bonus", "amount": 1}})

    def test_condition_aliases(self) -> None:
        """Condition keys use the document's camelCase names."""
        card = CardDefinition.model_validate(
            {
                "id": "a",
                "score": {
                    "type": "fixed",
                    "amount": 1,
                    "condition": {
                        "name": ["oak"],
                        "sameTree": True,
                        "sameTreeSymbol": True,
                        "fullTree": True,
                        "sameSpot": True,
                        "position": ["below"],
                    },
                },
            }
        )
        condition = card.score.condition
        assert condition.names == ("oak",)
        assert condition.same_tree
        assert condition.same_tree_symbol
        assert condition.full_tree
        assert condition.same_spot
        assert condition.below

    def test_absent_and_empty_filters_differ(self) -> None:
        """An absent name list is None, an empty one is kept empty."""
        absent = CardDefinition.model_validate(
            {"id": "a", "score": {"type": "fixed", "condition": {}}}
        )
        empty = CardDefinition.model_validate(
            {"id": "a", "score": {"type": "fixed", "condition": {"name": []}}}
        )
        assert absent.score.condition.names is None
        assert empty.score.condition.names == ()


class TestCardCatalog:
    def test_anchor_ids_from_tree_tag(self, catalog: CardCatalog) -> None:
        """Definitions tagged Tree are anchors."""
        assert catalog.is_anchor("oak")
        assert catalog.is_anchor("birch")
        assert not catalog.is_anchor("wolf")
        assert not catalog.is_anchor("unicorn")

    def test_duplicate_ids_keep_first(self) -> None:
        """The first definition of an id wins."""
        catalog = CardCatalog.from_definitions(
            [
                CardDefinition(id="wolf", tags=("Paw",)),
                CardDefinition(id="wolf", tags=("Tree",)),
            ]
        )
        assert len(catalog) == 1
        assert catalog.get("wolf").tags == ("Paw",)
        assert not catalog.is_anchor("wolf")

    def test_get_unknown(self, catalog: CardCatalog) -> None:
        """Unknown ids have no definition."""
        assert catalog.get("unicorn") is None


class TestLoadCardCatalog:
    def test_load_from_file(self, definitions_file: Path, card_definitions: list[dict]) -> None:
        """All definitions are loaded from the document."""
        catalog = load_card_catalog(definitions_file)

        assert len(catalog) == len(card_definitions)
        assert catalog.get("wolf").score.amount == 5

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing document is a configuration error."""
        with pytest.raises(CardCatalogError) as exc_info:
            load_card_catalog(tmp_path / "missing.json")

        assert exc_info.value.kind == FailureKind.CONFIGURATION_ERROR
        assert exc_info.value.status_code == 503

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Unparseable JSON is a configuration error."""
        path = tmp_path / "cards.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CardCatalogError, match="not valid JSON"):
            load_card_catalog(path)

    def test_invalid_document(self, tmp_path: Path) -> None:
        """A document with an unknown rule type is rejected at load time."""
        path = tmp_path / "cards.json"
        path.write_text(
            json.dumps({"cards": [{"id": "a", "score": {"type": "bonus"}}]}),
            encoding="utf-8",
        )

        with pytest.raises(CardCatalogError) as exc_info:
            load_card_catalog(path)

        response = exc_info.value.to_response()
        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure.kind == FailureKind.CONFIGURATION_ERROR

    def test_default_path_is_bundled_catalog(self) -> None:
        """The bundled catalog loads and declares anchors."""
        catalog = load_card_catalog()

        assert len(catalog) > 0
        assert catalog.is_anchor("oak")
        assert not catalog.is_anchor("wolf")


class TestGetCardCatalog:
    def test_cached(self) -> None:
        """The configured catalog is loaded once."""
        assert get_card_catalog() is get_card_catalog()

    def test_uses_configured_path(
        self, definitions_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The catalog comes from settings.card_definitions_path."""
        monkeypatch.setattr(settings, "card_definitions_path", definitions_file)

        catalog = get_card_catalog()
        assert catalog.get("squirrel") is not None

"""Tests for the fixture scoring job."""

import json
import sys
from pathlib import Path

import pytest

from forestscorer.jobs.score_fixture import (
    load_fixture,
    main,
    players_from_fixture,
    run_fixture,
)
from forestscorer.models.failure import CardCatalogError

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def cards_file(tmp_path: Path, card_definitions: list[dict]) -> Path:
    """Test card definitions on disk."""
    path = tmp_path / "cards.json"
    path.write_text(json.dumps({"cards": card_definitions}), encoding="utf-8")
    return path


class TestPlayersFromFixture:
    def test_corner_boxes_converted(self) -> None:
        """Corners are expanded into center and size."""
        [alice] = players_from_fixture(
            {"players": [{"name": "Alice", "boxes": [[0.2, 0.4, 0.3, 0.6, "oak:oak"]]}]}
        )

        [detected] = alice.cards
        assert alice.name == "Alice"
        assert detected.card_id == "oak:oak"
        assert detected.cx == pytest.approx(0.25)
        assert detected.cy == pytest.approx(0.5)
        assert detected.w == pytest.approx(0.1)
        assert detected.h == pytest.approx(0.2)

    def test_player_without_boxes(self) -> None:
        """Players may have no detections."""
        [alice] = players_from_fixture({"players": [{"name": "Alice"}]})
        assert alice.cards == []

    def test_load_fixture(self) -> None:
        """Fixture files load every player in order."""
        players = load_fixture(FIXTURES / "most_tie.json")
        assert [p.name for p in players] == ["Alice", "Bob", "Carol", "Dave"]


class TestRunFixture:
    def test_run_with_catalog(self, cards_file: Path) -> None:
        """A fixture is scored against the given catalog."""
        results = run_fixture(FIXTURES / "most_tie.json", cards_file)
        assert [r.total_score for r in results] == [6, 6, 0, 0]

    def test_missing_catalog(self, tmp_path: Path) -> None:
        """A missing catalog fails before scoring."""
        with pytest.raises(CardCatalogError):
            run_fixture(FIXTURES / "most_tie.json", tmp_path / "missing.json")


class TestMain:
    def test_prints_json(
        self,
        cards_file: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """The job prints one result object per player."""
        monkeypatch.setattr(
            sys,
            "argv",
            ["score_fixture", str(FIXTURES / "two_structures.json"), "--cards", str(cards_file)],
        )

        main()

        [result] = json.loads(capsys.readouterr().out)
        assert result["name"] == "Alice"
        assert result["total_score"] == 1
        assert [d["group"] for d in result["card_details"]] == [
            "Structure 1",
            "Structure 1",
            "Structure 2",
            "Structure 2",
        ]

"""
Score a fixture file.

Fixtures describe a game as players with corner boxes:

    {"players": [{"name": "Alice", "boxes": [[x1, y1, x2, y2, "oak:oak"], ...]}]}

Run this job to score a fixture against the configured card catalog and
print the results as JSON.
"""

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from forestscorer.analysis.scorer import score_players
from forestscorer.config import settings
from forestscorer.models.detection import PlayerInput, detected_card_from_corners
from forestscorer.models.score import PlayerScoreResult
from forestscorer.services.card_database import load_card_catalog

logger = logging.getLogger(__name__)


def players_from_fixture(data: dict[str, Any]) -> list[PlayerInput]:
    """Convert fixture players into scoring input."""
    players: list[PlayerInput] = []
    for player in data.get("players", []):
        cards = [
            detected_card_from_corners(x1, y1, x2, y2, label)
            for x1, y1, x2, y2, label in player.get("boxes", [])
        ]
        players.append(PlayerInput(name=player["name"], cards=cards))
    return players


def load_fixture(path: Path) -> list[PlayerInput]:
    """Read a fixture file into scoring input."""
    with open(path, encoding="utf-8") as f:
        return players_from_fixture(json.load(f))


def run_fixture(path: Path, catalog_path: Path | None = None) -> list[PlayerScoreResult]:
    """Score one fixture file."""
    catalog = load_card_catalog(catalog_path)
    players = load_fixture(path)
    logger.info("Scoring %d players from %s", len(players), path)
    return score_players(players, catalog)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Score a layout fixture file.")
    parser.add_argument("fixture", type=Path, help="Fixture JSON file")
    parser.add_argument(
        "--cards",
        type=Path,
        default=None,
        help="Card definition document (defaults to the configured catalog)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    results = run_fixture(args.fixture, args.cards)
    print(json.dumps([asdict(result) for result in results], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()

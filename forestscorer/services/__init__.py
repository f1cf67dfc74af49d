"""
ForestScorer services.

Card catalog loading and detection resolution.
"""

from forestscorer.services.card_database import (
    CardCatalog,
    get_card_catalog,
    load_card_catalog,
)
from forestscorer.services.instance_resolver import (
    resolve_instance,
    resolve_instances,
    split_label,
)

__all__ = [
    "CardCatalog",
    "get_card_catalog",
    "load_card_catalog",
    "resolve_instance",
    "resolve_instances",
    "split_label",
]

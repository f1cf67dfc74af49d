"""
Card instance resolution.

Turns detection boxes into card instances. The label carries the entity id
and the attachment symbol separated by the first colon ("wolf:oak").
"""

import logging

from forestscorer.models.detection import Box
from forestscorer.models.layout import CardInstance
from forestscorer.services.card_database import CardCatalog

logger = logging.getLogger(__name__)

LABEL_SEPARATOR = ":"


def split_label(label: str) -> tuple[str, str] | None:
    """
    Split a detection label into entity id and attachment symbol.

    Returns:
        (entity_id, tree_symbol), or None if the label has no separator.
    """
    head, sep, tail = label.partition(LABEL_SEPARATOR)
    if not sep:
        return None
    return head.strip(), tail.strip()


def resolve_instance(box: Box, catalog: CardCatalog, index: int) -> CardInstance | None:
    """
    Resolve one box against the catalog.

    Unknown entity ids still produce an instance, with no definition.

    Args:
        box: Detection geometry and label
        catalog: Card definitions
        index: Arena index to assign

    Returns:
        CardInstance, or None for a label without separator.
    """
    parts = split_label(box.label)
    if parts is None:
        logger.debug("Dropping detection with malformed label: %r", box.label)
        return None

    card_id, tree_symbol = parts
    return CardInstance(
        index=index,
        box=box,
        id=card_id,
        tree_symbol=tree_symbol,
        definition=catalog.get(card_id),
    )


def resolve_instances(boxes: list[Box], catalog: CardCatalog) -> list[CardInstance]:
    """Resolve boxes in input order, numbering the survivors consecutively."""
    instances: list[CardInstance] = []
    for box in boxes:
        inst = resolve_instance(box, catalog, len(instances))
        if inst is not None:
            instances.append(inst)
    return instances

"""
Score engine.

Maps a card's score rule and match count to points plus an explanation.
Explanation wording is part of the output contract and must stay stable.
"""

from forestscorer.analysis.conditions import TableGroups, count_matches
from forestscorer.analysis.most import MostResolver
from forestscorer.analysis.placement import PlayerLayout
from forestscorer.models.card import Condition, FixedRule, MultiplicationRule, TableRule
from forestscorer.models.layout import CardInstance

NO_EFFECT = "no effect"
NO_CONDITION = "0 (no condition)"


def points_word(n: int) -> str:
    return "point" if n == 1 else "points"


def describe_target(condition: Condition) -> str:
    """What the condition counts: ids, else tags, else plain cards."""
    names = [n for n in condition.names or () if n]
    tags = [t for t in condition.tags or () if t]
    if names:
        return "/".join(names)
    if tags:
        return " or ".join(tags)
    return "cards"


def describe_scope(condition: Condition) -> str:
    return "in the same tree" if condition.same_tree else ""


def describe_extras(condition: Condition) -> str:
    """Active modifiers, comma separated."""
    parts: list[str] = []
    if condition.unique:
        parts.append("unique")
    if condition.same_tree_symbol:
        parts.append("same tree symbol")
    if condition.full_tree:
        parts.append("full tree")
    if condition.same_spot:
        parts.append("same spot")
    if condition.most:
        parts.append("most")
    if condition.position:
        parts.append("/".join(condition.position))
    return ", ".join(parts)


def table_score(amounts: tuple[int, ...], count: int) -> int:
    """Table entry for a match count; 1 match reads the first entry, saturating at the last."""
    if not amounts:
        return 0
    return amounts[max(0, min(len(amounts) - 1, count - 1))]


def score_fixed(rule: FixedRule, matches: int | None) -> tuple[int, str]:
    """
    Fixed rule.

    Without a condition the amount is always awarded. With one, it is
    awarded when the matches reach ``min`` (at least one match if unset).
    """
    amount = rule.amount
    condition = rule.condition
    if condition is None or matches is None:
        return amount, f"{amount} fixed {points_word(amount)}"

    satisfied = matches >= rule.min if rule.min is not None else matches > 0
    min_text = f"at least {rule.min}" if rule.min is not None else "at least 1"
    extra = describe_extras(condition)
    extra_str = f" ({extra})" if extra else ""
    scope = describe_scope(condition)
    scope_str = f" {scope}" if scope else ""
    target = describe_target(condition)
    details = f"{matches} matches, {min_text} {target}{scope_str}{extra_str}"

    if satisfied:
        return amount, f"{amount} fixed {points_word(amount)} ({details})"
    return 0, f"0 {points_word(0)} (condition not met: {details})"


def score_multiplication(rule: MultiplicationRule, matches: int | None) -> tuple[int, str]:
    """Multiplication rule: amount per match, nothing below ``min``."""
    condition = rule.condition
    if condition is None or matches is None:
        return 0, NO_CONDITION

    amount = rule.amount
    effective = 0 if rule.min is not None and matches < rule.min else matches
    points = amount * effective

    extra = describe_extras(condition)
    extra_str = f" ({extra})" if extra else ""
    min_text = f"at least {rule.min}" if rule.min is not None else ""
    details = [part for part in (min_text, describe_scope(condition)) if part]
    details_str = f" ({', '.join(details)})" if details else ""
    per_text = f"{amount} {points_word(amount)} per {describe_target(condition)}"
    return points, f"{per_text} · {effective}{details_str}{extra_str}"


def score_table(rule: TableRule, matches: int | None) -> tuple[int, str]:
    """Table rule: points looked up by match count."""
    condition = rule.condition
    if condition is None or matches is None:
        return 0, NO_CONDITION

    points = table_score(rule.amounts, matches)
    extra = describe_extras(condition)
    extra_str = f" ({extra})" if extra else ""
    scope = describe_scope(condition)
    scope_str = f" {scope}" if scope else ""
    return points, f"Table: {matches} matches ({describe_target(condition)}{scope_str}{extra_str})"


def score_instance(
    inst: CardInstance,
    layout: PlayerLayout,
    most: MostResolver,
    table_groups: TableGroups,
) -> tuple[int, str]:
    """
    Score one card.

    Args:
        inst: The card to score
        layout: Its owner's layout
        most: Cross-player winners for this run
        table_groups: The owner's table groupings

    Returns:
        (points, reason). Cards without a definition or rule score
        (0, "no effect").
    """
    rule = inst.definition.score if inst.definition is not None else None
    if rule is None:
        return 0, NO_EFFECT

    matches = None
    if rule.condition is not None:
        matches = count_matches(inst, rule.condition, layout, most, table_groups)

    if isinstance(rule, FixedRule):
        return score_fixed(rule, matches)
    if isinstance(rule, MultiplicationRule):
        return score_multiplication(rule, matches)
    return score_table(rule, matches)

"""
Rule-based receipt scoring.

Seven independent rules, each a pure function of a validated receipt.
The total is the plain sum of their contributions. Monetary rules work
on integer cents so no floating-point tolerance is needed.
"""
from __future__ import annotations

from typing import Callable

from receipt_processor.schemas import Receipt

AFTERNOON_START_HOUR = 14
AFTERNOON_END_HOUR = 16  # exclusive


# ---------------------------------------------------------------------------
# Individual rules
# ---------------------------------------------------------------------------

def retailer_alphanumeric_points(receipt: Receipt) -> int:
    """+1 per letter or digit in the retailer name."""
    return sum(1 for char in receipt.retailer if char.isalnum())


def round_dollar_total_points(receipt: Receipt) -> int:
    """+50 when the total has no cents."""
    return 50 if receipt.total % 100 == 0 else 0


def quarter_multiple_total_points(receipt: Receipt) -> int:
    """+25 when the total is a multiple of 0.25."""
    return 25 if receipt.total % 25 == 0 else 0


def item_pair_points(receipt: Receipt) -> int:
    """+5 for every two items."""
    return 5 * (len(receipt.items) // 2)


def item_description_points(receipt: Receipt) -> int:
    """ceil(price * 0.2) for each item whose trimmed description length is a multiple of 3."""
    points = 0
    for item in receipt.items:
        if len(item.short_description.strip()) % 3 == 0:
            # price * 0.2 == cents / 500, rounded up
            points += -(-item.price // 500)
    return points


def odd_day_points(receipt: Receipt) -> int:
    return 6 if receipt.purchase_date.day % 2 == 1 else 0


def afternoon_window_points(receipt: Receipt) -> int:
    """+10 for purchases from 14:00 up to, not including, 16:00."""
    hour = receipt.purchase_time.hour
    return 10 if AFTERNOON_START_HOUR <= hour < AFTERNOON_END_HOUR else 0


# (rule name, rule function), evaluated in this order
SCORING_RULES: list[tuple[str, Callable[[Receipt], int]]] = [
    ("retailer_alphanumeric", retailer_alphanumeric_points),
    ("round_dollar_total", round_dollar_total_points),
    ("quarter_multiple_total", quarter_multiple_total_points),
    ("item_pairs", item_pair_points),
    ("item_description_length", item_description_points),
    ("odd_purchase_day", odd_day_points),
    ("afternoon_purchase", afternoon_window_points),
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def score_breakdown(receipt: Receipt) -> dict[str, int]:
    """Return ``{rule_name: points}`` for every rule."""
    return {name: rule(receipt) for name, rule in SCORING_RULES}


def score_receipt(receipt: Receipt) -> int:
    return sum(score_breakdown(receipt).values())

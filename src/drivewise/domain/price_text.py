"""Parsers for the human-readable money labels used across the catalog and forms."""

from __future__ import annotations

import re
from decimal import Decimal

from drivewise.domain.affordability import BudgetBracket
from drivewise.domain.money import ZERO, as_decimal, non_negative

# "$26,420", "$8500"
CURRENCY_AMOUNT_PATTERN = re.compile(r"\$\s?(\d[\d,]*)")
NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")

_UPPER_BOUND_WORDS = ("under", "below", "less than", "up to")
_LOWER_BOUND_WORDS = ("over", "above", "more than")


def extract_currency_amounts(text: str | None) -> list[Decimal]:
    if not text:
        return []

    amounts = []
    for match in CURRENCY_AMOUNT_PATTERN.finditer(text):
        digits = match.group(1).replace(",", "")
        if digits:
            amounts.append(Decimal(digits))
    return amounts


def parse_representative_price(text: str | None) -> Decimal:
    """
    Representative price of a catalog price label.

    "$26,420 - $28,500" -> 27460 (mean of every amount found).
    Returns 0 when the label holds no currency amount; callers treat 0 as
    "price unknown".
    """
    amounts = extract_currency_amounts(text)
    if not amounts:
        return ZERO
    return sum(amounts, ZERO) / Decimal(len(amounts))


def parse_currency_amount(text: str | None) -> Decimal | None:
    """
    Lenient parser for free-form amounts such as "$60,000" or "60000".

    Returns None for empty or non-numeric input. Negative amounts clamp to 0.
    """
    if text is None:
        return None

    cleaned = re.sub(r"[\s$,]", "", text)
    if not cleaned:
        return None

    value = as_decimal(cleaned)
    if value is None:
        return None
    return non_negative(value)


def parse_city_mpg(text: str | None) -> Decimal | None:
    """City figure of a fuel-economy label ("32/41 mpg" -> 32)."""
    if not text:
        return None

    match = NUMBER_PATTERN.search(text)
    if match is None:
        return None
    return Decimal(match.group(0))


def parse_budget_bracket(label: str) -> BudgetBracket | None:
    """
    Numeric range of a budget option label.

    "$25,000 - $35,000" -> 25000..35000
    "Under $300/month"  -> 0..300
    "$750+ /month"      -> 750..open
    """
    amounts = extract_currency_amounts(label)
    if not amounts:
        return None

    if len(amounts) >= 2:
        return BudgetBracket(label=label, min=min(amounts), max=max(amounts))

    amount = amounts[0]
    lowered = label.lower()
    if any(word in lowered for word in _UPPER_BOUND_WORDS):
        return BudgetBracket(label=label, min=ZERO, max=amount)
    if "+" in label or any(word in lowered for word in _LOWER_BOUND_WORDS):
        return BudgetBracket(label=label, min=amount, max=None)
    return BudgetBracket(label=label, min=amount, max=amount)

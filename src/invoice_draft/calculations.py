"""
Money arithmetic and derived invoice totals.

All monetary values produced here go through round_money, which rounds
half away from zero at two decimals so binary float artifacts never reach
the document (0.1 * 0.2 gives 0.02, not 0.020000000000000004).

Charges are applied to the subtotal in a fixed order: discount, tax,
shipping. A percentage charge is taken from the running total at that
point, so tax is computed after the discount and shipping after both.

None of these functions raise or mutate their arguments.
"""

import math
from copy import deepcopy
from dataclasses import replace
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Iterable

from invoice_draft.models.invoice import Adjustment, Invoice, LineItem
from invoice_draft.utils.words import to_words

_CENTS = Decimal(100)
# Enough digits to quantize any finite float times 100 without overflow
_WIDE = Context(prec=400)


def round_money(value: float) -> float:
    """Round to two decimals, half away from zero, on value * 100."""
    scaled = float(value) * 100
    if not math.isfinite(scaled):
        return 0.0
    cents = Decimal(repr(scaled)).quantize(
        Decimal(1), rounding=ROUND_HALF_UP, context=_WIDE
    )
    return float(cents / _CENTS)


def line_item_total(quantity: float, unit_price: float) -> float:
    """Return the rounded total of a single line."""
    return round_money(quantity * unit_price)


def apply_adjustment(base: float, value: float, kind: str) -> float:
    """
    Resolve a charge against a base amount.

    Args:
        base: Running total the charge applies to.
        value: Fixed amount or percentage.
        kind: "percentage" to take value percent of base; anything else
            returns value unchanged.
    """
    if kind == "percentage":
        return round_money(base * value / 100)
    return value


def subtotal(items: Iterable[LineItem]) -> float:
    """Return the exact sum of the rounded line totals."""
    total = Decimal(0)
    for item in items:
        total += Decimal(repr(line_item_total(item.quantity, item.unit_price)))
    return float(total)


def _resolved(adjustment: Adjustment, enabled: bool, running: float) -> float:
    if not enabled or not adjustment.value:
        return 0.0
    return apply_adjustment(running, adjustment.value, adjustment.kind)


def total_amount(invoice: Invoice) -> float:
    """Return the grand total after discount, tax and shipping."""
    details = invoice.details
    total = subtotal(details.items)
    total -= _resolved(details.discount_details, details.discount_enabled, total)
    total += _resolved(details.tax_details, details.tax_enabled, total)
    total += _resolved(details.shipping_details, details.shipping_enabled, total)
    return round_money(total)


def with_computed_totals(invoice: Invoice) -> Invoice:
    """
    Return a copy of the invoice with every derived field refreshed.

    Line totals, subtotal and grand total are recomputed; the total in
    words is filled when include_total_in_words is set and cleared
    otherwise. The result is a deep copy that shares no parties, items or
    lists with the input, which is left untouched.
    """
    snapshot = deepcopy(invoice)
    details = snapshot.details
    grand_total = total_amount(snapshot)
    words = (
        to_words(grand_total, details.currency, snapshot.language)
        if details.include_total_in_words
        else ""
    )
    items = [
        replace(item, total=line_item_total(item.quantity, item.unit_price))
        for item in details.items
    ]
    return replace(
        snapshot,
        details=replace(
            details,
            items=items,
            sub_total=subtotal(details.items),
            total_amount=grand_total,
            total_amount_in_words=words,
        ),
    )

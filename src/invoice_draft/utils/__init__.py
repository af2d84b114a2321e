"""Formatting and text helpers shared across the invoice draft package."""

from invoice_draft.utils.formatting import (
    format_currency,
    format_date,
    format_number,
    is_data_url,
    parse_date,
)
from invoice_draft.utils.words import english_cardinal, portuguese_cardinal, to_words

__all__ = [
    "english_cardinal",
    "format_currency",
    "format_date",
    "format_number",
    "is_data_url",
    "parse_date",
    "portuguese_cardinal",
    "to_words",
]

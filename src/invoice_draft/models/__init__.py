"""
Data models for the invoice draft core.

This package provides:
- The invoice document model (Invoice, Party, InvoiceDetails, LineItem, ...)
- Boundary result types (LoadResult, ValidationResult, ValidationIssue)

All models use Python dataclasses.
"""

from invoice_draft.models.common import (
    FORM_PATH,
    LoadErrorKind,
    LoadResult,
    ValidationIssue,
    ValidationResult,
)
from invoice_draft.models.invoice import (
    AMOUNT,
    DEFAULT_LANGUAGE,
    PERCENTAGE,
    SUPPORTED_LANGUAGES,
    Adjustment,
    AmountType,
    CustomField,
    Invoice,
    InvoiceDetails,
    Language,
    LineItem,
    Party,
    PaymentInfo,
    Signature,
    new_item_id,
)

__all__ = [
    "AMOUNT",
    "DEFAULT_LANGUAGE",
    "FORM_PATH",
    "PERCENTAGE",
    "SUPPORTED_LANGUAGES",
    "Adjustment",
    "AmountType",
    "CustomField",
    "Invoice",
    "InvoiceDetails",
    "Language",
    "LineItem",
    "LoadErrorKind",
    "LoadResult",
    "Party",
    "PaymentInfo",
    "Signature",
    "ValidationIssue",
    "ValidationResult",
    "new_item_id",
]

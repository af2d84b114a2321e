"""Factories for blank invoices and line items."""

from datetime import date

from invoice_draft import config
from invoice_draft.models.invoice import (
    DEFAULT_LANGUAGE,
    Invoice,
    InvoiceDetails,
    LineItem,
    Party,
    PaymentInfo,
)


def today_iso() -> str:
    return date.today().isoformat()


def create_default_item(**overrides) -> LineItem:
    """Return a blank line item with a freshly generated id."""
    return LineItem(**overrides)


def get_default_invoice() -> Invoice:
    """
    Return the invoice a new session starts with.

    Both dates default to today, the invoice number to "1" and the
    currency to the configured default. The item list holds a single
    blank line.
    """
    today = today_iso()
    return Invoice(
        language=DEFAULT_LANGUAGE,
        sender=Party(),
        receiver=Party(),
        details=InvoiceDetails(
            invoice_number=config.DEFAULT_INVOICE_NUMBER,
            invoice_date=today,
            due_date=today,
            currency=config.DEFAULT_CURRENCY,
            items=[create_default_item()],
            payment_information=PaymentInfo(),
        ),
    )

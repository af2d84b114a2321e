"""Shared fixtures for the invoice draft test suite."""

from __future__ import annotations

import pytest

from factories import make_invoice
from invoice_draft.models import Adjustment, Invoice
from invoice_draft.state import InvoiceSession


@pytest.fixture
def invoice() -> Invoice:
    return make_invoice()


@pytest.fixture
def charged_invoice() -> Invoice:
    """Subtotal 1000 with 10% discount, tax and shipping all enabled."""
    return make_invoice(
        discount_details=Adjustment(10, "percentage"),
        tax_details=Adjustment(10, "percentage"),
        shipping_details=Adjustment(10, "percentage"),
        discount_enabled=True,
        tax_enabled=True,
        shipping_enabled=True,
    )


@pytest.fixture
def session(invoice) -> InvoiceSession:
    return InvoiceSession(invoice)

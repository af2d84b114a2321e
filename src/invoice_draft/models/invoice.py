"""
Invoice document model.

This module defines the in-memory record that the UI edits and the core
reads. The hierarchy is:

    Invoice
    ├── Party (sender, receiver)
    │   └── CustomField[]
    └── InvoiceDetails (number, dates, currency, terms)
        ├── LineItem[] (print order, user reorderable)
        ├── PaymentInfo (optional)
        ├── Adjustment (discount, tax, shipping)
        └── Signature (optional)

Attribute names are snake_case; the camelCase names of the persisted JSON
file live in invoice_draft.codec. Derived fields (sub_total, total_amount,
total_amount_in_words and LineItem.total) are refreshed by
invoice_draft.calculations.with_computed_totals and are never treated as
inputs.
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Literal

from invoice_draft.utils import is_data_url

Language = Literal["en", "pt-BR"]
AmountType = Literal["amount", "percentage"]

DEFAULT_LANGUAGE: Language = "en"
SUPPORTED_LANGUAGES: tuple[Language, ...] = ("en", "pt-BR")

AMOUNT: AmountType = "amount"
PERCENTAGE: AmountType = "percentage"


def new_item_id() -> str:
    """Return a fresh line item id that is never handed out twice."""
    return str(uuid.uuid4())


@dataclass(slots=True)
class CustomField:
    """Free-form key/value pair shown under a party's address."""

    key: str = ""
    value: str = ""

    @property
    def is_blank(self) -> bool:
        return not (self.key.strip() or self.value.strip())


@dataclass(slots=True)
class Party:
    """Sender or receiver of the invoice."""

    name: str = ""
    address: str = ""
    zip_code: str = ""
    city: str = ""
    country: str = ""
    email: str = ""
    phone: str = ""
    custom_inputs: List[CustomField] = field(default_factory=list)

    def visible_custom_inputs(self) -> List[CustomField]:
        """Return the custom fields that should be rendered."""
        return [entry for entry in self.custom_inputs if not entry.is_blank]

    def has_address(self) -> bool:
        """Check if any part of the postal address is filled in."""
        return any((self.address, self.zip_code, self.city, self.country))


@dataclass(slots=True)
class LineItem:
    """Represents an individual line item on the invoice."""

    id: str = field(default_factory=new_item_id)
    name: str = ""
    description: str = ""
    quantity: float = 0.0
    unit_price: float = 0.0
    total: float = 0.0


@dataclass(slots=True)
class PaymentInfo:
    """Bank details printed in the payment section."""

    bank_name: str = ""
    account_name: str = ""
    account_number: str = ""


@dataclass(slots=True)
class Adjustment:
    """
    A discount, tax or shipping charge.

    Attributes:
        value: Fixed amount or percentage, depending on kind.
        kind: "amount" for a fixed value, "percentage" for a share of
            the running total.
    """

    value: float = 0.0
    kind: AmountType = AMOUNT

    @property
    def is_percentage(self) -> bool:
        return self.kind == PERCENTAGE


@dataclass(slots=True)
class Signature:
    """Either an embedded image data-URI or cursive text with its font."""

    data: str = ""
    font_family: str | None = None

    @property
    def is_image(self) -> bool:
        return is_data_url(self.data)


@dataclass(slots=True)
class InvoiceDetails:
    """Stores the invoice metadata, line items and charges."""

    invoice_logo: str = ""
    invoice_number: str = ""
    invoice_date: str = ""
    due_date: str = ""
    currency: str = ""
    items: List[LineItem] = field(default_factory=list)
    payment_information: PaymentInfo | None = None
    discount_details: Adjustment = field(default_factory=Adjustment)
    tax_details: Adjustment = field(default_factory=Adjustment)
    shipping_details: Adjustment = field(default_factory=Adjustment)
    discount_enabled: bool = False
    tax_enabled: bool = False
    shipping_enabled: bool = False
    sub_total: float = 0.0
    total_amount: float = 0.0
    total_amount_in_words: str = ""
    include_total_in_words: bool = True
    additional_notes: str = ""
    payment_terms: str = ""
    signature: Signature | None = None

    def find_item(self, item_id: str) -> LineItem | None:
        """Return the line item with the given id, if present."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None


@dataclass(slots=True)
class Invoice:
    """Root of the document model."""

    sender: Party = field(default_factory=Party)
    receiver: Party = field(default_factory=Party)
    details: InvoiceDetails = field(default_factory=InvoiceDetails)
    language: Language = DEFAULT_LANGUAGE

    def party(self, role: str) -> Party:
        """Return the sender or receiver by role name."""
        if role == "sender":
            return self.sender
        if role == "receiver":
            return self.receiver
        raise ValueError(f"Unknown party role: {role}")

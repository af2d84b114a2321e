"""
Editing session for a single invoice draft.

InvoiceSession owns the live document model and exposes the operations the
UI layer calls: partial updates with merge semantics, line item and custom
field editing, quick actions, reset, JSON export/import and validation.
Each UI session (or test) creates its own instance and passes it to the
code that needs it; nothing is shared at module level.

The document is only ever replaced, never mutated in place, so an Invoice
handed out by the session stays valid as a snapshot.
"""

import re
from dataclasses import replace
from datetime import date, timedelta
from typing import Iterable, List

from invoice_draft import config
from invoice_draft.calculations import with_computed_totals
from invoice_draft.codec import InvoiceLoadError, invoice_from_json, invoice_to_json
from invoice_draft.defaults import create_default_item, get_default_invoice
from invoice_draft.lib import logs
from invoice_draft.models.common import LoadErrorKind, LoadResult, ValidationResult
from invoice_draft.models.invoice import (
    SUPPORTED_LANGUAGES,
    CustomField,
    Invoice,
    LineItem,
    Party,
)
from invoice_draft.validation import validate_invoice

LOG = logs.logger(__file__)

_PARTY_ROLES = ("sender", "receiver")
_DIGITS = re.compile(r"[0-9]+")


class InvoiceSessionError(RuntimeError):
    """Raised when the session is used after it has been closed."""


class InvoiceSession:
    """
    Owner of the live invoice during one editing session.

    Attributes:
        invoice: Current document snapshot.
    """

    def __init__(self, invoice: Invoice | None = None) -> None:
        """
        Start a session.

        Args:
            invoice: Initial document, or None for the default invoice.
        """
        self._invoice: Invoice | None = (
            _with_checked_items(invoice) if invoice is not None else get_default_invoice()
        )

    # ─── Document access ─────────────────────────────────────────────

    @property
    def invoice(self) -> Invoice:
        if self._invoice is None:
            raise InvoiceSessionError("InvoiceSession used after close()")
        return self._invoice

    @property
    def is_open(self) -> bool:
        return self._invoice is not None

    def close(self) -> None:
        """End the session; later calls raise InvoiceSessionError."""
        self._invoice = None

    def set_invoice(self, invoice: Invoice) -> None:
        """
        Replace the whole document.

        An empty item list gets one blank item.

        Raises:
            ValueError: Two items share an id.
        """
        self._require_open()
        self._invoice = _with_checked_items(invoice)

    def computed(self) -> Invoice:
        """Return the current document with derived fields refreshed."""
        return with_computed_totals(self.invoice)

    # ─── Partial updates ─────────────────────────────────────────────

    def update_invoice(self, **changes) -> None:
        """Replace top-level fields (language, sender, receiver, details)."""
        updated = replace(self.invoice, **changes)
        self._invoice = _with_checked_items(updated) if "details" in changes else updated

    def update_sender(self, **changes) -> None:
        """Merge the given fields into the sender."""
        self._invoice = replace(self.invoice, sender=replace(self.invoice.sender, **changes))

    def update_receiver(self, **changes) -> None:
        """Merge the given fields into the receiver."""
        self._invoice = replace(
            self.invoice, receiver=replace(self.invoice.receiver, **changes)
        )

    def update_details(self, **changes) -> None:
        """
        Merge the given fields into the invoice details.

        A new item list goes through the same checks as set_items.
        """
        if "items" in changes:
            changes["items"] = _checked_items(changes["items"])
        self._invoice = replace(
            self.invoice, details=replace(self.invoice.details, **changes)
        )

    def set_language(self, language: str) -> None:
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")
        self.update_invoice(language=language)

    # ─── Line items ──────────────────────────────────────────────────

    @property
    def items(self) -> List[LineItem]:
        return list(self.invoice.details.items)

    def set_items(self, items: Iterable[LineItem]) -> None:
        """
        Replace the whole item list; an empty list gets one blank item.

        Raises:
            ValueError: Two items share an id.
        """
        self.update_details(items=items)

    def add_item(self, **fields) -> LineItem:
        """Append a new line item and return it."""
        fields.pop("id", None)
        item = create_default_item(**fields)
        self.set_items([*self.invoice.details.items, item])
        LOG.debug("add_item - id:%s count:%s", item.id, len(self.items))
        return item

    def update_item(self, item_id: str, **changes) -> LineItem:
        """Merge changes into the item with the given id and return it."""
        changes.pop("id", None)
        if self.invoice.details.find_item(item_id) is None:
            raise KeyError(item_id)
        updated = [
            replace(item, **changes) if item.id == item_id else item
            for item in self.invoice.details.items
        ]
        self.set_items(updated)
        return self.invoice.details.find_item(item_id)

    def remove_item(self, item_id: str) -> None:
        """
        Remove an item by id.

        Removing the last remaining item leaves a single fresh blank item
        with a new id in its place.
        """
        remaining = [item for item in self.invoice.details.items if item.id != item_id]
        self.set_items(remaining)
        LOG.debug("remove_item - id:%s remaining:%s", item_id, len(remaining))

    def move_item(self, old_index: int, new_index: int) -> None:
        """Move the item at old_index so it ends up at new_index."""
        items = self.items
        if not (0 <= old_index < len(items) and 0 <= new_index < len(items)):
            raise IndexError(f"move_item - index out of range: {old_index}->{new_index}")
        items.insert(new_index, items.pop(old_index))
        self.set_items(items)

    # ─── Custom fields ───────────────────────────────────────────────

    def add_custom_input(self, role: str, key: str = "", value: str = "") -> None:
        """Append a custom key/value field to the sender or receiver."""
        party = self._party(role)
        self._set_custom_inputs(role, [*party.custom_inputs, CustomField(key, value)])

    def update_custom_input(
        self, role: str, index: int, key: str | None = None, value: str | None = None
    ) -> None:
        entries = list(self._party(role).custom_inputs)
        current = entries[index]
        entries[index] = CustomField(
            key=current.key if key is None else key,
            value=current.value if value is None else value,
        )
        self._set_custom_inputs(role, entries)

    def remove_custom_input(self, role: str, index: int) -> None:
        entries = list(self._party(role).custom_inputs)
        del entries[index]
        self._set_custom_inputs(role, entries)

    def _party(self, role: str) -> Party:
        if role not in _PARTY_ROLES:
            raise ValueError(f"Unknown party role: {role}")
        return self.invoice.party(role)

    def _set_custom_inputs(self, role: str, entries: List[CustomField]) -> None:
        if role == "sender":
            self.update_sender(custom_inputs=entries)
        else:
            self.update_receiver(custom_inputs=entries)

    # ─── Quick actions ───────────────────────────────────────────────

    def increment_invoice_number(self) -> None:
        """Add one to a numeric invoice number; other values stay as they are."""
        number = _parse_invoice_number(self.invoice.details.invoice_number)
        if number is not None:
            self.update_details(invoice_number=str(number + 1))

    def decrement_invoice_number(self) -> None:
        """Subtract one from a numeric invoice number, never going below 1."""
        number = _parse_invoice_number(self.invoice.details.invoice_number)
        if number is not None and number > 1:
            self.update_details(invoice_number=str(number - 1))

    def set_dates_to_today(self, today: date | None = None) -> None:
        """Set the issue date to today and the due date DUE_DAYS later."""
        today = today or date.today()
        self.update_details(
            invoice_date=today.isoformat(),
            due_date=(today + timedelta(days=config.DUE_DAYS)).isoformat(),
        )

    def reset_invoice(self) -> None:
        """Discard the draft and start over from the default invoice."""
        self._require_open()
        self._invoice = get_default_invoice()
        LOG.info("reset_invoice")

    # ─── Export / import / validation ────────────────────────────────

    def get_invoice_json(self) -> str:
        """Return the document, with computed totals, as invoice file text."""
        return invoice_to_json(self.invoice)

    def load_from_json(self, text: str) -> LoadResult:
        """
        Replace the document with one decoded from invoice file text.

        Never raises. On failure the current document is left untouched and
        the result carries the error category and message.
        """
        self._require_open()
        try:
            loaded = invoice_from_json(text)
        except InvoiceLoadError as exc:
            LOG.warning("load_from_json - rejected kind:%s error:%s", exc.kind.name, exc)
            return LoadResult.failed(exc.kind)
        except Exception as exc:
            LOG.warning("load_from_json - failed: %s", exc, exc_info=True)
            return LoadResult.failed(LoadErrorKind.GENERIC, str(exc) or None)

        self._invoice = loaded
        LOG.info(
            "load_from_json - language:%s items:%s",
            loaded.language,
            len(loaded.details.items),
        )
        return LoadResult.ok()

    def validate_invoice(self) -> ValidationResult:
        """Validate the current document before print or export."""
        return validate_invoice(self.invoice)

    def _require_open(self) -> None:
        if self._invoice is None:
            raise InvoiceSessionError("InvoiceSession used after close()")


def _parse_invoice_number(value: str) -> int | None:
    """Return the invoice number as an integer when it is one and at least 1."""
    text = value.strip()
    if not _DIGITS.fullmatch(text):
        return None
    number = int(text)
    return number if number >= 1 else None


def _checked_items(items: Iterable[LineItem]) -> List[LineItem]:
    """Return the items as a list, never empty, with unique ids."""
    checked = list(items) or [create_default_item()]
    ids = [item.id for item in checked]
    if len(set(ids)) != len(ids):
        raise ValueError("duplicate line item ids")
    return checked


def _with_checked_items(invoice: Invoice) -> Invoice:
    details = invoice.details
    return replace(invoice, details=replace(details, items=_checked_items(details.items)))

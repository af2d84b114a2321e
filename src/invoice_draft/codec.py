"""
JSON load/save for invoice documents.

Export writes the full document, with freshly computed totals, as JSON
indented by two spaces. Field names are the camelCase names of the
invoice file format:

    {
      "language": "en",
      "sender": {"name": ..., "customInputs": [...]},
      "receiver": {...},
      "details": {"invoiceNumber": ..., "items": [...], ...}
    }

Import treats the file as untrusted. Only the top-level shape is enforced
(an object holding sender, receiver and details); every other field is
coerced to its type or defaulted, unknown fields are ignored, and the
item list is never left empty. Each section is wrapped in a benedict with
keypath parsing disabled, so keys containing dots in hand-edited files are
read literally and a mistyped section reads as empty.
"""

import json
import math
import uuid
from typing import Any, Dict, List

from benedict import benedict

from invoice_draft import config
from invoice_draft.calculations import round_money, with_computed_totals
from invoice_draft.defaults import create_default_item, today_iso
from invoice_draft.lib import logs
from invoice_draft.models.common import LoadErrorKind
from invoice_draft.models.invoice import (
    AMOUNT,
    DEFAULT_LANGUAGE,
    PERCENTAGE,
    Adjustment,
    CustomField,
    Invoice,
    InvoiceDetails,
    LineItem,
    Party,
    PaymentInfo,
    Signature,
)

LOG = logs.logger(__file__)

DEFAULT_FILENAME = "invoice.json"
FILE_EXTENSION = ".json"
MIME_TYPE = "application/json"

REQUIRED_KEYS = ("sender", "receiver", "details")
SECONDARY_LANGUAGE = "pt-BR"


class InvoiceLoadError(Exception):
    """Raised when a JSON document cannot be turned into an invoice."""

    kind = LoadErrorKind.GENERIC


class InvalidFormatError(InvoiceLoadError):
    """The text is not JSON, or its top-level value is not an object."""

    kind = LoadErrorKind.INVALID_FORMAT


class MissingFieldsError(InvoiceLoadError):
    """One of sender, receiver or details is absent."""

    kind = LoadErrorKind.MISSING_FIELDS


# ─── Coercion ────────────────────────────────────────────────────────


def to_number(value: Any) -> float:
    """
    Coerce an untrusted value to a finite float.

    Numbers pass through, booleans become 1/0, numeric strings are parsed.
    Anything else, including NaN and infinities, becomes 0.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value or "_" in value:
            return 0.0
    elif not isinstance(value, (int, float)):
        return 0.0
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def to_str(value: Any, default: str = "") -> str:
    """Coerce an untrusted value to text; None falls back to default."""
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def to_bool(value: Any) -> bool:
    """Return the truthiness of a JSON value; empty containers count as true."""
    if isinstance(value, (dict, list)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def _is_missing(value: Any) -> bool:
    if isinstance(value, (dict, list)):
        return False
    return not to_bool(value)


def _mapping(value: Any) -> benedict:
    return benedict(value if isinstance(value, dict) else {}, keypath_separator=None)


def _optional_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


# ─── Decoding ────────────────────────────────────────────────────────


def _parse_custom_inputs(value: Any) -> List[CustomField]:
    if not isinstance(value, list):
        return []
    fields = []
    for entry in value:
        raw = _mapping(entry)
        fields.append(CustomField(key=to_str(raw.get("key")), value=to_str(raw.get("value"))))
    return fields


def _parse_party(raw: benedict) -> Party:
    return Party(
        name=to_str(raw.get("name")),
        address=to_str(raw.get("address")),
        zip_code=to_str(raw.get("zipCode")),
        city=to_str(raw.get("city")),
        country=to_str(raw.get("country")),
        email=to_str(raw.get("email")),
        phone=to_str(raw.get("phone")),
        custom_inputs=_parse_custom_inputs(raw.get("customInputs")),
    )


def _placeholder_id(index: int) -> str:
    return f"item-{index}-{uuid.uuid4().hex[:12]}"


def _parse_items(value: Any) -> List[LineItem]:
    items: List[LineItem] = []
    seen: set[str] = set()
    for index, entry in enumerate(value if isinstance(value, list) else []):
        raw = _mapping(entry)
        item_id = raw.get("id")
        if not isinstance(item_id, str) or not item_id or item_id in seen:
            item_id = _placeholder_id(index)
        seen.add(item_id)

        quantity = to_number(raw.get("quantity"))
        unit_price = to_number(raw.get("unitPrice"))
        total = _optional_number(raw.get("total"))
        items.append(
            LineItem(
                id=item_id,
                name=to_str(raw.get("name")),
                description=to_str(raw.get("description")),
                quantity=quantity,
                unit_price=unit_price,
                total=total if total is not None else round_money(quantity * unit_price),
            )
        )
    return items or [create_default_item()]


def _parse_adjustment(value: Any, value_key: str, kind_key: str) -> Adjustment:
    raw = _mapping(value)
    return Adjustment(
        value=to_number(raw.get(value_key)),
        kind=PERCENTAGE if raw.get(kind_key) == PERCENTAGE else AMOUNT,
    )


def _parse_payment(value: Any) -> PaymentInfo | None:
    if _is_missing(value):
        return None
    raw = _mapping(value)
    return PaymentInfo(
        bank_name=to_str(raw.get("bankName")),
        account_name=to_str(raw.get("accountName")),
        account_number=to_str(raw.get("accountNumber")),
    )


def _parse_signature(value: Any) -> Signature | None:
    if not isinstance(value, dict):
        return None
    raw = _mapping(value)
    font_family = raw.get("fontFamily")
    return Signature(
        data=to_str(raw.get("data")),
        font_family=to_str(font_family) if font_family is not None else None,
    )


def parse_invoice(payload: Any) -> Invoice:
    """
    Build an Invoice from decoded, untrusted JSON data.

    Args:
        payload: Result of json.loads on an invoice file.

    Returns:
        A fully populated Invoice. Derived fields keep the imported values.

    Raises:
        InvalidFormatError: payload is null or not an object/array.
        MissingFieldsError: payload is an array, or lacks sender, receiver
            or details.
    """
    if payload is None or not isinstance(payload, (dict, list)):
        raise InvalidFormatError("Invalid JSON")
    if not isinstance(payload, dict) or any(
        _is_missing(payload.get(key)) for key in REQUIRED_KEYS
    ):
        raise MissingFieldsError("Missing required fields")

    data = _mapping(payload)
    details = _mapping(data.get("details"))
    today = today_iso()

    return Invoice(
        language=SECONDARY_LANGUAGE
        if data.get("language") == SECONDARY_LANGUAGE
        else DEFAULT_LANGUAGE,
        sender=_parse_party(_mapping(data.get("sender"))),
        receiver=_parse_party(_mapping(data.get("receiver"))),
        details=InvoiceDetails(
            invoice_logo=to_str(details.get("invoiceLogo")),
            invoice_number=to_str(details.get("invoiceNumber")),
            invoice_date=to_str(details.get("invoiceDate"), today),
            due_date=to_str(details.get("dueDate"), today),
            currency=to_str(details.get("currency"), config.DEFAULT_CURRENCY),
            items=_parse_items(details.get("items")),
            payment_information=_parse_payment(details.get("paymentInformation")),
            discount_details=_parse_adjustment(
                details.get("discountDetails"), "amount", "amountType"
            ),
            tax_details=_parse_adjustment(details.get("taxDetails"), "amount", "amountType"),
            shipping_details=_parse_adjustment(
                details.get("shippingDetails"), "cost", "costType"
            ),
            discount_enabled=to_bool(details.get("discountEnabled")),
            tax_enabled=to_bool(details.get("taxEnabled")),
            shipping_enabled=to_bool(details.get("shippingEnabled")),
            sub_total=to_number(details.get("subTotal")),
            total_amount=to_number(details.get("totalAmount")),
            total_amount_in_words=to_str(details.get("totalAmountInWords")),
            include_total_in_words=details.get("includeTotalInWords") is not False,
            additional_notes=to_str(details.get("additionalNotes")),
            payment_terms=to_str(details.get("paymentTerms")),
            signature=_parse_signature(details.get("signature")),
        ),
    )


def invoice_from_json(text: str) -> Invoice:
    """
    Decode invoice file text and recompute its derived fields.

    Raises:
        InvalidFormatError: text is not valid JSON or not an object.
        MissingFieldsError: a required top-level section is missing.
    """
    try:
        payload = json.loads(text)
    except (ValueError, TypeError) as exc:
        raise InvalidFormatError("Invalid JSON") from exc
    return with_computed_totals(parse_invoice(payload))


# ─── Encoding ────────────────────────────────────────────────────────


def _num(value: float) -> float | int:
    """Write integral floats without a trailing .0."""
    return int(value) if float(value).is_integer() else value


def _party_to_dict(party: Party) -> Dict[str, Any]:
    return {
        "name": party.name,
        "address": party.address,
        "zipCode": party.zip_code,
        "city": party.city,
        "country": party.country,
        "email": party.email,
        "phone": party.phone,
        "customInputs": [
            {"key": entry.key, "value": entry.value} for entry in party.custom_inputs
        ],
    }


def _item_to_dict(item: LineItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "name": item.name,
        "description": item.description,
        "quantity": _num(item.quantity),
        "unitPrice": _num(item.unit_price),
        "total": _num(item.total),
    }


def invoice_to_dict(invoice: Invoice) -> Dict[str, Any]:
    """
    Convert an Invoice into the camelCase structure of the invoice file.

    Derived fields are written as stored; use invoice_to_json to refresh
    them first. Optional payment information and signature are omitted
    when unset.
    """
    d = invoice.details
    details: Dict[str, Any] = {
        "invoiceLogo": d.invoice_logo,
        "invoiceNumber": d.invoice_number,
        "invoiceDate": d.invoice_date,
        "dueDate": d.due_date,
        "currency": d.currency,
        "items": [_item_to_dict(item) for item in d.items],
    }
    if d.payment_information is not None:
        details["paymentInformation"] = {
            "bankName": d.payment_information.bank_name,
            "accountName": d.payment_information.account_name,
            "accountNumber": d.payment_information.account_number,
        }
    details.update(
        {
            "discountDetails": {
                "amount": _num(d.discount_details.value),
                "amountType": d.discount_details.kind,
            },
            "taxDetails": {
                "amount": _num(d.tax_details.value),
                "amountType": d.tax_details.kind,
            },
            "shippingDetails": {
                "cost": _num(d.shipping_details.value),
                "costType": d.shipping_details.kind,
            },
            "discountEnabled": d.discount_enabled,
            "taxEnabled": d.tax_enabled,
            "shippingEnabled": d.shipping_enabled,
            "subTotal": _num(d.sub_total),
            "totalAmount": _num(d.total_amount),
            "totalAmountInWords": d.total_amount_in_words,
            "includeTotalInWords": d.include_total_in_words,
            "additionalNotes": d.additional_notes,
            "paymentTerms": d.payment_terms,
        }
    )
    if d.signature is not None:
        signature: Dict[str, Any] = {"data": d.signature.data}
        if d.signature.font_family is not None:
            signature["fontFamily"] = d.signature.font_family
        details["signature"] = signature

    return {
        "language": invoice.language,
        "sender": _party_to_dict(invoice.sender),
        "receiver": _party_to_dict(invoice.receiver),
        "details": details,
    }


def invoice_to_json(invoice: Invoice) -> str:
    """Serialize the invoice with refreshed totals as 2-space indented JSON."""
    computed = with_computed_totals(invoice)
    LOG.info(
        "invoice_to_json - items:%s total:%s",
        len(computed.details.items),
        computed.details.total_amount,
    )
    return json.dumps(invoice_to_dict(computed), indent=2, ensure_ascii=False)

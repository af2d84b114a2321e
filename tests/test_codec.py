from __future__ import annotations

import json

import pytest

from factories import make_invoice
from invoice_draft.calculations import with_computed_totals
from invoice_draft.codec import (
    InvalidFormatError,
    MissingFieldsError,
    invoice_from_json,
    invoice_to_dict,
    invoice_to_json,
    parse_invoice,
    to_bool,
    to_number,
    to_str,
)
from invoice_draft.models import Adjustment, LoadErrorKind, Signature

MINIMAL_RAW = {
    "sender": {"name": "Alice"},
    "receiver": {"name": "Bob"},
    "details": {
        "invoiceNumber": "1",
        "currency": "USD",
        "items": [{"id": "i1", "name": "Thing", "quantity": 1, "unitPrice": 50}],
    },
}


def _raw(**details) -> dict:
    return {**MINIMAL_RAW, "details": {**MINIMAL_RAW["details"], **details}}


# ─── guard clauses ───────────────────────────────────────────────────


@pytest.mark.parametrize("text", ["not json", "null", "42", '"hello"', "{"])
def test_invalid_format(text) -> None:
    with pytest.raises(InvalidFormatError) as excinfo:
        invoice_from_json(text)
    assert excinfo.value.kind is LoadErrorKind.INVALID_FORMAT


@pytest.mark.parametrize(
    "text",
    [
        "{}",
        "[]",
        '{"receiver": {}, "details": {}}',
        '{"sender": {}, "details": {}}',
        '{"sender": {}, "receiver": {}}',
        '{"sender": null, "receiver": {}, "details": {}}',
    ],
)
def test_missing_fields(text) -> None:
    with pytest.raises(MissingFieldsError) as excinfo:
        invoice_from_json(text)
    assert excinfo.value.kind is LoadErrorKind.MISSING_FIELDS


def test_empty_sections_are_accepted() -> None:
    invoice = parse_invoice({"sender": {}, "receiver": {}, "details": {}})
    assert invoice.sender.name == ""
    assert invoice.details.currency == "USD"
    assert len(invoice.details.items) == 1


# ─── coercion ────────────────────────────────────────────────────────


def test_minimal_object() -> None:
    invoice = parse_invoice(MINIMAL_RAW)
    assert invoice.sender.name == "Alice"
    assert invoice.receiver.name == "Bob"
    assert invoice.details.currency == "USD"
    assert [item.id for item in invoice.details.items] == ["i1"]
    assert invoice.language == "en"


def test_numeric_strings_in_items_are_coerced() -> None:
    invoice = parse_invoice(
        _raw(items=[{"id": "i1", "quantity": "3", "unitPrice": " 99.5 ", "total": "abc"}])
    )
    item = invoice.details.items[0]
    assert item.quantity == 3.0
    assert item.unit_price == 99.5
    assert item.total == 298.5


def test_non_numeric_values_fall_back_to_zero() -> None:
    invoice = parse_invoice(
        _raw(items=[{"quantity": "lots", "unitPrice": None, "total": 12}], subTotal="x")
    )
    item = invoice.details.items[0]
    assert (item.quantity, item.unit_price, item.total) == (0.0, 0.0, 12.0)
    assert invoice.details.sub_total == 0.0


def test_empty_items_get_one_blank_item() -> None:
    invoice = parse_invoice(_raw(items=[]))
    assert len(invoice.details.items) == 1
    item = invoice.details.items[0]
    assert item.id
    assert (item.name, item.quantity, item.unit_price) == ("", 0.0, 0.0)


def test_missing_and_duplicate_ids_get_distinct_placeholders() -> None:
    invoice = parse_invoice(_raw(items=[{"name": "a"}, {"name": "b"}, {"id": 7}, {"id": "x"}, {"id": "x"}]))
    ids = [item.id for item in invoice.details.items]
    assert len(set(ids)) == 5
    assert ids[0].startswith("item-0-")
    assert ids[3] == "x"
    assert ids[4].startswith("item-4-")


def test_adjustment_defaults_and_kinds() -> None:
    invoice = parse_invoice(
        _raw(
            taxDetails={"amount": "7.5", "amountType": "percentage"},
            discountDetails={"amount": 5, "amountType": "PERCENTAGE"},
            shippingDetails={"cost": 12, "costType": "percentage"},
        )
    )
    assert invoice.details.tax_details == Adjustment(7.5, "percentage")
    assert invoice.details.discount_details == Adjustment(5.0, "amount")
    assert invoice.details.shipping_details == Adjustment(12.0, "percentage")

    bare = parse_invoice(MINIMAL_RAW)
    assert bare.details.discount_details == Adjustment(0.0, "amount")
    assert bare.details.shipping_details == Adjustment(0.0, "amount")


@pytest.mark.parametrize(("raw", "expected"), [("pt-BR", "pt-BR"), ("fr", "en"), (None, "en"), ("pt-br", "en")])
def test_language(raw, expected) -> None:
    assert parse_invoice({**MINIMAL_RAW, "language": raw}).language == expected


@pytest.mark.parametrize(("raw", "expected"), [(False, False), (True, True), ("false", True), (0, True)])
def test_include_total_in_words_is_true_unless_literal_false(raw, expected) -> None:
    assert parse_invoice(_raw(includeTotalInWords=raw)).details.include_total_in_words is expected


def test_include_total_in_words_defaults_to_true() -> None:
    assert parse_invoice(MINIMAL_RAW).details.include_total_in_words is True


def test_enabled_flags_follow_truthiness() -> None:
    invoice = parse_invoice(_raw(discountEnabled="yes", taxEnabled=0))
    assert invoice.details.discount_enabled is True
    assert invoice.details.tax_enabled is False
    assert invoice.details.shipping_enabled is False


def test_custom_inputs_payment_and_signature() -> None:
    raw = {
        **MINIMAL_RAW,
        "sender": {"name": "Alice", "customInputs": [{"key": "VAT", "value": "PT123"}, {"key": ""}]},
        "receiver": {"name": "Bob", "customInputs": "nope"},
        "details": {
            **MINIMAL_RAW["details"],
            "paymentInformation": {"bankName": "First Bank", "accountNumber": 12345},
            "signature": {"data": "Alice Smith", "fontFamily": "Dancing Script"},
        },
    }
    invoice = parse_invoice(raw)
    assert [(c.key, c.value) for c in invoice.sender.custom_inputs] == [("VAT", "PT123"), ("", "")]
    assert invoice.receiver.custom_inputs == []
    assert invoice.details.payment_information.bank_name == "First Bank"
    assert invoice.details.payment_information.account_number == "12345"
    assert invoice.details.signature == Signature("Alice Smith", "Dancing Script")


def test_unknown_fields_are_ignored() -> None:
    raw = {**MINIMAL_RAW, "version": 3, "sender": {"name": "Alice", "a.b": 1, "extra": [1]}}
    assert parse_invoice(raw).sender.name == "Alice"


def test_parse_keeps_imported_totals_but_from_json_recomputes() -> None:
    raw = _raw(subTotal=1, totalAmount="2", totalAmountInWords="stale")
    assert parse_invoice(raw).details.sub_total == 1.0
    loaded = invoice_from_json(json.dumps(raw))
    assert loaded.details.sub_total == 50.0
    assert loaded.details.total_amount == 50.0
    assert loaded.details.total_amount_in_words == "Fifty USD"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(5, 5.0), ("2.5", 2.5), ("", 0.0), ("abc", 0.0), (None, 0.0), (True, 1.0),
     (float("nan"), 0.0), ("Infinity", 0.0), ("1_000", 0.0), ([1], 0.0),
     (10**400, 0.0), ("1e400", 0.0)],
)
def test_to_number(value, expected) -> None:
    assert to_number(value) == expected


def test_integers_too_large_for_a_float_become_zero() -> None:
    huge = 10**400
    text = json.dumps(
        _raw(items=[{"id": "i1", "quantity": huge, "unitPrice": 2, "total": huge}])
    )

    invoice = invoice_from_json(text)

    item = invoice.details.items[0]
    assert (item.quantity, item.unit_price, item.total) == (0.0, 2.0, 0.0)
    assert invoice.details.total_amount == 0.0


def test_to_str_and_to_bool() -> None:
    assert to_str(None) == ""
    assert to_str(None, "USD") == "USD"
    assert to_str(12.0) == "12"
    assert to_str(True) == "true"
    assert to_bool({}) is True
    assert to_bool("") is False


# ─── export ──────────────────────────────────────────────────────────


def test_export_is_two_space_indented_with_fresh_totals() -> None:
    invoice = make_invoice(lines=[(2, 10.5)])
    invoice.details.items[0].total = 1.0
    text = invoice_to_json(invoice)

    assert text.startswith('{\n  "language": "en",\n  "sender": {\n    "name": "Acme Ltd"')
    data = json.loads(text)
    assert data["details"]["items"][0]["total"] == 21
    assert data["details"]["subTotal"] == 21
    assert data["details"]["totalAmount"] == 21
    assert data["details"]["totalAmountInWords"] == "Twenty-one USD"
    assert data["details"]["discountDetails"] == {"amount": 0, "amountType": "amount"}
    assert data["details"]["shippingDetails"] == {"cost": 0, "costType": "amount"}
    assert "signature" not in data["details"]


def test_export_keeps_non_ascii_text() -> None:
    invoice = make_invoice(payment_terms="Pagamento em até 30 dias")
    assert "até" in invoice_to_json(invoice)


@pytest.mark.parametrize(
    "lines", [[(1, 1000)], [(3, 19.99), (0.5, 0.3)], [(0.1, 0.2), (7, 0.333), (12, 4.25)]]
)
def test_round_trip_preserves_totals(lines) -> None:
    exported = with_computed_totals(
        make_invoice(
            lines=lines,
            tax_details=Adjustment(23, "percentage"),
            tax_enabled=True,
            language="pt-BR",
        )
    )
    loaded = invoice_from_json(invoice_to_json(exported))

    assert loaded.details.sub_total == exported.details.sub_total
    assert loaded.details.total_amount == exported.details.total_amount
    assert loaded.details.items == exported.details.items
    assert loaded.language == "pt-BR"
    assert invoice_to_dict(loaded) == invoice_to_dict(exported)

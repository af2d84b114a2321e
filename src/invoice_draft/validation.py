"""
Rules an invoice must satisfy before it can be printed or exported.

The rules are declared as a pydantic schema over the invoice file
structure, so every failing field is reported at once with its dotted
path (for example "sender.name" or "details.items.0.quantity") and a
translatable message identifier:

    validation.required                    required text is empty
    validation.invalidEmail                email present but malformed
    validation.issueDateRequired           invoice date is empty
    validation.dueDateRequired             due date is empty
    validation.atLeastOneItem              item list is empty
    validation.atLeastOneItemWithQuantity  every item has quantity 0
    validation.nonNegative                 quantity or unit price below 0
    validation.invalidLanguage             unsupported language tag

Failures are returned as data (ValidationResult), never raised.
"""

import re
from typing import Annotated, Any, Callable, Iterable, List, Mapping

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import PydanticCustomError

from invoice_draft.codec import invoice_to_dict
from invoice_draft.lib import logs
from invoice_draft.models.common import FORM_PATH, ValidationIssue, ValidationResult
from invoice_draft.models.invoice import SUPPORTED_LANGUAGES, Invoice

LOG = logs.logger(__file__)

EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Z0-9_'+\-\.]*)[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}$",
    re.IGNORECASE,
)


def _require(message: str) -> Callable[[str], str]:
    def check(value: str) -> str:
        if not value:
            raise PydanticCustomError("required", message)
        return value

    return check


def _optional_email(value: str) -> str:
    if value and not EMAIL_PATTERN.fullmatch(value):
        raise PydanticCustomError("email", "validation.invalidEmail")
    return value


def _non_negative(value: float) -> float:
    if value < 0:
        raise PydanticCustomError("non_negative", "validation.nonNegative")
    return value


def _supported_language(value: str | None) -> str | None:
    if value is not None and value not in SUPPORTED_LANGUAGES:
        raise PydanticCustomError("language", "validation.invalidLanguage")
    return value


RequiredText = Annotated[str, AfterValidator(_require("validation.required"))]
OptionalEmail = Annotated[str, AfterValidator(_optional_email)]
NonNegative = Annotated[float, AfterValidator(_non_negative)]


class _Schema(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_default=True)


class PartySchema(_Schema):
    name: RequiredText = ""
    address: str = ""
    zipCode: str = ""
    city: str = ""
    country: str = ""
    email: OptionalEmail = ""
    phone: str = ""


class LineItemSchema(_Schema):
    id: str = ""
    name: str = ""
    description: str = ""
    quantity: NonNegative = 0
    unitPrice: NonNegative = 0
    total: float = 0


def _check_items(items: List[LineItemSchema]) -> List[LineItemSchema]:
    if not items:
        raise PydanticCustomError("too_short", "validation.atLeastOneItem")
    if not any(item.quantity > 0 for item in items):
        raise PydanticCustomError("no_quantity", "validation.atLeastOneItemWithQuantity")
    return items


class DetailsSchema(_Schema):
    invoiceNumber: RequiredText = ""
    invoiceDate: Annotated[str, AfterValidator(_require("validation.issueDateRequired"))] = ""
    dueDate: Annotated[str, AfterValidator(_require("validation.dueDateRequired"))] = ""
    currency: RequiredText = ""
    paymentTerms: RequiredText = ""
    items: Annotated[List[LineItemSchema], AfterValidator(_check_items)] = Field(
        default_factory=list
    )


class InvoiceSchema(_Schema):
    language: Annotated[str | None, AfterValidator(_supported_language)] = None
    sender: PartySchema = Field(default_factory=dict)
    receiver: PartySchema = Field(default_factory=dict)
    details: DetailsSchema = Field(default_factory=dict)


def _issue_path(loc: Iterable[Any]) -> str:
    return ".".join(str(part) for part in loc) or FORM_PATH


def validate_invoice(invoice: Invoice | Mapping[str, Any]) -> ValidationResult:
    """
    Check whether an invoice is complete enough to print or export.

    Args:
        invoice: An Invoice, or its camelCase file structure.

    Returns:
        ValidationResult listing every failing rule; empty when valid.
    """
    payload = invoice_to_dict(invoice) if isinstance(invoice, Invoice) else invoice
    try:
        InvoiceSchema.model_validate(payload)
    except ValidationError as exc:
        issues = [
            ValidationIssue(path=_issue_path(error["loc"]), message=error["msg"])
            for error in exc.errors()
        ]
        LOG.debug("validate_invoice - failed paths:%s", [i.path for i in issues])
        return ValidationResult(errors=issues)
    return ValidationResult()


def format_validation_errors(
    errors: Iterable[ValidationIssue],
    translate: Callable[[str], str] | None = None,
) -> str:
    """
    Join validation issues into one message, one "path: message" per line.

    Args:
        errors: Issues to render.
        translate: Optional lookup applied to "validation.*" identifiers.
    """
    return "\n".join(issue.format(translate) for issue in errors)

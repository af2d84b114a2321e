"""
Result objects returned at the boundaries of the invoice draft core.

Import and validation never signal failure to the UI through exceptions.
They return one of the dataclasses below so the caller always gets a value
it can render:

- LoadResult: outcome of loading an invoice from JSON text
- ValidationResult: list of ValidationIssue entries gating export/print

Message identifiers ("errors.*", "validation.*") are translation keys that
the UI resolves against its own string catalog.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List

FORM_PATH = "form"


class LoadErrorKind(str, Enum):
    """Category of a failed import, valued by its message identifier."""

    INVALID_FORMAT = "errors.invalidJson"
    MISSING_FIELDS = "errors.missingFields"
    GENERIC = "errors.parseFailed"


@dataclass(slots=True)
class LoadResult:
    """
    Outcome of InvoiceSession.load_from_json.

    Attributes:
        success: True when the document was replaced.
        error: Message identifier for known failure kinds, otherwise the
            message of the underlying exception.
        kind: Failure category, None on success.
    """

    success: bool
    error: str | None = None
    kind: LoadErrorKind | None = None

    @classmethod
    def ok(cls) -> "LoadResult":
        return cls(success=True)

    @classmethod
    def failed(cls, kind: LoadErrorKind, error: str | None = None) -> "LoadResult":
        return cls(success=False, error=error or kind.value, kind=kind)


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single failing rule, keyed by a dotted field path."""

    path: str
    message: str

    def format(self, translate: Callable[[str], str] | None = None) -> str:
        """Render as "path: message", translating validation message ids."""
        message = self.message
        if translate is not None and message.startswith("validation."):
            message = translate(message)
        return f"{self.path}: {message}"


@dataclass(slots=True)
class ValidationResult:
    """Outcome of validating an invoice before export or print."""

    errors: List[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def success(self) -> bool:
        """Alias of valid, matching the UI-facing result shape."""
        return self.valid

    def paths(self) -> List[str]:
        """Return the field paths that failed, in rule order."""
        return [issue.path for issue in self.errors]

    def messages(self, translate: Callable[[str], str] | None = None) -> List[str]:
        """Return one formatted line per issue."""
        return [issue.format(translate) for issue in self.errors]

    def message(self, translate: Callable[[str], str] | None = None) -> str:
        """Return all issues joined into a single displayable message."""
        return "\n".join(self.messages(translate))

"""
Locale-aware formatting helpers.

Provides helpers for:
- Date parsing (ISO and m/d/y formats)
- Number and currency formatting with the document language's grouping
- Long-form date display in the document language
- Recognizing embedded image data-URIs
"""

from datetime import datetime

_MONTHS = {
    "en": [
        "January", "February", "March", "April", "May", "June", "July",
        "August", "September", "October", "November", "December",
    ],
    "pt-BR": [
        "janeiro", "fevereiro", "março", "abril", "maio", "junho", "julho",
        "agosto", "setembro", "outubro", "novembro", "dezembro",
    ],
}


def parse_date(date_str: str | None) -> datetime | None:
    """
    Parse an invoice date string to a datetime object.

    Args:
        date_str: Date in ISO format (e.g., "2024-12-25") or m/d/y format
            (e.g., "12/25/2024").

    Returns:
        datetime object if parsing succeeds, None otherwise
    """
    if date_str:
        date_str = date_str.strip()
    if not date_str:
        return None

    try:
        return datetime.fromisoformat(date_str)
    except (ValueError, TypeError):
        pass

    try:
        return datetime.strptime(date_str, "%m/%d/%Y")
    except ValueError:
        pass

    return None


def format_number(value: float, language: str | None = None) -> str:
    """
    Format a number with two decimals and the language's digit grouping.

    Args:
        value: Numeric amount to format.
        language: "pt-BR" for 1.234,56; anything else for 1,234.56.

    Returns:
        Formatted number string.
    """
    text = f"{value:,.2f}"
    if language == "pt-BR":
        text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return text


def format_currency(value: float, currency: str, language: str | None = None) -> str:
    """
    Format a currency amount followed by the currency label.

    Returns:
        Formatted string like '1,234.56 USD'.
    """
    return f"{format_number(value, language)} {currency}"


def format_date(date_str: str, language: str | None = None) -> str:
    """
    Format an ISO date for display in the document language.

    Unparseable input is returned unchanged so a hand-edited value still
    shows up on the printed document.
    """
    parsed = parse_date(date_str)
    if parsed is None:
        return date_str
    if language == "pt-BR":
        month = _MONTHS["pt-BR"][parsed.month - 1]
        return f"{parsed.day} de {month} de {parsed.year}"
    return f"{_MONTHS['en'][parsed.month - 1]} {parsed.day}, {parsed.year}"


def is_data_url(text: str) -> bool:
    """Check if a logo or signature value is an embedded data-URI."""
    return text.startswith("data:")

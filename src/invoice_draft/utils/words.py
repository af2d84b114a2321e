"""
Spell out invoice totals in words.

Supports the two document languages:

    to_words(1000.5, "USD", "en")    -> "One thousand USD and fifty cents"
    to_words(1.5, "BRL", "pt-BR")    -> "Um BRL e cinquenta centavos"

The currency label is echoed back verbatim; no ISO currency names are
looked up. A zero amount is always rendered as "Zero <label>", in both
languages.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

_ZERO_LABEL = "Zero"

# ─── English ─────────────────────────────────────────────────────────

_EN_ONES = [
    "zero", "one", "two", "three", "four", "five", "six", "seven", "eight",
    "nine", "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen",
    "sixteen", "seventeen", "eighteen", "nineteen",
]
_EN_TENS = [
    "", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy",
    "eighty", "ninety",
]
_EN_SCALES = [
    (10**12, "trillion"),
    (10**9, "billion"),
    (10**6, "million"),
    (10**3, "thousand"),
]

# ─── Brazilian Portuguese ────────────────────────────────────────────

_PT_UNITS = [
    "zero", "um", "dois", "três", "quatro", "cinco", "seis", "sete", "oito",
    "nove",
]
_PT_TEENS = [
    "dez", "onze", "doze", "treze", "catorze", "quinze", "dezesseis",
    "dezessete", "dezoito", "dezenove",
]
_PT_TENS = [
    "", "", "vinte", "trinta", "quarenta", "cinquenta", "sessenta", "setenta",
    "oitenta", "noventa",
]
_PT_HUNDREDS = [
    "", "cento", "duzentos", "trezentos", "quatrocentos", "quinhentos",
    "seiscentos", "setecentos", "oitocentos", "novecentos",
]
# (scale, word for exactly one, plural word)
_PT_SCALES = [
    (10**9, "um bilhão", "bilhões"),
    (10**6, "um milhão", "milhões"),
    (10**3, "mil", "mil"),
]
PT_MAX = 10**12 - 1
# Enough digits to quantize any finite float times 100 without overflow
_WIDE = Context(prec=400)

_LABELS = {
    "en": {"minus": "minus", "and": "and", "cents": "cents"},
    "pt-BR": {"minus": "menos", "and": "e", "cents": "centavos"},
}


def _english_below_thousand(number: int) -> str:
    hundreds, rest = divmod(number, 100)
    words = []
    if hundreds:
        words.append(f"{_EN_ONES[hundreds]} hundred")
    if rest >= 20:
        tens, units = divmod(rest, 10)
        words.append(f"{_EN_TENS[tens]}-{_EN_ONES[units]}" if units else _EN_TENS[tens])
    elif rest:
        words.append(_EN_ONES[rest])
    return " ".join(words)


def english_cardinal(number: int) -> str:
    """
    Convert an integer to lowercase English cardinal words.

    Tens and units are hyphenated and each thousand/million/... group that
    is followed by more words ends with a comma, e.g. 9150 becomes
    "nine thousand, one hundred fifty".
    """
    if number < 0:
        return f"minus {english_cardinal(-number)}"
    if number == 0:
        return _EN_ONES[0]

    words = []
    remainder = number
    for scale, label in _EN_SCALES:
        if remainder >= scale:
            words.append(f"{english_cardinal(remainder // scale)} {label},")
            remainder %= scale
    if remainder:
        words.append(_english_below_thousand(remainder))
    return " ".join(words).rstrip(",")


def _portuguese_below_thousand(number: int) -> str:
    if number == 100:
        return "cem"
    hundreds, rest = divmod(number, 100)
    words = []
    if hundreds:
        words.append(_PT_HUNDREDS[hundreds])
    if rest >= 20:
        tens, units = divmod(rest, 10)
        words.append(_PT_TENS[tens])
        if units:
            words.append(_PT_UNITS[units])
    elif rest >= 10:
        words.append(_PT_TEENS[rest - 10])
    elif rest:
        words.append(_PT_UNITS[rest])
    return " e ".join(words)


def portuguese_cardinal(number: int) -> str:
    """
    Convert an integer to lowercase Brazilian Portuguese cardinal words.

    Handles "cem" versus "cento e ...", "mil" without "um", singular and
    plural millions/billions, and the "e" placed before a final group that
    is below one hundred or a round hundred. That joiner makes 1100 read
    "mil e cem" and 2050 "dois mil e cinquenta", where earlier releases of
    the editor printed "mil cem" and "dois mil cinquenta"; saved totals in
    words from those releases are replaced on the next recompute. Values
    above PT_MAX are returned as digits.
    """
    if number < 0:
        return f"menos {portuguese_cardinal(-number)}"
    if number == 0:
        return _PT_UNITS[0]
    if number > PT_MAX:
        return str(number)

    groups: list[tuple[int, str]] = []
    remainder = number
    for scale, single, plural in _PT_SCALES:
        count, remainder = divmod(remainder, scale)
        if count == 1:
            groups.append((count, single))
        elif count:
            groups.append((count, f"{_portuguese_below_thousand(count)} {plural}"))
    if remainder:
        groups.append((remainder, _portuguese_below_thousand(remainder)))

    result = groups[0][1]
    for index, (value, words) in enumerate(groups[1:], start=1):
        last = index == len(groups) - 1
        joiner = " e " if last and (value < 100 or value % 100 == 0) else " "
        result = f"{result}{joiner}{words}"
    return result


def _split_cents(amount: float) -> tuple[bool, int, int]:
    """Round to two decimals and return (negative, integer part, cents)."""
    value = float(amount) * 100
    if not math.isfinite(value):
        return False, 0, 0
    scaled = Decimal(repr(value)).quantize(
        Decimal(1), rounding=ROUND_HALF_UP, context=_WIDE
    )
    integer_part, cents = divmod(abs(int(scaled)), 100)
    return scaled < 0, integer_part, cents


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def to_words(amount: float, currency_label: str, language: str | None = None) -> str:
    """
    Spell out a monetary amount followed by the caller's currency label.

    Args:
        amount: Amount to convert; rounded to two decimals first.
        currency_label: Currency code or label, echoed verbatim.
        language: "en" or "pt-BR"; anything else falls back to English.

    Returns:
        Capitalized words, with the cents appended when non-zero.
    """
    negative, integer_part, cents = _split_cents(amount)
    if integer_part == 0 and cents == 0:
        return f"{_ZERO_LABEL} {currency_label}"

    is_pt = language == "pt-BR"
    cardinal = portuguese_cardinal if is_pt else english_cardinal
    labels = _LABELS["pt-BR" if is_pt else "en"]

    words = cardinal(integer_part)
    if negative:
        words = f"{labels['minus']} {words}"
    result = f"{_capitalize(words)} {currency_label}"
    if cents > 0:
        result += f" {labels['and']} {cardinal(cents)} {labels['cents']}"
    return result

"""Product identifier normalization, classification and checksum validation.

Numeric codes are canonicalized by length:

- 6 or 7 digits are left-padded to 8 (compressed UPC-E)
- 9 to 11 digits are left-padded to 12 (UPC-A)
- 12 digits failing the UPC-A check digit get one leading zero (truncated EAN-13)

The last rule is a heuristic. A 12-digit value can carry a valid UPC-A check
digit and still be a truncated EAN-13 (and vice versa); nothing in the digits
settles it.

An 8-digit code with a valid EAN-8 check digit is EAN-8; any other 8-digit
code is taken as UPC-E. UPC-E check digits are not verified.

Values containing letters are treated as internal SKUs: separators are kept
and the value is upper-cased.
"""

from __future__ import annotations

import re
from typing import Final

from productrecon.domain.model import IdentifierCode, IdentifierKind

_HEX_PREFIX: Final[str] = "0x"
_NON_DIGIT = re.compile(r"[^0-9]")
_ISBN10_WITH_CHECK_X = re.compile(r"^[0-9]{9}X$")
_ISBN13_PREFIXES: Final[tuple[str, ...]] = ("978", "979")
_GTIN_LENGTHS: Final[frozenset[int]] = frozenset({8, 12, 13, 14})
_SKU_MIN_LENGTH: Final[int] = 4
_SKU_MAX_LENGTH: Final[int] = 20
_ASCII_DIGITS: Final[str] = "0123456789"


def normalize_code(raw: str | None) -> str:
    """Return the canonical form of ``raw``.

    The function is pure and idempotent: ``normalize_code(normalize_code(x))``
    equals ``normalize_code(x)``.
    """

    if raw is None:
        return ""
    text = raw.strip()
    while text[:2].lower() == _HEX_PREFIX:
        text = text[2:].strip()
    if not text:
        return ""

    if _is_numeric_code(text):
        return _canonical_numeric(_NON_DIGIT.sub("", text))
    return text.upper()


def detect_type(raw: str | None) -> IdentifierKind:
    """Classify ``raw`` after normalization."""

    normalized = normalize_code(raw)
    if not normalized:
        return IdentifierKind.UNKNOWN
    if _ISBN10_WITH_CHECK_X.match(normalized) and is_valid_isbn10(normalized):
        return IdentifierKind.ISBN_10
    if not _is_ascii_digits(normalized):
        return IdentifierKind.SKU

    match len(normalized):
        case 8 if has_valid_gtin_check_digit(normalized):
            return IdentifierKind.EAN_8
        case 8:
            return IdentifierKind.UPC_E
        case 12:
            return IdentifierKind.UPC_A
        case 13 if normalized.startswith(_ISBN13_PREFIXES):
            return IdentifierKind.ISBN_13
        case 13:
            return IdentifierKind.EAN_13
        case 14:
            return IdentifierKind.GTIN_14
        case 10 if is_valid_isbn10(normalized):
            return IdentifierKind.ISBN_10
        case length if _SKU_MIN_LENGTH <= length <= _SKU_MAX_LENGTH:
            return IdentifierKind.SKU
        case _:
            return IdentifierKind.UNKNOWN


def is_valid_barcode(raw: str | None) -> bool:
    """Validate the check digit for GTIN lengths; accept plausible SKU lengths."""

    normalized = normalize_code(raw)
    if not normalized:
        return False

    length = len(normalized)
    if length in _GTIN_LENGTHS and _is_ascii_digits(normalized):
        if length == 8:
            # simplified UPC-E: every 8-digit code passes
            return True
        return has_valid_gtin_check_digit(normalized)
    return _SKU_MIN_LENGTH <= length <= _SKU_MAX_LENGTH


def parse_identifier(raw: str | None) -> IdentifierCode:
    """Derive the full identifier value for ``raw``."""

    return IdentifierCode(
        raw=raw or "",
        normalized=normalize_code(raw),
        kind=detect_type(raw),
    )


def gtin_check_digit(digits: str) -> int:
    """Compute the modulo-10 check digit over all but the last digit of ``digits``.

    Digits at even 0-indexed positions weigh 1, odd positions weigh 3.
    """

    total = 0
    for index, char in enumerate(digits[:-1]):
        total += int(char) * (1 if index % 2 == 0 else 3)
    return (10 - total % 10) % 10


def has_valid_gtin_check_digit(code: str) -> bool:
    """Validate an EAN-8, UPC-A, EAN-13 or GTIN-14 check digit."""

    if len(code) not in _GTIN_LENGTHS or not _is_ascii_digits(code):
        return False
    return gtin_check_digit(code) == int(code[-1])


def is_valid_isbn10(code: str) -> bool:
    if len(code) != 10 or not _is_ascii_digits(code[:9]):
        return False
    total = sum(int(char) * (10 - index) for index, char in enumerate(code[:9]))
    last = code[9]
    if last in "Xx":
        total += 10
    elif _is_ascii_digits(last):
        total += int(last)
    else:
        return False
    return total % 11 == 0


def _is_numeric_code(text: str) -> bool:
    has_digit = False
    for char in text:
        if char.isalpha():
            return False
        if char in _ASCII_DIGITS:
            has_digit = True
    return has_digit


def _canonical_numeric(digits: str) -> str:
    digits = digits.lstrip("0") or "0"
    length = len(digits)
    if length in (6, 7):
        return digits.rjust(8, "0")
    if 9 <= length <= 11:
        digits = digits.rjust(12, "0")
    if len(digits) == 12 and not has_valid_gtin_check_digit(digits):
        return "0" + digits
    return digits


def _is_ascii_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()

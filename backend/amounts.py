# backend/amounts.py
"""
Conversions between what people type and integer cents.

Bad input never raises: it is normalized to 0 (or to the nearest valid
participant count) before it reaches the settlement engine.
"""

import math
from decimal import Decimal, DecimalException, localcontext


def parse_amount(text):
    """
    Parse "12.50", "12,50", " 7 " or 3.5 into cents.

    Blank or unparsable input is 0. Digits past the second decimal place
    are truncated toward zero.
    """
    if text is None:
        return 0
    cleaned = str(text).strip().replace(',', '.')
    # Decimal() would accept "1_000"; digit grouping is not supported
    if not cleaned or '_' in cleaned:
        return 0

    try:
        value = Decimal(cleaned)
        if not value.is_finite():
            return 0
        with localcontext() as ctx:
            # enough precision that scaling never rounds
            ctx.prec = max(ctx.prec, len(value.as_tuple().digits))
            # int() truncates toward zero
            return int(value.scaleb(2))
    except DecimalException:
        return 0


def format_cents(cents, currency=None):
    """1250 -> "12.50", or "12.50 €" when a currency symbol is given."""
    sign = '-' if cents < 0 else ''
    units, rest = divmod(abs(cents), 100)
    text = f"{sign}{units}.{rest:02d}"
    if currency:
        text = f"{text} {currency}"
    return text


def clamp_participant_count(requested, maximum):
    """Requested roster size, at least 1 and at most `maximum`."""
    try:
        count = float(requested)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(count):
        return 1
    return max(1, min(int(count), maximum))

"""Promotion codes and the discounts they grant.

Codes are matched case-insensitively but otherwise exactly: surrounding
whitespace is not trimmed here. Anything unrecognised, including the empty
string, grants no discount rather than being rejected, so a typo such
as ``SAVE1O`` is indistinguishable from "no code" except through
``is_recognized``.
"""

from enum import Enum

SAVE10_RATE = 0.10
SAVE10_CAP = 150.0
FLAT50_AMOUNT = 50.0


class PromotionCode(Enum):
    SAVE10 = "SAVE10"
    FLAT50 = "FLAT50"


def normalize_code(code: str | None) -> str:
    return (code or "").upper()


def is_recognized(code: str | None) -> bool:
    return normalize_code(code) in {promotion.value for promotion in PromotionCode}


def resolve_discount(code: str | None, subtotal: float) -> float:
    """Discount granted by ``code`` on ``subtotal``.

    ``FLAT50`` is not capped by the subtotal; keeping totals non-negative is
    the billing engine's job.
    """
    normalized = normalize_code(code)

    if normalized == PromotionCode.SAVE10.value:
        return min(subtotal * SAVE10_RATE, SAVE10_CAP)
    if normalized == PromotionCode.FLAT50.value:
        return FLAT50_AMOUNT
    return 0.0

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

MONEY_Q = Decimal("0.01")
BALANCE_TOLERANCE = Decimal("0.01")


def to_decimal(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0")
    if isinstance(v, Decimal):
        return v
    try:
        return Decimal(str(v))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {v!r}")


def q_money(v) -> Decimal:
    return to_decimal(v).quantize(MONEY_Q, rounding=ROUND_HALF_UP)

"""Period-over-period evolution helpers."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from visit_insights.core.errors import InvalidArgument


def to_number(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip().rstrip("%"))
        except ValueError as exc:
            raise InvalidArgument(f"Cannot compute an evolution from non-numeric value {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidArgument(f"Cannot compute an evolution from non-finite value {value!r}")
    return number


def calculate_evolution(current_value: Any, past_value: Any, precision: int = 1) -> float:
    """Return the signed percentage change from ``past_value`` to ``current_value``.

    A zero past value has no meaningful ratio, so the change is reported as
    100, 0 or -100 depending on the sign of the current value. Halves round
    away from zero: 401 against 400 is 0.3, not 0.2.
    """

    current = to_number(current_value)
    past = to_number(past_value)
    if past == 0:
        if current > 0:
            return 100.0
        if current == 0:
            return 0.0
        return -100.0

    current_dec = Decimal(str(current))
    past_dec = Decimal(str(past))
    with localcontext() as ctx:
        ctx.prec = 28
        ratio = (current_dec - past_dec) / abs(past_dec) * 100
        ctx.prec = max(ctx.prec, ratio.adjusted() + precision + 2)
        return float(ratio.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP))


def format_evolution(percent: float, precision: int = 1) -> str:
    """Render ``percent`` the way dashboards display it, e.g. ``+12.5%``."""

    text = f"{percent:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    if percent > 0 and text != "0":
        return f"+{text}%"
    return f"{text}%"


__all__ = ["calculate_evolution", "format_evolution", "to_number"]

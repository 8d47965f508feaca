"""
Entitlement models — rule engine output and the rows written to disk.

``Diagnostic``   — one warning produced by a rule; the orchestrator decides
                   how to present it (the engine itself never logs).
``Entitlement``  — full-precision engine result for one employee/year pair:
                   ``days`` (may be NaN), the fraction ``carried`` into the
                   following year, and the diagnostics raised on the way.
``EntitlementResult`` — terminal ``{name, days}`` record; ``days`` is
                   rounded to one decimal or ``None`` when not computable.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from pydantic import BaseModel, ConfigDict

OUTPUT_FIELDS = ["name", "days"]


@dataclass(frozen=True)
class Diagnostic:
    """A rule-level message about one employee.

    Attributes:
        rule:    Name of the rule that produced it (e.g. ``"contract"``).
        message: Human-readable text.
        level:   ``logging`` level number; rules only emit warnings today.
    """

    rule: str
    message: str
    level: int = logging.WARNING


@dataclass(frozen=True)
class Entitlement:
    """Unrounded result of running the rule chain once."""

    days: float
    carried: float = 0.0
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def is_computable(self) -> bool:
        return not math.isnan(self.days)

    def rounded_days(self) -> Optional[float]:
        """Days rounded half-up to one decimal, or ``None`` for NaN."""
        if not self.is_computable:
            return None
        return round_days(self.days)


def round_days(days: float) -> float:
    """Round ``days`` half-up to one decimal place.

    Works for any finite float: the context precision grows with the
    number of integer digits so ``quantize`` never overflows it.
    """
    exact = Decimal(days)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + 3)
        return float(exact.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class EntitlementResult(BaseModel):
    """A single output row: employee name and entitled days."""

    model_config = ConfigDict(frozen=True)

    name: str
    days: Optional[float] = None

    def to_row(self) -> dict[str, str]:
        """Render as CSV cells; whole numbers lose their ``.0``, ``None`` is empty."""
        if self.days is None:
            days = ""
        elif float(self.days).is_integer():
            days = str(int(self.days))
        else:
            days = f"{self.days:.1f}"
        return {"name": self.name, "days": days}

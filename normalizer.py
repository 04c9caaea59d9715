"""Turn raw model output into a type-clean, percentage-annotated ProductionReport."""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Dict, List, Optional

from config import DAYS_IN_MONTH
from models import EntityProduction, LineItem, ProductionReport, ShareValue


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a loosely typed numeric value.

    Strings may carry thousands separators ("12,934.2"). Returns None for
    anything absent, empty, unparseable or non-finite.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        cleaned = value.replace(",", "").strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


def to_number(value: Any) -> float:
    """Required numeric field: invalid input becomes 0."""
    number = parse_number(value)
    return number if number is not None else 0.0


def to_optional_text(value: Any) -> Optional[str]:
    """Optional string field: strings pass through, numbers are stringified."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return str(value)
        except ValueError:
            # int over the interpreter's digit limit
            return None
    return None


def round2(value: float) -> float:
    """Round half-up to 2 decimal places. Non-finite input becomes 0."""
    if not math.isfinite(value):
        return 0.0
    with localcontext() as ctx:
        # Enough digits for the largest float plus 2 decimals
        ctx.prec = 400
        return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def percentage(value: float, total: float) -> float:
    """Share of total in percent, 0 when the total is not positive."""
    if total > 0:
        return round2(value / total * 100)
    return 0.0


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _line_items(raw_items: Any, total: float) -> List[LineItem]:
    if not isinstance(raw_items, list):
        return []

    items = []
    for raw_item in raw_items:
        if not isinstance(raw_item, dict):
            continue
        name = raw_item.get("name")
        value = to_number(raw_item.get("value"))
        items.append(LineItem(
            name=name if isinstance(name, str) else (to_optional_text(name) or ""),
            value=value,
            percentage=percentage(value, total),
        ))
    return items


def _share(raw_share: Any, total: float) -> ShareValue:
    # Some responses flatten {"value": n} to a bare number
    if isinstance(raw_share, dict):
        value = to_number(raw_share.get("value"))
    else:
        value = to_number(raw_share)
    return ShareValue(value=value, percentage=percentage(value, total))


def normalize_entity(raw_entity: Any) -> EntityProduction:
    """Normalize the data block of a single industry."""
    raw = _as_dict(raw_entity)
    total = to_number(raw.get("dailyProductionTotal"))

    total_this_month = parse_number(raw.get("totalThisMonth"))
    average_per_day = total_this_month / DAYS_IN_MONTH if total_this_month is not None else None

    return EntityProduction(
        daily_production_total=total,
        loading_capacity=_line_items(raw.get("loadingCapacity"), total),
        in_house=_share(raw.get("inHouse"), total),
        sub_contract=_share(raw.get("subContract"), total),
        lab_rft=to_optional_text(raw.get("labRft")),
        total_this_month=total_this_month,
        average_per_day=average_per_day,
    )


def normalize(raw_extraction: Any) -> ProductionReport:
    """
    Build a ProductionReport from a raw extraction dict.

    Never raises: every field has a defined fallback. Line items keep the
    order and names the model reported them with.
    """
    raw = _as_dict(raw_extraction)

    return ProductionReport(
        date=to_optional_text(raw.get("date")) or "",
        lantabur=normalize_entity(raw.get("lantabur")),
        taqwa=normalize_entity(raw.get("taqwa")),
        overall_grand_total=parse_number(raw.get("overallGrandTotal")),
    )

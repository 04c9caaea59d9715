"""Human-readable text and chart-ready series derived from a ProductionReport."""

from typing import Dict, List, Optional
from urllib.parse import quote

from config import NO_DATA_TEXT
from models import EntityProduction, ProductionReport


def format_number(value: float, max_fraction_digits: int = 3) -> str:
    """Format with thousands grouping and no trailing fraction zeros."""
    text = f"{value:,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_percentage(value: float) -> str:
    """Always exactly 2 decimals."""
    return f"{value:.2f}"


def format_entity(name: str, entity: EntityProduction) -> str:
    """Format the block for one industry."""
    lines = [
        f"╰─>{name} Data:",
        f"Total = {format_number(entity.daily_production_total)} kg",
        "Loading cap:",
    ]
    for item in entity.loading_capacity:
        lines.append(f"{item.name}: {format_number(item.value)} kg ({format_percentage(item.percentage)}%)")

    lines.append("")
    lines.append(f"Inhouse: {format_number(entity.in_house.value)} kg ({format_percentage(entity.in_house.percentage)}%)")
    lines.append(
        f"Sub Contract: {format_number(entity.sub_contract.value)} kg "
        f"({format_percentage(entity.sub_contract.percentage)}%)"
    )
    lines.append("")
    lines.append(f"LAB RFT: {entity.lab_rft if entity.lab_rft is not None else ''}")

    if entity.total_this_month is not None:
        lines.append(f"Total this month: {format_number(entity.total_this_month)} kg")
    if entity.average_per_day is not None:
        lines.append(f"Avg/day: {format_number(entity.average_per_day, max_fraction_digits=2)} kg")

    return "\n".join(lines) + "\n"


def format_report(report: Optional[ProductionReport]) -> str:
    """
    Format a report as the plain-text summary shown on the dashboard.

    Returns the fixed "No data available." text for None. The output depends
    only on the report, so repeated calls give identical strings.
    """
    if report is None:
        return NO_DATA_TEXT

    output = f"Date: {report.date}\n\n"
    output += "\n".join(format_entity(name, entity) for name, entity in report.entities())

    if report.overall_grand_total is not None:
        output += f"\nOverall Grand Total: {format_number(report.overall_grand_total)} kg\n"

    return output.strip()


def loading_capacity_chart_data(entity: EntityProduction) -> List[Dict]:
    """Bar chart rows: one per loading-capacity item, in display order."""
    return [
        {"name": item.name, "value": item.value, "percentage": item.percentage}
        for item in entity.loading_capacity
    ]


def production_mix_chart_data(entity: EntityProduction) -> List[Dict]:
    """Pie chart slices: in-house vs subcontracted production."""
    return [
        {"name": "In-House", "value": entity.in_house.value, "percentage": entity.in_house.percentage},
        {"name": "Subcontracted", "value": entity.sub_contract.value, "percentage": entity.sub_contract.percentage},
    ]


def entity_comparison_chart_data(report: ProductionReport) -> List[Dict]:
    """Grouped bar rows comparing both industries. Month values are None when not reported."""
    return [
        {
            "name": name,
            "dailyProductionTotal": entity.daily_production_total,
            "totalThisMonth": entity.total_this_month,
            "averagePerDay": entity.average_per_day,
        }
        for name, entity in report.entities()
    ]


def whatsapp_share_url(text: str) -> str:
    """Build a WhatsApp share link carrying the summary text."""
    return f"https://api.whatsapp.com/send?text={quote(text, safe='')}"

"""Display helpers for indicator values.

Values stay provider text in the model; only these helpers parse them, and
anything that does not parse is shown unchanged.
"""

from __future__ import annotations

from careerecon.domain.models.series import Indicator


def _parse_number(value: str) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    return number


def format_indicator_value(display_name: str, value: str) -> str:
    """Format ``value`` for the indicator named ``display_name``.

    >>> format_indicator_value("Unemployment Rate", "3.70")
    '3.7%'
    >>> format_indicator_value("Average Hourly Earnings", "-")
    '-'
    """
    number = _parse_number(value)
    if number is None:
        return value

    if "CPI" in display_name or "Price Index" in display_name:
        return f"{number:.1f}"
    if "Unemployment" in display_name or "Rate" in display_name:
        return f"{number:.1f}%"
    if "Earnings" in display_name or "Wage" in display_name:
        return f"${number:.2f}/hr"
    return value


def latest_value(indicator: Indicator) -> str:
    # Provider data is most recent first
    if indicator.data:
        return indicator.data[0].value
    return "N/A"


def latest_period_label(indicator: Indicator) -> str:
    if indicator.data:
        point = indicator.data[0]
        return f"{point.period_name} {point.year}"
    return ""

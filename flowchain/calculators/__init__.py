"""Calculators module for analytics metric helpers."""

from flowchain.calculators.metrics import (
    MONTHS,
    calculate_percentage,
    month_label,
    sum_hours,
)

__all__ = ["MONTHS", "calculate_percentage", "month_label", "sum_hours"]

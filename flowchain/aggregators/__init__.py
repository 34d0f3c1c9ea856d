"""Aggregators module for analytics views.

This module provides filter normalization, the analytics aggregator with
its seven views, and the filter option provider.
"""

from flowchain.aggregators.analytics_aggregator import (
    AnalyticsAggregator,
    FilteredCollections,
    KpiSummary,
    MonthlyHours,
    MonthlyRevenueExpense,
    NamedValue,
    ProjectCost,
)
from flowchain.aggregators.filter_normalizer import normalize_filters
from flowchain.aggregators.filter_options import FilterOptionProvider, FilterOptions

__all__ = [
    "AnalyticsAggregator",
    "FilterOptionProvider",
    "FilterOptions",
    "FilteredCollections",
    "KpiSummary",
    "MonthlyHours",
    "MonthlyRevenueExpense",
    "NamedValue",
    "ProjectCost",
    "normalize_filters",
]

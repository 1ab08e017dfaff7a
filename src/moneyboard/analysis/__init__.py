"""
Financial Analysis Package

Pure aggregations over canonical transactions plus the CSV exporter and
dashboard charts built on top of them.

Key Components:
- aggregation: totals, monthly breakdown, category breakdown, report summary
- export: CSV report export
- charts: PNG dashboard (imported on demand; pulls in matplotlib)
"""

from .aggregation import (
    CategorySummary,
    ChartSlice,
    MonthlySummary,
    ReportSummary,
    category_breakdown,
    category_chart_data,
    compute_totals,
    monthly_breakdown,
    report_summary,
)
from .export import export_transactions_csv, report_filename, write_transactions_csv

__all__ = [
    "CategorySummary",
    "ChartSlice",
    "MonthlySummary",
    "ReportSummary",
    "category_breakdown",
    "category_chart_data",
    "compute_totals",
    "export_transactions_csv",
    "monthly_breakdown",
    "report_filename",
    "report_summary",
    "write_transactions_csv",
]

#!/usr/bin/env python3
"""
Dashboard Charts

Renders the monthly income/expense series and the expense and income
category splits into a single PNG dashboard.
"""

from datetime import datetime
from pathlib import Path

import matplotlib
import pandas as pd

matplotlib.use("Agg")  # Use non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from ..core.config import get_config
from ..core.models import Transaction, TransactionType
from .aggregation import category_breakdown, category_chart_data, monthly_breakdown


def monthly_dataframe(transactions: list[Transaction]) -> pd.DataFrame:
    """Monthly breakdown as a DataFrame indexed by YYYY-MM (amounts in currency units)."""
    rows = [
        {
            "Month": summary.month,
            "Income": summary.income.to_float(),
            "Expense": summary.expense.to_float(),
            "Balance": summary.balance.to_float(),
            "Transactions": summary.transaction_count,
        }
        for summary in monthly_breakdown(transactions)
    ]
    df = pd.DataFrame(rows, columns=["Month", "Income", "Expense", "Balance", "Transactions"])
    return df.set_index("Month")


def category_dataframe(transactions: list[Transaction]) -> pd.DataFrame:
    """Top expense categories as a DataFrame."""
    rows = [
        {"Category": summary.category or "Uncategorized", "Total": summary.total.to_float(), "Percentage": summary.percentage}
        for summary in category_breakdown(transactions)
    ]
    return pd.DataFrame(rows, columns=["Category", "Total", "Percentage"])


def income_dataframe(transactions: list[Transaction]) -> pd.DataFrame:
    """Income per category, in first-seen order."""
    rows = [
        {"Category": chart_slice.name, "Total": chart_slice.value.to_float()}
        for chart_slice in category_chart_data(transactions)
        if chart_slice.type is TransactionType.INCOME
    ]
    return pd.DataFrame(rows, columns=["Category", "Total"])


def _create_monthly_panel(ax, monthly_df: pd.DataFrame) -> None:
    """Grouped income/expense bars with the monthly balance as a line."""
    if monthly_df.empty:
        ax.text(0.5, 0.5, "No dated transactions", ha="center", va="center", transform=ax.transAxes)
        ax.axis("off")
        return

    x = np.arange(len(monthly_df))
    width = 0.38

    ax.bar(x - width / 2, monthly_df["Income"], width, color="#10B981", alpha=0.8, label="Income")
    ax.bar(x + width / 2, monthly_df["Expense"], width, color="#EF4444", alpha=0.8, label="Expense")
    ax.plot(x, monthly_df["Balance"], color="#3B82F6", marker="o", linewidth=2, label="Balance")
    ax.axhline(y=0, color="black", linestyle="-", linewidth=0.5)

    ax.set_xticks(x)
    ax.set_xticklabels(monthly_df.index, rotation=45, ha="right", fontsize=8)
    ax.set_title("Monthly Income and Expenses", fontsize=12, fontweight="bold")
    ax.set_ylabel("Amount", fontsize=10)
    ax.legend(loc="best", fontsize=8)
    ax.grid(True, alpha=0.3, axis="y")


def _create_pie_panel(ax, category_df: pd.DataFrame, title: str, empty_text: str) -> None:
    """Pie of category totals."""
    if category_df.empty or category_df["Total"].sum() <= 0:
        ax.text(0.5, 0.5, empty_text, ha="center", va="center", transform=ax.transAxes)
        ax.axis("off")
        return

    ax.pie(
        category_df["Total"],
        labels=category_df["Category"],
        autopct="%1.1f%%",
        startangle=90,
        textprops={"fontsize": 8},
    )
    ax.set_title(title, fontsize=12, fontweight="bold")
    ax.axis("equal")


def generate_dashboard(
    transactions: list[Transaction],
    output_dir: Path | None = None,
    figure_size: tuple[int, int] | None = None,
    dpi: int = 150,
) -> Path:
    """
    Generate the dashboard image: monthly bars plus expense and income pies.

    Returns:
        Path to generated dashboard image.
    """
    config = get_config()
    if output_dir is None:
        output_dir = config.reports.output_dir / "charts"
    if figure_size is None:
        figure_size = (config.reports.chart_width, config.reports.chart_height)

    output_dir.mkdir(parents=True, exist_ok=True)

    fig, (monthly_ax, expense_ax, income_ax) = plt.subplots(1, 3, figsize=figure_size)
    _create_monthly_panel(monthly_ax, monthly_dataframe(transactions))
    _create_pie_panel(expense_ax, category_dataframe(transactions), "Expenses by Category", "No expenses")
    _create_pie_panel(income_ax, income_dataframe(transactions), "Income by Category", "No income")

    fig.suptitle("Transaction Dashboard", fontsize=14, fontweight="bold")
    fig.tight_layout()

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    output_file = output_dir / f"{timestamp}_dashboard.png"

    fig.savefig(output_file, dpi=dpi, bbox_inches="tight")
    plt.close(fig)

    return output_file

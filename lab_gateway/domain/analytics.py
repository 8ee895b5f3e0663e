"""Analytics aggregation - turnover, wages, taxes, profit and category breakdowns"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Sequence
from lab_gateway.domain.models import (
    CATEGORIES,
    AnalyticsReport,
    Category,
    CategoryAmount,
    CategoryBreakdown,
    ProfitFormula,
    Summary,
    Transaction,
    TransactionType,
)

# Flat 10% of income turnover
TAX_RATE = 0.1


def compute_percentage(part: float, whole: float) -> int:
    """
    Share of `part` in `whole` as a whole-number percentage in 0..100.

    Halves round up, matching how the dashboard has always displayed them.
    A zero (or negative) whole has no meaningful share and yields 0, as does
    a non-finite part or whole.
    """
    if not math.isfinite(part) or not math.isfinite(whole) or whole <= 0:
        return 0
    ratio = Decimal(str(part)) / Decimal(str(whole)) * 100
    percent = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(0, min(100, percent))


def _turnover(transactions: Iterable[Transaction]) -> float:
    return sum((t.amount for t in transactions), 0.0)


def _split_percentages(first: float, second: float) -> tuple[int, int]:
    """Shares of two turnovers in their sum, scaled down when the sum overflows"""
    if not math.isfinite(first + second):
        first, second = first / 2, second / 2
    whole = first + second
    return compute_percentage(first, whole), compute_percentage(second, whole)


def compute_profit(
    income_turnover: float,
    expense_turnover: float,
    wages: float,
    taxes: float,
    formula: ProfitFormula = ProfitFormula.SOURCE,
) -> float:
    if formula == ProfitFormula.NET:
        return income_turnover - (expense_turnover + taxes)
    return income_turnover - (expense_turnover + wages + taxes)


def compute_summary(
    transactions: Sequence[Transaction],
    profit_formula: ProfitFormula = ProfitFormula.SOURCE,
) -> Summary:
    """
    Derive the dashboard summary from a transaction collection.

    Records of any category count toward totals, including ones outside the
    known category list. An empty collection produces zeros everywhere and
    `has_data=False` rather than undefined ratios.
    """
    income = [t for t in transactions if t.type == TransactionType.INCOME]
    expense = [t for t in transactions if t.type == TransactionType.EXPENSE]

    total = len(transactions)
    income_turnover = _turnover(income)
    expense_turnover = _turnover(expense)
    wages = _turnover(t for t in expense if t.category == Category.EMPLOYEE_SALARY.value)
    taxes = income_turnover * TAX_RATE
    profit = compute_profit(income_turnover, expense_turnover, wages, taxes, profit_formula)

    income_turnover_percent, expense_turnover_percent = _split_percentages(income_turnover, expense_turnover)

    return Summary(
        total_transactions=total,
        income_count=len(income),
        expense_count=len(expense),
        income_turnover=income_turnover,
        expense_turnover=expense_turnover,
        wages=wages,
        taxes=taxes,
        profit=profit,
        income_count_percent=compute_percentage(len(income), total),
        expense_count_percent=compute_percentage(len(expense), total),
        income_turnover_percent=income_turnover_percent,
        expense_turnover_percent=expense_turnover_percent,
        has_data=total > 0,
        profit_formula=profit_formula,
    )


def _amounts_by_category(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> dict:
    amounts: dict = {}
    for t in transactions:
        if t.type == transaction_type:
            amounts[t.category] = amounts.get(t.category, 0.0) + t.amount
    return amounts


def compute_category_breakdown(
    transactions: Sequence[Transaction],
    categories: Sequence[str],
    transaction_type: TransactionType,
) -> List[CategoryAmount]:
    """
    Per-category amounts of one transaction type, in `categories` order.

    Categories with nothing booked are left out; percentages are relative to
    the type's total turnover.
    """
    amounts = _amounts_by_category(transactions, transaction_type)
    turnover = _turnover(t for t in transactions if t.type == transaction_type)

    return [
        CategoryAmount(
            category=category,
            amount=amounts[category],
            percent=compute_percentage(amounts[category], turnover),
        )
        for category in categories
        if amounts.get(category, 0.0) > 0
    ]


def compute_category_totals(
    transactions: Sequence[Transaction],
    categories: Sequence[str],
) -> List[CategoryBreakdown]:
    """Income vs expense per category (bar chart rows), zero-only categories dropped"""
    income = _amounts_by_category(transactions, TransactionType.INCOME)
    expense = _amounts_by_category(transactions, TransactionType.EXPENSE)

    rows = [
        CategoryBreakdown(
            category=category,
            income_amount=income.get(category, 0.0),
            expense_amount=expense.get(category, 0.0),
        )
        for category in categories
    ]
    return [row for row in rows if row.income_amount > 0 or row.expense_amount > 0]


def build_report(
    transactions: Sequence[Transaction],
    categories: Sequence[str] = CATEGORIES,
    profit_formula: ProfitFormula = ProfitFormula.SOURCE,
) -> AnalyticsReport:
    """
    Main entry point: everything the analytics dashboard needs in one object.
    """
    return AnalyticsReport(
        summary=compute_summary(transactions, profit_formula),
        category_totals=compute_category_totals(transactions, categories),
        income_by_category=compute_category_breakdown(transactions, categories, TransactionType.INCOME),
        expense_by_category=compute_category_breakdown(transactions, categories, TransactionType.EXPENSE),
    )

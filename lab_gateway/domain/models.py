"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
import datetime as dt
from enum import Enum
from typing import Any, Dict, List, Optional


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Category(str, Enum):
    """Known transaction categories, in display order"""

    RAW_MATERIAL = "Raw Material"
    TRANSPORTATION = "Transportation"
    FOOD_PRODUCTS = "Food Products"
    MACHINE_EQUIPMENT = "Machine Equipment"
    VEHICLE_SERVICE = "Vehicle Service"
    OTHER_INCOME = "Other Income"
    EMPLOYEE_SALARY = "Employee Salary"
    EQUIPMENT_PURCHASE = "Equipment Purchase"
    BUILDING_RENT = "Building Rent"
    SELLS = "Sells"


CATEGORIES: List[str] = [c.value for c in Category]


class ProfitFormula(str, Enum):
    """
    How profit is derived from the turnover figures.

    - source: income - (expenses + wages + taxes). Wages are already part of
      expenses, so salary spend is subtracted twice. Kept as the default
      because it is what the dashboard has always shown.
    - net: income - (expenses + taxes)
    """

    SOURCE = "source"
    NET = "net"


@dataclass(frozen=True)
class Transaction:
    """Transaction record from the transaction store"""

    amount: float
    type: TransactionType
    category: str
    date: Optional[dt.date] = None
    description: str = ""
    reference: str = ""
    transaction_id: Optional[str] = None


@dataclass
class Summary:
    """Aggregate figures for one transaction collection"""

    total_transactions: int
    income_count: int
    expense_count: int
    income_turnover: float
    expense_turnover: float
    wages: float
    taxes: float
    profit: float
    income_count_percent: int
    expense_count_percent: int
    income_turnover_percent: int
    expense_turnover_percent: int
    has_data: bool
    profit_formula: ProfitFormula = ProfitFormula.SOURCE


@dataclass
class CategoryBreakdown:
    """Income and expense amounts for a single category"""

    category: str
    income_amount: float
    expense_amount: float


@dataclass
class CategoryAmount:
    """Amount of one transaction type in a category, with its share of that type's turnover"""

    category: str
    amount: float
    percent: int


@dataclass
class AnalyticsReport:
    """Everything the analytics dashboard renders"""

    summary: Summary
    category_totals: List[CategoryBreakdown]
    income_by_category: List[CategoryAmount]
    expense_by_category: List[CategoryAmount]


@dataclass
class SessionContext:
    """Logged-in user session, opened on login and closed on logout or expiry"""

    token: str
    user_id: str
    email: str
    created_at: dt.datetime
    expires_at: dt.datetime
    name: str = ""
    user: Dict[str, Any] = field(default_factory=dict)

    def is_expired(self, now: dt.datetime) -> bool:
        return now >= self.expires_at

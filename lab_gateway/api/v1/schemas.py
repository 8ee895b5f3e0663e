"""Pydantic schemas for API request/response validation"""

import datetime as dt
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from lab_gateway.domain.models import (
    AnalyticsReport,
    CategoryAmount,
    CategoryBreakdown,
    ProfitFormula,
    Summary,
    Transaction,
    TransactionType,
)


class LoginRequest(BaseModel):
    """Request body for POST /v1/users/login"""

    email: str = Field(..., min_length=3, description="User email")
    password: str = Field(..., min_length=1, description="User password")


class LoginResponse(BaseModel):
    """Response for POST /v1/users/login"""

    token: str
    expires_at: dt.datetime
    user: Dict[str, Any]


class CurrentUserResponse(BaseModel):
    """Response for GET /v1/users/me"""

    user_id: str
    email: str
    name: str
    expires_at: dt.datetime
    user: Dict[str, Any]


class TransactionSchema(BaseModel):
    """Single transaction record"""

    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Amount in the implied currency")
    type: TransactionType
    category: str
    date: Optional[dt.date] = None
    description: str = ""
    reference: str = ""

    def to_domain(self) -> Transaction:
        return Transaction(
            amount=self.amount,
            type=self.type,
            category=self.category,
            date=self.date,
            description=self.description,
            reference=self.reference,
        )


class ComputeRequest(BaseModel):
    """Request body for POST /v1/analytics/compute"""

    transactions: List[TransactionSchema] = Field(default_factory=list)


class SummarySchema(BaseModel):
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
    profit_formula: ProfitFormula

    @classmethod
    def from_domain(cls, summary: Summary) -> "SummarySchema":
        return cls(**vars(summary))


class CategoryBreakdownSchema(BaseModel):
    category: str
    income_amount: float
    expense_amount: float

    @classmethod
    def from_domain(cls, row: CategoryBreakdown) -> "CategoryBreakdownSchema":
        return cls(**vars(row))


class CategoryAmountSchema(BaseModel):
    category: str
    amount: float
    percent: int

    @classmethod
    def from_domain(cls, row: CategoryAmount) -> "CategoryAmountSchema":
        return cls(**vars(row))


class AnalyticsResponse(BaseModel):
    """Response for the analytics endpoints"""

    summary: SummarySchema
    category_totals: List[CategoryBreakdownSchema]
    income_by_category: List[CategoryAmountSchema]
    expense_by_category: List[CategoryAmountSchema]

    @classmethod
    def from_report(cls, report: AnalyticsReport) -> "AnalyticsResponse":
        return cls(
            summary=SummarySchema.from_domain(report.summary),
            category_totals=[CategoryBreakdownSchema.from_domain(r) for r in report.category_totals],
            income_by_category=[CategoryAmountSchema.from_domain(r) for r in report.income_by_category],
            expense_by_category=[CategoryAmountSchema.from_domain(r) for r in report.expense_by_category],
        )

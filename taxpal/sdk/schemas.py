"""Pydantic schemas for income and expense records.

All schemas use extra='forbid' to reject unknown fields, so a typo in a
hand-edited record file causes a clear error rather than silent ignoring.
"""

from datetime import date as Date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


IncomeCategory = Literal["freelance", "consulting", "products", "services", "investment", "other"]
IncomePlatform = Literal["upwork", "fiverr", "stripe", "paypal", "bank", "cash", "other"]

ExpenseCategory = Literal[
    "office-supplies", "software", "marketing", "travel",
    "meals", "home-office", "internet", "insurance",
    "professional", "education", "equipment", "other",
]
PaymentMethod = Literal["credit-card", "debit-card", "bank-transfer", "cash", "paypal", "other"]

INCOME_CATEGORIES = IncomeCategory.__args__
INCOME_PLATFORMS = IncomePlatform.__args__
EXPENSE_CATEGORIES = ExpenseCategory.__args__
PAYMENT_METHODS = PaymentMethod.__args__


class _Entry(BaseModel):
    """Fields shared by income and expense entries."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Amount in dollars")
    date: Date = Field(..., description="Date received or paid (YYYY-MM-DD)")
    description: str = Field(..., min_length=1, max_length=500)
    is_recurring: bool = False

    @property
    def year(self) -> int:
        return self.date.year


class IncomeRecord(_Entry):
    """A single payment received."""

    source: str = Field(..., min_length=1, max_length=200, description="Client or payer")
    category: IncomeCategory
    platform: IncomePlatform = "other"
    invoice_number: Optional[str] = None
    taxable: bool = Field(
        default=True,
        description="Included in total income for tax estimates. Non-taxable income is reported separately.",
    )


class ExpenseRecord(_Entry):
    """A single business expense."""

    category: ExpenseCategory
    payment_method: PaymentMethod = "credit-card"
    vendor: Optional[str] = None
    receipt_url: Optional[str] = None
    is_deductible: bool = True
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("receipt_url")
    @classmethod
    def check_receipt_url(cls, value: Optional[str]) -> Optional[str]:
        if value and not value.startswith(("http://", "https://")):
            raise ValueError("receipt_url must be an http(s) URL")
        return value


class YearTotals(BaseModel):
    """Totals for one tax year, as consumed by the estimate engine."""

    model_config = ConfigDict(extra="forbid")

    year: int
    total_income: float = Field(default=0, ge=0, description="Sum of taxable income entries")
    non_taxable_income: float = Field(default=0, ge=0)
    total_expenses: float = Field(default=0, ge=0)
    deductible_expenses: float = Field(default=0, ge=0, description="Subset of total_expenses")
    income_entries: int = 0
    expense_entries: int = 0

    @property
    def net_income(self) -> float:
        return self.total_income + self.non_taxable_income - self.total_expenses

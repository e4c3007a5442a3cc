"""Pydantic schemas for tax rules validation.

These schemas validate the tax_rules/*.yaml files and provide typed,
immutable access to the bracket table, standard deduction and
self-employment tax rate.
"""

import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TaxBracket(BaseModel):
    """Single tax bracket entry covering [min, max)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(..., ge=0, description="Lower bound of the bracket")
    max: float = Field(default=math.inf, description="Upper bound (null in YAML = unbounded)")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")

    @field_validator("max", mode="before")
    @classmethod
    def none_is_unbounded(cls, value):
        return math.inf if value is None else value

    @property
    def width(self) -> float:
        return self.max - self.min


class TaxRules(BaseModel):
    """Complete federal rules for a year and filing status."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    year: int
    filing_status: Literal["single"] = "single"
    standard_deduction: float = Field(..., ge=0)
    self_employment_tax_rate: float = Field(..., ge=0, le=1)
    brackets: tuple[TaxBracket, ...]
    # Informational only; not used in calculations
    source: Optional[str] = None

    @model_validator(mode="after")
    def check_brackets(self) -> "TaxRules":
        """Brackets must cover [0, inf) in ascending order with no gaps or overlaps."""
        errors = []

        if not self.brackets:
            raise ValueError("brackets: at least one bracket is required")

        if self.brackets[0].min != 0:
            errors.append(f"first bracket must start at 0, got {self.brackets[0].min}")

        for prev, cur in zip(self.brackets, self.brackets[1:]):
            if cur.min != prev.max:
                errors.append(f"bracket starting at {cur.min} does not continue from {prev.max}")
            if cur.rate < prev.rate:
                errors.append(f"bracket starting at {cur.min} has a lower rate than the one before it")

        for bracket in self.brackets:
            if bracket.max <= bracket.min:
                errors.append(f"bracket starting at {bracket.min} has max <= min")

        if not math.isinf(self.brackets[-1].max):
            errors.append("last bracket must be unbounded (max: null)")

        if errors:
            raise ValueError("; ".join(errors))

        return self

    @property
    def top_rate(self) -> float:
        return self.brackets[-1].rate

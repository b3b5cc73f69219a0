"""Request bodies accepted by the HTTP API."""

from typing import Annotated, Any

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StringConstraints, field_validator

from monthlies.domain.expenses import ExpenseInput, ExpensePatch, parse_amount
from monthlies.domain.models import Amount, CategoryName, Description

NonEmptyText = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]


class ExpenseCreateBody(BaseModel):
    """Body of POST /api/expenses. Unknown keys are ignored."""

    amount: StrictFloat | StrictInt = Field(..., description="Monthly cost (> 0)")
    description: NonEmptyText = Field(..., description="What the expense is for")
    category: NonEmptyText = Field(..., description="Category label, free text")

    model_config = {
        "json_schema_extra": {
            "example": {
                "amount": 15.99,
                "description": "Netflix",
                "category": "Streaming Services",
            }
        }
    }

    @field_validator("amount")
    @classmethod
    def amount_is_positive(cls, value: float | int) -> float:
        return parse_amount(value)

    def to_input(self) -> ExpenseInput:
        return ExpenseInput(
            amount=Amount(self.amount),
            description=Description(self.description),
            category=CategoryName(self.category),
        )


class ExpensePatchBody(BaseModel):
    """Body of PUT /api/expenses/{id}. Only the keys sent are applied."""

    amount: StrictFloat | StrictInt | None = None
    description: NonEmptyText | None = None
    category: NonEmptyText | None = None

    @field_validator("amount", "description", "category", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # Defaults are not validated, so this only sees keys that were sent
        if value is None:
            raise ValueError("cannot be null")
        return value

    @field_validator("amount")
    @classmethod
    def amount_is_positive(cls, value: float | int | None) -> float | None:
        return parse_amount(value) if value is not None else None

    def to_patch(self) -> ExpensePatch:
        return ExpensePatch(**self.model_dump(exclude_unset=True))
